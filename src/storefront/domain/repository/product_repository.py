"""Abstract repository for the catalog (products, their variants, taxons).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product, Taxon, Variant


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Product | None:
        """Return a product by its URL slug, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def get_taxon(self, permalink: str) -> Taxon | None:
        """Return a taxon by its permalink, or None if not found."""

    @abstractmethod
    def save_taxon(self, taxon: Taxon) -> None:
        """Persist a new or updated taxon."""

    def get_variant(self, variant_id: str) -> Variant | None:
        for product in self.list_all():
            variant = product.find_variant(variant_id)
            if variant is not None:
                return variant
        return None
