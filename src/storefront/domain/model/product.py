"""Catalog aggregates: Product (with its variants) and Taxon.

Products live independently of orders. They have their own lifecycle:
prices change, products become available on a date, products are
classified under taxons. Orders only ever reference a variant and keep
a price snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Variant:
    """A purchasable SKU of a product."""

    id: str
    product_id: str
    sku: str
    name: str
    price: Money
    track_inventory: bool = True

    def update_price(self, new_price: Money) -> None:
        """Change the variant price.

        This does NOT affect any existing orders because line items
        capture a price snapshot when they are added to the cart.
        """
        if new_price.is_zero:
            raise ValidationError("Variant price must be greater than zero")
        self.price = new_price


@dataclass
class Product:
    """A product in the catalog.

    ``available_on`` of ``None`` or in the future means the product is not
    yet active; only admins may look at it.
    """

    id: str
    name: str
    slug: str
    variants: list[Variant] = field(default_factory=list)
    description: str = ""
    available_on: datetime | None = None
    taxon_permalinks: list[str] = field(default_factory=list)

    def is_available(self, now: datetime | None = None) -> bool:
        if self.available_on is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.available_on <= now

    @property
    def master(self) -> Variant:
        if not self.variants:
            raise ValidationError(f"Product '{self.name}' has no variants")
        return self.variants[0]

    @property
    def price(self) -> Money:
        return self.master.price

    def find_variant(self, variant_id: str) -> Variant | None:
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None


@dataclass
class Taxon:
    """A node of the catalog taxonomy, addressed by its permalink."""

    id: str
    name: str
    permalink: str
