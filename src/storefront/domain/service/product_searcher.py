"""Domain service: catalog search scoped to the current shopper."""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.repository.product_repository import ProductRepository


class ProductSearcher:
    """Finds the products a shopper may browse.

    The current user is assigned by the caller before searching; admins
    also see products that are not yet available.
    """

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self.current_user: User | None = None

    def retrieve_products(
        self,
        taxon_permalink: str | None = None,
        keywords: str | None = None,
        now: datetime | None = None,
    ) -> list[Product]:
        now = now or datetime.now(timezone.utc)
        show_all = self.current_user is not None and self.current_user.is_admin

        results = []
        for product in self._product_repo.list_all():
            if not show_all and not product.is_available(now):
                continue
            if taxon_permalink is not None and not _in_taxon(product, taxon_permalink):
                continue
            if keywords and keywords.lower() not in product.name.lower():
                continue
            results.append(product)
        return sorted(results, key=lambda p: p.name.lower())


def _in_taxon(product: Product, permalink: str) -> bool:
    # Products filed under a child taxon also belong to its ancestors.
    return any(
        p == permalink or p.startswith(permalink + "/")
        for p in product.taxon_permalinks
    )
