"""Application service: Add Product use case."""

from __future__ import annotations

import re
from datetime import datetime

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, currency: str = "USD") -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        sku: str | None = None,
        available_on: datetime | None = None,
        taxons: list[str] | None = None,
    ) -> Product:
        """Add a new product, with a single master variant, to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        money = Money.of(price, self._currency)
        if money.is_zero:
            raise ValidationError("Product price must be greater than zero")

        slug = _slugify(name)
        if self._product_repo.get_by_slug(slug) is not None:
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign IDs based on existing products
        all_products = self._product_repo.list_all()
        next_id = str(max((int(p.id) for p in all_products), default=0) + 1)
        next_variant_id = str(
            max((int(v.id) for p in all_products for v in p.variants), default=0) + 1
        )

        product = Product(
            id=next_id,
            name=name.strip(),
            slug=slug,
            available_on=available_on,
            taxon_permalinks=list(taxons or []),
        )
        product.variants.append(
            Variant(
                id=next_variant_id,
                product_id=next_id,
                sku=sku or f"SKU-{next_variant_id}",
                name=product.name,
                price=money,
            )
        )
        self._product_repo.save(product)
        return product


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")
