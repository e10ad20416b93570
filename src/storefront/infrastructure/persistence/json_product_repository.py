"""JSON-file-backed implementation of ProductRepository.

The catalog file holds two lists, ``products`` (each with its variants)
and ``taxons``.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product, Taxon, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_slug(self, slug: str) -> Product | None:
        for product in self._load().values():
            if product.slug == slug:
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products, self._load_taxons())

    def get_taxon(self, permalink: str) -> Taxon | None:
        for taxon in self._load_taxons():
            if taxon.permalink == permalink:
                return taxon
        return None

    def save_taxon(self, taxon: Taxon) -> None:
        taxons = [t for t in self._load_taxons() if t.id != taxon.id]
        taxons.append(taxon)
        self._persist(self._load(), taxons)

    # --- Serialization helpers ------------------------------------------------

    def _read(self) -> dict:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                slug=item["slug"],
                description=item.get("description", ""),
                available_on=(
                    datetime.fromisoformat(item["available_on"]) if item.get("available_on") else None
                ),
                taxon_permalinks=list(item.get("taxons", [])),
                variants=[
                    Variant(
                        id=v["id"],
                        product_id=item["id"],
                        sku=v["sku"],
                        name=v["name"],
                        price=Money(Decimal(v["price"]), v.get("currency", "USD")),
                        track_inventory=v.get("track_inventory", True),
                    )
                    for v in item.get("variants", [])
                ],
            )
            for item in self._read()["products"]
        }

    def _load_taxons(self) -> list[Taxon]:
        return [
            Taxon(id=t["id"], name=t["name"], permalink=t["permalink"])
            for t in self._read()["taxons"]
        ]

    def _persist(self, products: dict[str, Product], taxons: list[Taxon]) -> None:
        raw = {
            "products": [
                {
                    "id": p.id,
                    "name": p.name,
                    "slug": p.slug,
                    "description": p.description,
                    "available_on": p.available_on.isoformat() if p.available_on else None,
                    "taxons": p.taxon_permalinks,
                    "variants": [
                        {
                            "id": v.id,
                            "sku": v.sku,
                            "name": v.name,
                            "price": str(v.price.amount),
                            "currency": v.price.currency,
                            "track_inventory": v.track_inventory,
                        }
                        for v in p.variants
                    ],
                }
                for p in products.values()
            ],
            "taxons": [
                {"id": t.id, "name": t.name, "permalink": t.permalink}
                for t in taxons
            ],
        }
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({"products": [], "taxons": []}), encoding="utf-8"
            )
