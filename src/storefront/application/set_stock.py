"""Application service: Set Stock use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.stock import StockItem
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.stock_repository import StockRepository


class SetStockHandler:

    def __init__(
        self,
        stock_repo: StockRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._stock_repo = stock_repo
        self._product_repo = product_repo

    def handle(self, variant_id: str, count_on_hand: int, backorderable: bool = False) -> StockItem:
        """Set the units on hand for a variant."""
        if count_on_hand < 0:
            raise ValidationError("Count on hand cannot be negative")

        variant = self._product_repo.get_variant(variant_id)
        if variant is None:
            raise EntityNotFoundError(f"Variant '{variant_id}' not found")

        item = self._stock_repo.get_by_variant_id(variant.id)
        if item is not None:
            item.count_on_hand = count_on_hand
            item.backorderable = backorderable
        else:
            item = StockItem(
                variant_id=variant.id,
                variant_name=variant.name,
                count_on_hand=count_on_hand,
                backorderable=backorderable,
            )
        self._stock_repo.save(item)
        return item
