"""Domain service: stock checks and deduction for orders.

Coordinates the cross-aggregate rule that an order may only proceed
while every line item can still be supplied, and deducts stock when an
order completes.

The two-phase approach (validate-then-mutate) ensures stock is never
left partially deducted if one variant fails validation.
"""

from __future__ import annotations

from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.model.order import LineItem, Order
from storefront.domain.model.stock import StockItem
from storefront.domain.repository.stock_repository import StockRepository


class StockService:

    def __init__(self, stock_repo: StockRepository, track_inventory_levels: bool = True) -> None:
        self._stock_repo = stock_repo
        self._track = track_inventory_levels

    def insufficient_stock_lines(self, order: Order) -> list[LineItem]:
        """Line items that the current stock cannot supply."""
        if not self._track:
            return []
        return [
            line for line in order.line_items
            if not self._can_supply(line.variant_id, line.quantity.value)
        ]

    def ensure_sufficient_stock(self, order: Order) -> None:
        lines = self.insufficient_stock_lines(order)
        if lines:
            raise InsufficientStockError([line.variant_name for line in lines])

    def can_supply(self, variant_id: str, quantity: int) -> bool:
        return not self._track or self._can_supply(variant_id, quantity)

    def unstock_for_order(self, order: Order) -> None:
        """Deduct every line item from stock.

        Uses a two-phase approach:
          Phase 1: load and validate every tracked stock item.
          Phase 2: mutate and persist.
        """
        if not self._track:
            return

        # Phase 1: load and validate
        to_unstock: list[tuple[StockItem, int]] = []
        missing: list[str] = []
        for line in order.line_items:
            item = self._stock_repo.get_by_variant_id(line.variant_id)
            if item is None:
                continue  # untracked variant
            qty = line.quantity.value
            if not item.can_supply(qty):
                missing.append(line.variant_name)
            to_unstock.append((item, qty))
        if missing:
            raise InsufficientStockError(missing)

        # Phase 2: mutate and persist
        for item, qty in to_unstock:
            item.unstock(qty)
            self._stock_repo.save(item)

    def _can_supply(self, variant_id: str, quantity: int) -> bool:
        item = self._stock_repo.get_by_variant_id(variant_id)
        return item is None or item.can_supply(quantity)
