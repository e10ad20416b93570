"""StockItem aggregate: tracks units on hand per variant.

Each variant has one StockItem. Stock is only deducted when an order
completes; before that the checkout merely checks that the items can
still be supplied.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


@dataclass
class StockItem:
    """Aggregate root for stock tracking.

    Invariants:
    - ``count_on_hand`` never drops below 0 unless the item is backorderable
    """

    variant_id: str
    variant_name: str
    count_on_hand: int
    backorderable: bool = False

    def can_supply(self, quantity: int) -> bool:
        return self.backorderable or quantity <= self.count_on_hand

    def unstock(self, quantity: int) -> None:
        """Deduct units sold by a completed order."""
        if quantity <= 0:
            raise ValidationError("Unstock quantity must be positive")
        if not self.can_supply(quantity):
            raise ValidationError(
                f"Insufficient stock for {self.variant_name} "
                f"(need {quantity}, have {self.count_on_hand} on hand)"
            )
        self.count_on_hand -= quantity

    def restock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.count_on_hand += quantity
