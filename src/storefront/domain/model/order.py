"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items, addresses,
shipments and payments. Contents invariants are enforced here; the
checkout step sequence is driven by the CheckoutStateMachine.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.address import Address
from storefront.domain.model.payment import Payment
from storefront.domain.model.product import Variant
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import UNREASONABLE_QUANTITY, Money, Quantity

# Initial state of every order; not itself a checkout step.
CART = "cart"
COMPLETE = "complete"


@dataclass
class LineItem:
    """A variant in the cart with the price captured when it was added."""

    id: int
    variant_id: str
    variant_name: str
    quantity: Quantity
    unit_price: Money  # locked when first added

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Shipment:

    shipping_method: str
    cost: Money
    country_iso: str


@dataclass
class Order:
    """Aggregate root for shopping carts and placed orders.

    Use ``Order.create()`` for new carts. The ``__init__`` is left simple so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    number: str
    line_items: list[LineItem] = field(default_factory=list)
    state: str = CART
    user_id: int | None = None
    guest_token: str | None = None
    email: str | None = None
    bill_address: Address | None = None
    ship_address: Address | None = None
    shipments: list[Shipment] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    currency: str = "USD"
    created_by_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None
    # Messages collected while processing the current request; never persisted.
    errors: list[str] = field(default_factory=list, compare=False, repr=False)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        user: User | None = None,
        guest_token: str | None = None,
        currency: str = "USD",
    ) -> Order:
        """Start a new, empty cart for a user and/or a guest token."""
        return Order(
            id=None,
            number=generate_number(),
            user_id=user.id if user is not None else None,
            guest_token=guest_token,
            email=user.email if user is not None else None,
            currency=currency,
            created_by_id=user.id if user is not None else None,
        )

    # --- Contents -------------------------------------------------------------

    def add_variant(self, variant: Variant, quantity: Quantity) -> LineItem:
        """Add units of a variant, merging with an existing line if present."""
        self._ensure_not_completed()
        existing = self.find_line_item_by_variant(variant.id)
        if existing is not None:
            existing.quantity = Quantity(existing.quantity.value + quantity.value)
            item = existing
        else:
            item = LineItem(
                id=max((li.id for li in self.line_items), default=0) + 1,
                variant_id=variant.id,
                variant_name=variant.name,
                quantity=quantity,
                unit_price=variant.price,  # <-- price snapshot
            )
            self.line_items.append(item)
        self.shipments.clear()
        return item

    def set_quantity(self, line_item_id: int, quantity: int) -> None:
        """Change a line's quantity; zero removes the line."""
        self._ensure_not_completed()
        item = self._find_line_item(line_item_id)
        if quantity < 0:
            raise ValidationError(UNREASONABLE_QUANTITY)
        if quantity == 0:
            self.line_items.remove(item)
        else:
            item.quantity = Quantity(quantity)
        self.shipments.clear()

    def empty(self) -> None:
        """Administrative reset: drop all contents and restart the checkout."""
        self._ensure_not_completed()
        self.line_items.clear()
        self.shipments.clear()
        self.payments.clear()
        self.state = CART

    def find_line_item_by_variant(self, variant_id: str) -> LineItem | None:
        for item in self.line_items:
            if item.variant_id == variant_id:
                return item
        return None

    # --- Ownership ------------------------------------------------------------

    def associate_user(self, user: User) -> None:
        self.user_id = user.id
        self.created_by_id = self.created_by_id or user.id
        if not self.email:
            self.email = user.email

    def assign_default_user_addresses(self, user: User) -> None:
        if self.bill_address is None and user.bill_address is not None:
            self.bill_address = user.bill_address
        if self.ship_address is None and user.ship_address is not None:
            self.ship_address = user.ship_address

    def belongs_to(self, user_id: int | None, guest_token: str | None) -> bool:
        if user_id is not None and self.user_id == user_id:
            return True
        return guest_token is not None and self.guest_token == guest_token

    # --- Payments & completion ------------------------------------------------

    def add_payment(self, payment: Payment) -> None:
        self._ensure_not_completed()
        self.payments.append(payment)

    def finalize(self) -> None:
        """Mark the order complete. Checks are the state machine's job."""
        self.completed_at = datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def item_total(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.line_items:
            result = result + item.line_total
        return result

    @property
    def ship_total(self) -> Money:
        result = Money.zero(self.currency)
        for shipment in self.shipments:
            result = result + shipment.cost
        return result

    @property
    def total(self) -> Money:
        return self.item_total + self.ship_total

    @property
    def payment_total(self) -> Money:
        """Sum of payments already captured."""
        result = Money.zero(self.currency)
        for payment in self.payments:
            if payment.is_completed:
                result = result + payment.amount
        return result

    @property
    def outstanding_balance(self) -> Money:
        if self.payment_total >= self.total:
            return Money.zero(self.currency)
        return self.total - self.payment_total

    @property
    def payment_required(self) -> bool:
        return not self.total.is_zero

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.line_items)

    @property
    def checkout_allowed(self) -> bool:
        return bool(self.line_items)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    # --- Internal helpers -----------------------------------------------------

    def _find_line_item(self, line_item_id: int) -> LineItem:
        for item in self.line_items:
            if item.id == line_item_id:
                return item
        raise EntityNotFoundError(f"Line item #{line_item_id} not found in order {self.number}")

    def _ensure_not_completed(self) -> None:
        if self.is_completed:
            raise ValidationError(f"Order {self.number} is already complete")


def generate_number() -> str:
    return "R" + "".join(str(secrets.randbelow(10)) for _ in range(9))
