"""Payment methods and the payments recorded against an order."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


class PaymentState(Enum):
    CHECKOUT = "checkout"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PaymentMethod:
    """A way to pay. Only methods available to users may be chosen at checkout."""

    id: int
    name: str
    active: bool = True
    available_to_users: bool = True

    @property
    def selectable(self) -> bool:
        return self.active and self.available_to_users


@dataclass
class Payment:

    payment_method_id: int
    amount: Money
    state: PaymentState = PaymentState.CHECKOUT
    source: str | None = None  # card number as entered
    response_code: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.state == PaymentState.CHECKOUT

    @property
    def is_completed(self) -> bool:
        return self.state == PaymentState.COMPLETED

    def complete(self, response_code: str) -> None:
        if self.state != PaymentState.CHECKOUT:
            raise ValidationError(
                f"Cannot complete payment in {self.state.value} state"
            )
        self.state = PaymentState.COMPLETED
        self.response_code = response_code

    def fail(self) -> None:
        self.state = PaymentState.FAILED

    @property
    def source_last_digits(self) -> str:
        return (self.source or "")[-4:]
