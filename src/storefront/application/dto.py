"""Data Transfer Objects: plain containers that cross layer boundaries.

Requests come in as small input specs; every handler answers with a
``Response`` that mirrors what a web controller would send back: either
a redirect carrying flash messages or a rendered view with a status code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# --- Input ------------------------------------------------------------------


@dataclass(frozen=True)
class PaymentSpec:
    """Input: the payment method chosen at checkout and its source."""

    payment_method_id: int
    source: str | None = None  # card number


@dataclass(frozen=True)
class CheckoutParams:
    """Input: attributes submitted with a checkout step."""

    email: str | None = None
    bill_address: dict | None = None
    ship_address: dict | None = None
    use_billing: bool = False
    payments: list[PaymentSpec] = field(default_factory=list)
    save_user_address: bool = False


# --- Output -----------------------------------------------------------------


@dataclass(frozen=True)
class LineItemDTO:

    id: int
    variant_id: str
    variant_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class PaymentDTO:

    payment_method_id: int
    amount: str
    state: str
    last_digits: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order (or unsaved cart) as displayed to the shopper."""

    id: int | None
    number: str
    state: str
    email: str | None
    line_items: list[LineItemDTO]
    item_total: str
    ship_total: str
    total: str
    payment_total: str
    payments: list[PaymentDTO]
    bill_address: dict | None
    ship_address: dict | None
    shipping_method: str | None
    created_at: str
    completed_at: str | None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    slug: str
    price: str
    available: bool
    variant_ids: list[str]


@dataclass(frozen=True)
class Response:
    """Output: the outcome of one storefront request."""

    status: int
    location: str | None = None
    template: str | None = None
    flash: dict[str, str] = field(default_factory=dict)
    order: OrderDTO | None = None
    context: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    guest_token: str | None = None  # cookie to set on the shopper

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400

    @property
    def is_ok(self) -> bool:
        return self.status == 200

    @staticmethod
    def redirect(
        location: str,
        *,
        notice: str | None = None,
        error: str | None = None,
        order: OrderDTO | None = None,
        guest_token: str | None = None,
    ) -> Response:
        return Response(
            status=302,
            location=location,
            flash=_flash(notice, error),
            order=order,
            guest_token=guest_token,
        )

    @staticmethod
    def render(
        template: str,
        *,
        status: int = 200,
        order: OrderDTO | None = None,
        error: str | None = None,
        errors: list[str] | None = None,
        **context: Any,
    ) -> Response:
        return Response(
            status=status,
            template=template,
            flash=_flash(None, error),
            order=order,
            context=context,
            errors=list(errors or []),
        )


def _flash(notice: str | None, error: str | None) -> dict[str, str]:
    flash: dict[str, str] = {}
    if notice:
        flash["notice"] = notice
    if error:
        flash["error"] = error
    return flash
