"""Domain service: the checkout state machine.

Walks an order through the steps of a CheckoutFlow. Each step has an
optional guard that must pass before the order may leave it. Entering
``complete`` re-checks the address, stock and payment coverage before any
payment is captured, then deducts stock.

A failed guard raises and leaves ``order.state`` untouched, so the order
never moves on a failure and never moves backwards on its own. Going
back to an earlier step is only done through an explicit ``go_to``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from storefront.domain.exceptions import GatewayError, ValidationError
from storefront.domain.model.checkout_flow import CheckoutFlow
from storefront.domain.model.order import CART, COMPLETE, Order
from storefront.domain.service.payment_gateway import PaymentGateway
from storefront.domain.service.shipping import ShippingCalculator
from storefront.domain.service.stock_service import StockService

logger = logging.getLogger(__name__)


class CheckoutStateMachine:

    def __init__(
        self,
        flow: CheckoutFlow,
        stock_service: StockService,
        shipping: ShippingCalculator,
        gateway: PaymentGateway,
    ) -> None:
        self.flow = flow
        self._stock = stock_service
        self._shipping = shipping
        self._gateway = gateway
        self._guards: dict[str, Callable[[Order], None]] = {
            CART: self._leave_cart,
            "address": self._leave_address,
            "delivery": self._leave_delivery,
            "payment": self._leave_payment,
        }

    # --- Queries --------------------------------------------------------------

    def steps_for(self, order: Order) -> list[str]:
        return self.flow.steps_for(order)

    def has_step(self, order: Order, step: str) -> bool:
        return step in self.steps_for(order)

    def is_ahead(self, order: Order, target: str) -> bool:
        """True if ``target`` lies strictly after the order's current step.

        ``cart`` sits before the first step, so from the cart only the first
        step can be entered.
        """
        steps = self.steps_for(order)
        if target not in steps:
            return False
        if order.state == CART:
            return steps.index(target) > 0
        if order.state not in steps:
            return False
        return steps.index(target) > steps.index(order.state)

    def can_enter(self, order: Order, target: str) -> bool:
        return self.has_step(order, target) and not self.is_ahead(order, target)

    def next_step(self, order: Order) -> str:
        steps = self.steps_for(order)
        if order.state == CART:
            return steps[0]
        if order.state == COMPLETE or order.is_completed:
            raise ValidationError(f"Order {order.number} is already complete")
        if order.state not in steps:
            raise ValidationError(
                f"Order {order.number} is in unknown checkout step '{order.state}'"
            )
        return steps[steps.index(order.state) + 1]

    # --- Transitions ----------------------------------------------------------

    def go_to(self, order: Order, target: str) -> None:
        """Explicitly move the order to the current or an earlier step."""
        if not self.has_step(order, target):
            raise ValidationError(f"Unknown checkout step '{target}'")
        if self.is_ahead(order, target):
            raise ValidationError(
                f"Cannot skip ahead to '{target}' from '{order.state}'"
            )
        order.state = target

    def advance(self, order: Order) -> str:
        """Run the current step's guard and move to the next step."""
        source = order.state
        target = self.next_step(order)

        guard = self._guards.get(source)
        if guard is not None:
            guard(order)
        if target == COMPLETE:
            self._complete(order)

        order.state = target
        logger.info("Order %s transitioned %s -> %s", order.number, source, target)
        return target

    # --- Guards ---------------------------------------------------------------

    def _leave_cart(self, order: Order) -> None:
        if not order.checkout_allowed:
            raise ValidationError("There are no items for this order")

    def _leave_address(self, order: Order) -> None:
        self._validate_address(order)
        if self.has_step(order, "delivery"):
            self._shipping.propose_shipments(order)

    def _leave_delivery(self, order: Order) -> None:
        if not order.shipments:
            self._shipping.propose_shipments(order)
        self._stock.ensure_sufficient_stock(order)

    def _leave_payment(self, order: Order) -> None:
        self._ensure_payments_cover_total(order)

    def _complete(self, order: Order) -> None:
        self._validate_address(order)
        if self.has_step(order, "delivery") and not order.shipments:
            self._shipping.propose_shipments(order)
        self._stock.ensure_sufficient_stock(order)
        # Nothing is captured unless the payments on file cover the total.
        self._ensure_payments_cover_total(order)

        for payment in order.payments:
            if not payment.is_pending:
                continue
            try:
                code = self._gateway.purchase(payment, order.number)
            except GatewayError as exc:
                payment.fail()
                order.errors.append(str(exc))
                logger.warning("Payment failed for order %s: %s", order.number, exc)
                raise
            payment.complete(code)

        self._stock.unstock_for_order(order)
        order.finalize()
        logger.info("Order %s completed (total=%s)", order.number, order.total)

    # --- Checks ---------------------------------------------------------------

    def _validate_address(self, order: Order) -> None:
        if not order.email or not order.email.strip():
            raise ValidationError("Email can't be blank")
        if order.bill_address is None:
            raise ValidationError("Bill address is required")
        order.bill_address.validate()
        if order.ship_address is None:
            raise ValidationError("Ship address is required")
        order.ship_address.validate()

    def _ensure_payments_cover_total(self, order: Order) -> None:
        if not order.payment_required:
            return
        live = [p for p in order.payments if p.is_pending or p.is_completed]
        if not live:
            raise ValidationError("No payment found")
        covered = sum((p.amount.amount for p in live), Decimal("0"))
        if covered < order.total.amount:
            raise ValidationError("Payment total does not cover the order total")
