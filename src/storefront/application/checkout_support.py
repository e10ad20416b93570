"""Request guards shared by the checkout handlers."""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.paths import CART_PATH, checkout_state_path
from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.model.order import Order
from storefront.domain.service.checkout_state_machine import CheckoutStateMachine
from storefront.domain.service.stock_service import StockService


def checkout_blocked(order: Order | None, stock: StockService) -> Response | None:
    """Send the shopper back to the cart when checkout cannot start.

    Covers a missing order, an order without line items, a completed
    order and an order whose items can no longer be supplied.
    """
    if order is None or not order.checkout_allowed or order.is_completed:
        return Response.redirect(CART_PATH)
    lines = stock.insufficient_stock_lines(order)
    if lines:
        error = InsufficientStockError([line.variant_name for line in lines])
        return Response.redirect(CART_PATH, error=str(error))
    return None


def enter_requested_step(
    machine: CheckoutStateMachine, order: Order, state: str
) -> Response | None:
    """Put the order on the requested step, or redirect if it may not go there."""
    if not machine.has_step(order, state):
        return Response.redirect(checkout_state_path(machine.steps_for(order)[0]))
    if machine.is_ahead(order, state):
        current = order.state if machine.has_step(order, order.state) else machine.steps_for(order)[0]
        return Response.redirect(checkout_state_path(current))
    machine.go_to(order, state)
    return None
