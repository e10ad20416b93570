"""Application service: show the cart (GET cart, GET orders/:number/edit)."""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.mapping import order_to_dto
from storefront.application.messages import CANNOT_EDIT_ORDERS
from storefront.application.paths import CART_PATH
from storefront.domain.model.order import Order
from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.order_repository import OrderRepository


class EditCartHandler:

    def __init__(self, order_repo: OrderRepository, currency: str = "USD") -> None:
        self._order_repo = order_repo
        self._currency = currency

    def handle(self, session: ShopperSession, number: str | None = None) -> Response:
        # Shoppers without a cart see a new, unsaved one.
        order = self._order_repo.current_order_for(session) or Order.create(
            user=session.user, guest_token=session.guest_token, currency=self._currency
        )
        if number is not None and order.number != number:
            return Response.redirect(CART_PATH, error=CANNOT_EDIT_ORDERS)
        return Response.render("orders/edit", order=order_to_dto(order))
