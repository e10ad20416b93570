"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.mapping import order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, session: ShopperSession, number: str) -> Response:
        order = self._order_repo.get_by_number(number)
        # Someone else's order is reported exactly like a missing one.
        if order is None or not (
            session.is_admin or order.belongs_to(session.user_id, session.guest_token)
        ):
            raise EntityNotFoundError(f"Order {number} not found")
        return Response.render("orders/show", order=order_to_dto(order))
