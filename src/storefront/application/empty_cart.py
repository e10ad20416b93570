"""Application service: empty the cart (PUT empty_cart)."""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.paths import CART_PATH
from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.order_contents import OrderContents


class EmptyCartHandler:

    def __init__(self, order_repo: OrderRepository, contents: OrderContents) -> None:
        self._order_repo = order_repo
        self._contents = contents

    def handle(self, session: ShopperSession) -> Response:
        order = self._order_repo.current_order_for(session)
        if order is not None:
            self._contents.empty(order)
        return Response.redirect(CART_PATH)
