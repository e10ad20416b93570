"""Application service: add a variant to the cart (POST populate_orders)."""

from __future__ import annotations

import logging

from storefront.application.dto import Response
from storefront.application.mapping import order_to_dto
from storefront.application.paths import CART_PATH, ROOT_PATH
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import ShopperSession
from storefront.domain.service.order_contents import OrderContents

logger = logging.getLogger(__name__)


class PopulateOrderHandler:

    def __init__(self, contents: OrderContents) -> None:
        self._contents = contents

    def handle(
        self,
        session: ShopperSession,
        variant_id: str,
        quantity: str | int | None = None,
        referer: str | None = None,
    ) -> Response:
        """Add ``quantity`` units (blank or missing means one) to the cart.

        On an unreasonable quantity or missing stock the shopper is sent
        back where they came from with a flash error and nothing is saved.
        """
        try:
            order = self._contents.create_or_append(session, variant_id, quantity)
        except ValidationError as exc:
            logger.info("Rejected populate of variant %s: %s", variant_id, exc)
            return Response.redirect(
                referer or ROOT_PATH, error=str(exc), guest_token=session.guest_token
            )

        return Response.redirect(
            CART_PATH, order=order_to_dto(order), guest_token=session.guest_token
        )
