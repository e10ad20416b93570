"""Domain service: cart contents.

Adding to, changing and emptying a cart touches the order, the catalog
and stock at once, so the rules live here rather than on the Order.
Every operation validates fully before it saves, leaving the order
unchanged on failure.
"""

from __future__ import annotations

import copy
import logging
import secrets

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError
from storefront.domain.model.order import Order
from storefront.domain.model.user import ShopperSession
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_service import StockService

logger = logging.getLogger(__name__)


class OrderContents:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        stock_service: StockService,
        currency: str = "USD",
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._stock = stock_service
        self._currency = currency

    def create_or_append(
        self,
        session: ShopperSession,
        variant_id: str,
        quantity: Quantity | str | int | None = None,
    ) -> Order:
        """Add a variant to the session's cart, creating the cart if needed.

        Anonymous sessions are issued a guest token so the new cart can be
        found again on the next request.
        """
        qty = quantity if isinstance(quantity, Quantity) else Quantity.parse(quantity)

        variant = self._product_repo.get_variant(variant_id)
        if variant is None:
            raise EntityNotFoundError(f"Variant '{variant_id}' not found")

        order = self._order_repo.current_order_for(session)
        if order is None:
            if session.user is None and session.guest_token is None:
                session.guest_token = secrets.token_urlsafe(16)
            order = Order.create(
                user=session.user,
                guest_token=session.guest_token,
                currency=self._currency,
            )
            logger.info("Created cart %s", order.number)

        existing = order.find_line_item_by_variant(variant.id)
        wanted = qty.value + (existing.quantity.value if existing is not None else 0)
        if not self._stock.can_supply(variant.id, wanted):
            raise InsufficientStockError([variant.name])

        order.add_variant(variant, qty)
        self._order_repo.save(order)
        return order

    def update_quantities(self, order: Order, quantities: dict[int, int]) -> None:
        """Set line quantities by line item id; zero removes the line.

        The changes are tried on a copy first, so ``order`` is left as it
        was when a quantity is rejected or stock falls short.
        """
        draft = copy.deepcopy(order)
        for line_id, qty in quantities.items():
            draft.set_quantity(line_id, qty)
        self._stock.ensure_sufficient_stock(draft)

        order.line_items = draft.line_items
        order.shipments = draft.shipments
        self._order_repo.save(order)

    def empty(self, order: Order) -> None:
        order.empty()
        self._order_repo.save(order)
        logger.info("Emptied cart %s", order.number)
