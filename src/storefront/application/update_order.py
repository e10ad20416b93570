"""Application service: update the cart (PUT orders/:number).

Changes the contact email and line quantities (zero removes a line).
With the checkout flag set, a cart-state order is moved into the first
checkout step.
"""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.mapping import order_to_dto
from storefront.application.paths import CART_PATH, checkout_state_path
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import CART
from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.checkout_state_machine import CheckoutStateMachine
from storefront.domain.service.order_contents import OrderContents

# Email becomes mandatory once an order has left the address step.
_EMAIL_OPTIONAL_STATES = (CART, "address")


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        contents: OrderContents,
        state_machine: CheckoutStateMachine,
    ) -> None:
        self._order_repo = order_repo
        self._contents = contents
        self._machine = state_machine

    def handle(
        self,
        session: ShopperSession,
        number: str,
        email: str | None = None,
        quantities: dict[int, int] | None = None,
        checkout: bool = False,
    ) -> Response:
        order = self._order_repo.current_order_for(session)
        if order is None or order.number != number:
            raise EntityNotFoundError(f"Order {number} not found")

        try:
            if email is not None:
                if not email.strip() and order.state not in _EMAIL_OPTIONAL_STATES:
                    raise ValidationError("Email can't be blank")
                order.email = email.strip() or None
            if quantities:
                self._contents.update_quantities(order, quantities)
            if checkout and order.state == CART:
                self._machine.advance(order)
        except ValidationError as exc:
            # Show the cart as stored, not the rejected edits.
            persisted = self._order_repo.get_by_id(order.id) or order
            return Response.render(
                "orders/edit", status=422, order=order_to_dto(persisted), error=str(exc)
            )

        self._order_repo.save(order)

        if checkout:
            steps = self._machine.steps_for(order)
            step = order.state if order.state in steps else steps[0]
            return Response.redirect(checkout_state_path(step))
        return Response.redirect(CART_PATH, order=order_to_dto(order))
