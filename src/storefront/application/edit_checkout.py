"""Application service: show a checkout step (GET checkout/:state)."""

from __future__ import annotations

from storefront.application.checkout_support import checkout_blocked, enter_requested_step
from storefront.application.dto import Response
from storefront.application.mapping import order_to_dto
from storefront.application.paths import checkout_state_path
from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.payment_method_repository import PaymentMethodRepository
from storefront.domain.service.checkout_state_machine import CheckoutStateMachine
from storefront.domain.service.stock_service import StockService


class EditCheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        payment_method_repo: PaymentMethodRepository,
        state_machine: CheckoutStateMachine,
        stock_service: StockService,
    ) -> None:
        self._order_repo = order_repo
        self._payment_method_repo = payment_method_repo
        self._machine = state_machine
        self._stock = stock_service

    def handle(self, session: ShopperSession, state: str | None = None) -> Response:
        """Render the requested step without persisting a step change.

        A guest order is claimed by the signed-in user on the way in; that
        association is the only thing saved.
        """
        order = self._order_repo.current_order_for(session)
        blocked = checkout_blocked(order, self._stock)
        if blocked is not None:
            return blocked

        if session.user is not None and order.user_id is None:
            order.associate_user(session.user)
            self._order_repo.save(order)

        if state is None:
            current = order.state if self._machine.has_step(order, order.state) else None
            return Response.redirect(
                checkout_state_path(current or self._machine.steps_for(order)[0])
            )

        redirect = enter_requested_step(self._machine, order, state)
        if redirect is not None:
            return redirect

        if state == "address" and session.user is not None:
            order.assign_default_user_addresses(session.user)

        return Response.render(
            "checkout/edit",
            order=order_to_dto(order),
            state=state,
            steps=self._machine.steps_for(order),
            payment_methods=[
                (m.id, m.name) for m in self._payment_method_repo.list_available_to_users()
            ],
        )
