"""Application service: submit a checkout step (PATCH checkout/:state).

Applies the submitted attributes to the order, then asks the state
machine to advance it. Recoverable failures become redirects or
re-rendered views with a flash error; a payment method the shopper may
not use propagates as EntityNotFoundError with the order untouched.
"""

from __future__ import annotations

import logging

from storefront.application.checkout_support import checkout_blocked, enter_requested_step
from storefront.application.dto import CheckoutParams, Response
from storefront.application.mapping import order_to_dto
from storefront.application.messages import (
    GATEWAY_ERROR_FOR_CHECKOUT,
    ORDER_PROCESSED_SUCCESSFULLY,
)
from storefront.application.paths import CART_PATH, checkout_state_path, order_path
from storefront.domain.exceptions import (
    EntityNotFoundError,
    GatewayError,
    InsufficientStockError,
    UnshippableOrderError,
    ValidationError,
)
from storefront.domain.model.address import Address
from storefront.domain.model.order import Order
from storefront.domain.model.payment import Payment, PaymentMethod
from storefront.domain.model.user import ShopperSession
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.payment_method_repository import PaymentMethodRepository
from storefront.domain.repository.user_repository import UserRepository
from storefront.domain.service.checkout_state_machine import CheckoutStateMachine
from storefront.domain.service.stock_service import StockService

logger = logging.getLogger(__name__)


class UpdateCheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        user_repo: UserRepository,
        payment_method_repo: PaymentMethodRepository,
        state_machine: CheckoutStateMachine,
        stock_service: StockService,
    ) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo
        self._payment_method_repo = payment_method_repo
        self._machine = state_machine
        self._stock = stock_service

    def handle(
        self,
        session: ShopperSession,
        state: str,
        params: CheckoutParams | None = None,
    ) -> Response:
        params = params or CheckoutParams()

        order = self._order_repo.current_order_for(session)
        blocked = checkout_blocked(order, self._stock)
        if blocked is not None:
            return blocked

        redirect = enter_requested_step(self._machine, order, state)
        if redirect is not None:
            return redirect

        if session.user is not None:
            if order.user_id is None:
                order.associate_user(session.user)
            if state == "address":
                order.assign_default_user_addresses(session.user)

        # Resolve payment methods before touching the order so a refused
        # method leaves it exactly as it was.
        methods = [self._payment_method(spec.payment_method_id) for spec in params.payments]

        try:
            self._apply(session, order, params, methods)
        except ValidationError as exc:
            return Response.render(
                "checkout/edit", status=422, order=order_to_dto(order), error=str(exc), state=state
            )

        try:
            self._machine.advance(order)
        except GatewayError:
            self._order_repo.save(order)
            return Response.render(
                "checkout/edit",
                status=422,
                order=order_to_dto(order),
                error=GATEWAY_ERROR_FOR_CHECKOUT,
                errors=order.errors,
                state=order.state,
            )
        except InsufficientStockError as exc:
            return Response.redirect(CART_PATH, error=str(exc))
        except UnshippableOrderError as exc:
            self._order_repo.save(order)
            return Response.redirect(checkout_state_path("address"), error=str(exc))
        except ValidationError as exc:
            self._order_repo.save(order)
            return Response.redirect(checkout_state_path(order.state), error=str(exc))

        self._order_repo.save(order)

        if order.is_completed:
            logger.info("Order %s placed", order.number)
            return Response.redirect(
                order_path(order.number),
                notice=ORDER_PROCESSED_SUCCESSFULLY,
                order=order_to_dto(order),
            )
        return Response.redirect(checkout_state_path(order.state), order=order_to_dto(order))

    # --- Helpers --------------------------------------------------------------

    def _payment_method(self, method_id: int) -> PaymentMethod:
        method = self._payment_method_repo.get_by_id(method_id)
        if method is None or not method.selectable:
            raise EntityNotFoundError(f"Payment method #{method_id} not found")
        return method

    def _apply(
        self,
        session: ShopperSession,
        order: Order,
        params: CheckoutParams,
        methods: list[PaymentMethod],
    ) -> None:
        if params.email is not None:
            email = params.email.strip()
            if email and "@" not in email:
                raise ValidationError(f"Email is invalid: {email!r}")
            order.email = email or None

        if params.bill_address is not None:
            order.bill_address = Address.from_dict(params.bill_address)
        if params.use_billing and order.bill_address is not None:
            order.ship_address = order.bill_address
        elif params.ship_address is not None:
            order.ship_address = Address.from_dict(params.ship_address)

        if params.save_user_address and session.user is not None and order.bill_address is not None:
            session.user.persist_order_address(order.bill_address, order.ship_address)
            self._user_repo.save(session.user)

        if params.payments:
            # A fresh submission replaces payments that were never captured.
            order.payments = [p for p in order.payments if not p.is_pending]
            remaining = order.outstanding_balance
            for spec, method in zip(params.payments, methods):
                order.add_payment(
                    Payment(
                        payment_method_id=method.id,
                        amount=remaining,
                        source=spec.source,
                    )
                )
                remaining = Money.zero(order.currency)
