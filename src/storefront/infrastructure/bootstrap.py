"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.domain.model.checkout_flow import CheckoutFlow
from storefront.domain.model.value_objects import Money
from storefront.domain.service.checkout_state_machine import CheckoutStateMachine
from storefront.domain.service.order_contents import OrderContents
from storefront.domain.service.product_searcher import ProductSearcher
from storefront.domain.service.shipping import ShippingCalculator, ShippingRate
from storefront.domain.service.stock_service import StockService
from storefront.infrastructure.config import Settings
from storefront.infrastructure.payments.bogus_gateway import BogusGateway
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_payment_method_repository import (
    JsonPaymentMethodRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_stock_repository import (
    JsonStockRepository,
)
from storefront.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


def product_repository(config: Settings) -> JsonProductRepository:
    return JsonProductRepository(config.data_dir / "catalog.json")


def order_repository(config: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(config.data_dir / "orders.json")


def stock_repository(config: Settings) -> JsonStockRepository:
    return JsonStockRepository(config.data_dir / "stock.json")


def payment_method_repository(config: Settings) -> JsonPaymentMethodRepository:
    return JsonPaymentMethodRepository(config.data_dir / "payment_methods.json")


def user_repository(config: Settings) -> JsonUserRepository:
    return JsonUserRepository(config.data_dir / "users.json")


def stock_service(config: Settings) -> StockService:
    return StockService(stock_repository(config), config.track_inventory_levels)


def shipping_calculator(config: Settings) -> ShippingCalculator:
    rate = ShippingRate(
        method_name=config.shipping_method_name,
        cost=Money(config.shipping_cost, config.currency),
    )
    return ShippingCalculator({iso: [rate] for iso in config.shippable_countries})


def checkout_state_machine(config: Settings) -> CheckoutStateMachine:
    return CheckoutStateMachine(
        flow=CheckoutFlow.default(),
        stock_service=stock_service(config),
        shipping=shipping_calculator(config),
        gateway=BogusGateway(),
    )


def order_contents(config: Settings) -> OrderContents:
    return OrderContents(
        order_repo=order_repository(config),
        product_repo=product_repository(config),
        stock_service=stock_service(config),
        currency=config.currency,
    )


def product_searcher(config: Settings) -> ProductSearcher:
    return ProductSearcher(product_repository(config))
