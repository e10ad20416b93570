"""Domain service: proposing shipments from a flat shipping-rate table."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import UnshippableOrderError, ValidationError
from storefront.domain.model.order import Order, Shipment
from storefront.domain.model.value_objects import Money

ITEMS_CANNOT_BE_SHIPPED = "Items cannot be shipped"


@dataclass(frozen=True)
class ShippingRate:

    method_name: str
    cost: Money


class ShippingCalculator:
    """Maps destination country ISO codes to the rates offered there."""

    def __init__(self, rates_by_country: dict[str, list[ShippingRate]]) -> None:
        self._rates = {iso.upper(): list(rates) for iso, rates in rates_by_country.items()}

    def rates_for(self, country_iso: str) -> list[ShippingRate]:
        return list(self._rates.get(country_iso.upper(), []))

    def propose_shipments(self, order: Order) -> list[Shipment]:
        """Replace the order's shipments with one at the cheapest rate."""
        if order.ship_address is None:
            raise ValidationError("Ship address is required")
        rates = self.rates_for(order.ship_address.country_iso)
        if not rates:
            raise UnshippableOrderError(ITEMS_CANNOT_BE_SHIPPED)
        cheapest = min(rates, key=lambda rate: rate.cost.amount)
        order.shipments = [
            Shipment(
                shipping_method=cheapest.method_name,
                cost=cheapest.cost,
                country_iso=order.ship_address.country_iso,
            )
        ]
        return order.shipments
