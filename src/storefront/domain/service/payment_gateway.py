"""Port for payment processing.

The domain only needs "capture this payment or tell me why not";
concrete gateways live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.payment import Payment


class PaymentGateway(ABC):

    @abstractmethod
    def purchase(self, payment: Payment, order_number: str) -> str:
        """Capture the payment amount and return the gateway response code.

        Raises GatewayError when the gateway refuses the payment.
        """
