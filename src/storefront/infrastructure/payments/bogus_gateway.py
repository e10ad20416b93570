"""Test payment gateway.

Approves every card except the well-known decline numbers, so the whole
checkout can be exercised without a real processor.
"""

from __future__ import annotations

import secrets

from storefront.domain.exceptions import GatewayError
from storefront.domain.model.payment import Payment
from storefront.domain.service.payment_gateway import PaymentGateway

DECLINED_CARDS = frozenset({"4000000000000002", "4000000000009995"})


class BogusGateway(PaymentGateway):

    def purchase(self, payment: Payment, order_number: str) -> str:
        if payment.source in DECLINED_CARDS:
            raise GatewayError("Bogus Gateway: Forced failure")
        return f"{order_number}-{secrets.token_hex(4).upper()}"
