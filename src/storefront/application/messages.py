"""User-visible flash messages."""

from storefront.domain.model.value_objects import UNREASONABLE_QUANTITY
from storefront.domain.service.shipping import ITEMS_CANNOT_BE_SHIPPED

ORDER_PROCESSED_SUCCESSFULLY = "Your order has been processed successfully"
CANNOT_EDIT_ORDERS = "You may only edit your current shopping cart."
GATEWAY_ERROR_FOR_CHECKOUT = (
    "There was a problem with your payment information. "
    "Please check your information and try again."
)

__all__ = [
    "CANNOT_EDIT_ORDERS",
    "GATEWAY_ERROR_FOR_CHECKOUT",
    "ITEMS_CANNOT_BE_SHIPPED",
    "ORDER_PROCESSED_SUCCESSFULLY",
    "UNREASONABLE_QUANTITY",
]
