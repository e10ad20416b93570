"""Domain -> DTO mapping shared by the handlers."""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.application.dto import LineItemDTO, OrderDTO, PaymentDTO, ProductDTO
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        number=order.number,
        state=order.state,
        email=order.email,
        line_items=[
            LineItemDTO(
                id=item.id,
                variant_id=item.variant_id,
                variant_name=item.variant_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.line_items
        ],
        item_total=str(order.item_total),
        ship_total=str(order.ship_total),
        total=str(order.total),
        payment_total=str(order.payment_total),
        payments=[
            PaymentDTO(
                payment_method_id=p.payment_method_id,
                amount=str(p.amount),
                state=p.state.value,
                last_digits=p.source_last_digits,
            )
            for p in order.payments
        ],
        bill_address=order.bill_address.to_dict() if order.bill_address else None,
        ship_address=order.ship_address.to_dict() if order.ship_address else None,
        shipping_method=order.shipments[0].shipping_method if order.shipments else None,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        completed_at=(
            order.completed_at.strftime("%Y-%m-%d %H:%M UTC") if order.completed_at else None
        ),
    )


def product_to_dto(product: Product, now: datetime | None = None) -> ProductDTO:
    now = now or datetime.now(timezone.utc)
    return ProductDTO(
        id=product.id,
        name=product.name,
        slug=product.slug,
        price=str(product.price) if product.variants else "-",
        available=product.is_available(now),
        variant_ids=[v.id for v in product.variants],
    )
