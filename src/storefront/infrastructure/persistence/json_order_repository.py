"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.address import Address
from storefront.domain.model.order import LineItem, Order, Shipment
from storefront.domain.model.payment import Payment, PaymentState
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_number(self, number: str) -> Order | None:
        for raw in self._load_raw():
            if raw["number"] == number:
                return self._to_domain(raw)
        return None

    def list_incomplete(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw() if raw.get("completed_at") is None]

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        if order.id is None:
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "number": order.number,
            "state": order.state,
            "user_id": order.user_id,
            "guest_token": order.guest_token,
            "email": order.email,
            "currency": order.currency,
            "created_by_id": order.created_by_id,
            "created_at": order.created_at.isoformat(),
            "completed_at": order.completed_at.isoformat() if order.completed_at else None,
            "bill_address": order.bill_address.to_dict() if order.bill_address else None,
            "ship_address": order.ship_address.to_dict() if order.ship_address else None,
            "line_items": [
                {
                    "id": item.id,
                    "variant_id": item.variant_id,
                    "variant_name": item.variant_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.line_items
            ],
            "shipments": [
                {
                    "shipping_method": s.shipping_method,
                    "cost": str(s.cost.amount),
                    "country_iso": s.country_iso,
                }
                for s in order.shipments
            ],
            "payments": [
                {
                    "payment_method_id": p.payment_method_id,
                    "amount": str(p.amount.amount),
                    "state": p.state.value,
                    "source": p.source,
                    "response_code": p.response_code,
                }
                for p in order.payments
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        return Order(
            id=raw["id"],
            number=raw["number"],
            state=raw["state"],
            user_id=raw.get("user_id"),
            guest_token=raw.get("guest_token"),
            email=raw.get("email"),
            currency=currency,
            created_by_id=raw.get("created_by_id"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            completed_at=(
                datetime.fromisoformat(raw["completed_at"]) if raw.get("completed_at") else None
            ),
            bill_address=Address(**raw["bill_address"]) if raw.get("bill_address") else None,
            ship_address=Address(**raw["ship_address"]) if raw.get("ship_address") else None,
            line_items=[
                LineItem(
                    id=i["id"],
                    variant_id=i["variant_id"],
                    variant_name=i["variant_name"],
                    quantity=Quantity(i["quantity"]),
                    unit_price=Money(Decimal(i["unit_price"]), currency),
                )
                for i in raw["line_items"]
            ],
            shipments=[
                Shipment(
                    shipping_method=s["shipping_method"],
                    cost=Money(Decimal(s["cost"]), currency),
                    country_iso=s["country_iso"],
                )
                for s in raw.get("shipments", [])
            ],
            payments=[
                Payment(
                    payment_method_id=p["payment_method_id"],
                    amount=Money(Decimal(p["amount"]), currency),
                    state=PaymentState(p["state"]),
                    source=p.get("source"),
                    response_code=p.get("response_code"),
                )
                for p in raw.get("payments", [])
            ],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
