"""JSON-file-backed implementation of PaymentMethodRepository.

A fresh data directory starts with a single card method so a new store
can take orders straight away.
"""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.payment import PaymentMethod
from storefront.domain.repository.payment_method_repository import PaymentMethodRepository

_DEFAULT_METHODS = [
    {"id": 1, "name": "Credit Card", "active": True, "available_to_users": True},
]


class JsonPaymentMethodRepository(PaymentMethodRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_id(self, method_id: int) -> PaymentMethod | None:
        for method in self.list_all():
            if method.id == method_id:
                return method
        return None

    def list_all(self) -> list[PaymentMethod]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return [
            PaymentMethod(
                id=m["id"],
                name=m["name"],
                active=m.get("active", True),
                available_to_users=m.get("available_to_users", True),
            )
            for m in raw
        ]

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(_DEFAULT_METHODS, indent=2) + "\n", encoding="utf-8"
            )
