"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.address import Address
from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: int) -> User | None:
        for raw in self._load_raw():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_api_key(self, api_key: str) -> User | None:
        for raw in self._load_raw():
            if raw["api_key"] == api_key:
                return self._to_domain(raw)
        return None

    def save(self, user: User) -> None:
        users = self._load_raw()
        if user.id is None:
            user.id = max((u["id"] for u in users), default=0) + 1

        replaced = False
        for i, raw in enumerate(users):
            if raw["id"] == user.id:
                users[i] = self._to_raw(user)
                replaced = True
                break
        if not replaced:
            users.append(self._to_raw(user))
        self._persist_raw(users)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "email": user.email,
            "api_key": user.api_key,
            "is_admin": user.is_admin,
            "bill_address": user.bill_address.to_dict() if user.bill_address else None,
            "ship_address": user.ship_address.to_dict() if user.ship_address else None,
            "addresses": [a.to_dict() for a in user.addresses],
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            email=raw["email"],
            api_key=raw["api_key"],
            is_admin=raw.get("is_admin", False),
            bill_address=Address(**raw["bill_address"]) if raw.get("bill_address") else None,
            ship_address=Address(**raw["ship_address"]) if raw.get("ship_address") else None,
            addresses=[Address(**a) for a in raw.get("addresses", [])],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, users: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(users, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
