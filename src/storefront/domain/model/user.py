"""Registered shopper accounts and the per-request shopper session."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.address import Address


@dataclass
class User:

    id: int | None
    email: str
    api_key: str
    is_admin: bool = False
    bill_address: Address | None = None
    ship_address: Address | None = None
    addresses: list[Address] = field(default_factory=list)

    def persist_order_address(self, bill: Address, ship: Address | None = None) -> None:
        """Save the order's addresses to the address book and as defaults."""
        for address in (bill, ship):
            if address is not None and address not in self.addresses:
                self.addresses.append(address)
        self.bill_address = bill
        self.ship_address = ship or bill


@dataclass
class ShopperSession:
    """Who is making the request: a signed-in user, a guest token, or both."""

    user: User | None = None
    guest_token: str | None = None

    @property
    def user_id(self) -> int | None:
        return self.user.id if self.user is not None else None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin
