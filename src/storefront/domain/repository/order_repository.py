"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order
from storefront.domain.model.user import ShopperSession


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_number(self, number: str) -> Order | None:
        """Return an order by its public number, or None if not found."""

    @abstractmethod
    def list_incomplete(self) -> list[Order]:
        """Return every order that has not been completed."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""

    def current_order_for(self, session: ShopperSession) -> Order | None:
        """Return the session's one incomplete order, if any.

        A signed-in user's own cart wins over a guest cart carrying the
        session's token; among several candidates the newest is current.
        """
        candidates = self.list_incomplete()
        if session.user_id is not None:
            owned = [o for o in candidates if o.user_id == session.user_id]
            if owned:
                return max(owned, key=lambda o: o.created_at)
        if session.guest_token is not None:
            by_token = [o for o in candidates if o.guest_token == session.guest_token]
            if by_token:
                return max(by_token, key=lambda o: o.created_at)
        return None
