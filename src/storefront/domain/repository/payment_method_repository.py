"""Abstract repository for PaymentMethod records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.payment import PaymentMethod


class PaymentMethodRepository(ABC):

    @abstractmethod
    def get_by_id(self, method_id: int) -> PaymentMethod | None:
        """Return a payment method by ID, or None."""

    @abstractmethod
    def list_all(self) -> list[PaymentMethod]:
        """Return every payment method."""

    def list_available_to_users(self) -> list[PaymentMethod]:
        return [m for m in self.list_all() if m.selectable]
