"""Abstract repository for User accounts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_api_key(self, api_key: str) -> User | None:
        """Return the user owning an API key, or None."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user, assigning an ID to new ones."""
