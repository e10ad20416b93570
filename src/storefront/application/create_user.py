"""Application service: register a shopper account."""

from __future__ import annotations

import secrets

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository


class CreateUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, email: str, is_admin: bool = False) -> User:
        """Create a user and issue the API key used to sign requests."""
        if not email or "@" not in email:
            raise ValidationError(f"Invalid email: {email!r}")
        user = User(id=None, email=email.strip(), api_key=secrets.token_hex(20), is_admin=is_admin)
        self._user_repo.save(user)
        return user
