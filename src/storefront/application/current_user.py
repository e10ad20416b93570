"""Resolve who is shopping from request credentials."""

from __future__ import annotations

from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.user_repository import UserRepository


def resolve_session(
    user_repo: UserRepository,
    api_key: str | None = None,
    guest_token: str | None = None,
) -> ShopperSession:
    """Build the shopper session for a request.

    An unknown API key is treated as an anonymous shopper rather than an
    error; the guest token is carried either way.
    """
    user = user_repo.get_by_api_key(api_key) if api_key else None
    return ShopperSession(user=user, guest_token=guest_token)
