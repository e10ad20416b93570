"""Application service: product detail page (GET products/:slug)."""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.mapping import product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, session: ShopperSession, slug: str) -> Response:
        """Only admins may view products that are not available yet."""
        product = self._product_repo.get_by_slug(slug) or self._product_repo.get_by_id(slug)
        if product is None or not (product.is_available() or session.is_admin):
            raise EntityNotFoundError(f"Product not found: '{slug}'")
        return Response.render("products/show", product=product_to_dto(product))
