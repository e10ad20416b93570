"""Application service: browse the catalog (GET products)."""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.mapping import product_to_dto
from storefront.domain.model.user import ShopperSession
from storefront.domain.service.product_searcher import ProductSearcher


class ListProductsHandler:

    def __init__(self, searcher: ProductSearcher) -> None:
        self._searcher = searcher

    def handle(self, session: ShopperSession, keywords: str | None = None) -> Response:
        self._searcher.current_user = session.user
        products = self._searcher.retrieve_products(keywords=keywords)
        return Response.render(
            "products/index", products=[product_to_dto(p) for p in products]
        )
