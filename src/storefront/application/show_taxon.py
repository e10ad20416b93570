"""Application service: browse one taxon (GET t/:permalink)."""

from __future__ import annotations

from storefront.application.dto import Response
from storefront.application.mapping import product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import ShopperSession
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.product_searcher import ProductSearcher


class ShowTaxonHandler:

    def __init__(self, product_repo: ProductRepository, searcher: ProductSearcher) -> None:
        self._product_repo = product_repo
        self._searcher = searcher

    def handle(self, session: ShopperSession, permalink: str) -> Response:
        taxon = self._product_repo.get_taxon(permalink)
        if taxon is None:
            raise EntityNotFoundError(f"Taxon not found: '{permalink}'")

        self._searcher.current_user = session.user
        products = self._searcher.retrieve_products(taxon_permalink=taxon.permalink)
        return Response.render(
            "taxons/show",
            taxon=taxon.name,
            products=[product_to_dto(p) for p in products],
        )
