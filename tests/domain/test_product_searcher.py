"""Tests for catalog search visibility and filtering."""

from datetime import datetime, timedelta, timezone

from storefront.domain.model.product import Product, Variant
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money
from tests.factories import build_store


def _store_with_upcoming_product():
    store = build_store()
    store.product_repo.save(
        Product(
            id="3", name="Coming Soon", slug="coming-soon",
            variants=[Variant("3", "3", "SOON", "Coming Soon", Money.of("9.00"))],
            available_on=datetime.now(timezone.utc) + timedelta(days=7),
        )
    )
    return store


class TestRetrieveProducts:

    def test_shoppers_see_available_products_sorted(self):
        searcher = _store_with_upcoming_product().searcher()
        names = [p.name for p in searcher.retrieve_products()]
        assert names == ["Amazing Item", "Ruby Tote"]

    def test_admins_see_everything(self):
        searcher = _store_with_upcoming_product().searcher()
        searcher.current_user = User(id=1, email="admin@example.com", api_key="k", is_admin=True)
        names = [p.name for p in searcher.retrieve_products()]
        assert "Coming Soon" in names

    def test_regular_user_does_not_see_upcoming(self):
        searcher = _store_with_upcoming_product().searcher()
        searcher.current_user = User(id=2, email="u@example.com", api_key="k")
        assert "Coming Soon" not in [p.name for p in searcher.retrieve_products()]

    def test_taxon_includes_children(self):
        searcher = build_store().searcher()
        names = [p.name for p in searcher.retrieve_products(taxon_permalink="categories")]
        assert names == ["Amazing Item", "Ruby Tote"]

    def test_taxon_filter(self):
        searcher = build_store().searcher()
        names = [p.name for p in searcher.retrieve_products(taxon_permalink="categories/bags")]
        assert names == ["Ruby Tote"]

    def test_taxon_prefix_is_not_a_parent(self):
        searcher = build_store().searcher()
        assert searcher.retrieve_products(taxon_permalink="categories/bag") == []

    def test_keywords(self):
        searcher = build_store().searcher()
        assert [p.name for p in searcher.retrieve_products(keywords="tote")] == ["Ruby Tote"]
