"""Tests for adding to, changing and emptying carts."""

import pytest

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError, ValidationError
from storefront.domain.model.order import CART
from storefront.domain.model.user import ShopperSession
from storefront.domain.model.value_objects import UNREASONABLE_QUANTITY
from tests.factories import build_store, create_order_with_line_items, create_user


class TestCreateOrAppend:

    def test_guest_gets_token_and_new_cart(self):
        store = build_store()
        session = ShopperSession()

        order = store.contents.create_or_append(session, "1", "2")

        assert session.guest_token
        assert order.guest_token == session.guest_token
        assert order.id is not None
        assert order.item_count == 2

    def test_appends_to_existing_cart(self):
        store = build_store()
        session = ShopperSession(guest_token="tok")
        first = store.contents.create_or_append(session, "1")
        second = store.contents.create_or_append(session, "2")
        assert first.id == second.id
        assert len(second.line_items) == 2
        assert store.order_repo.count() == 1

    def test_user_cart_is_owned(self):
        store = build_store()
        user = create_user(store)
        order = store.contents.create_or_append(ShopperSession(user=user), "1")
        assert order.user_id == user.id
        assert order.email == user.email
        assert order.guest_token is None

    def test_blank_quantity_means_one(self):
        store = build_store()
        order = store.contents.create_or_append(ShopperSession(guest_token="tok"), "1", "")
        assert order.item_count == 1

    def test_unreasonable_quantity_saves_nothing(self):
        store = build_store()
        with pytest.raises(ValidationError, match=UNREASONABLE_QUANTITY):
            store.contents.create_or_append(ShopperSession(guest_token="tok"), "1", "-1")
        assert store.order_repo.count() == 0

    def test_unknown_variant(self):
        store = build_store()
        with pytest.raises(EntityNotFoundError, match="Variant '99'"):
            store.contents.create_or_append(ShopperSession(guest_token="tok"), "99")

    def test_stock_counts_what_is_already_in_cart(self):
        store = build_store(count_on_hand=2)
        session = ShopperSession(guest_token="tok")
        store.contents.create_or_append(session, "1", 2)
        with pytest.raises(InsufficientStockError, match="Amazing Item"):
            store.contents.create_or_append(session, "1", 1)
        assert store.order_repo.current_order_for(session).item_count == 2


class TestUpdateQuantities:

    def test_changes_and_removes_lines(self):
        store = build_store()
        order = create_order_with_line_items(store)
        order.add_variant(store.variants[1], order.line_items[0].quantity)
        store.order_repo.save(order)

        store.contents.update_quantities(order, {1: 3, 2: 0})

        saved = store.order_repo.get_by_id(order.id)
        assert [(li.variant_id, li.quantity.value) for li in saved.line_items] == [("1", 3)]
        assert saved.shipments == []

    def test_short_stock_not_saved(self):
        store = build_store(count_on_hand=2)
        order = create_order_with_line_items(store)
        with pytest.raises(InsufficientStockError):
            store.contents.update_quantities(order, {1: 5})
        assert store.order_repo.get_by_id(order.id).item_count == 1
        assert order.item_count == 1


class TestEmpty:

    def test_empties_and_resets_state(self):
        store = build_store()
        order = create_order_with_line_items(store, state="payment")
        store.contents.empty(order)
        saved = store.order_repo.get_by_id(order.id)
        assert saved.line_items == []
        assert saved.state == CART
