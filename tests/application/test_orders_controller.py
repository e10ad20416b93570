"""Tests for the cart and order pages: edit, update, empty and show."""

import pytest

from storefront.application.edit_cart import EditCartHandler
from storefront.application.empty_cart import EmptyCartHandler
from storefront.application.messages import CANNOT_EDIT_ORDERS, UNREASONABLE_QUANTITY
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order import UpdateOrderHandler
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import ShopperSession, User
from tests.factories import build_store, create_completed_order, create_order_with_line_items, create_user


def _guest() -> ShopperSession:
    return ShopperSession(guest_token="tok")


class TestEditCart:

    def test_without_cart_shows_unsaved_cart(self):
        store = build_store()
        response = EditCartHandler(store.order_repo).handle(_guest())
        assert response.template == "orders/edit"
        assert not response.order.is_persisted
        assert response.order.line_items == []
        assert store.order_repo.count() == 0

    def test_shows_current_cart(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok")
        response = EditCartHandler(store.order_repo).handle(_guest(), order.number)
        assert response.is_ok
        assert response.order.number == order.number

    def test_other_order_number_redirects(self):
        store = build_store()
        create_order_with_line_items(store, guest_token="tok")
        response = EditCartHandler(store.order_repo).handle(_guest(), "R000000000")
        assert response.location == "/cart"
        assert response.flash["error"] == CANNOT_EDIT_ORDERS


class TestUpdateOrder:

    def _handler(self, store) -> UpdateOrderHandler:
        return UpdateOrderHandler(store.order_repo, store.contents, store.machine)

    def test_updates_quantities(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok")

        response = self._handler(store).handle(_guest(), order.number, quantities={1: 3})

        assert response.location == "/cart"
        assert store.order_repo.get_by_id(order.id).item_count == 3

    def test_zero_quantity_removes_line(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok")
        self._handler(store).handle(_guest(), order.number, quantities={1: 0})
        assert store.order_repo.get_by_id(order.id).line_items == []

    def test_negative_quantity_rerenders(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok")

        response = self._handler(store).handle(_guest(), order.number, quantities={1: -1})

        assert response.status == 422
        assert response.template == "orders/edit"
        assert response.flash["error"] == UNREASONABLE_QUANTITY
        assert store.order_repo.get_by_id(order.id).item_count == 1
        assert [li.quantity for li in response.order.line_items] == [1]

    def test_short_stock_rerenders_stored_quantities(self):
        store = build_store(count_on_hand=2)
        order = create_order_with_line_items(store, guest_token="tok")

        response = self._handler(store).handle(_guest(), order.number, quantities={1: 5})

        assert response.status == 422
        assert response.flash["error"] == "Amazing Item became unavailable."
        assert [li.quantity for li in response.order.line_items] == [1]
        assert store.order_repo.get_by_id(order.id).item_count == 1

    def test_checkout_moves_cart_to_first_step(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok")

        response = self._handler(store).handle(_guest(), order.number, checkout=True)

        assert response.location == "/checkout/address"
        assert store.order_repo.get_by_id(order.id).state == "address"

    def test_checkout_resumes_current_step(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok", state="delivery")

        response = self._handler(store).handle(_guest(), order.number, checkout=True)

        assert response.location == "/checkout/delivery"
        assert store.order_repo.get_by_id(order.id).state == "delivery"

    def test_blank_email_allowed_in_cart(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok")
        self._handler(store).handle(_guest(), order.number, email="")
        assert store.order_repo.get_by_id(order.id).email is None

    def test_blank_email_rejected_after_address(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok", state="delivery")
        response = self._handler(store).handle(_guest(), order.number, email=" ")
        assert response.status == 422
        assert response.flash["error"] == "Email can't be blank"
        assert store.order_repo.get_by_id(order.id).email == "guest@example.com"

    def test_someone_elses_order_not_found(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="other")
        with pytest.raises(EntityNotFoundError):
            self._handler(store).handle(_guest(), order.number, quantities={1: 2})


class TestEmptyCart:

    def test_empties_current_cart(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok", state="payment")

        response = EmptyCartHandler(store.order_repo, store.contents).handle(_guest())

        assert response.location == "/cart"
        saved = store.order_repo.get_by_id(order.id)
        assert saved.line_items == []
        assert saved.state == "cart"

    def test_without_cart_just_redirects(self):
        store = build_store()
        response = EmptyCartHandler(store.order_repo, store.contents).handle(_guest())
        assert response.location == "/cart"


class TestShowOrder:

    def test_owner_sees_order(self):
        store = build_store()
        user = create_user(store)
        order = create_completed_order(store, user=user)
        response = ShowOrderHandler(store.order_repo).handle(ShopperSession(user=user), order.number)
        assert response.template == "orders/show"
        assert response.order.completed_at is not None

    def test_guest_sees_own_order_by_token(self):
        store = build_store()
        order = create_order_with_line_items(store, guest_token="tok")
        response = ShowOrderHandler(store.order_repo).handle(_guest(), order.number)
        assert response.order.number == order.number

    def test_admin_sees_any_order(self):
        store = build_store()
        order = create_completed_order(store, user=create_user(store))
        admin = User(id=99, email="admin@example.com", api_key="admin", is_admin=True)
        response = ShowOrderHandler(store.order_repo).handle(ShopperSession(user=admin), order.number)
        assert response.is_ok

    def test_other_shopper_gets_not_found(self):
        store = build_store()
        order = create_completed_order(store, user=create_user(store))
        with pytest.raises(EntityNotFoundError, match=order.number):
            ShowOrderHandler(store.order_repo).handle(_guest(), order.number)

    def test_unknown_number(self):
        store = build_store()
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(store.order_repo).handle(_guest(), "R123456789")
