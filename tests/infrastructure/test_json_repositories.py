"""Round trips through the JSON-file repositories."""

from datetime import datetime, timezone

from storefront.domain.model.order import Order, Shipment
from storefront.domain.model.payment import Payment, PaymentState
from storefront.domain.model.product import Product, Taxon, Variant
from storefront.domain.model.stock import StockItem
from storefront.domain.model.user import ShopperSession, User
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_payment_method_repository import (
    JsonPaymentMethodRepository,
)
from storefront.infrastructure.persistence.json_product_repository import JsonProductRepository
from storefront.infrastructure.persistence.json_stock_repository import JsonStockRepository
from storefront.infrastructure.persistence.json_user_repository import JsonUserRepository
from tests.factories import build_address


def _variant() -> Variant:
    return Variant(id="1", product_id="1", sku="TOTE", name="Ruby Tote", price=Money.of("15.00"))


class TestJsonOrderRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = Order.create(guest_token="tok")
        order.email = "guest@example.com"
        order.add_variant(_variant(), Quantity(2))
        order.bill_address = order.ship_address = build_address()
        order.shipments = [Shipment("UPS Ground", Money.of("5.00"), "US")]
        payment = Payment(1, Money.of("35.00"), source="4111111111111111")
        payment.complete("AUTH-1")
        order.add_payment(payment)
        order.state = "confirm"

        repo.save(order)
        loaded = repo.get_by_number(order.number)

        assert loaded == order
        assert loaded.payments[0].state == PaymentState.COMPLETED
        assert loaded.total == Money.of("35.00")

    def test_assigns_sequential_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = Order.create(), Order.create()
        repo.save(first)
        repo.save(second)
        assert (first.id, second.id) == (1, 2)
        assert repo.next_id() == 3

    def test_current_order_skips_completed(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        done = Order.create(guest_token="tok")
        done.finalize()
        repo.save(done)
        cart = Order.create(guest_token="tok")
        repo.save(cart)

        assert repo.current_order_for(ShopperSession(guest_token="tok")).id == cart.id
        assert repo.current_order_for(ShopperSession(guest_token="other")) is None


class TestJsonProductRepository:

    def test_products_and_taxons(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "catalog.json")
        available_on = datetime(2024, 1, 1, tzinfo=timezone.utc)
        repo.save(Product(
            id="1", name="Ruby Tote", slug="ruby-tote", variants=[_variant()],
            available_on=available_on, taxon_permalinks=["categories/bags"],
        ))
        repo.save_taxon(Taxon(id="bags", name="Bags", permalink="categories/bags"))

        product = repo.get_by_slug("ruby-tote")
        assert product.available_on == available_on
        assert product.price == Money.of("15.00")
        assert repo.get_variant("1").sku == "TOTE"
        assert repo.get_taxon("categories/bags").name == "Bags"


class TestJsonStockRepository:

    def test_upsert(self, tmp_path):
        repo = JsonStockRepository(tmp_path / "stock.json")
        repo.save(StockItem("1", "Ruby Tote", 5))
        item = repo.get_by_variant_id("1")
        item.unstock(2)
        repo.save(item)
        assert [i.count_on_hand for i in repo.list_all()] == [3]


class TestJsonPaymentMethodRepository:

    def test_fresh_store_has_card_method(self, tmp_path):
        repo = JsonPaymentMethodRepository(tmp_path / "payment_methods.json")
        assert [m.name for m in repo.list_available_to_users()] == ["Credit Card"]
        assert repo.get_by_id(1).selectable


class TestJsonUserRepository:

    def test_round_trip_with_addresses(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        user = User(id=None, email="shopper@example.com", api_key="key")
        user.persist_order_address(build_address())
        repo.save(user)

        loaded = repo.get_by_api_key("key")
        assert loaded.id == 1
        assert loaded.bill_address == build_address()
        assert loaded.addresses == [build_address()]
