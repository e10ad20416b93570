"""End-to-end tests of the click CLI against a temporary data directory."""

import json
import re

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli

ADDRESS = json.dumps({
    "firstname": "John",
    "lastname": "Doe",
    "address1": "10 Lovely Street",
    "city": "Herndon",
    "zipcode": "35005",
    "state_name": "Alabama",
    "country_iso": "US",
    "phone": "555-555-0199",
})


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args: str, api_key: str | None = None):
        prefix = ["--data-dir", str(tmp_path)]
        if api_key is not None:
            prefix += ["--api-key", api_key]
        return runner.invoke(cli, prefix + list(args))

    return _run


@pytest.fixture
def shopper(run) -> str:
    """Seed a product with stock and return a signed-in shopper's API key."""
    assert run("product", "add", "--name", "Ruby Tote", "--price", "15.00").exit_code == 0
    assert run("stock", "set", "--variant", "1", "--count", "5").exit_code == 0
    result = run("user", "create", "--email", "shopper@example.com")
    assert result.exit_code == 0
    return re.search(r"API key: (\w+)", result.output).group(1)


def _order_number(output: str) -> str:
    return re.search(r"R\d{9}", output).group(0)


class TestCatalogCommands:

    def test_product_list(self, run, shopper):
        result = run("product", "list")
        assert result.exit_code == 0
        assert "Ruby Tote" in result.output
        assert "$15.00" in result.output

    def test_unavailable_product_hidden(self, run, shopper):
        run("product", "add", "--name", "Coming Soon", "--price", "9.00", "--unavailable")
        assert "Coming Soon" not in run("product", "list").output
        result = run("product", "show", "coming-soon")
        assert result.exit_code == 1
        assert "Product not found" in result.output

    def test_taxon_show(self, run):
        run("taxon", "add", "--name", "Bags", "--permalink", "categories/bags")
        run("product", "add", "--name", "Ruby Tote", "--price", "15.00", "--taxon", "categories/bags")
        result = run("taxon", "show", "categories/bags")
        assert result.exit_code == 0
        assert "Bags" in result.output
        assert "Ruby Tote" in result.output


class TestCartCommands:

    def test_add_and_show(self, run, shopper):
        result = run("cart", "add", "--variant", "1", "--quantity", "2", api_key=shopper)
        assert result.exit_code == 0
        assert "-> /cart" in result.output

        result = run("cart", "show", api_key=shopper)
        assert "Ruby Tote" in result.output
        assert "$30.00" in result.output

    def test_guest_token_issued(self, run, shopper):
        result = run("cart", "add", "--variant", "1")
        assert "Guest token:" in result.output

    def test_unreasonable_quantity(self, run, shopper):
        result = run("cart", "add", "--variant", "1", "--quantity", "0", api_key=shopper)
        assert "[error] Please enter a reasonable quantity." in result.output
        assert "-> /" in result.output

    def test_update_quantities(self, run, shopper):
        run("cart", "add", "--variant", "1", api_key=shopper)
        number = _order_number(run("cart", "show", api_key=shopper).output)

        result = run("cart", "update", "--number", number, "--item", "1:3", api_key=shopper)

        assert result.exit_code == 0
        assert "$45.00" in run("cart", "show", api_key=shopper).output

    def test_empty(self, run, shopper):
        run("cart", "add", "--variant", "1", api_key=shopper)
        run("cart", "empty", api_key=shopper)
        assert "Your cart is empty." in run("cart", "show", api_key=shopper).output


class TestCheckoutCommands:

    def _fill_cart(self, run, api_key):
        run("cart", "add", "--variant", "1", api_key=api_key)
        steps = [
            ("--state", "address", "--bill-address", ADDRESS, "--use-billing"),
            ("--state", "delivery"),
        ]
        for step in steps:
            assert run("checkout", "update", *step, api_key=api_key).exit_code == 0

    def test_full_checkout(self, run, shopper, tmp_path):
        self._fill_cart(run, shopper)
        result = run(
            "checkout", "update", "--state", "payment",
            "--payment-method", "1", "--card", "4111111111111111", api_key=shopper,
        )
        assert "-> /checkout/confirm" in result.output

        result = run("checkout", "update", "--state", "confirm", api_key=shopper)

        assert "[notice] Your order has been processed successfully" in result.output
        number = _order_number(result.output)
        assert f"-> /orders/{number}" in result.output
        stock = json.loads((tmp_path / "stock.json").read_text())
        assert stock[0]["count_on_hand"] == 4

        shown = run("order", "show", "--number", number, api_key=shopper)
        assert "state=complete" in shown.output
        assert "$20.00" in shown.output

    def test_declined_card(self, run, shopper):
        self._fill_cart(run, shopper)
        run(
            "checkout", "update", "--state", "payment",
            "--payment-method", "1", "--card", "4000000000000002", api_key=shopper,
        )

        result = run("checkout", "update", "--state", "confirm", api_key=shopper)

        assert "[422] checkout/edit" in result.output
        assert "There was a problem with your payment information" in result.output
        assert "Bogus Gateway: Forced failure" in result.output

    def test_cannot_skip_ahead(self, run, shopper):
        run("cart", "add", "--variant", "1", api_key=shopper)
        run("checkout", "update", "--state", "address", "--email", "", api_key=shopper)
        result = run("checkout", "show", "--state", "confirm", api_key=shopper)
        assert "-> /checkout/address" in result.output

    def test_unknown_payment_method(self, run, shopper):
        self._fill_cart(run, shopper)
        result = run(
            "checkout", "update", "--state", "payment", "--payment-method", "7", api_key=shopper,
        )
        assert result.exit_code == 1
        assert "Payment method #7 not found" in result.output


class TestOrderCommands:

    def test_unknown_order(self, run, shopper):
        result = run("order", "show", "--number", "R000000000", api_key=shopper)
        assert result.exit_code == 1
        assert "Order R000000000 not found" in result.output
