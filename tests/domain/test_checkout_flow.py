"""Unit tests for the configurable checkout step sequence."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.checkout_flow import CheckoutFlow, CheckoutStep
from storefront.domain.model.order import Order
from storefront.domain.model.product import Variant
from storefront.domain.model.value_objects import Money, Quantity


def _order(price: str = "19.99") -> Order:
    order = Order.create()
    order.add_variant(
        Variant(id="1", product_id="1", sku="S", name="Item", price=Money.of(price)),
        Quantity(1),
    )
    return order


class TestDefaultFlow:

    def test_step_names(self):
        assert CheckoutFlow.default().step_names == [
            "address", "delivery", "payment", "confirm", "complete",
        ]

    def test_payment_skipped_for_free_orders(self):
        flow = CheckoutFlow.default()
        assert "payment" in flow.steps_for(_order())
        assert "payment" not in flow.steps_for(_order(price="0"))

    def test_cart_is_not_a_step(self):
        assert not CheckoutFlow.default().has_step("cart")


class TestFlowConstruction:

    def test_duplicates_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            CheckoutFlow([CheckoutStep("address"), CheckoutStep("address")])

    @pytest.mark.parametrize("name", ["cart", "complete"])
    def test_implicit_states_rejected(self, name):
        with pytest.raises(ValidationError, match="implicit"):
            CheckoutFlow([CheckoutStep(name)])


class TestFlowMutation:

    def test_insert_after(self):
        flow = CheckoutFlow.default()
        flow.insert_step("review", after="payment")
        assert flow.step_names[:4] == ["address", "delivery", "payment", "review"]

    def test_insert_before(self):
        flow = CheckoutFlow.default()
        flow.insert_step("gift", before="address")
        assert flow.step_names[0] == "gift"

    def test_insert_before_complete_appends(self):
        flow = CheckoutFlow.default()
        flow.insert_step("survey", before="complete")
        assert flow.step_names[-2:] == ["survey", "complete"]

    def test_insert_with_condition(self):
        flow = CheckoutFlow.default()
        flow.insert_step("review", after="payment", condition=lambda o: o.item_count > 1)
        assert "review" not in flow.steps_for(_order())

    def test_insert_requires_exactly_one_anchor(self):
        flow = CheckoutFlow.default()
        with pytest.raises(ValidationError, match="exactly one"):
            flow.insert_step("review")
        with pytest.raises(ValidationError, match="exactly one"):
            flow.insert_step("review", before="confirm", after="payment")

    def test_insert_existing_rejected(self):
        with pytest.raises(ValidationError, match="already exists"):
            CheckoutFlow.default().insert_step("payment", after="address")

    def test_insert_unknown_anchor_rejected(self):
        with pytest.raises(ValidationError, match="Unknown checkout step"):
            CheckoutFlow.default().insert_step("review", after="shipping")

    def test_remove_step(self):
        flow = CheckoutFlow.default()
        flow.remove_step("delivery")
        assert "delivery" not in flow.step_names

    def test_copy_is_independent(self):
        flow = CheckoutFlow.default()
        other = flow.copy()
        other.remove_step("confirm")
        assert flow.has_step("confirm")
        assert not other.has_step("confirm")
