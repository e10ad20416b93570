"""Ordered checkout step sequence.

The flow is data, not code: steps can be inserted or removed at runtime
(e.g. an extra review step after payment) and each step may carry a
condition deciding whether it applies to a given order. ``cart`` is the
starting state of every order and never part of the flow; ``complete``
is always its last step.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import CART, COMPLETE

if TYPE_CHECKING:
    from storefront.domain.model.order import Order


@dataclass(frozen=True)
class CheckoutStep:

    name: str
    condition: Callable[[Order], bool] | None = None

    def applies_to(self, order: Order) -> bool:
        return self.condition is None or self.condition(order)


class CheckoutFlow:

    def __init__(self, steps: list[CheckoutStep]) -> None:
        names = [step.name for step in steps]
        if len(set(names)) != len(names):
            raise ValidationError("Checkout steps must be unique")
        if CART in names or COMPLETE in names:
            raise ValidationError(f"'{CART}' and '{COMPLETE}' are implicit states")
        self._steps = list(steps)

    @staticmethod
    def default() -> CheckoutFlow:
        return CheckoutFlow([
            CheckoutStep("address"),
            CheckoutStep("delivery"),
            CheckoutStep("payment", condition=lambda order: order.payment_required),
            CheckoutStep("confirm"),
        ])

    def copy(self) -> CheckoutFlow:
        return CheckoutFlow(self._steps)

    # --- Queries --------------------------------------------------------------

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self._steps] + [COMPLETE]

    def steps_for(self, order: Order) -> list[str]:
        """The step names that apply to this order, in order."""
        return [step.name for step in self._steps if step.applies_to(order)] + [COMPLETE]

    def has_step(self, name: str) -> bool:
        return name in self.step_names

    # --- Mutation -------------------------------------------------------------

    def insert_step(
        self,
        name: str,
        *,
        before: str | None = None,
        after: str | None = None,
        condition: Callable[[Order], bool] | None = None,
    ) -> None:
        """Insert a named step relative to an existing one."""
        if (before is None) == (after is None):
            raise ValidationError("Specify exactly one of 'before' or 'after'")
        if self.has_step(name) or name == CART:
            raise ValidationError(f"Checkout step '{name}' already exists")
        anchor = before if before is not None else after
        if anchor == COMPLETE and before is not None:
            self._steps.append(CheckoutStep(name, condition))
            return
        position = self._index(anchor)
        if after is not None:
            position += 1
        self._steps.insert(position, CheckoutStep(name, condition))

    def remove_step(self, name: str) -> None:
        self._steps.pop(self._index(name))

    def _index(self, name: str | None) -> int:
        for i, step in enumerate(self._steps):
            if step.name == name:
                return i
        raise ValidationError(f"Unknown checkout step '{name}'")
