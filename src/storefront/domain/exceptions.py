"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the application layer can map them onto redirects and flash messages,
and the CLI can catch them uniformly.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist (or is not visible to the shopper)."""


class GatewayError(DomainException):
    """The payment gateway refused or failed to process a payment."""


class InsufficientStockError(ValidationError):
    """One or more line items cannot be supplied from stock."""

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(f"{_to_sentence(self.names)} became unavailable.")


class UnshippableOrderError(ValidationError):
    """No shipping rate exists for the order's shipping address."""


def _to_sentence(words: list[str]) -> str:
    if len(words) <= 1:
        return "".join(words)
    return ", ".join(words[:-1]) + " and " + words[-1]
