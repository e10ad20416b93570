"""Abstract repository for StockItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.stock import StockItem


class StockRepository(ABC):

    @abstractmethod
    def get_by_variant_id(self, variant_id: str) -> StockItem | None:
        """Return the stock record for a variant, or None."""

    @abstractmethod
    def list_all(self) -> list[StockItem]:
        """Return every stock record."""

    @abstractmethod
    def save(self, item: StockItem) -> None:
        """Persist a new or updated stock record."""
