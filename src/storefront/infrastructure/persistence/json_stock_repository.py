"""JSON-file-backed implementation of StockRepository."""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.model.stock import StockItem
from storefront.domain.repository.stock_repository import StockRepository


class JsonStockRepository(StockRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- StockRepository interface --------------------------------------------

    def get_by_variant_id(self, variant_id: str) -> StockItem | None:
        for raw in self._load_raw():
            if raw["variant_id"] == variant_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[StockItem]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, item: StockItem) -> None:
        records = self._load_raw()
        replaced = False
        for i, raw in enumerate(records):
            if raw["variant_id"] == item.variant_id:
                records[i] = self._to_raw(item)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(item))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: StockItem) -> dict:
        return {
            "variant_id": item.variant_id,
            "variant_name": item.variant_name,
            "count_on_hand": item.count_on_hand,
            "backorderable": item.backorderable,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockItem:
        return StockItem(
            variant_id=raw["variant_id"],
            variant_name=raw["variant_name"],
            count_on_hand=raw["count_on_hand"],
            backorderable=raw.get("backorderable", False),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
