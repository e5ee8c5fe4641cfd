"""JSON-file-backed implementation of StockRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from invoicing.domain.exceptions import ValidationError
from invoicing.domain.model.line_item import ProductType
from invoicing.domain.model.stock import StockRecord
from invoicing.domain.model.value_objects import to_decimal
from invoicing.domain.repository.stock_repository import StockRepository


class JsonStockRepository(StockRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_id(self, stock_id: str) -> StockRecord | None:
        for record in self._load():
            if record.id == stock_id:
                return record
        return None

    def find_matching(
        self, product_type: ProductType, gsm: Decimal, width_mm: Decimal
    ) -> StockRecord | None:
        for record in self._load():
            if record.matches(product_type, gsm, width_mm):
                return record
        return None

    def list_all(self) -> list[StockRecord]:
        return self._load()

    def _load(self) -> list[StockRecord]:
        records = []
        for item in json.loads(self._file_path.read_text(encoding="utf-8")):
            product_type = ProductType.parse(item.get("type"))
            if product_type is None:
                raise ValidationError(
                    f"Stock record {item.get('id')!r} has unknown type {item.get('type')!r}"
                )
            records.append(
                StockRecord(
                    id=item["id"],
                    product_type=product_type,
                    gsm=Decimal(str(item["gsm"])),
                    width_mm=Decimal(str(item["width_mm"])),
                    weight_kg=to_decimal(item.get("weight_kg"), "weight_kg"),
                    length_m=to_decimal(item.get("length_m"), "length_m"),
                )
            )
        return records

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
