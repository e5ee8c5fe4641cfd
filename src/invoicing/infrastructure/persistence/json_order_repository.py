"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from invoicing.domain.model.discount import Discount, DiscountType
from invoicing.domain.model.order import Order
from invoicing.domain.model.value_objects import Money
from invoicing.domain.repository.order_repository import OrderRepository, next_in_month
from invoicing.infrastructure.persistence.serialization import (
    line_item_from_raw,
    line_item_to_raw,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_order_no(self, now: datetime) -> str:
        return next_in_month(now, (raw["order_no"] for raw in self._load_raw()))

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_order_no(self, order_no: str) -> Order | None:
        for raw in self._load_raw():
            if raw["order_no"] == order_no:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        if order.id is None:
            order.id = max((o["id"] for o in orders), default=0) + 1

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_no": order.order_no,
            "customer_id": order.customer_id,
            "created_at": order.created_at.isoformat(),
            "note": order.note,
            "discount": {
                "value": str(order.discount.value),
                "type": order.discount.kind.value,
            },
            "total_amount": str(order.total_amount.amount),
            "items": [line_item_to_raw(item) for item in order.items],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        discount = raw.get("discount") or {}
        return Order(
            id=raw["id"],
            order_no=raw["order_no"],
            customer_id=raw["customer_id"],
            items=[line_item_from_raw(i) for i in raw.get("items") or []],
            discount=Discount(
                Decimal(discount.get("value", "0")),
                DiscountType(discount.get("type", DiscountType.VALUE.value)),
            ),
            total_amount=Money(Decimal(raw.get("total_amount", "0"))),
            created_at=datetime.fromisoformat(raw["created_at"]),
            note=raw.get("note", ""),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
