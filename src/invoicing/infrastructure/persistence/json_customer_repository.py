"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

import json
from pathlib import Path

from invoicing.domain.model.customer import Customer
from invoicing.domain.repository.customer_repository import CustomerRepository


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_id(self, customer_id: str) -> Customer | None:
        return self._load().get(customer_id)

    def list_all(self) -> list[Customer]:
        return list(self._load().values())

    def _load(self) -> dict[str, Customer]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["id"]: Customer(
                id=item["id"],
                name=item["name"],
                company=item.get("company"),
                phone=item.get("phone"),
                address=item.get("address"),
                email=item.get("email"),
            )
            for item in raw
        }

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
