"""Customer record as needed by the invoice header."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:

    id: str
    name: str
    company: str | None = None
    phone: str | None = None
    address: str | None = None
    email: str | None = None
