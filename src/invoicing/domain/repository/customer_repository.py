"""Abstract repository for customers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from invoicing.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return all customers."""
