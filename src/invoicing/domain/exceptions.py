"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class MissingDimensionError(ValidationError):
    """A line item lacks a dimension its pricing formula needs."""

    def __init__(self, kind: str, missing: tuple[str, ...]) -> None:
        self.kind = kind
        self.missing = missing
        super().__init__(
            f"{kind} item is missing required field(s): {', '.join(missing)}"
        )


class UnknownProductTypeError(ValidationError):
    """A line item has no recognised product type / sub-variant."""


class TotalAmountMismatchError(ValidationError):
    """A stored order total disagrees with the recomputed one."""

    def __init__(self, order_no: str, stored, computed) -> None:
        self.order_no = order_no
        self.stored = stored
        self.computed = computed
        super().__init__(
            f"Order {order_no}: stored total {stored} does not match "
            f"computed total {computed}"
        )


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class LayoutError(DomainException):
    """The invoice layout cannot be built with the given geometry."""
