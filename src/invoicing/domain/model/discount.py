"""Order-level discount and the totals it produces."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from invoicing.domain.exceptions import ValidationError
from invoicing.domain.model.value_objects import Money, to_decimal


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    VALUE = "value"


@dataclass(frozen=True)
class Discount:
    """A requested discount, either a flat amount or a percentage.

    ``resolve`` turns it into money against a subtotal; capping at the
    subtotal is the aggregator's job.
    """

    value: Decimal
    kind: DiscountType = DiscountType.VALUE

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Discount must be a Decimal, got {type(self.value).__name__}"
            )
        if not self.value.is_finite():
            raise ValidationError(f"Discount must be finite, got {self.value}")
        if self.value < 0:
            raise ValidationError(f"Discount cannot be negative, got {self.value}")

    def resolve(self, subtotal: Money) -> Money:
        if self.kind is DiscountType.PERCENTAGE:
            return Money(subtotal.amount * self.value / Decimal("100"), subtotal.currency)
        return Money(self.value, subtotal.currency)

    def __str__(self) -> str:
        if self.kind is DiscountType.PERCENTAGE:
            return f"{self.value.normalize():f}%"
        return str(Money(self.value))

    @staticmethod
    def none() -> Discount:
        return Discount(Decimal("0"))

    @staticmethod
    def amount(value: str | int | Decimal) -> Discount:
        return Discount(to_decimal(value, "discount") or Decimal("0"), DiscountType.VALUE)

    @staticmethod
    def percent(value: str | int | Decimal) -> Discount:
        return Discount(to_decimal(value, "discount") or Decimal("0"), DiscountType.PERCENTAGE)


@dataclass(frozen=True)
class OrderTotals:
    """Result of aggregating an order.

    ``subtotal`` is the exact tax-inclusive sum; only ``total`` is rounded.
    """

    subtotal: Money
    applied_discount: Money
    total: Money
