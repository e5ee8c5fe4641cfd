"""Line items and the closed set of product kinds they can be priced as."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from invoicing.domain.exceptions import ValidationError
from invoicing.domain.model.value_objects import Money, Percentage, Quantity


class ProductType(Enum):
    SUBLIMATION_PAPER = "Sublimation Paper"
    PROTECT_PAPER = "Protect Paper"
    DTF_FILM = "DTF Film"
    INK = "Ink"

    @classmethod
    def parse(cls, raw: str | None) -> ProductType | None:
        """Return the matching member, or None for missing/unknown labels."""
        if not raw:
            return None
        for member in cls:
            if member.value.lower() == raw.strip().lower():
                return member
        return None


class SubVariant(Enum):
    JUMBO_ROLL = "Jumbo Roll"
    ROLL = "Roll"

    @classmethod
    def parse(cls, raw: str | None) -> SubVariant | None:
        if not raw:
            return None
        for member in cls:
            if member.value.lower() == raw.strip().lower():
                return member
        return None


class PricingKind(Enum):
    """One member per pricing formula.

    ``UNCLASSIFIED`` is the explicit variant for items whose product type
    is missing or unknown (or a sublimation item without a sub-variant).
    """

    SUBLIMATION_JUMBO_ROLL = "Sublimation Paper / Jumbo Roll"
    SUBLIMATION_ROLL = "Sublimation Paper / Roll"
    PROTECT_PAPER = "Protect Paper"
    DTF_FILM = "DTF Film"
    INK = "Ink"
    UNCLASSIFIED = "Unclassified"

    @property
    def sold_by_weight(self) -> bool:
        return self in (PricingKind.SUBLIMATION_JUMBO_ROLL, PricingKind.PROTECT_PAPER)


@dataclass(frozen=True)
class Specification:
    """Optional physical attributes selected from inventory.

    Which ones are required depends on the pricing kind; absent values are
    ``None`` rather than zero so the calculator can report them.
    """

    gsm: Decimal | None = None
    width_mm: Decimal | None = None
    length_m: Decimal | None = None
    weight_kg: Decimal | None = None

    def __post_init__(self) -> None:
        for name in ("gsm", "width_mm", "length_m", "weight_kg"):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, Decimal):
                raise ValidationError(
                    f"{name} must be a Decimal, got {type(value).__name__}"
                )
            if not value.is_finite():
                raise ValidationError(f"{name} must be finite, got {value}")
            if value < 0:
                raise ValidationError(f"{name} cannot be negative, got {value}")


@dataclass(frozen=True)
class LineItem:
    """One purchasable unit within an order.

    Read-only input to the pricing engine. ``product_type`` is None when
    the source record carried no (or an unknown) type.
    """

    product_type: ProductType | None
    quantity: Quantity
    unit_price: Money
    tax_rate: Percentage = field(default_factory=lambda: Percentage(Decimal("0")))
    sub_variant: SubVariant | None = None
    specification: Specification = field(default_factory=Specification)
    stock_id: str | None = None
    # Raw type label as received; kept for display of unclassified items.
    product_label: str | None = None

    @property
    def kind(self) -> PricingKind:
        if self.product_type is ProductType.SUBLIMATION_PAPER:
            if self.sub_variant is SubVariant.JUMBO_ROLL:
                return PricingKind.SUBLIMATION_JUMBO_ROLL
            if self.sub_variant is SubVariant.ROLL:
                return PricingKind.SUBLIMATION_ROLL
            return PricingKind.UNCLASSIFIED
        if self.product_type is ProductType.PROTECT_PAPER:
            return PricingKind.PROTECT_PAPER
        if self.product_type is ProductType.DTF_FILM:
            return PricingKind.DTF_FILM
        if self.product_type is ProductType.INK:
            return PricingKind.INK
        return PricingKind.UNCLASSIFIED

    @property
    def type_label(self) -> str:
        if self.product_type is not None:
            return self.product_type.value
        return self.product_label or "-"
