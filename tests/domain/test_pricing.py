"""Unit tests for the shared pricing service."""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from invoicing.domain.exceptions import (
    MissingDimensionError,
    TotalAmountMismatchError,
    UnknownProductTypeError,
)
from invoicing.domain.model.discount import Discount
from invoicing.domain.model.line_item import (
    LineItem,
    PricingKind,
    ProductType,
    Specification,
    SubVariant,
)
from invoicing.domain.model.order import Order
from invoicing.domain.model.value_objects import Money, Percentage, Quantity
from invoicing.domain.service.pricing import (
    compute_item_amount,
    compute_order_total,
    price_item,
    verify_total_amount,
)


def _item(
    product_type=ProductType.DTF_FILM,
    price="10000",
    qty=1,
    tax="0",
    sub_variant=None,
    **spec,
) -> LineItem:
    return LineItem(
        product_type=product_type,
        sub_variant=sub_variant,
        specification=Specification(**{k: Decimal(str(v)) for k, v in spec.items()}),
        quantity=Quantity(qty),
        unit_price=Money.of(price),
        tax_rate=Percentage.of(tax),
    )


def _roll(price="10000", width_mm=1000, length_m=50, qty=2, tax="10"):
    return _item(
        ProductType.SUBLIMATION_PAPER,
        price=price,
        qty=qty,
        tax=tax,
        sub_variant=SubVariant.ROLL,
        width_mm=width_mm,
        length_m=length_m,
    )


def _jumbo(price="5000", weight_kg=20, tax="0"):
    return _item(
        ProductType.SUBLIMATION_PAPER,
        price=price,
        tax=tax,
        sub_variant=SubVariant.JUMBO_ROLL,
        weight_kg=weight_kg,
    )


# ── Per-item formulas ────────────────────────────────────────────────────────


class TestItemFormulas:

    def test_roll_scenario(self):
        # 10000 * 1m * 50m * 2 = 1,000,000 subtotal, +10% tax
        priced = price_item(_roll())
        assert priced.kind is PricingKind.SUBLIMATION_ROLL
        assert priced.subtotal == Money.of("1000000")
        assert priced.amount == Money.of("1100000")
        assert not priced.degraded

    def test_jumbo_roll_scenario(self):
        assert compute_item_amount(_jumbo()) == Money.of("100000")

    def test_roll_width_is_millimetres(self):
        item = _roll(price="2000", width_mm=610, length_m=100, qty=3, tax="0")
        assert compute_item_amount(item).amount == Decimal("2000") * Decimal("0.61") * 100 * 3

    def test_protect_paper_priced_by_weight(self):
        item = _item(ProductType.PROTECT_PAPER, price="3000", qty=4, tax="11", weight_kg="12.5")
        assert compute_item_amount(item).amount == Decimal("3000") * Decimal("12.5") * Decimal("1.11")

    @pytest.mark.parametrize("product_type", [ProductType.DTF_FILM, ProductType.INK])
    @pytest.mark.parametrize("price,qty,tax", [("0", 1, "0"), ("150000", 3, "11"), ("99999.99", 7, "12.5")])
    def test_unit_priced_products(self, product_type, price, qty, tax):
        item = _item(product_type, price=price, qty=qty, tax=tax)
        expected = Decimal(price) * qty * (1 + Decimal(tax) / 100)
        assert compute_item_amount(item).amount == expected

    def test_quantity_ignored_for_weight_priced_items(self):
        one = _item(ProductType.PROTECT_PAPER, qty=1, weight_kg=10)
        many = _item(ProductType.PROTECT_PAPER, qty=9, weight_kg=10)
        assert compute_item_amount(one) == compute_item_amount(many)


# ── Degradation ──────────────────────────────────────────────────────────────


class TestDegradation:

    def test_missing_weight_collapses_to_zero(self):
        item = _item(ProductType.SUBLIMATION_PAPER, sub_variant=SubVariant.JUMBO_ROLL)
        with capture_logs() as logs:
            priced = price_item(item)
        assert priced.amount == Money.zero()
        assert priced.missing == ("weight_kg",)
        assert priced.degraded
        assert logs[0]["event"] == "pricing_degraded"
        assert logs[0]["log_level"] == "warning"

    def test_roll_reports_every_missing_dimension(self):
        item = _item(ProductType.SUBLIMATION_PAPER, sub_variant=SubVariant.ROLL, qty=2)
        priced = price_item(item)
        assert priced.missing == ("width_mm", "length_m")
        assert priced.amount == Money.zero()

    def test_strict_mode_rejects_missing_dimension(self):
        item = _item(ProductType.PROTECT_PAPER)
        with pytest.raises(MissingDimensionError, match="weight_kg") as exc_info:
            price_item(item, strict=True)
        assert exc_info.value.missing == ("weight_kg",)

    def test_missing_type_falls_back_to_price_times_quantity(self):
        item = _item(product_type=None, price="5000", qty=3, tax="10")
        with capture_logs() as logs:
            priced = price_item(item)
        assert priced.kind is PricingKind.UNCLASSIFIED
        assert priced.amount.amount == Decimal("16500.0")
        assert priced.missing == ("product_type",)
        assert logs[0]["event"] == "pricing_fallback"

    def test_sublimation_without_variant_is_unclassified(self):
        item = _item(ProductType.SUBLIMATION_PAPER, qty=2)
        priced = price_item(item)
        assert priced.kind is PricingKind.UNCLASSIFIED
        assert priced.missing == ("sub_variant",)

    def test_strict_mode_rejects_unknown_type(self):
        with pytest.raises(UnknownProductTypeError):
            price_item(_item(product_type=None), strict=True)

    def test_injected_logger_receives_warning(self):
        calls = []

        class Recorder:
            def warning(self, event, **kw):
                calls.append((event, kw))

        price_item(_item(product_type=None, price="1"), log=Recorder())
        assert calls[0][0] == "pricing_fallback"

    def test_input_item_is_not_mutated(self):
        item = _roll()
        before = (item.specification, item.quantity, item.unit_price, item.tax_rate)
        price_item(item)
        assert (item.specification, item.quantity, item.unit_price, item.tax_rate) == before


# ── Order aggregation ────────────────────────────────────────────────────────


class TestOrderTotal:

    def test_subtotal_is_exact_sum_of_item_amounts(self):
        items = [_roll(), _jumbo(), _item(ProductType.INK, price="33333.33", qty=3, tax="11")]
        totals = compute_order_total(items)
        expected = Money.zero()
        for item in items:
            expected = expected + compute_item_amount(item)
        assert totals.subtotal == expected
        assert totals.applied_discount == Money.zero()

    def test_flat_discount_subtracted_and_total_rounded(self):
        items = [_item(ProductType.INK, price="1000.005", qty=1)]
        totals = compute_order_total(items, Money.of("0.001"))
        assert totals.total.amount == Decimal("1000.00")

    def test_discount_clamped_to_subtotal(self):
        totals = compute_order_total([_roll()], Money.of("1500000"))
        assert totals.subtotal == Money.of("1100000")
        assert totals.applied_discount == Money.of("1100000")
        assert totals.total == Money.zero()

    def test_percentage_discount(self):
        totals = compute_order_total([_roll()], Discount.percent("10"))
        assert totals.applied_discount == Money.of("110000")
        assert totals.total == Money.of("990000")

    def test_percentage_over_hundred_clamps(self):
        totals = compute_order_total([_roll()], Discount.percent("150"))
        assert totals.total == Money.zero()

    def test_empty_items(self):
        totals = compute_order_total([], Money.of("100"))
        assert totals.subtotal == Money.zero()
        assert totals.total == Money.zero()

    def test_deterministic(self):
        items = [_roll(price="12345.67", width_mm=914, length_m=100, qty=3, tax="11"), _jumbo()]
        first = compute_order_total(items, Discount.percent("7.5"))
        second = compute_order_total(items, Discount.percent("7.5"))
        assert first == second
        assert str(first.total.amount) == str(second.total.amount)

    def test_strict_total_rejects_unclassified(self):
        with pytest.raises(UnknownProductTypeError):
            compute_order_total([_item(product_type=None)], strict=True)


# ── Reconciliation ───────────────────────────────────────────────────────────


class TestVerifyTotalAmount:

    def test_consistent_order_passes(self):
        order = Order.create("SO2610001", "c1", [_roll()], Discount.amount("100000"))
        totals = verify_total_amount(order)
        assert totals.total == Money.of("1000000")

    def test_drifted_total_detected(self):
        order = Order.create("SO2610001", "c1", [_roll()])
        order.total_amount = Money.of("1000000")
        with pytest.raises(TotalAmountMismatchError, match="SO2610001") as exc_info:
            verify_total_amount(order)
        assert exc_info.value.computed == Money.of("1100000")
