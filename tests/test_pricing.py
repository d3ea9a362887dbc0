"""
Tests for the pricing engine
"""

from decimal import Decimal

import pytest

from shopcart.models import CartSettings
from shopcart.pricing import DiscountPolicy, FlatOffItems, PricingEngine


class TestScenarios:
    """Worked examples."""

    def test_save10(self, engine):
        t = engine.compute(Decimal("1000.00"), Decimal("50.00"), "SAVE10")

        assert t.item_discount == Decimal("100.00")
        assert t.taxable_base == Decimal("900.00")
        assert t.tax == Decimal("135.00")
        assert t.shipping_discount == 0
        assert t.shipping_after_discount == Decimal("50.00")
        assert t.grand_total == Decimal("1085.00")

    def test_save20_capped(self, engine):
        t = engine.compute(Decimal("3000.00"), Decimal("0"), "SAVE20")

        assert t.item_discount == Decimal("500.00")
        assert t.taxable_base == Decimal("2500.00")
        assert t.tax == Decimal("375.00")

    def test_freeship(self, engine):
        t = engine.compute(Decimal("100.00"), Decimal("200.00"), "FREESHIP")

        assert t.item_discount == 0
        assert t.shipping_discount == Decimal("150.00")
        assert t.shipping_after_discount == Decimal("50.00")
        assert t.shipping_fee == Decimal("200.00")

    def test_unknown_code(self, engine):
        t = engine.compute(Decimal("100.00"), Decimal("10.00"), "XYZ")

        assert t.item_discount == 0
        assert t.shipping_discount == 0
        assert t.tax == Decimal("15.00")
        assert t.grand_total == Decimal("125.00")

    def test_student5_boundary(self, engine):
        below = engine.compute(Decimal("499.99"), Decimal("0"), "STUDENT5")
        at = engine.compute(Decimal("500.00"), Decimal("0"), "STUDENT5")

        assert below.item_discount == 0
        assert at.item_discount == Decimal("50.00")
        assert at.taxable_base == Decimal("450.00")


class TestRoundingOrder:
    """Rounding happens in the rule and on tax only."""

    def test_tax_rounded_half_up(self, engine):
        # 0.10 * 0.15 = 0.015 -> 0.02
        t = engine.compute(Decimal("0.10"), Decimal("0"), "")
        assert t.tax == Decimal("0.02")
        assert t.grand_total == Decimal("0.12")

    def test_discount_rounded_before_tax(self, engine):
        # 10% of 10.05 = 1.005 -> 1.01; base 9.04; tax 1.356 -> 1.36
        t = engine.compute(Decimal("10.05"), Decimal("0"), "SAVE10")
        assert t.item_discount == Decimal("1.01")
        assert t.taxable_base == Decimal("9.04")
        assert t.tax == Decimal("1.36")
        assert t.grand_total == Decimal("10.40")

    def test_grand_total_is_exact_sum(self, engine):
        t = engine.compute(Decimal("1234.56"), Decimal("78.90"), "SAVE20")
        assert t.grand_total == t.taxable_base + t.tax + t.shipping_after_discount

    @pytest.mark.parametrize("subtotal, fee, code", [
        (1000, 50, ""),
        (Decimal("3000"), Decimal("0"), "SAVE20"),
        (Decimal("40"), Decimal("200"), "FREESHIP"),
    ])
    def test_every_amount_has_two_places(self, engine, subtotal, fee, code):
        t = engine.compute(subtotal, fee, code)

        for name, value in t.model_dump().items():
            assert value.as_tuple().exponent == -2, name
        assert str(t.subtotal) == str(Decimal(subtotal).quantize(Decimal("0.01")))


class TestClamping:
    """Discounts never push amounts below zero."""

    def test_taxable_base_never_negative(self):
        engine = PricingEngine(
            tax_rate=Decimal("0.15"),
            policy=DiscountPolicy({"BIG": FlatOffItems(amount=Decimal("100"), minimum_subtotal=Decimal("0"))}),
        )
        t = engine.compute(Decimal("40.00"), Decimal("10.00"), "BIG")

        assert t.item_discount == Decimal("100.00")
        assert str(t.taxable_base) == "0.00"
        assert t.tax == Decimal("0.00")
        assert t.grand_total == Decimal("10.00")

    def test_empty_cart_with_freeship(self, engine):
        t = engine.compute(Decimal("0"), Decimal("0"), "FREESHIP")
        assert t.shipping_after_discount == 0
        assert t.grand_total == 0


class TestEngine:
    """Engine behaviour."""

    def test_deterministic(self, engine):
        args = (Decimal("987.65"), Decimal("43.21"), " save10 ")
        assert engine.compute(*args) == engine.compute(*args)

    def test_custom_tax_rate(self):
        engine = PricingEngine(tax_rate=Decimal("0.20"))
        assert engine.compute(Decimal("100.00"), 0, "").tax == Decimal("20.00")
        assert engine.tax_label == "VAT (20%)"

    def test_default_label(self, engine):
        assert engine.tax_label == "VAT (15%)"

    @pytest.mark.parametrize("rate,label", [("0.155", "VAT (15.5%)"), ("0", "VAT (0%)")])
    def test_fractional_label(self, rate, label):
        assert PricingEngine(tax_rate=Decimal(rate)).tax_label == label

    def test_compute_for_cart(self, engine, cart):
        cart.add("BK-403", 2)  # 1798.00
        settings = CartSettings(discount_code="SAVE10", shipping_fee="60")

        t = engine.compute_for_cart(cart, settings)

        assert t.subtotal == Decimal("1798.00")
        assert t.item_discount == Decimal("179.80")
        assert t.tax == Decimal("242.73")
        assert t.grand_total == Decimal("1920.93")

    def test_discount_total(self, engine):
        t = engine.compute(Decimal("100"), Decimal("20"), "FREESHIP")
        assert t.discount_total == Decimal("20.00")
