"""Discount codes and the rules they select.

Each code maps to exactly one rule. A rule is a pure function of
(subtotal, shipping fee) and discounts either the items or the shipping,
never both. Unknown codes are not errors; they simply have no effect.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Union

from shopcart.models import DiscountBreakdown
from shopcart.services.money import ZERO, multiply, round_money, to_decimal


def normalize_code(code: Optional[str]) -> str:
    """Trim and uppercase a typed code; None becomes ""."""
    if code is None:
        return ""
    return code.strip().upper()


@dataclass(frozen=True)
class PercentOffItems:
    """Percentage off the subtotal, optionally capped."""
    rate: Decimal
    cap: Optional[Decimal] = None

    def apply(self, subtotal: Decimal, shipping_fee: Decimal) -> DiscountBreakdown:
        discount = round_money(multiply(subtotal, self.rate))
        if self.cap is not None:
            discount = min(discount, round_money(self.cap))
        return DiscountBreakdown(item_discount=discount, shipping_discount=ZERO)


@dataclass(frozen=True)
class FlatOffItems:
    """Fixed amount off the items once the subtotal reaches a minimum (inclusive)."""
    amount: Decimal
    minimum_subtotal: Decimal

    def apply(self, subtotal: Decimal, shipping_fee: Decimal) -> DiscountBreakdown:
        if subtotal >= self.minimum_subtotal:
            return DiscountBreakdown(item_discount=round_money(self.amount), shipping_discount=ZERO)
        return DiscountBreakdown()


@dataclass(frozen=True)
class ShippingCredit:
    """Shipping fee waived up to a cap."""
    cap: Decimal

    def apply(self, subtotal: Decimal, shipping_fee: Decimal) -> DiscountBreakdown:
        return DiscountBreakdown(
            item_discount=ZERO,
            shipping_discount=round_money(min(shipping_fee, self.cap)),
        )


DiscountRule = Union[PercentOffItems, FlatOffItems, ShippingCredit]

# Promotional code table, keyed by normalized code
DISCOUNT_RULES: Mapping[str, DiscountRule] = {
    "SAVE10": PercentOffItems(rate=Decimal("0.10")),
    "SAVE20": PercentOffItems(rate=Decimal("0.20"), cap=Decimal("500.00")),
    "FREESHIP": ShippingCredit(cap=Decimal("150.00")),
    "STUDENT5": FlatOffItems(amount=Decimal("50.00"), minimum_subtotal=Decimal("500.00")),
}


class DiscountPolicy:
    """Maps a discount code to the discount it grants on a given cart."""

    def __init__(self, rules: Optional[Mapping[str, DiscountRule]] = None):
        self._rules = dict(DISCOUNT_RULES if rules is None else rules)

    def codes(self) -> list[str]:
        return sorted(self._rules)

    def is_known(self, code: Optional[str]) -> bool:
        return normalize_code(code) in self._rules

    def rule_for(self, code: Optional[str]) -> Optional[DiscountRule]:
        return self._rules.get(normalize_code(code))

    def evaluate(self, code: Optional[str], subtotal, shipping_fee) -> DiscountBreakdown:
        """
        Discount granted by a code.

        Args:
            code: Raw code as typed; normalized before lookup
            subtotal: Cart subtotal
            shipping_fee: Shipping fee before discount

        Returns:
            DiscountBreakdown; zero on both axes for unknown or empty codes
        """
        rule = self.rule_for(code)
        if rule is None:
            return DiscountBreakdown()
        return rule.apply(to_decimal(subtotal), to_decimal(shipping_fee))
