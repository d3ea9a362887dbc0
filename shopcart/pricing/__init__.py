"""Pricing package: discount rules and the totals engine."""
from .discounts import (
    DISCOUNT_RULES,
    DiscountPolicy,
    FlatOffItems,
    PercentOffItems,
    ShippingCredit,
    normalize_code,
)
from .engine import PricingEngine

__all__ = [
    "DISCOUNT_RULES",
    "DiscountPolicy",
    "FlatOffItems",
    "PercentOffItems",
    "ShippingCredit",
    "normalize_code",
    "PricingEngine",
]
