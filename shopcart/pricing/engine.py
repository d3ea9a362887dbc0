"""Totals computation: discount, tax and shipping on top of a cart subtotal."""
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from shopcart.config import DEFAULT_TAX_RATE
from shopcart.models import CartSettings, Totals
from shopcart.pricing.discounts import DiscountPolicy
from shopcart.services.money import (
    add,
    clamp_non_negative,
    multiply,
    round_money,
    subtract,
    to_decimal,
)

if TYPE_CHECKING:
    from shopcart.cart.models import Cart


class PricingEngine:
    """
    Turns (subtotal, shipping fee, discount code) into a Totals breakdown.

    Calculation order:
    1. Discount from the policy (rounded inside the rule)
    2. Taxable base = subtotal - item discount, floored at zero
    3. Tax = taxable base x tax rate, rounded
    4. Shipping after discount, floored at zero
    5. Grand total = taxable base + tax + shipping after discount (no rounding)

    Rounding at any other point changes results by a cent on boundary inputs.
    """

    def __init__(
        self,
        tax_rate: Decimal = DEFAULT_TAX_RATE,
        policy: Optional[DiscountPolicy] = None,
    ):
        self.tax_rate = to_decimal(tax_rate)
        self.policy = policy or DiscountPolicy()

    def compute(self, subtotal, shipping_fee, code: Optional[str]) -> Totals:
        subtotal = round_money(subtotal)
        shipping_fee = round_money(shipping_fee)

        breakdown = self.policy.evaluate(code, subtotal, shipping_fee)
        taxable_base = clamp_non_negative(subtract(subtotal, breakdown.item_discount))
        tax = round_money(multiply(taxable_base, self.tax_rate))
        shipping_after = clamp_non_negative(subtract(shipping_fee, breakdown.shipping_discount))
        grand_total = add(add(taxable_base, tax), shipping_after)

        return Totals(
            subtotal=subtotal,
            item_discount=breakdown.item_discount,
            shipping_discount=breakdown.shipping_discount,
            taxable_base=taxable_base,
            tax=tax,
            shipping_fee=shipping_fee,
            shipping_after_discount=shipping_after,
            grand_total=grand_total,
        )

    def compute_for_cart(self, cart: "Cart", settings: CartSettings) -> Totals:
        """Totals for a cart under the given discount code and shipping fee."""
        return self.compute(cart.subtotal(), settings.shipping_fee, settings.discount_code)

    @property
    def tax_label(self) -> str:
        """e.g. "VAT (15%)"."""
        percent = (self.tax_rate * 100).normalize()
        return f"VAT ({percent:f}%)"
