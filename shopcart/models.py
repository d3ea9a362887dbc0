"""
Pydantic Models - Data Schemas for the cart engine

Contains the value types passed between catalog, cart, pricing and storage:
- Product (catalog entry)
- CartLineView (read-only line snapshot)
- DiscountBreakdown / Totals (pricing results)
- CartSettings (persisted discount code and shipping fee)
"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, field_validator

from shopcart.services.money import ZERO, add, round_money, to_decimal


# ============================================================
# Catalog
# ============================================================

class Product(BaseModel):
    """Catalog product. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    unit_price: Decimal

    @field_validator("unit_price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        price = round_money(to_decimal(v))
        if price < 0:
            raise ValueError("unit_price must be non-negative")
        return price


# ============================================================
# Cart
# ============================================================

class CartLineView(BaseModel):
    """Snapshot of one cart line as shown in tables and receipts."""
    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


# ============================================================
# Pricing
# ============================================================

class DiscountBreakdown(BaseModel):
    """Discount on items and discount on shipping for one code."""
    model_config = ConfigDict(frozen=True)

    item_discount: Decimal = ZERO
    shipping_discount: Decimal = ZERO


class Totals(BaseModel):
    """Full monetary breakdown of a cart. Derived, never persisted."""
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    item_discount: Decimal
    shipping_discount: Decimal
    taxable_base: Decimal
    tax: Decimal
    shipping_fee: Decimal
    shipping_after_discount: Decimal
    grand_total: Decimal

    @property
    def discount_total(self) -> Decimal:
        """Combined discount as displayed on the totals line."""
        return add(self.item_discount, self.shipping_discount)


# ============================================================
# Settings
# ============================================================

class CartSettings(BaseModel):
    """Last-used discount code and shipping fee."""

    discount_code: str = ""
    shipping_fee: Decimal = ZERO

    @field_validator("shipping_fee", mode="before")
    @classmethod
    def convert_shipping_to_decimal(cls, v):
        fee = round_money(to_decimal(v))
        if fee < 0:
            raise ValueError("shipping_fee must be non-negative")
        return fee

    @field_validator("discount_code", mode="before")
    @classmethod
    def convert_code(cls, v):
        return "" if v is None else str(v)
