"""Plain-text receipt report.

Fixed-width and meant for people, not for parsing back. Amounts come from the
same Totals and money formatting as the on-screen totals.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from shopcart.config import DEFAULT_CURRENCY_SYMBOL
from shopcart.models import CartLineView, Totals
from shopcart.services.money import format_money

NAME_WIDTH = 28
ELLIPSIS = "…"
DATE_FORMAT = "%Y-%m-%d %H:%M"

_ROW = "{:<10} {:<28} {:>5} {:>12} {:>12}"
_TOTAL_ROW = "{:>58} {:>13}"
_RULE = "-" * 71


def abbreviate(text: Optional[str], width: int = NAME_WIDTH) -> str:
    """Cut text to width columns, marking the cut with an ellipsis."""
    if not text:
        return ""
    if len(text) <= width:
        return text
    return text[: max(0, width - 1)] + ELLIPSIS


def render_receipt(
    lines: Iterable[CartLineView],
    totals: Totals,
    *,
    tax_label: str = "VAT (15%)",
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Render a receipt.

    Args:
        lines: Cart line snapshots, in display order
        totals: Totals computed for the same cart
        tax_label: Label of the tax row
        symbol: Currency symbol
        generated_at: Timestamp printed in the header (default: now)

    Returns:
        Receipt text, newline-terminated
    """
    when = generated_at or datetime.now()

    def money(value) -> str:
        return format_money(value, symbol)

    out = [
        "==== Receipt ====",
        f"Date: {when.strftime(DATE_FORMAT)}",
        "",
        _ROW.format("ID", "Name", "Qty", "Unit", "Line Total"),
        _RULE,
    ]
    for line in lines:
        out.append(_ROW.format(
            line.product_id,
            abbreviate(line.name),
            line.quantity,
            money(line.unit_price),
            money(line.line_total),
        ))
    out.append(_RULE)

    out.append(_TOTAL_ROW.format("Subtotal:", money(totals.subtotal)))
    out.append(_TOTAL_ROW.format("Discount:", "-" + money(totals.discount_total)))
    out.append(_TOTAL_ROW.format(f"{tax_label}:", money(totals.tax)))
    out.append(_TOTAL_ROW.format("Shipping:", money(totals.shipping_after_discount)))
    out.append(_TOTAL_ROW.format("TOTAL:", money(totals.grand_total)))
    out.append("")
    out.append("Thank you for shopping!")
    return "\n".join(out) + "\n"
