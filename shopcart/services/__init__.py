# Services Module
from .money import (
    MONEY_PRECISION,
    ZERO,
    to_decimal,
    parse_money,
    round_money,
    format_money,
)

__all__ = [
    "MONEY_PRECISION",
    "ZERO",
    "to_decimal",
    "parse_money",
    "round_money",
    "format_money",
]
