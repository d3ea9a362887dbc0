"""Runtime configuration loaded from the environment (and an optional .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import cache
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATA_DIR = Path.home() / ".shopcart"
DEFAULT_TAX_RATE = Decimal("0.15")  # 15% VAT
DEFAULT_CURRENCY_SYMBOL = "R"

CART_FILENAME = "cart.csv"
SETTINGS_FILENAME = "settings.properties"


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_rate(*keys: str, default: Decimal) -> Decimal:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        rate = Decimal(v)
    except InvalidOperation:
        raise ValueError(f"{keys[0]} must be a decimal number, got {v!r}")
    if not rate.is_finite() or rate < 0:
        raise ValueError(f"{keys[0]} must be a non-negative number, got {v!r}")
    return rate


@dataclass(frozen=True)
class Config:
    data_dir: Path
    tax_rate: Decimal
    currency_symbol: str
    log_level: str

    @property
    def cart_path(self) -> Path:
        return self.data_dir / CART_FILENAME

    @property
    def settings_path(self) -> Path:
        return self.data_dir / SETTINGS_FILENAME


def load_config() -> Config:
    """Build a Config from the current environment."""
    load_dotenv()
    data_dir = _get_env("SHOPCART_DATA_DIR", default=None)
    return Config(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        tax_rate=_get_rate("SHOPCART_TAX_RATE", default=DEFAULT_TAX_RATE),
        currency_symbol=_get_env("SHOPCART_CURRENCY_SYMBOL", default=DEFAULT_CURRENCY_SYMBOL) or DEFAULT_CURRENCY_SYMBOL,
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )


@cache
def get_config() -> Config:
    """Get the process-wide Config (loaded on first use)."""
    return load_config()
