"""
Text encodings for cart and settings snapshots.

Cart snapshot: one ``<productId>,<quantity>`` record per line, UTF-8,
newline-terminated, no header. Settings snapshot: ``key=value`` lines with at
least ``discount`` and ``shipping``.

Decoding is tolerant: bad cart records are skipped and reported back, bad
settings fall back to defaults. This module does no file I/O.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from shopcart.catalog import ProductCatalog
from shopcart.cart.models import CartRecord
from shopcart.logging import get_logger, sanitize_string_for_logging
from shopcart.models import CartSettings
from shopcart.services.money import ZERO, parse_money

logger = get_logger(__name__)

ENCODING = "utf-8"

SETTINGS_DISCOUNT_KEY = "discount"
SETTINGS_SHIPPING_KEY = "shipping"

_INT_RE = re.compile(r"[+-]?\d+")


class SkipReason(str, Enum):
    """Why a cart record was left out of a decoded snapshot."""
    MALFORMED = "malformed"
    INVALID_QUANTITY = "invalid_quantity"
    UNKNOWN_PRODUCT = "unknown_product"


@dataclass(frozen=True)
class SkippedRecord:
    """A cart snapshot line that did not decode."""
    line_number: int
    raw: str
    reason: SkipReason


@dataclass
class CartDecodeResult:
    """Records that decoded, plus an account of those that did not."""
    records: List[CartRecord] = field(default_factory=list)
    skipped: List[SkippedRecord] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def _decode_text(data: bytes) -> str:
    # utf-8-sig drops a BOM left by editors; undecodable bytes end up in a skipped record
    return data.decode("utf-8-sig", errors="replace")


class PersistenceStore:
    """Encodes and decodes cart and settings snapshots. Knows nothing about pricing."""

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog

    # ==================== Cart snapshot ====================

    def encode_cart(self, records: Iterable[CartRecord]) -> bytes:
        """One ``id,quantity`` line per record. The result replaces any prior snapshot."""
        text = "".join(f"{product_id},{quantity}\n" for product_id, quantity in records)
        return text.encode(ENCODING)

    def decode_cart(self, data: bytes) -> CartDecodeResult:
        """
        Parse a cart snapshot.

        Every record is checked against the catalog. Records with the wrong
        shape, a non-positive or non-integer quantity, or an unknown product id
        are skipped; decoding never fails as a whole.

        Args:
            data: Raw snapshot bytes

        Returns:
            CartDecodeResult with records in file order and the skipped lines
        """
        result = CartDecodeResult()

        for line_number, raw_line in enumerate(_decode_text(data).splitlines(), start=1):
            line = raw_line.strip()
            if not line:
                continue

            parts = line.split(",")
            if len(parts) != 2:
                result.skipped.append(SkippedRecord(line_number, raw_line, SkipReason.MALFORMED))
                continue

            product_id = parts[0].strip()
            quantity_text = parts[1].strip()
            if not product_id or not _INT_RE.fullmatch(quantity_text):
                result.skipped.append(SkippedRecord(line_number, raw_line, SkipReason.MALFORMED))
                continue

            quantity = int(quantity_text)
            if quantity <= 0:
                result.skipped.append(SkippedRecord(line_number, raw_line, SkipReason.INVALID_QUANTITY))
                continue

            if self.catalog.find_by_id(product_id) is None:
                result.skipped.append(SkippedRecord(line_number, raw_line, SkipReason.UNKNOWN_PRODUCT))
                continue

            result.records.append((product_id, quantity))

        for skipped in result.skipped:
            logger.warning(
                f"Skipped cart record at line {skipped.line_number} "
                f"({skipped.reason.value}): {sanitize_string_for_logging(skipped.raw)}"
            )
        return result

    # ==================== Settings snapshot ====================

    def encode_settings(self, settings: CartSettings) -> bytes:
        """``discount`` and ``shipping`` (two fractional digits) as key=value lines."""
        code = settings.discount_code.replace("\r", " ").replace("\n", " ")
        text = (
            f"{SETTINGS_DISCOUNT_KEY}={code}\n"
            f"{SETTINGS_SHIPPING_KEY}={settings.shipping_fee:.2f}\n"
        )
        return text.encode(ENCODING)

    def decode_settings(self, data: Optional[bytes]) -> CartSettings:
        """
        Parse a settings snapshot.

        Missing data, missing keys and unusable shipping values fall back to
        ``discount=""`` and ``shipping=0.00``. Lines starting with ``#`` or
        ``!`` are comments.
        """
        if data is None:
            return CartSettings()

        values: dict[str, str] = {}
        for raw_line in _decode_text(data).splitlines():
            line = raw_line.strip()
            if not line or line.startswith(("#", "!")) or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip()

        discount_code = values.get(SETTINGS_DISCOUNT_KEY, "")

        shipping_fee = ZERO
        shipping_text = values.get(SETTINGS_SHIPPING_KEY)
        if shipping_text is not None:
            parsed = parse_money(shipping_text)
            if parsed is None or parsed < 0:
                logger.warning(
                    f"Ignoring invalid shipping setting: {sanitize_string_for_logging(shipping_text)}"
                )
            else:
                shipping_fee = parsed

        return CartSettings(discount_code=discount_code, shipping_fee=shipping_fee)
