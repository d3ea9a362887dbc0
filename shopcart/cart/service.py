"""Cart session service using file storage."""
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Mapping, Optional, Union

from shopcart.catalog import ProductCatalog
from shopcart.config import Config, get_config
from shopcart.errors import (
    ERROR_EXPORT_FAILED,
    ERROR_LOAD_FAILED,
    ERROR_SAVE_FAILED,
    EmptyCartError,
    StorageError,
)
from shopcart.logging import get_logger, sanitize_string_for_logging
from shopcart.models import CartSettings, Totals
from shopcart.pricing import PricingEngine
from shopcart.receipt import render_receipt
from shopcart.services.money import parse_money
from .models import Cart, CartLine
from .storage import PersistenceStore, SkippedRecord

logger = get_logger(__name__)

PathLike = Union[str, Path]


@dataclass
class LoadResult:
    """Outcome of loading a saved cart."""
    found: bool
    line_count: int = 0
    skipped: List[SkippedRecord] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def _write_atomic(path: Path, data: bytes) -> None:
    """Replace path with data; the old content stays intact if writing fails."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _read_optional(path: Path) -> Optional[bytes]:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


class CartSession:
    """
    Owns one cart together with its discount code, shipping fee and files.

    Features:
    - Cart edits and totals recomputed on demand
    - Save/load of cart and settings snapshots
    - Receipt export

    A session is not thread-safe; each caller owns its own.
    """

    def __init__(
        self,
        catalog: Optional[ProductCatalog] = None,
        *,
        cart_path: Optional[PathLike] = None,
        settings_path: Optional[PathLike] = None,
        engine: Optional[PricingEngine] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or get_config()
        self.catalog = catalog or ProductCatalog.default()
        self.cart = Cart(self.catalog)
        self.settings = CartSettings()
        self.engine = engine or PricingEngine(tax_rate=self.config.tax_rate)
        self.store = PersistenceStore(self.catalog)
        self.cart_path = Path(cart_path) if cart_path else self.config.cart_path
        self.settings_path = Path(settings_path) if settings_path else self.config.settings_path

    @classmethod
    def in_directory(cls, data_dir: PathLike, **kwargs) -> "CartSession":
        """Session whose files live in data_dir."""
        data_dir = Path(data_dir)
        config = kwargs.pop("config", None) or get_config()
        return cls(
            cart_path=data_dir / config.cart_path.name,
            settings_path=data_dir / config.settings_path.name,
            config=config,
            **kwargs,
        )

    # ==================== Cart edits ====================

    def add(self, product_id: str, quantity: int = 1) -> CartLine:
        line = self.cart.add(product_id, quantity)
        logger.info(f"Added {quantity} x {line.product.name} to cart")
        return line

    def remove(self, product_id: str) -> bool:
        return self.cart.remove(product_id)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        self.cart.set_quantity(product_id, quantity)

    def update_quantities(self, quantities: Mapping[str, int]) -> None:
        self.cart.update_quantities(quantities)

    def clear(self) -> None:
        self.cart.clear()

    # ==================== Settings ====================

    def apply_discount(self, code: Optional[str]) -> Totals:
        """Set the discount code (stored as typed) and return the new totals."""
        self.settings = self.settings.model_copy(update={"discount_code": code or ""})
        if code and not self.engine.policy.is_known(code):
            logger.info(f"Discount code has no effect: {sanitize_string_for_logging(code)}")
        return self.totals()

    def set_shipping(self, fee) -> Totals:
        """Set the shipping fee. Raises ValueError for negative or non-numeric fees."""
        amount = parse_money(None if fee is None else str(fee))
        if amount is None or amount < 0:
            raise ValueError(f"Shipping fee must be a non-negative amount, got {fee!r}")
        self.settings = self.settings.model_copy(update={"shipping_fee": amount})
        return self.totals()

    # ==================== Pricing ====================

    def totals(self) -> Totals:
        return self.engine.compute_for_cart(self.cart, self.settings)

    def summary(self) -> dict:
        """Cart and totals as plain values, for display."""
        totals = self.totals()
        return {
            "is_empty": self.cart.is_empty(),
            "total_items": self.cart.total_items,
            "items": [line.model_dump() for line in self.cart.lines()],
            "discount_code": self.settings.discount_code,
            "totals": totals.model_dump(),
        }

    # ==================== Persistence ====================

    def save(self) -> None:
        """
        Write cart and settings snapshots, replacing the previous files.

        Raises:
            StorageError: a file could not be written; in-memory state is untouched
        """
        cart_bytes = self.store.encode_cart(self.cart.records())
        settings_bytes = self.store.encode_settings(self.settings)
        try:
            _write_atomic(self.cart_path, cart_bytes)
            _write_atomic(self.settings_path, settings_bytes)
        except OSError as e:
            logger.error(f"{ERROR_SAVE_FAILED}: {e}")
            raise StorageError(f"{ERROR_SAVE_FAILED}: {e}", path=self.cart_path) from e
        logger.info(f"Cart saved to {self.cart_path} ({len(self.cart)} lines)")

    def load(self) -> LoadResult:
        """
        Replace the cart and settings with the saved snapshots.

        Both files are read before anything is swapped in, so a failure leaves
        the session as it was. Settings always come from their own file
        (defaults when it is missing). A missing cart file is not an error:
        the cart is left alone and ``found`` is False.

        Raises:
            StorageError: a file exists but could not be read
        """
        try:
            cart_bytes = _read_optional(self.cart_path)
            settings_bytes = _read_optional(self.settings_path)
        except OSError as e:
            logger.error(f"{ERROR_LOAD_FAILED}: {e}")
            raise StorageError(f"{ERROR_LOAD_FAILED}: {e}", path=self.cart_path) from e

        settings = self.store.decode_settings(settings_bytes)
        if cart_bytes is None:
            self.settings = settings
            logger.info(f"No saved cart found at {self.cart_path}")
            return LoadResult(found=False)

        decoded = self.store.decode_cart(cart_bytes)
        fresh = Cart(self.catalog)
        for product_id, quantity in decoded.records:
            fresh.add(product_id, quantity)

        self.cart = fresh
        self.settings = settings
        logger.info(
            f"Loaded cart from {self.cart_path}: {len(fresh)} lines, "
            f"{decoded.skipped_count} records skipped"
        )
        return LoadResult(found=True, line_count=len(fresh), skipped=decoded.skipped)

    def load_settings(self) -> CartSettings:
        """Reload only the settings snapshot (defaults if it is missing)."""
        try:
            data = _read_optional(self.settings_path)
        except OSError as e:
            logger.error(f"{ERROR_LOAD_FAILED}: {e}")
            raise StorageError(f"{ERROR_LOAD_FAILED}: {e}", path=self.settings_path) from e
        self.settings = self.store.decode_settings(data)
        return self.settings

    # ==================== Output ====================

    def render_receipt(self, generated_at: Optional[datetime] = None) -> str:
        return render_receipt(
            self.cart.lines(),
            self.totals(),
            tax_label=self.engine.tax_label,
            symbol=self.config.currency_symbol,
            generated_at=generated_at,
        )

    def export_receipt(self, path: PathLike, generated_at: Optional[datetime] = None) -> Path:
        """Write the receipt to path and return it."""
        target = Path(path)
        text = self.render_receipt(generated_at)
        try:
            _write_atomic(target, text.encode("utf-8"))
        except OSError as e:
            logger.error(f"{ERROR_EXPORT_FAILED}: {e}")
            raise StorageError(f"{ERROR_EXPORT_FAILED}: {e}", path=target) from e
        logger.info(f"Receipt exported to {target}")
        return target

    def checkout(self) -> Totals:
        """
        Place the (demo) order: saves the cart and returns the charged totals.

        Raises:
            EmptyCartError: nothing in the cart
        """
        if self.cart.is_empty():
            raise EmptyCartError()
        totals = self.totals()
        self.save()
        logger.info(f"Checkout placed for {self.cart.total_items} items, total {totals.grand_total}")
        return totals
