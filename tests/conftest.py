"""Pytest configuration and fixtures"""
import logging
import os
from decimal import Decimal

import pytest

# Set test environment variables
os.environ["SHOPCART_TAX_RATE"] = "0.15"
os.environ["SHOPCART_CURRENCY_SYMBOL"] = "R"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from shopcart.cart import Cart, CartSession, PersistenceStore  # noqa: E402
from shopcart.catalog import ProductCatalog  # noqa: E402
from shopcart.config import Config  # noqa: E402
from shopcart.logging import LOGGER_NAME  # noqa: E402
from shopcart.models import Product  # noqa: E402
from shopcart.pricing import PricingEngine  # noqa: E402


@pytest.fixture
def catalog():
    """Built-in product catalog"""
    return ProductCatalog.default()


@pytest.fixture
def small_catalog():
    """Catalog with awkward prices for rounding checks"""
    return ProductCatalog([
        Product(id="A-1", name="Widget", category="Tools", unit_price="0.10"),
        Product(id="A-2", name="Gadget", category="Tools", unit_price="19.99"),
        Product(id="B-1", name="Gizmo with a very long descriptive name", category="Toys", unit_price="249.995"),
    ])


@pytest.fixture
def cart(catalog):
    """Empty cart over the built-in catalog"""
    return Cart(catalog)


@pytest.fixture
def engine():
    """Pricing engine with the default 15% VAT"""
    return PricingEngine(tax_rate=Decimal("0.15"))


@pytest.fixture
def store(catalog):
    """Snapshot codec over the built-in catalog"""
    return PersistenceStore(catalog)


@pytest.fixture
def config(tmp_path):
    """Config pointing at a temporary data directory"""
    return Config(
        data_dir=tmp_path,
        tax_rate=Decimal("0.15"),
        currency_symbol="R",
        log_level="WARNING",
    )


@pytest.fixture
def session(catalog, config):
    """Session storing its files under tmp_path"""
    return CartSession(catalog, config=config)


@pytest.fixture(autouse=True)
def detach_log_handlers():
    """Drop handlers the CLI attached, they hold the test's captured stderr"""
    yield
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
