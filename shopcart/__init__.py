"""
shopcart - cart pricing engine

This package contains:
- catalog: read-only product registry
- cart: cart model, snapshot storage, session service
- pricing: discount codes and totals engine
- receipt: plain-text receipt report

Note: Imports are lazy so that `python -m shopcart.cli` and light imports
such as `shopcart.services.money` do not pull in every module.
"""

__all__ = [
    "ProductCatalog",
    "Cart",
    "CartSession",
    "DiscountPolicy",
    "PricingEngine",
    "PersistenceStore",
]


def __getattr__(name):
    """Lazy attribute access for the public entry points."""
    if name == "ProductCatalog":
        from shopcart.catalog import ProductCatalog
        return ProductCatalog
    elif name == "Cart":
        from shopcart.cart import Cart
        return Cart
    elif name == "CartSession":
        from shopcart.cart import CartSession
        return CartSession
    elif name == "DiscountPolicy":
        from shopcart.pricing import DiscountPolicy
        return DiscountPolicy
    elif name == "PricingEngine":
        from shopcart.pricing import PricingEngine
        return PricingEngine
    elif name == "PersistenceStore":
        from shopcart.cart import PersistenceStore
        return PersistenceStore
    raise AttributeError(f"module 'shopcart' has no attribute '{name}'")
