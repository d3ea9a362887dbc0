"""
Common errors for the cart engine.

Message constants live next to the exception types so the CLI and the
session service report the same wording.
"""

# Cart errors
ERROR_INVALID_QUANTITY = "Quantity must be a positive integer"
ERROR_EMPTY_CART = "Your cart is empty"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Storage errors
ERROR_SAVE_FAILED = "Failed to save cart"
ERROR_LOAD_FAILED = "Failed to load cart"
ERROR_EXPORT_FAILED = "Failed to export receipt"


class ShopCartError(Exception):
    """Base error for cart operations."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class InvalidQuantityError(ShopCartError):
    """Quantity below 1 passed where a positive quantity is required."""

    def __init__(self, quantity: object) -> None:
        super().__init__(f"{ERROR_INVALID_QUANTITY}: {quantity!r}", code="INVALID_QUANTITY")
        self.quantity = quantity


class UnknownProductError(ShopCartError):
    """Catalog has no product with the given id."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"{ERROR_PRODUCT_NOT_FOUND}: {product_id}", code="UNKNOWN_PRODUCT")
        self.product_id = product_id


class EmptyCartError(ShopCartError):
    """Checkout attempted on a cart without lines."""

    def __init__(self, message: str = ERROR_EMPTY_CART) -> None:
        super().__init__(message, code="EMPTY_CART")


class StorageError(ShopCartError):
    """Reading or writing a persisted artifact failed."""

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message, code="IO_FAILURE")
        self.path = path
