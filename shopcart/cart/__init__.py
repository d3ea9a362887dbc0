"""Cart package: models, snapshot storage, and session facade."""
from .models import CartLine, Cart
from .storage import PersistenceStore, CartDecodeResult, SkippedRecord, SkipReason
from .service import CartSession, LoadResult

__all__ = [
    "CartLine",
    "Cart",
    "PersistenceStore",
    "CartDecodeResult",
    "SkippedRecord",
    "SkipReason",
    "CartSession",
    "LoadResult",
]
