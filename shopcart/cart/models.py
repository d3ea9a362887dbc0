"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Mapping, Tuple

from shopcart.catalog import ProductCatalog
from shopcart.errors import InvalidQuantityError
from shopcart.models import CartLineView, Product
from shopcart.services.money import ZERO, multiply, round_money

CartRecord = Tuple[str, int]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class CartLine:
    """Single line in the cart. The product is referenced, not owned."""
    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        """quantity x unit price, rounded to cents."""
        return round_money(multiply(self.product.unit_price, self.quantity))

    def to_view(self) -> CartLineView:
        return CartLineView(
            product_id=self.product.id,
            name=self.product.name,
            quantity=self.quantity,
            unit_price=self.product.unit_price,
            line_total=self.line_total,
        )


class Cart:
    """
    Ordered collection of cart lines keyed by product id.

    Lines keep insertion order; changing a quantity leaves a line where it is.
    A line never holds a quantity below 1: setting one removes the line.
    """

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog
        self._lines: dict[str, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    # ==================== Mutation ====================

    def add(self, product_id: str, quantity: int = 1) -> CartLine:
        """
        Add quantity of a product, merging into an existing line.

        Raises:
            InvalidQuantityError: quantity is not an integer >= 1
            UnknownProductError: product id is not in the catalog
        """
        if not _is_int(quantity) or quantity < 1:
            raise InvalidQuantityError(quantity)
        product = self.catalog.require(product_id)

        line = self._lines.get(product_id)
        if line is not None:
            line.quantity += quantity
            return line

        line = CartLine(product=product, quantity=quantity)
        self._lines[product_id] = line
        return line

    def remove(self, product_id: str) -> bool:
        """Delete a line. Returns False (and does nothing) if it was absent."""
        return self._lines.pop(product_id, None) is not None

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """
        Overwrite a line's quantity in place; quantity <= 0 removes the line.

        Ids that are not in the cart are ignored.
        """
        if not _is_int(quantity):
            raise InvalidQuantityError(quantity)
        if quantity <= 0:
            self.remove(product_id)
            return
        line = self._lines.get(product_id)
        if line is not None:
            line.quantity = quantity

    def update_quantities(self, quantities: Mapping[str, int]) -> None:
        """Apply a batch of in-place quantity edits."""
        for product_id, quantity in quantities.items():
            self.set_quantity(product_id, quantity)

    def clear(self) -> None:
        self._lines.clear()

    # ==================== Queries ====================

    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(line.quantity for line in self._lines.values())

    def get(self, product_id: str) -> CartLineView | None:
        line = self._lines.get(product_id)
        return line.to_view() if line is not None else None

    def lines(self) -> List[CartLineView]:
        """Read-only snapshot of all lines in display order."""
        return [line.to_view() for line in self._lines.values()]

    def records(self) -> List[CartRecord]:
        """(product_id, quantity) pairs in display order, for persistence."""
        return [(line.product_id, line.quantity) for line in self._lines.values()]

    def subtotal(self) -> Decimal:
        """Sum of line totals, before any discount."""
        total = sum((line.line_total for line in self._lines.values()), ZERO)
        return round_money(total)
