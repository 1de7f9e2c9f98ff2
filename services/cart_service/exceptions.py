from typing import Optional


class CartError(Exception):
    """Base class for errors signaled by the cart engine."""


class InvalidIndexError(CartError, IndexError):
    """An index-based operation addressed a position outside the cart."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Cart index {index} out of range (cart has {length} entries)")


class EntryNotFoundError(CartError, LookupError):
    """No cart entry matches the requested product/weight pair."""

    def __init__(self, product_id: str, weight: Optional[str] = None):
        self.product_id = product_id
        self.weight = weight
        label = product_id if weight is None else f"{product_id} ({weight})"
        super().__init__(f"Product {label} not found in cart")
