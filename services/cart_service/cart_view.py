"""
Cart view rendering.

CartView and CartCountBadge are cart subscribers: they never touch cart state
directly, they re-render from the item list the engine broadcasts and forward
control gestures (quantity steppers, remove buttons) back to the engine.
"""

import logging
import re
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from shared.money import format_inr

from services.cart_service.cart_engine import Cart
from services.cart_service.exceptions import InvalidIndexError
from services.cart_service.schemas import CartEntry

logger = logging.getLogger(__name__)

# Resolve template directory relative to this file
TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)
env.filters["inr"] = format_inr

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_quantity(raw) -> int:
    """Integer typed into a quantity box; blank, zero or junk input becomes 1."""
    if isinstance(raw, int):
        return raw or 1
    match = _LEADING_INT.match(str(raw or ""))
    if not match:
        return 1
    return int(match.group(1)) or 1


def render_cart_html(items: List[CartEntry]) -> str:
    subtotal = sum(item.line_total for item in items)
    template = env.get_template("cart.html")
    return template.render(
        items=items,
        empty=not items,
        subtotal=subtotal,
        # No shipping charge yet
        total=subtotal,
    )


class CartView:
    """Cart page: keeps ``html`` in sync with the cart and wires its controls."""

    def __init__(self, cart: Cart):
        self.cart = cart
        self.html = ""
        self.empty_visible = True
        self.summary_visible = False
        self._items: List[CartEntry] = []
        self._unsubscribe = cart.subscribe(self.render)
        self.render(cart.get_items())

    def render(self, items: List[CartEntry]) -> None:
        self._items = list(items)
        self.empty_visible = not self._items
        self.summary_visible = bool(self._items)
        self.html = render_cart_html(self._items)

    def detach(self) -> None:
        self._unsubscribe()

    def _rendered(self, index: int) -> CartEntry:
        if not 0 <= index < len(self._items):
            raise InvalidIndexError(index, len(self._items))
        return self._items[index]

    # ---- controls ----

    def decrement(self, index: int) -> None:
        item = self._rendered(index)
        self.cart.update_quantity(index, max(1, item.quantity - 1))

    def increment(self, index: int) -> None:
        item = self._rendered(index)
        self.cart.update_quantity(index, item.quantity + 1)

    def set_quantity(self, index: int, raw_value) -> None:
        self._rendered(index)
        self.cart.update_quantity(index, parse_quantity(raw_value))

    def remove(self, index: int) -> None:
        self.cart.remove_item(index)


class CartCountBadge:
    """Header cart counter, shown only while the cart holds something."""

    def __init__(self, cart: Cart):
        self.count = 0
        self.display = "none"
        self._unsubscribe = cart.subscribe(self.update)
        self.update(cart.get_items())

    def update(self, items: List[CartEntry]) -> None:
        self.count = sum(item.quantity for item in items)
        self.display = "flex" if self.count > 0 else "none"

    def detach(self) -> None:
        self._unsubscribe()
