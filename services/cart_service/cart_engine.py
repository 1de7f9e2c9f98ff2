"""
Cart Engine Module

The cart engine is the only writer of a shopper's cart. It owns the ordered list of
entries, mirrors it to the cart store after every mutation and then broadcasts the
new item list to subscribers (views, count badges, loggers).

Mutation sequence:
    UI event -> Cart.<mutation>() -> CartStore.save() -> aggregates -> NotificationBus.notify()

Example Usage:
    ```python
    store = CartStore(redis_client, key="cart:3f9c2a")
    cart = Cart(store, session_id="3f9c2a")
    unsubscribe = cart.subscribe(lambda items: print(len(items)))

    cart.add_item({"id": 1, "name": "Garam Masala", "price": 120, "quantity": 2, "weight": "100g"})
    cart.update_quantity(0, 3)
    cart.get_total()          # 360.0
    cart.get_order_message()  # text for the messaging app

    unsubscribe()
    cart.close()
    ```
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from shared.events import (
    CART_CLEARED,
    CART_ITEM_ADDED,
    CART_ITEM_REMOVED,
    CART_QUANTITY_UPDATED,
)
from shared.money import format_inr

from services.cart_service.cart_store import CartStore
from services.cart_service.exceptions import EntryNotFoundError, InvalidIndexError
from services.cart_service.notification_bus import NotificationBus
from services.cart_service.schemas import CartEntry

logger = logging.getLogger(__name__)

ORDER_FOOTER = "_Please provide shipping details to complete the order._"


class Cart:
    """In-memory cart with write-through persistence and change notification."""

    def __init__(self, store: CartStore, bus: Optional[NotificationBus] = None, session_id: Optional[str] = None):
        self.store = store
        self.bus = bus if bus is not None else NotificationBus()
        self.session_id = session_id
        self._items: List[CartEntry] = store.load()
        logger.debug(f"Loaded cart {store.key} with {len(self._items)} entries")

    def __len__(self) -> int:
        return len(self._items)

    # ---- subscriptions ----

    def subscribe(self, callback: Callable[[List[CartEntry]], Any]) -> Callable[[], None]:
        """Register a cart-changed callback; returns its unsubscribe function."""
        return self.bus.subscribe(callback)

    def notify(self) -> None:
        self.bus.notify(self.get_items())

    def close(self) -> None:
        """Tear down: drop every subscriber. Stored content is left untouched."""
        self.bus.clear()

    # ---- internal helpers ----

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise InvalidIndexError(index, len(self._items))

    def _commit(self, event_type: str, message: str) -> None:
        self.store.save(self._items)
        logger.info(
            f"{message} (items={self.get_total_items()}, total={self.get_total()})",
            extra={"event_type": event_type, "session_id": self.session_id},
        )
        self.notify()

    # ---- mutations ----

    def add_item(self, entry: Union[CartEntry, Dict[str, Any]]) -> None:
        """Add an entry, merging into an existing line for the same product/weight."""
        if isinstance(entry, CartEntry):
            entry = entry.model_copy()
        else:
            entry = CartEntry.model_validate(entry)

        existing = next(
            (item for item in self._items if item.matches(entry.product_id, entry.weight)),
            None,
        )
        if existing is not None:
            existing.quantity += entry.quantity
        else:
            self._items.append(entry)

        self._commit(CART_ITEM_ADDED, f"Added {entry.quantity} x {entry.name} to cart")

    def remove_item(self, index: int) -> CartEntry:
        """Remove and return the entry at ``index``."""
        self._check_index(index)
        removed = self._items.pop(index)
        self._commit(CART_ITEM_REMOVED, f"Removed {removed.name} from cart")
        return removed

    def update_quantity(self, index: int, quantity: int) -> None:
        """Set the quantity at ``index``. Quantities below 1 are ignored."""
        if quantity < 1:
            logger.debug(f"Ignoring quantity {quantity} for cart index {index}")
            return
        self._check_index(index)
        entry = self._items[index]
        entry.quantity = quantity
        self._commit(CART_QUANTITY_UPDATED, f"Set {entry.name} quantity to {quantity}")

    def clear(self) -> None:
        self._items = []
        self._commit(CART_CLEARED, "Cleared cart")

    # ---- key-addressed helpers ----

    def find_index(self, product_id: Any, weight: Optional[str] = None) -> int:
        """Position of the line for (product_id, weight), or -1."""
        product_id = str(product_id)
        weight = weight or None
        for index, item in enumerate(self._items):
            if item.product_id == product_id and item.weight == weight:
                return index
        return -1

    def remove_entry(self, product_id: Any, weight: Optional[str] = None) -> CartEntry:
        index = self.find_index(product_id, weight)
        if index < 0:
            raise EntryNotFoundError(str(product_id), weight)
        return self.remove_item(index)

    def update_entry_quantity(self, product_id: Any, quantity: int, weight: Optional[str] = None) -> None:
        index = self.find_index(product_id, weight)
        if index < 0:
            raise EntryNotFoundError(str(product_id), weight)
        self.update_quantity(index, quantity)

    # ---- reads ----

    def get_items(self) -> List[CartEntry]:
        """Copy of the current entries; mutating it does not touch the cart."""
        return [item.model_copy() for item in self._items]

    def get_total(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_order_message(self) -> str:
        """Order summary text for hand-off to the messaging app."""
        lines = "\n".join(
            f"{item.quantity}x {item.name} - {format_inr(item.line_total)}" for item in self._items
        )
        return (
            "🛒 *New Order*\n\n"
            f"*Items:*\n{lines}\n\n"
            f"*Total: {format_inr(self.get_total())}*\n\n"
            f"{ORDER_FOOTER}"
        )
