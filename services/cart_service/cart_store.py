"""
Cart Store Module

This module provides Redis-based persistence for a single shopper's cart.
It is the write-through mirror of the in-memory cart held by the cart engine:
every mutation overwrites the whole slot with the full entry list.

Key Features:
    - One Redis key ("slot") per cart, holding a JSON array of entries
    - Optional expiry of abandoned carts (TTL reset on every save)
    - Malformed slot content is recovered as an empty cart, never raised
    - Logging for debugging and monitoring

Data Format (Redis):
    Key: "cart:3f9c2a"
    Value: '[
        {"product_id": "1", "name": "Garam Masala", "price": 120.0,
         "quantity": 2, "weight": "100g", "image": "/img/garam.jpg"},
        {"product_id": "4", "name": "Dried Basil", "price": 80.0,
         "quantity": 1, "weight": null, "image": "/img/basil.jpg"}
    ]'

Example Usage:
    ```python
    redis_client = redis.Redis(host="redis", port=6379, db=0, decode_responses=True)
    store = CartStore(redis_client, key="cart:3f9c2a", ttl=86400)

    entries = store.load()          # [] when the slot is absent or unreadable
    store.save(entries)             # overwrite the slot
    store.delete()                  # drop the slot entirely
    ```
"""

import json
import logging
from typing import List, Optional, Sequence

import redis
from pydantic import TypeAdapter, ValidationError

from services.cart_service.schemas import CartEntry

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "cart"

_entries_adapter = TypeAdapter(List[CartEntry])


class CartStore:
    """Load/save a cart entry sequence to one Redis key."""

    def __init__(self, redis_client: redis.Redis, key: str = DEFAULT_CART_KEY, ttl: Optional[int] = None):
        self.redis = redis_client
        self.key = key
        # 0 or None keeps the slot until it is explicitly cleared
        self.ttl = ttl or None

    def load(self) -> List[CartEntry]:
        """Read the slot. Absent or malformed content yields an empty list."""
        raw = self.redis.get(self.key)
        if raw is None:
            return []

        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unparseable cart in {self.key}: {e}")
            return []

        if data is None:
            return []

        try:
            return _entries_adapter.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Discarding malformed cart in {self.key}: {e.error_count()} invalid field(s)")
            return []

    def save(self, entries: Sequence[CartEntry]) -> None:
        """Serialize and write the full sequence, overwriting prior content."""
        payload = json.dumps([entry.model_dump(mode="json") for entry in entries], ensure_ascii=False)
        self.redis.set(self.key, payload, ex=self.ttl)
        logger.debug(f"Saved {len(entries)} cart entries to {self.key}")

    def delete(self) -> None:
        self.redis.delete(self.key)
        logger.info(f"Deleted cart slot {self.key}")
