"""Print every persisted cart slot in Redis with its TTL and contents."""

import json
import os
import sys
from typing import List, Tuple

import redis

from services.cart_service.cart_store import CartStore
from services.cart_service.schemas import CartEntry
from shared.money import format_inr

CART_KEY_PREFIX = os.getenv("CART_KEY_PREFIX", "cart:")


def list_carts(redis_client: redis.Redis, prefix: str = CART_KEY_PREFIX) -> List[Tuple[str, int, List[CartEntry]]]:
    """(session_id, ttl_seconds, entries) for every cart slot, sorted by session id.

    A ttl of -1 means the slot never expires.
    """
    carts = []
    for key in redis_client.scan_iter(match=f"{prefix}*"):
        if isinstance(key, bytes):
            key = key.decode("utf-8")
        session_id = key[len(prefix):]
        entries = CartStore(redis_client, key=key).load()
        carts.append((session_id, redis_client.ttl(key), entries))
    return sorted(carts, key=lambda cart: cart[0])


def main() -> int:
    try:
        redis_client = redis.Redis(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            decode_responses=True,
        )
        # PING fails fast when the server is not reachable
        redis_client.ping()
    except redis.RedisError as e:
        print(f"❌ Failed to connect to Redis: {e}")
        print("Make sure Redis is running: docker-compose up redis -d")
        return 1

    carts = list_carts(redis_client)
    print(f"✅ Found {len(carts)} active carts:\n")

    if not carts:
        print("No carts found. Add items via the API first, e.g.:")
        print("\ncurl -X POST http://localhost:8001/cart/abc123/items \\")
        print('  -H "Content-Type: application/json" \\')
        print('  -d \'{"id": "1", "name": "Garam Masala", "price": 220, "quantity": 1}\'\n')
        return 0

    for session_id, ttl, entries in carts:
        total = sum(entry.line_total for entry in entries)
        print(f"👤 Session: {session_id}")
        print(f"⏱️  TTL: {'never expires' if ttl < 0 else f'{ttl} seconds remaining'}")
        print(f"🛒 Items: {json.dumps([e.model_dump(mode='json') for e in entries], indent=2, ensure_ascii=False)}")
        print(f"💰 Total: {format_inr(total)}")
        print("-" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
