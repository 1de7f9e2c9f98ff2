"""Tests for the Redis cart store"""
import json

import pytest

from services.cart_service.cart_store import DEFAULT_CART_KEY, CartStore
from services.cart_service.schemas import CartEntry


@pytest.fixture
def entries():
    return [
        CartEntry(product_id="1", name="Garam Masala", price=220, quantity=2, weight="100g", image="/g.jpg"),
        CartEntry(product_id="4", name="Dried Basil", price=80, quantity=1),
    ]


def test_round_trip(store, entries):
    store.save(entries)

    assert store.load() == entries


def test_save_overwrites(store, entries):
    store.save(entries)
    store.save(entries[:1])

    assert store.load() == entries[:1]


def test_missing_slot_loads_empty(store):
    assert store.load() == []


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "",
        '{"product_id": "1"}',
        '[{"product_id": "1", "name": "X", "price": -5, "quantity": 1}]',
        '[{"name": "no id", "price": 5, "quantity": 1}]',
        '["just a string"]',
    ],
)
def test_malformed_slot_loads_empty(mock_redis, redis_data, raw):
    redis_data["cart:bad"] = raw

    assert CartStore(mock_redis, key="cart:bad").load() == []


def test_null_slot_loads_empty(mock_redis, redis_data):
    redis_data["cart:null"] = "null"

    assert CartStore(mock_redis, key="cart:null").load() == []


def test_bytes_payload_is_decoded(mock_redis, redis_data):
    redis_data["cart:bytes"] = json.dumps([{"id": 3, "name": "Cumin", "price": 60, "quantity": 2}]).encode()

    loaded = CartStore(mock_redis, key="cart:bytes").load()

    assert loaded[0].product_id == "3"
    assert loaded[0].quantity == 2


def test_browser_style_payload_is_accepted(mock_redis, redis_data):
    # Shape written by the storefront's front-end cart
    redis_data["cart"] = json.dumps(
        [{"id": 1, "name": "Chilli", "price": 100, "quantity": 2, "weight": "250g", "image": "/c.jpg"}]
    )

    loaded = CartStore(mock_redis).load()

    assert loaded == [CartEntry(product_id="1", name="Chilli", price=100, quantity=2, weight="250g", image="/c.jpg")]


def test_default_key_and_no_ttl(mock_redis, entries):
    store = CartStore(mock_redis)
    store.save(entries)

    assert store.key == DEFAULT_CART_KEY
    mock_redis.set.assert_called_once()
    assert mock_redis.set.call_args.kwargs["ex"] is None


def test_ttl_passed_to_redis(mock_redis, entries):
    CartStore(mock_redis, key="cart:ttl", ttl=3600).save(entries)

    assert mock_redis.set.call_args.kwargs["ex"] == 3600
    assert mock_redis.ttl("cart:ttl") == 3600


def test_serialized_format(store, redis_data, entries):
    store.save(entries)

    payload = json.loads(redis_data["cart:test"])
    assert payload[0] == {
        "product_id": "1",
        "name": "Garam Masala",
        "price": 220.0,
        "quantity": 2,
        "weight": "100g",
        "image": "/g.jpg",
    }


def test_delete(store, entries, redis_data):
    store.save(entries)
    store.delete()

    assert "cart:test" not in redis_data
    assert store.load() == []
