"""Pytest configuration and fixtures"""
from fnmatch import fnmatch
from unittest.mock import MagicMock

import pytest
import redis
from sqlalchemy.orm import Session

from shared.database import Base, make_engine, make_session_factory
from services.cart_service.cart_engine import Cart
from services.cart_service.cart_store import CartStore
from services.catalog_service import models  # noqa: F401


@pytest.fixture
def redis_data():
    """Backing dict for the mocked Redis client"""
    return {}


@pytest.fixture
def mock_redis(redis_data):
    """Mock Redis client storing values in ``redis_data``"""
    client = MagicMock(spec=redis.Redis)
    expiries = {}

    def _set(key, value, ex=None):
        redis_data[key] = value
        if ex:
            expiries[key] = ex
        else:
            expiries.pop(key, None)
        return True

    def _delete(*keys):
        removed = 0
        for key in keys:
            if redis_data.pop(key, None) is not None:
                removed += 1
            expiries.pop(key, None)
        return removed

    def _ttl(key):
        if key not in redis_data:
            return -2
        return expiries.get(key, -1)

    client.get.side_effect = lambda key: redis_data.get(key)
    client.set.side_effect = _set
    client.delete.side_effect = _delete
    client.ttl.side_effect = _ttl
    client.scan_iter.side_effect = lambda match="*": [k for k in list(redis_data) if fnmatch(k, match)]
    client.ping.return_value = True
    return client


@pytest.fixture
def store(mock_redis):
    return CartStore(mock_redis, key="cart:test")


@pytest.fixture
def cart(store):
    cart = Cart(store, session_id="test")
    yield cart
    cart.close()


@pytest.fixture
def masala():
    """Sample cart entry data"""
    return {
        "id": "1",
        "name": "Garam Masala",
        "price": 220,
        "quantity": 2,
        "weight": "100g",
        "image": "/images/garam-masala.jpg",
    }


@pytest.fixture
def basil():
    return {"id": "4", "name": "Dried Basil", "price": 80, "quantity": 1, "image": "/images/basil.jpg"}


@pytest.fixture
def db_session() -> Session:
    """In-memory SQLite session with the catalog tables created"""
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
