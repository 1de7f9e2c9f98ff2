"""
cart_service/main.py - Shopping Cart Service

PURPOSE:
    Hosts the storefront cart over HTTP. Each shopper session owns one Redis slot
    ("cart:{session_id}") that mirrors the cart engine's entry list.

RESPONSIBILITIES:
    - Add/remove/update items through the cart engine
    - Report cart totals and item counts
    - Render the cart page HTML
    - Build the WhatsApp checkout hand-off (message + deep link)

API ENDPOINTS:
    GET    /cart/{session_id}                 - View cart contents
    POST   /cart/{session_id}/items           - Add item (merges same product/weight)
    PUT    /cart/{session_id}/items/{index}   - Update quantity (quantity < 1 ignored)
    DELETE /cart/{session_id}/items/{index}   - Remove item at position
    DELETE /cart/{session_id}                 - Clear cart
    GET    /cart/{session_id}/view            - Cart page HTML
    POST   /cart/{session_id}/checkout        - Order message and WhatsApp link
    GET    /health                            - Health check endpoint

TESTING COMMANDS:
    1. Add 2 x Garam Masala (100g):
        curl -X POST http://localhost:8001/cart/abc123/items \
          -H "Content-Type: application/json" \
          -d '{"id": "1", "name": "Garam Masala", "price": 120, "quantity": 2, "weight": "100g"}'

    2. Bump the first line to 3:
        curl -X PUT http://localhost:8001/cart/abc123/items/0 \
          -H "Content-Type: application/json" -d '{"quantity": 3}'

    3. Checkout:
        curl -X POST http://localhost:8001/cart/abc123/checkout

USAGE:
    Runs on port 8001
    Access: http://localhost:8001/cart/...
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import redis
from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse
from pydantic_settings import BaseSettings

from shared.events import CartCheckoutInitiatedEvent
from shared.logging_config import setup_logging

from services.cart_service.cart_engine import Cart
from services.cart_service.cart_store import CartStore
from services.cart_service.cart_view import render_cart_html
from services.cart_service.checkout import build_checkout_url
from services.cart_service.exceptions import CartError
from services.cart_service.schemas import (
    CartEntry,
    CartResponse,
    CheckoutResponse,
    HealthResponse,
    UpdateQuantityRequest,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings."""

    redis_host: str = os.getenv("REDIS_HOST", "localhost")
    redis_port: int = int(os.getenv("REDIS_PORT", "6379"))
    redis_db: int = int(os.getenv("REDIS_DB", "0"))
    cart_key_prefix: str = os.getenv("CART_KEY_PREFIX", "cart:")
    # 0 keeps carts until cleared, like browser storage
    cart_ttl_seconds: int = int(os.getenv("CART_TTL_SECONDS", "0"))
    checkout_phone_number: str = os.getenv("CHECKOUT_PHONE_NUMBER", "910000000000")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cart_service_port: int = int(os.getenv("CART_SERVICE_PORT", "8001"))


settings = Settings()

# Global instances
redis_client: Optional[redis.Redis] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    global redis_client

    setup_logging("cart-service", level=settings.log_level)
    logger.info("Starting Cart Service...")

    try:
        redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            decode_responses=True,
        )
        redis_client.ping()
        logger.info("Redis connected")
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise

    yield

    logger.info("Shutting down Cart Service...")
    if redis_client:
        redis_client.close()


app = FastAPI(title="Cart Service", version="1.0.0", lifespan=lifespan)


def get_redis() -> redis.Redis:
    if redis_client is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Cart storage unavailable")
    return redis_client


def open_cart(session_id: str, client: redis.Redis) -> Cart:
    """Load the session's cart from its Redis slot."""
    store = CartStore(client, key=f"{settings.cart_key_prefix}{session_id}", ttl=settings.cart_ttl_seconds)
    return Cart(store, session_id=session_id)


def cart_response(session_id: str, cart: Cart) -> CartResponse:
    return CartResponse(
        session_id=session_id,
        items=cart.get_items(),
        total_amount=cart.get_total(),
        total_items=cart.get_total_items(),
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", service="cart-service", version="1.0.0")


@app.get("/cart/{session_id}", response_model=CartResponse)
def get_cart(session_id: str, client: redis.Redis = Depends(get_redis)) -> CartResponse:
    """Get the session's cart."""
    try:
        return cart_response(session_id, open_cart(session_id, client))
    except Exception as e:
        logger.error(f"Error getting cart: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.post("/cart/{session_id}/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
def add_item(session_id: str, entry: CartEntry, client: redis.Redis = Depends(get_redis)) -> CartResponse:
    """Add an entry; a line with the same product and weight has its quantity increased."""
    try:
        cart = open_cart(session_id, client)
        cart.add_item(entry)
        return cart_response(session_id, cart)
    except Exception as e:
        logger.error(f"Error adding item to cart: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.put("/cart/{session_id}/items/{index}", response_model=CartResponse)
def update_item_quantity(
    session_id: str,
    index: int,
    request: UpdateQuantityRequest,
    client: redis.Redis = Depends(get_redis),
) -> CartResponse:
    """Update the quantity of the line at ``index``. Quantities below 1 leave the cart unchanged."""
    try:
        cart = open_cart(session_id, client)
        cart.update_quantity(index, request.quantity)
        return cart_response(session_id, cart)
    except CartError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating item quantity: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.delete("/cart/{session_id}/items/{index}", response_model=CartResponse)
def remove_item(session_id: str, index: int, client: redis.Redis = Depends(get_redis)) -> CartResponse:
    """Remove the line at ``index``."""
    try:
        cart = open_cart(session_id, client)
        cart.remove_item(index)
        return cart_response(session_id, cart)
    except CartError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error removing item from cart: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.delete("/cart/{session_id}", response_model=CartResponse)
def clear_cart(session_id: str, client: redis.Redis = Depends(get_redis)) -> CartResponse:
    """Empty the cart."""
    try:
        cart = open_cart(session_id, client)
        cart.clear()
        return cart_response(session_id, cart)
    except Exception as e:
        logger.error(f"Error clearing cart: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.get("/cart/{session_id}/view", response_class=HTMLResponse)
def view_cart(session_id: str, client: redis.Redis = Depends(get_redis)) -> HTMLResponse:
    """Render the cart page."""
    cart = open_cart(session_id, client)
    return HTMLResponse(render_cart_html(cart.get_items()))


# Checkout builds the order message and WhatsApp deep link; the shopper's app takes over from there.
# The cart is kept unless clear_after is set, so the shopper can come back and adjust the order.
@app.post("/cart/{session_id}/checkout", response_model=CheckoutResponse)
def checkout(
    session_id: str,
    clear_after: bool = False,
    client: redis.Redis = Depends(get_redis),
) -> CheckoutResponse:
    """Build the order hand-off for the session's cart."""
    try:
        cart = open_cart(session_id, client)
        if not len(cart):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty")

        message = cart.get_order_message()
        checkout_url = build_checkout_url(message, settings.checkout_phone_number)
        summary = cart_response(session_id, cart)

        event = CartCheckoutInitiatedEvent(
            session_id=session_id,
            items=[item.model_dump(mode="json") for item in summary.items],
            total_amount=summary.total_amount,
            total_items=summary.total_items,
            message=message,
            checkout_url=checkout_url,
        )
        logger.info(
            f"Checkout initiated for {summary.total_items} item(s), total {summary.total_amount}",
            extra={"event_type": event.event_type, "session_id": session_id},
        )

        if clear_after:
            cart.clear()

        return CheckoutResponse(
            message=message,
            checkout_url=checkout_url,
            event_id=event.event_id,
            cart=summary,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during checkout: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.cart_service_port)
