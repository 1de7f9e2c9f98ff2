"""
events.py - Cart Event Schema Definitions

PURPOSE:
    Defines the event types emitted by the cart engine and the checkout flow.
    Events are not shipped to a broker; they are attached to log records
    (event_type extra) and the checkout event is returned to API callers.

EVENT TYPES:
    - cart.item_added
    - cart.item_removed
    - cart.quantity_updated
    - cart.cleared
    - cart.checkout_initiated

COMMON FIELDS (BaseEvent):
    - event_id: Unique identifier (UUID)
    - event_type: Event category and action
    - timestamp: Store-timezone timestamp of event creation
    - session_id: Cart session the event belongs to

SERIALIZATION:
    event.model_dump_json() / CartCheckoutInitiatedEvent.model_validate_json(raw)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field, field_validator

from shared.logging_config import DEFAULT_TIMEZONE

CART_ITEM_ADDED = "cart.item_added"
CART_ITEM_REMOVED = "cart.item_removed"
CART_QUANTITY_UPDATED = "cart.quantity_updated"
CART_CLEARED = "cart.cleared"
CART_CHECKOUT_INITIATED = "cart.checkout_initiated"

ALL_EVENT_TYPES = [
    CART_ITEM_ADDED,
    CART_ITEM_REMOVED,
    CART_QUANTITY_UPDATED,
    CART_CLEARED,
    CART_CHECKOUT_INITIATED,
]


class BaseEvent(BaseModel):
    """Base event model shared by all cart events."""

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(ZoneInfo(DEFAULT_TIMEZONE)))
    session_id: Optional[str] = None

    @field_validator("event_type")
    @classmethod
    def known_event_type(cls, v: str) -> str:
        if v not in ALL_EVENT_TYPES:
            raise ValueError(f"Unknown event type: {v}")
        return v


class CartCheckoutInitiatedEvent(BaseEvent):
    """
    Event produced when a shopper hands the cart off to the messaging app.
    Carries the message text and deep link so the hand-off can be audited from logs.
    """

    event_type: str = CART_CHECKOUT_INITIATED
    items: List[Dict[str, Any]]
    total_amount: float
    total_items: int
    message: str
    checkout_url: str

