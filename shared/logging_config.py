"""
logging_config.py - Centralized JSON Logging Configuration

PURPOSE:
    Provides structured JSON logging for the storefront services with timezone-aware
    timestamps, cart event tagging, and service-specific context injection.

KEY FEATURES:
    - JSON Format: Every log line is a single JSON object
    - Timezone Aware: Timestamps use the store timezone (LOG_TIMEZONE, default Asia/Kolkata)
    - Service Context: Automatically adds service_name to all log entries
    - Event Tracking: Optional event_type / session_id fields for cart diagnostics
    - Exception Handling: Full stack traces included in log entries

JSON LOG FIELDS:
    - timestamp: ISO 8601 format in the store timezone (e.g., "2026-10-19T14:02:11.120331+05:30")
    - level: Log level (INFO, ERROR, WARNING, DEBUG, CRITICAL)
    - logger: Module name where the log originated (e.g., "services.cart_service.cart_engine")
    - message: The actual log message
    - service_name: Name of the service (injected automatically)
    - session_id: Optional cart session the record belongs to
    - event_type: Optional cart event type (e.g., "cart.item_added")
    - exception: Full stack trace (only when exc_info is set)

USAGE:
    from shared.logging_config import setup_logging
    setup_logging("cart-service", level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Added item", extra={"event_type": "cart.item_added", "session_id": "abc"})

EXAMPLE JSON OUTPUT:
    {
        "timestamp": "2026-10-19T14:02:11.120331+05:30",
        "level": "INFO",
        "logger": "services.cart_service.cart_engine",
        "message": "Added 2 x Garam Masala to cart",
        "service_name": "cart-service",
        "event_type": "cart.item_added"
    }
"""

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = os.getenv("LOG_TIMEZONE", "Asia/Kolkata")

# Record attributes copied into the JSON payload when present
CONTEXT_FIELDS = ("service_name", "session_id", "event_type")


class JsonFormatter(logging.Formatter):
    """Custom formatter that outputs JSON logs with cart context."""

    def __init__(self, timezone: str = DEFAULT_TIMEZONE):
        super().__init__()
        self.tz = ZoneInfo(timezone)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, self.tz).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class ServiceFilter(logging.Filter):
    """Stamp every record with the owning service name."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


def setup_logging(service_name: str, level: str = "INFO", timezone: Optional[str] = None) -> None:
    """Setup JSON logging for a service.

    Safe to call more than once: handlers installed by a previous call are replaced
    rather than stacked, so app factories can be invoked repeatedly in tests.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(timezone or DEFAULT_TIMEZONE))
    handler.addFilter(ServiceFilter(service_name))
    handler._storefront_handler = True  # type: ignore[attr-defined]

    root = logging.getLogger()
    root.setLevel(level.upper())
    for existing in list(root.handlers):
        if getattr(existing, "_storefront_handler", False):
            root.removeHandler(existing)
    root.addHandler(handler)
