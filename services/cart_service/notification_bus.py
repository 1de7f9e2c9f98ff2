import copy
import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Subscriber = Callable[[List[Any]], Any]


class NotificationBus:
    """Registry of cart-changed callbacks.

    Callbacks run synchronously, in registration order, each with its own copy of
    the item list passed to ``notify``. A callback that raises is logged and
    skipped; the remaining callbacks still receive the notification.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` and return a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(callback)

        return unsubscribe

    def unsubscribe(self, callback: Subscriber) -> None:
        """Remove every registration of ``callback``; unknown callbacks are ignored."""
        self._subscribers = [s for s in self._subscribers if s is not callback]

    def notify(self, items: List[Any]) -> None:
        # Snapshot: callbacks may subscribe/unsubscribe while being notified
        for callback in list(self._subscribers):
            if not any(s is callback for s in self._subscribers):
                # Unsubscribed by an earlier callback in this round
                continue
            try:
                # Each callback gets its own copy; mutations stay local to it
                callback(copy.deepcopy(items))
            except Exception:
                logger.exception(f"Cart subscriber {callback!r} failed")

    def clear(self) -> None:
        self._subscribers = []
