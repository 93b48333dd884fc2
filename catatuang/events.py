from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

from catatuang.logging_setup import get_logger
from catatuang.memo import clear_caches

__all__ = [
    'event_bus', 'Event', 'EventBus', 'CHANGE_EVENTS',
    'TRANSACTION_ADDED', 'TRANSACTION_UPDATED', 'TRANSACTION_DELETED',
    'CATEGORY_ADDED', 'CATEGORY_UPDATED', 'CATEGORY_DELETED', 'DATA_RESET',
]

logger = get_logger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.setdefault(name, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("Publishing %s to %d handler(s)", name, len(self._subscribers[name]))
        return [handler(event, payload) for handler in list(self._subscribers[name])]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_UPDATED = "TRANSACTION_UPDATED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
CATEGORY_ADDED = "CATEGORY_ADDED"
CATEGORY_UPDATED = "CATEGORY_UPDATED"
CATEGORY_DELETED = "CATEGORY_DELETED"
DATA_RESET = "DATA_RESET"

CHANGE_EVENTS = (
    TRANSACTION_ADDED,
    TRANSACTION_UPDATED,
    TRANSACTION_DELETED,
    CATEGORY_ADDED,
    CATEGORY_UPDATED,
    CATEGORY_DELETED,
    DATA_RESET,
)

event_bus = EventBus()


def invalidate_caches_handler(event: Event, payload: dict) -> dict:
    """Drop every memoized view after a change.

    Caches are keyed by the transaction tuple itself, so a mutated store already
    misses the cache. Clearing only frees the entries of snapshots that no
    caller will ask for again.
    """
    clear_caches()
    return {"invalidated": True, "cause": event.name}


def register_default_handlers(bus: EventBus = event_bus) -> None:
    for name in CHANGE_EVENTS:
        bus.subscribe(name, invalidate_caches_handler)
