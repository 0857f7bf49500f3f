"""
Player Event Bus

In-process publish/subscribe channel connecting a host player, the derived
event trackers and any external subscriber.
"""

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Union

from .event_types import EventType

logger = logging.getLogger(__name__)

Payload = Dict[str, Any]
Handler = Callable[[Payload], None]
EventName = Union[str, EventType]


def _topic(event: EventName) -> str:
    return event.value if isinstance(event, EventType) else event


class EventBus:
    """Synchronous event bus with per-event handler lists.
    
    Handlers run in subscription order on the publishing thread. A failing
    handler is logged and does not prevent the remaining handlers from running.
    """
    
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: Dict[str, List[Handler]] = defaultdict(list)
    
    def subscribe(self, event: EventName, handler: Handler) -> None:
        """Subscribe a handler to an event name."""
        with self._lock:
            self._subscribers[_topic(event)].append(handler)
    
    def unsubscribe(self, event: EventName, handler: Handler) -> bool:
        """Remove a handler. Returns False if it was not subscribed."""
        with self._lock:
            handlers = self._subscribers.get(_topic(event), [])
            try:
                handlers.remove(handler)
            except ValueError:
                return False
            return True
    
    def publish(self, event: EventName, payload: Optional[Payload] = None) -> None:
        """Publish an event to every handler subscribed at call time."""
        topic = _topic(event)
        with self._lock:
            handlers = list(self._subscribers.get(topic, []))
        data = payload if payload is not None else {}
        for handler in handlers:
            try:
                handler(data)
            except Exception:
                logger.exception(f"Handler {handler!r} failed for event '{topic}'")
    
    def subscriber_count(self, event: EventName) -> int:
        """Number of handlers currently subscribed to an event."""
        with self._lock:
            return len(self._subscribers.get(_topic(event), []))
