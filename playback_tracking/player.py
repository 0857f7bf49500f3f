"""
Host player port.

The trackers only need a small surface from the player: an event bus, the
current playback position, the media duration, and whether the user is
seeking or scrubbing. ``RemotePlayer`` provides that surface for a player that
lives elsewhere (e.g. in a browser) by mirroring the state carried on each
ingested event.
"""

import logging
from typing import Any, Dict, Optional, Protocol, Union

from .event_bus import EventBus, EventName

logger = logging.getLogger(__name__)


class MediaPlayer(Protocol):
    """Surface of a host player consumed by the trackers.
    
    ``seeking()`` and ``scrubbing()`` are optional; a player without them is
    treated as never seeking.
    """
    
    events: EventBus
    
    def current_time(self) -> Optional[float]:
        ...
    
    def duration(self) -> Optional[float]:
        ...


def is_seeking(player: Any) -> bool:
    """Whether the player reports a seek or scrub in progress."""
    for query_name in ("seeking", "scrubbing"):
        query = getattr(player, query_name, None)
        if callable(query) and query():
            return True
    return False


class RemotePlayer:
    """Player whose state is mirrored from externally reported events."""
    
    def __init__(self, player_id: str = "", events: Optional[EventBus] = None):
        self.player_id = player_id
        self.events = events or EventBus()
        self._current_time: Optional[float] = None
        self._duration: Optional[float] = None
        self._seeking = False
        self._scrubbing = False
    
    def current_time(self) -> Optional[float]:
        return self._current_time
    
    def duration(self) -> Optional[float]:
        return self._duration
    
    def seeking(self) -> bool:
        return self._seeking
    
    def scrubbing(self) -> bool:
        return self._scrubbing
    
    def update(
        self,
        current_time: Optional[float] = None,
        duration: Optional[float] = None,
        seeking: Optional[bool] = None,
        scrubbing: Optional[bool] = None
    ) -> None:
        """Update the mirrored state. None leaves a field unchanged."""
        if current_time is not None:
            self._current_time = current_time
        if duration is not None:
            self._duration = duration
        if seeking is not None:
            self._seeking = seeking
        if scrubbing is not None:
            self._scrubbing = scrubbing
    
    def emit(
        self,
        event: EventName,
        payload: Optional[Dict[str, Any]] = None,
        **state: Union[float, bool, None]
    ) -> None:
        """Apply state carried with an event, then publish the event.
        
        Args:
            event: Event name
            payload: Event payload (derived events only)
            **state: Any of current_time, duration, seeking, scrubbing
        """
        self.update(**state)
        self.events.publish(event, payload)
    
    def __repr__(self) -> str:
        return f"RemotePlayer({self.player_id!r})"
