"""
Event Types for Playback Tracking

Defines every event name flowing over a player's event bus: the raw host
lifecycle events and the derived ``tracking:*`` events.
"""

from enum import Enum


class EventType(Enum):
    """Known player event names."""
    
    # Host lifecycle events
    PLAY = "play"
    PAUSE = "pause"
    TIMEUPDATE = "timeupdate"
    LOADSTART = "loadstart"
    LOADEDDATA = "loadeddata"
    ENDED = "ended"
    DISPOSE = "dispose"
    
    # Derived by the pause tracker
    TRACKING_PAUSE = "tracking:pause"
    TRACKING_UNPAUSE = "tracking:unpause"
    
    # Derived by sibling collaborators (seek counter, buffer monitor, first-frame timer)
    TRACKING_SEEK = "tracking:seek"
    TRACKING_BUFFERED = "tracking:buffered"
    TRACKING_FIRSTPLAY = "tracking:firstplay"
    
    @classmethod
    def is_valid(cls, event_type: str) -> bool:
        """Check if an event type string is valid."""
        try:
            cls(event_type)
            return True
        except ValueError:
            return False
    
    @classmethod
    def get_allowed_types(cls) -> set[str]:
        """Get all allowed event type strings."""
        return {e.value for e in cls}
    
    @classmethod
    def get_ingestible_types(cls) -> set[str]:
        """Event types an external source may publish.
        
        Everything except the pause tracker's own output, which is only ever
        derived in-process.
        """
        return cls.get_allowed_types() - {cls.TRACKING_PAUSE.value, cls.TRACKING_UNPAUSE.value}
