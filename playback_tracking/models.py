"""
Data Models for Playback Tracking

Defines the derived event payloads, the mutable per-viewing session record and
the immutable performance report handed to consumers.
"""

import math
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def _as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it is not a usable number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def _as_count(value: Any) -> Optional[int]:
    number = _as_number(value)
    if number is None or number < 0:
        return None
    return int(number)


def new_session_id() -> str:
    """Generate an opaque random session identifier."""
    return str(uuid.uuid4())


# -----------------------------------------------------------------------------
# Derived event payloads
# -----------------------------------------------------------------------------

@dataclass
class PausePayload:
    """Payload of ``tracking:pause`` and ``tracking:unpause``."""
    
    pause_time: Optional[float] = None
    pause_count: Optional[int] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire dictionary."""
        return {"pauseTime": self.pause_time, "pauseCount": self.pause_count}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PausePayload":
        """Create from a wire dictionary. Unusable fields become None."""
        return cls(
            pause_time=_as_number(data.get("pauseTime")),
            pause_count=_as_count(data.get("pauseCount"))
        )


@dataclass
class SeekPayload:
    """Payload of ``tracking:seek``."""
    
    seek_count: Optional[int] = None
    
    def to_dict(self) -> Dict[str, Any]:
        return {"seekCount": self.seek_count}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeekPayload":
        return cls(seek_count=_as_count(data.get("seekCount")))


@dataclass
class BufferedPayload:
    """Payload of ``tracking:buffered``."""
    
    buffer_count: Optional[int] = None
    seconds_to_load: Optional[float] = None
    
    def to_dict(self) -> Dict[str, Any]:
        return {"bufferCount": self.buffer_count, "secondsToLoad": self.seconds_to_load}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BufferedPayload":
        seconds = _as_number(data.get("secondsToLoad"))
        return cls(
            buffer_count=_as_count(data.get("bufferCount")),
            seconds_to_load=seconds if seconds is not None and seconds >= 0 else None
        )


@dataclass
class FirstPlayPayload:
    """Payload of ``tracking:firstplay``."""
    
    seconds_to_load: Optional[float] = None
    
    def to_dict(self) -> Dict[str, Any]:
        return {"secondsToLoad": self.seconds_to_load}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FirstPlayPayload":
        seconds = _as_number(data.get("secondsToLoad"))
        return cls(seconds_to_load=seconds if seconds is not None and seconds >= 0 else None)


# -----------------------------------------------------------------------------
# Session record and report
# -----------------------------------------------------------------------------

class PerformanceReport(BaseModel):
    """Immutable snapshot of a tracking session delivered to the consumer."""
    
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    session_id: str = Field(alias="sessionId", description="Identifier of the viewing session")
    pause_time: float = Field(default=0.0, alias="pauseTime", description="Seconds spent paused")
    pause_count: int = Field(default=0, alias="pauseCount", description="Confirmed user pauses")
    seek_count: int = Field(default=0, alias="seekCount", description="Seeks reported by the seek counter")
    buffer_count: int = Field(default=0, alias="bufferCount", description="Buffer stalls reported")
    total_duration: int = Field(default=0, alias="totalDuration", description="Media duration in whole seconds")
    watched_duration: int = Field(default=0, alias="watchedDuration", description="Distinct whole seconds watched")
    buffer_duration: float = Field(default=0.0, alias="bufferDuration", description="Seconds lost to buffering")
    initial_load_time: float = Field(default=0.0, alias="initialLoadTime", description="Seconds from load start to first frame")
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire dictionary."""
        return self.model_dump(by_alias=True)


@dataclass
class TrackingSession:
    """Mutable record of one contiguous viewing of a source."""
    
    session_id: str = field(default_factory=new_session_id)
    pause_time: float = 0.0
    pause_count: int = 0
    seek_count: int = 0
    buffer_count: int = 0
    total_duration: int = 0
    buffer_duration: float = 0.0
    initial_load_time: Optional[float] = None
    # Insertion-ordered set of whole-second positions already seen
    watched_seconds: Dict[int, None] = field(default_factory=dict)
    
    @property
    def watched_duration(self) -> int:
        return len(self.watched_seconds)
    
    def mark_watched(self, second: int) -> bool:
        """Record a whole-second position. Returns False if already seen."""
        if second in self.watched_seconds:
            return False
        self.watched_seconds[second] = None
        return True
    
    def copy(self) -> "TrackingSession":
        """Independent copy of the record, including the watched seconds."""
        return replace(self, watched_seconds=dict(self.watched_seconds))
    
    def to_report(self) -> PerformanceReport:
        """Take an immutable snapshot of the current counters."""
        return PerformanceReport(
            session_id=self.session_id,
            pause_time=self.pause_time,
            pause_count=self.pause_count,
            seek_count=self.seek_count,
            buffer_count=self.buffer_count,
            total_duration=self.total_duration,
            watched_duration=self.watched_duration,
            buffer_duration=round(self.buffer_duration, 3),
            initial_load_time=self.initial_load_time or 0.0
        )
