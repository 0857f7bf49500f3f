"""
Performance Tracking

Fuses raw player events and derived ``tracking:*`` events into one session
record per viewing and hands snapshots of it to a consumer callback:

- every ``trigger_interval`` distinct watched seconds,
- on every confirmed pause (when ``trigger_on_pause`` is set),
- once more as the final report of the session when the source changes, the
  media ends, the player is disposed or the process exits.

Report attributes (see PerformanceReport):
    pauseCount:       Confirmed user pauses
    pauseTime:        Seconds spent in confirmed pauses
    seekCount:        Seeks reported by the seek counter
    bufferCount:      Buffer stalls reported by the buffer monitor
    totalDuration:    Duration provided by the media, whole seconds
    watchedDuration:  Distinct whole seconds watched (not seeked past)
    bufferDuration:   Seconds lost to buffering
    initialLoadTime:  Seconds it took for the first frame to appear
"""

import atexit
import logging
import math
import numbers
import threading
from typing import Any, Callable, Dict, Optional

from .event_bus import EventBus
from .event_types import EventType
from .models import (
    BufferedPayload,
    FirstPlayPayload,
    PausePayload,
    PerformanceReport,
    SeekPayload,
    TrackingSession,
)
from .player import MediaPlayer

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER_INTERVAL = 10

ReportCallback = Callable[[PerformanceReport], None]


def round_half_up(value: float) -> int:
    """Round a non-negative number of seconds to the nearest whole second."""
    return int(math.floor(value + 0.5))


def _usable_seconds(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    value = float(value)
    if math.isnan(value) or math.isinf(value) or value < 0:
        return None
    return value


class PerformanceTracker:
    """Session aggregator for one player."""
    
    def __init__(
        self,
        player: MediaPlayer,
        performance: ReportCallback,
        trigger_on_pause: bool = True,
        trigger_interval: int = DEFAULT_TRIGGER_INTERVAL,
        bus: Optional[EventBus] = None,
        unload_hooks: Any = atexit,
    ):
        """
        Initialize PerformanceTracker and subscribe to the player's events.
        
        Args:
            player: Host player (position/duration queries)
            performance: Consumer callback receiving each PerformanceReport
            trigger_on_pause: Deliver a report on every confirmed pause
            trigger_interval: Deliver a report every N distinct watched seconds
            bus: Event bus, defaults to the player's own
            unload_hooks: Exit-hook registry with register/unregister
        
        Unusable option values fall back to their defaults with a warning.
        
        Raises:
            TypeError: If performance is not callable
        """
        if not callable(performance):
            raise TypeError(f"performance callback must be callable, got {performance!r}")
        
        if not isinstance(trigger_on_pause, bool):
            logger.warning(f"Ignoring trigger_on_pause={trigger_on_pause!r}, using True")
            trigger_on_pause = True
        
        if (
            isinstance(trigger_interval, bool)
            or not isinstance(trigger_interval, numbers.Real)
            or not math.isfinite(trigger_interval)
            or trigger_interval <= 0
            or trigger_interval != int(trigger_interval)
        ):
            logger.warning(
                f"Ignoring trigger_interval={trigger_interval!r}, using {DEFAULT_TRIGGER_INTERVAL}"
            )
            trigger_interval = DEFAULT_TRIGGER_INTERVAL
        
        self.player = player
        self.performance = performance
        self.trigger_on_pause = trigger_on_pause
        self.trigger_interval = int(trigger_interval)
        self.bus = bus or player.events
        self.unload_hooks = unload_hooks
        self.reports_delivered = 0
        
        self._lock = threading.RLock()
        self._session = TrackingSession()
        self._disposed = False
        
        self._handlers = {
            EventType.LOADSTART: self._on_loadstart,
            EventType.LOADEDDATA: self._on_loadeddata,
            EventType.TIMEUPDATE: self._on_timeupdate,
            EventType.ENDED: self._on_ended,
            EventType.DISPOSE: self._on_dispose,
            EventType.TRACKING_SEEK: self._on_seek,
            EventType.TRACKING_PAUSE: self._on_pause,
            EventType.TRACKING_UNPAUSE: self._on_unpause,
            EventType.TRACKING_BUFFERED: self._on_buffered,
            EventType.TRACKING_FIRSTPLAY: self._on_firstplay,
        }
        for event, handler in self._handlers.items():
            self.bus.subscribe(event, handler)
        
        if self.unload_hooks is not None:
            self.unload_hooks.register(self._on_unload)
    
    @property
    def session(self) -> TrackingSession:
        """Copy of the current session record. Changes to it are not tracked."""
        with self._lock:
            return self._session.copy()
    
    def snapshot(self) -> PerformanceReport:
        with self._lock:
            return self._session.to_report()
    
    def flush(self, reset: bool = False) -> PerformanceReport:
        """Deliver the current session to the consumer, optionally starting a new one."""
        with self._lock:
            report = self._session.to_report()
            self.reports_delivered += 1
            logger.debug(f"Delivering report for session {report.session_id} (reset={reset})")
            try:
                self.performance(report)
            finally:
                if reset:
                    self._reset()
            return report
    
    def _reset(self) -> None:
        """Start a new session with a fresh id and zeroed counters."""
        with self._lock:
            self._session = TrackingSession()
    
    def detach(self) -> None:
        """Unsubscribe from the bus and release the exit hook."""
        for event, handler in self._handlers.items():
            self.bus.unsubscribe(event, handler)
        if self.unload_hooks is not None:
            self.unload_hooks.unregister(self._on_unload)
    
    def _on_unload(self) -> None:
        self.flush(reset=True)
    
    def _on_loadstart(self, data: Dict[str, Any]) -> None:
        with self._lock:
            if self._session.total_duration > 0:
                self.flush(reset=True)
            else:
                self._reset()
    
    def _on_loadeddata(self, data: Dict[str, Any]) -> None:
        duration = _usable_seconds(self.player.duration())
        if duration is None:
            return
        with self._lock:
            self._session.total_duration = round_half_up(duration)
    
    def _on_timeupdate(self, data: Dict[str, Any]) -> None:
        position = _usable_seconds(self.player.current_time())
        if position is None:
            return
        with self._lock:
            if not self._session.mark_watched(round_half_up(position)):
                return
            if self._session.watched_duration % self.trigger_interval == 0:
                self.flush()
    
    def _on_seek(self, data: Dict[str, Any]) -> None:
        payload = SeekPayload.from_dict(data)
        if payload.seek_count is None:
            return
        with self._lock:
            self._session.seek_count = payload.seek_count
    
    def _on_pause(self, data: Dict[str, Any]) -> None:
        payload = PausePayload.from_dict(data)
        with self._lock:
            if payload.pause_count is not None:
                self._session.pause_count = payload.pause_count
            if self.trigger_on_pause:
                self.flush()
    
    def _on_unpause(self, data: Dict[str, Any]) -> None:
        payload = PausePayload.from_dict(data)
        with self._lock:
            if payload.pause_time is not None:
                self._session.pause_time = payload.pause_time
            if payload.pause_count is not None:
                self._session.pause_count = payload.pause_count
    
    def _on_buffered(self, data: Dict[str, Any]) -> None:
        payload = BufferedPayload.from_dict(data)
        with self._lock:
            if payload.buffer_count is not None:
                self._session.buffer_count = payload.buffer_count
            if payload.seconds_to_load is not None:
                self._session.buffer_duration += payload.seconds_to_load
    
    def _on_firstplay(self, data: Dict[str, Any]) -> None:
        payload = FirstPlayPayload.from_dict(data)
        with self._lock:
            if payload.seconds_to_load is None or self._session.initial_load_time is not None:
                return
            self._session.initial_load_time = payload.seconds_to_load
    
    def _on_ended(self, data: Dict[str, Any]) -> None:
        self.flush(reset=True)
    
    def _on_dispose(self, data: Dict[str, Any]) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self.detach()
            self.flush(reset=True)


def create_performance_tracker(
    player: MediaPlayer,
    performance: Optional[ReportCallback] = None,
    **kwargs: Any
) -> Optional[PerformanceTracker]:
    """Create a PerformanceTracker if there is a consumer to report to.
    
    Without a callable ``performance`` callback no tracker is created.
    
    Args:
        player: Host player
        performance: Consumer callback
        **kwargs: Passed through to PerformanceTracker
        
    Returns:
        PerformanceTracker instance or None
    """
    if not callable(performance):
        logger.warning("Performance tracking disabled: no performance callback supplied")
        return None
    
    return PerformanceTracker(player, performance, **kwargs)
