"""
Pause Tracker

Counts genuine user pauses. Players fire a pause as part of every scrub
gesture, so a raw ``pause`` is only counted once it survives a debounce window
without a ``play`` arriving.

Derived events:
    tracking:pause    {pauseTime, pauseCount} when a pause is confirmed
    tracking:unpause  {pauseTime, pauseCount} when playback resumes after one

Example:
    >>> tracker = PauseTracker(player)
    >>> player.events.subscribe("tracking:pause", lambda data: print(data))
"""

import logging
import threading
from enum import Enum
from typing import Any, Dict, Optional

from .event_bus import EventBus
from .event_types import EventType
from .models import PausePayload
from .player import MediaPlayer, is_seeking
from .timers import ThreadingScheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 300


class PauseStatus(Enum):
    """States of the pause debounce machine."""
    IDLE = "idle"
    PENDING = "pending"      # raw pause seen, debounce timer running
    CONFIRMED = "confirmed"  # pause counted, accumulating pause time


class PauseTracker:
    """Debounced pause detector for one player."""
    
    def __init__(
        self,
        player: MediaPlayer,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        scheduler: Any = None,
        bus: Optional[EventBus] = None,
    ):
        """
        Initialize PauseTracker and subscribe to the player's events.
        
        Args:
            player: Host player (position/seek queries)
            debounce_ms: Quiet period a pause must survive before it counts
            scheduler: Timer scheduler, defaults to ThreadingScheduler
            bus: Event bus, defaults to the player's own
        """
        self.player = player
        self.bus = bus or player.events
        self.scheduler = scheduler or ThreadingScheduler()
        self.debounce_seconds = debounce_ms / 1000.0
        self.locked = False
        
        self._lock = threading.RLock()
        self._pause_time = 0.0
        self._pause_count = 0
        self._init_pause_time: Optional[float] = None
        self._timer: Optional[TimerHandle] = None
        
        self._handlers = {
            EventType.DISPOSE: self._on_dispose,
            EventType.LOADSTART: self._on_reset_event,
            EventType.ENDED: self._on_reset_event,
            EventType.PLAY: self._on_play,
            EventType.PAUSE: self._on_pause,
        }
        for event, handler in self._handlers.items():
            self.bus.subscribe(event, handler)
    
    @property
    def pause_time(self) -> float:
        return self._pause_time
    
    @property
    def pause_count(self) -> int:
        return self._pause_count
    
    @property
    def status(self) -> PauseStatus:
        with self._lock:
            if self._timer is not None:
                return PauseStatus.PENDING
            if self._init_pause_time is not None:
                return PauseStatus.CONFIRMED
            return PauseStatus.IDLE
    
    def lock(self) -> None:
        """Stop counting pauses until unlock() or the next reset."""
        self.locked = True
    
    def unlock(self) -> None:
        self.locked = False
    
    def reset(self) -> None:
        """Return to idle, dropping any pending or active pause and all counters."""
        with self._lock:
            self._cancel_timer()
            self._pause_time = 0.0
            self._pause_count = 0
            self._init_pause_time = None
            self.locked = False
        logger.debug("Pause tracker reset")
    
    def detach(self) -> None:
        """Unsubscribe from the event bus."""
        for event, handler in self._handlers.items():
            self.bus.unsubscribe(event, handler)
    
    def _payload(self) -> Dict[str, Any]:
        return PausePayload(pause_time=self._pause_time, pause_count=self._pause_count).to_dict()
    
    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
    
    def _on_reset_event(self, data: Dict[str, Any]) -> None:
        self.reset()
    
    def _on_dispose(self, data: Dict[str, Any]) -> None:
        self.reset()
        self.detach()
    
    def _on_pause(self, data: Dict[str, Any]) -> None:
        with self._lock:
            if is_seeking(self.player) or self.locked:
                return
            if self._init_pause_time is not None:
                # Already counted, keep accumulating the current pause
                return
            self._cancel_timer()
            # Filled in before the callback can take the lock
            pending: Dict[str, TimerHandle] = {}
            pending["handle"] = self.scheduler.call_later(
                self.debounce_seconds, lambda: self._confirm_pause(pending)
            )
            self._timer = pending["handle"]
            logger.debug("Pause pending confirmation")
    
    def _confirm_pause(self, pending: Dict[str, TimerHandle]) -> None:
        with self._lock:
            if self._timer is None or self._timer is not pending.get("handle"):
                return
            self._timer = None
            self._pause_count += 1
            self._init_pause_time = self.scheduler.now()
            logger.debug(f"Pause confirmed (count={self._pause_count})")
            self.bus.publish(EventType.TRACKING_PAUSE, self._payload())
    
    def _on_play(self, data: Dict[str, Any]) -> None:
        with self._lock:
            if self._timer is not None:
                self._cancel_timer()
                logger.debug("Pending pause cancelled by play")
            if self._init_pause_time is None:
                return
            self._pause_time += self.scheduler.now() - self._init_pause_time
            self._init_pause_time = None
            self.bus.publish(EventType.TRACKING_UNPAUSE, self._payload())
