"""
Timer scheduling for debounce windows.

Two interchangeable schedulers share the same small interface
(``now()`` and ``call_later(delay, callback)``):

- ``ThreadingScheduler`` runs callbacks on ``threading.Timer`` threads against
  the monotonic clock. Used for live players.
- ``ManualScheduler`` keeps a virtual clock that only moves when ``advance()``
  is called, firing due callbacks on the caller's thread. Used for replaying
  recorded event streams and in tests.
"""

import heapq
import itertools
import threading
import time
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """Owned handle to one scheduled callback."""
    
    def __init__(self, cancel_fn: Optional[Callable[[], None]] = None):
        self._cancel_fn = cancel_fn
        self._cancelled = False
        self._fired = False
    
    @property
    def active(self) -> bool:
        """True while the callback is still due to run."""
        return not (self._cancelled or self._fired)
    
    def cancel(self) -> None:
        """Cancel the callback. Safe to call more than once."""
        if not self.active:
            return
        self._cancelled = True
        if self._cancel_fn:
            self._cancel_fn()
    
    def _mark_fired(self) -> None:
        self._fired = True


class ThreadingScheduler:
    """Wall-clock scheduler backed by daemon ``threading.Timer`` threads."""
    
    def now(self) -> float:
        return time.monotonic()
    
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer: Optional[threading.Timer] = None
        handle = TimerHandle(cancel_fn=lambda: timer.cancel())
        
        def _run() -> None:
            if handle.active:
                handle._mark_fired()
                callback()
        
        timer = threading.Timer(delay, _run)
        timer.daemon = True
        timer.start()
        return handle


class ManualScheduler:
    """Virtual-clock scheduler. Time only moves through ``advance()``."""
    
    def __init__(self, start: float = 0.0):
        self._now = start
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, TimerHandle, Callable[[], None]]] = []
    
    def now(self) -> float:
        return self._now
    
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle()
        heapq.heappush(self._queue, (self._now + max(delay, 0.0), next(self._seq), handle, callback))
        return handle
    
    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not fired or been cancelled."""
        return sum(1 for _, _, handle, _ in self._queue if handle.active)
    
    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every callback that falls due.
        
        Callbacks run in due-time order with the clock set to their due time.
        
        Returns:
            Number of callbacks fired
        """
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = due
            handle._mark_fired()
            callback()
            fired += 1
        self._now = target
        return fired
