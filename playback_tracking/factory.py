"""
Factory for attaching event tracking to a player.
"""
import atexit
from typing import Any, Optional

from .pause_tracker import DEFAULT_DEBOUNCE_MS, PauseTracker
from .performance import DEFAULT_TRIGGER_INTERVAL, ReportCallback, create_performance_tracker
from .player import MediaPlayer


def create_event_tracking_module(
    player: MediaPlayer,
    performance: Optional[ReportCallback] = None,
    trigger_on_pause: Any = True,
    trigger_interval: Any = DEFAULT_TRIGGER_INTERVAL,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    scheduler: Any = None,
    unload_hooks: Any = atexit,
) -> dict:
    """Attach the pause and performance trackers to a player.
    
    Args:
        player: Host player to track
        performance: Consumer callback for performance reports; without it
            only pause tracking is attached
        trigger_on_pause: Deliver a report on every confirmed pause
        trigger_interval: Deliver a report every N distinct watched seconds
        debounce_ms: Pause debounce window in milliseconds
        scheduler: Timer scheduler for the pause debounce
        unload_hooks: Exit-hook registry used for the final report on shutdown
    
    Returns:
        Dictionary containing:
        - pause_tracker: PauseTracker instance
        - performance_tracker: PerformanceTracker instance or None
    """
    pause_tracker = PauseTracker(player, debounce_ms=debounce_ms, scheduler=scheduler)
    
    performance_tracker = create_performance_tracker(
        player,
        performance,
        trigger_on_pause=trigger_on_pause,
        trigger_interval=trigger_interval,
        unload_hooks=unload_hooks
    )
    
    return {
        "pause_tracker": pause_tracker,
        "performance_tracker": performance_tracker
    }
