"""
Playback Tracking

Derives behavioral telemetry (pauses, seeks, buffering, watch time) from a
media player's raw events and aggregates it into session-scoped performance
reports.
"""

from .event_bus import EventBus
from .event_types import EventType
from .factory import create_event_tracking_module
from .models import PerformanceReport, TrackingSession
from .pause_tracker import PauseStatus, PauseTracker
from .performance import PerformanceTracker, create_performance_tracker
from .player import MediaPlayer, RemotePlayer
from .timers import ManualScheduler, ThreadingScheduler

__all__ = [
    'EventBus',
    'EventType',
    'create_event_tracking_module',
    'PerformanceReport',
    'TrackingSession',
    'PauseStatus',
    'PauseTracker',
    'PerformanceTracker',
    'create_performance_tracker',
    'MediaPlayer',
    'RemotePlayer',
    'ManualScheduler',
    'ThreadingScheduler',
]
