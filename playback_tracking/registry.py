"""
Player registry for the ingestion service.

Keeps one RemotePlayer, with pause and performance tracking attached, per
player id reported by clients.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .event_types import EventType
from .factory import create_event_tracking_module
from .models import PerformanceReport
from .player import RemotePlayer

logger = logging.getLogger(__name__)

ReportSink = Callable[[str, PerformanceReport], None]


def log_report(player_id: str, report: PerformanceReport) -> None:
    """Default report sink: write the report to the log."""
    logger.info(f"Performance report for player {player_id}: {report.to_dict()}")


class PlayerRegistry:
    """Thread-safe map of player id to tracked RemotePlayer."""
    
    def __init__(
        self,
        on_report: Optional[ReportSink] = None,
        trigger_on_pause: bool = True,
        trigger_interval: int = 10,
        debounce_ms: int = 300,
        scheduler: Any = None,
        unload_hooks: Any = None,
    ):
        """Initialize the registry.
        
        Args:
            on_report: Receives (player_id, report) for every delivered report
            trigger_on_pause: Passed to each player's performance tracker
            trigger_interval: Passed to each player's performance tracker
            debounce_ms: Pause debounce window for each player
            scheduler: Timer scheduler shared by all pause trackers
            unload_hooks: Exit-hook registry; None leaves shutdown to shutdown()
        """
        self.on_report = on_report or log_report
        self.trigger_on_pause = trigger_on_pause
        self.trigger_interval = trigger_interval
        self.debounce_ms = debounce_ms
        self.scheduler = scheduler
        self.unload_hooks = unload_hooks
        self._lock = threading.RLock()
        self._players: Dict[str, Dict[str, Any]] = {}
    
    def get_or_create(self, player_id: str) -> RemotePlayer:
        """Get the player for an id, attaching tracking on first use."""
        with self._lock:
            entry = self._players.get(player_id)
            if entry is not None:
                return entry["player"]
            
            player = RemotePlayer(player_id)
            module = create_event_tracking_module(
                player,
                performance=lambda report: self.on_report(player_id, report),
                trigger_on_pause=self.trigger_on_pause,
                trigger_interval=self.trigger_interval,
                debounce_ms=self.debounce_ms,
                scheduler=self.scheduler,
                unload_hooks=self.unload_hooks
            )
            self._players[player_id] = {"player": player, **module}
            logger.info(f"Tracking new player {player_id}")
            return player
    
    def get(self, player_id: str) -> Optional[Dict[str, Any]]:
        """Get the registry entry (player and trackers) for an id."""
        with self._lock:
            return self._players.get(player_id)
    
    def player_ids(self) -> List[str]:
        with self._lock:
            return list(self._players)
    
    def dispose(self, player_id: str) -> bool:
        """Dispose a player, delivering its final report, and forget it.
        
        Returns:
            False if the id was unknown
        """
        with self._lock:
            entry = self._players.pop(player_id, None)
        if entry is None:
            return False
        entry["player"].emit(EventType.DISPOSE)
        logger.info(f"Disposed player {player_id}")
        return True
    
    def shutdown(self) -> None:
        """Dispose every tracked player."""
        for player_id in self.player_ids():
            self.dispose(player_id)
