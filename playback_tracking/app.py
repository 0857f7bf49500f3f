"""
Flask application factory for the playback tracking ingestion service.
"""

import logging

from flask import Flask

from config_manager import ConfigManager
from .registry import PlayerRegistry
from .routes import create_player_events_blueprint

logger = logging.getLogger(__name__)


def create_app(config_manager: ConfigManager = None, registry: PlayerRegistry = None) -> Flask:
    """Create the ingestion app.
    
    Args:
        config_manager: Configuration source, defaults to tracking_config.json + env
        registry: Player registry, built from configuration if not given
    
    Returns:
        Flask application with the registry available as ``app.extensions["player_registry"]``.
        The caller owns the registry lifetime and calls ``registry.shutdown()`` on exit.
    """
    config_manager = config_manager or ConfigManager()
    
    if registry is None:
        perf_config = config_manager.get_performance_config()
        pause_config = config_manager.get_pause_config()
        registry = PlayerRegistry(
            trigger_on_pause=perf_config.trigger_on_pause,
            trigger_interval=perf_config.trigger_interval,
            debounce_ms=pause_config.debounce_ms
        )
    
    app = Flask(__name__)
    app.extensions["player_registry"] = registry
    app.register_blueprint(create_player_events_blueprint(registry))
    
    logger.info(
        f"Playback tracking app created (interval={registry.trigger_interval}s, "
        f"debounce={registry.debounce_ms}ms)"
    )
    return app
