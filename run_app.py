#!/usr/bin/env python3
"""
Simple runner script for the playback tracking ingestion service.
"""

import sys
from pathlib import Path

# Add the current directory to Python path
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from config_manager import get_app_config
from playback_tracking.app import create_app
from playback_tracking.logging_config import setup_logging, stop_logging

if __name__ == "__main__":
    app_config = get_app_config()
    setup_logging(debug=app_config.debug)
    
    app = create_app()
    try:
        app.run(
            host=app_config.host,
            port=app_config.port,
            debug=app_config.debug,
            use_reloader=False
        )
    finally:
        # Final reports must be logged before the listener goes away
        app.extensions["player_registry"].shutdown()
        stop_logging()
