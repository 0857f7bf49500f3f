"""
Configuration management for the playback tracking service.
Handles loading, validating, and providing access to tracking and service settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class PerformanceConfig:
    """Performance report settings."""
    trigger_on_pause: bool
    trigger_interval: int


@dataclass
class PauseConfig:
    """Pause detection settings."""
    debounce_ms: int


@dataclass
class AppConfig:
    """Ingestion service settings."""
    host: str
    port: int
    debug: bool


class ConfigManager:
    """Manages configuration loading and access."""

    def __init__(self, config_file: str = "tracking_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        # Load base config from file
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        # Override with environment variables
        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "performance": {
                "trigger_on_pause": True,
                "trigger_interval": 10
            },
            "pause": {
                "debounce_ms": 300
            },
            "app": {
                "host": "0.0.0.0",
                "port": 22590,
                "debug": False
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # Tracking settings
        if os.getenv("TRACKING_TRIGGER_ON_PAUSE"):
            self._config["performance"]["trigger_on_pause"] = (
                os.getenv("TRACKING_TRIGGER_ON_PAUSE").lower() == "true"
            )

        if os.getenv("TRACKING_TRIGGER_INTERVAL"):
            self._config["performance"]["trigger_interval"] = int(os.getenv("TRACKING_TRIGGER_INTERVAL"))

        if os.getenv("TRACKING_PAUSE_DEBOUNCE_MS"):
            self._config["pause"]["debounce_ms"] = int(os.getenv("TRACKING_PAUSE_DEBOUNCE_MS"))

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

    def get_performance_config(self) -> PerformanceConfig:
        """Get performance report configuration."""
        perf_config = self._config["performance"]
        return PerformanceConfig(
            trigger_on_pause=perf_config["trigger_on_pause"],
            trigger_interval=perf_config["trigger_interval"]
        )

    def get_pause_config(self) -> PauseConfig:
        """Get pause detection configuration."""
        return PauseConfig(debounce_ms=self._config["pause"]["debounce_ms"])

    def get_app_config(self) -> AppConfig:
        """Get ingestion service configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_performance_config() -> PerformanceConfig:
    """Get performance report configuration."""
    return config_manager.get_performance_config()


def get_pause_config() -> PauseConfig:
    """Get pause detection configuration."""
    return config_manager.get_pause_config()


def get_app_config() -> AppConfig:
    """Get ingestion service configuration."""
    return config_manager.get_app_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
