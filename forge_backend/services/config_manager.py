"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        # Environment variable first, then the home directory
        config_dir = os.environ.get("FORGE_CONFIG_DIR") or os.path.expanduser("~/.forge_assistant")

        config_path = Path(config_dir)
        try:
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            logger.warning("Cannot write to %s: %s", config_dir, e)
            self._config_file = None

        # Last resort: the system temp directory
        if not self._config_file:
            tmp_dir = Path(tempfile.gettempdir()) / "forge_assistant"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            logger.info("Using temporary config path: %s", self._config_file)

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton so the next access re-reads the environment"""
        cls._instance = None

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, layered over the defaults"""
        config = self._default_config()
        if self._config_file.exists():
            try:
                with open(self._config_file, encoding="utf-8") as f:
                    config = _merge(config, json.load(f))
            except (json.JSONDecodeError, OSError) as e:
                logger.error("Error loading config: %s", e)

        output_override = os.environ.get("FORGE_OUTPUT_DIR")
        if output_override:
            config["output_dir"] = output_override
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "output_dir": "ai-generated",
            "max_sessions": 100,
            "server": {"host": "0.0.0.0", "port": 5000},
            "client": {"base_url": "http://127.0.0.1:5000", "timeout_seconds": 30},
            "pacing": {"speed": 1.0, "fine_grained_cancel": False},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def save_config(self, config: dict[str, Any]):
        """Merge ``config`` into the current settings and write them to file"""
        self._config = _merge(self._config, config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self._config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self.save_config({key: value})

    def output_dir(self) -> Path:
        """Resolved directory that generated files are written to"""
        return Path(self.get_config()["output_dir"]).expanduser().resolve()
