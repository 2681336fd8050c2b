"""
Configuration management for the FX trade journal.

Loads settings from config.yaml and environment variables.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from fxjournal.coach.thresholds import Thresholds

# Load environment variables
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_CONFIG_FILE = PROJECT_ROOT / "config.yaml"
DEFAULT_OUTPUTS_DIR = PROJECT_ROOT / "outputs"


def get_config_file() -> Path:
    """Config file path, overridable with FXJOURNAL_CONFIG."""
    env_path = os.getenv("FXJOURNAL_CONFIG")
    return Path(env_path) if env_path else DEFAULT_CONFIG_FILE


def load_config() -> dict[str, Any]:
    """Load configuration from YAML file."""
    config_file = get_config_file()
    if config_file.exists():
        with open(config_file, "r") as f:
            return yaml.safe_load(f) or get_default_config()
    return get_default_config()


def get_default_config() -> dict[str, Any]:
    """Return default configuration if config.yaml doesn't exist."""
    return {
        "coach": {
            "thresholds": {
                "big_win_pips": 20,
                "big_loss_pips": 30,
                "strong_win_pips": 30,
                "wide_stop_pips_per_rr": 20,
                "history_limit": 20,
                "min_history": 3,
                "recent_window": 5,
                "over_trading_same_day": 3,
                "early_exit_min_wins": 2,
                "early_exit_max_pips": 15,
                "late_entry_min_losses": 2,
            },
        },
        "reports": {
            "output_dir": "outputs",
            "format": "markdown",
        },
        "analytics": {
            "recent_trades": 10,
        },
        "logging": {
            "level": "INFO",
        },
    }


class Settings:
    """Application settings singleton."""

    _instance = None
    _config: dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._config = load_config()
        return cls._instance

    def reload(self) -> None:
        """Reload configuration from file."""
        type(self)._config = load_config()

    @property
    def thresholds(self) -> Thresholds:
        return Thresholds.from_mapping(self.get("coach.thresholds", {}))

    @property
    def history_limit(self) -> int:
        return self.thresholds.history_limit

    @property
    def recent_trades(self) -> int:
        return int(self.get("analytics.recent_trades", 10))

    @property
    def outputs_dir(self) -> Path:
        # Check environment first, then config file
        env_dir = os.getenv("FXJOURNAL_OUTPUTS_DIR")
        if env_dir:
            return Path(env_dir)
        configured = self.get("reports.output_dir")
        if configured:
            path = Path(configured)
            return path if path.is_absolute() else PROJECT_ROOT / path
        return DEFAULT_OUTPUTS_DIR

    @property
    def log_level(self) -> str:
        env_level = os.getenv("FXJOURNAL_LOG_LEVEL")
        if env_level:
            return env_level.upper()
        return str(self.get("logging.level", "INFO")).upper()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default


# Global settings instance
settings = Settings()
