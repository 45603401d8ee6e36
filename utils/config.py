# utils/config.py
"""
Centralized Configuration Management

Version: 1.0.0
Features:
- Support both local (.env) and Streamlit secrets (secrets.toml)
- Singleton pattern for efficiency
- Type-safe getters with defaults
- Environment detection
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv
from typing import Dict, Any
from dataclasses import dataclass

# Initialize logger
logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".lead_tracker"
DEFAULT_DATA_FILE = "tracker-data.json"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def is_running_on_streamlit_cloud() -> bool:
    """Detect if Streamlit secrets are available"""
    try:
        import streamlit as st
        return hasattr(st, 'secrets') and len(st.secrets) > 0
    except Exception:
        return False


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_log_level(value: Any, debug_mode: bool = False) -> str:
    if debug_mode:
        return "DEBUG"
    level = str(value or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        logger.warning(f"⚠️ Unknown LOG_LEVEL {value!r}, using INFO")
        return "INFO"
    return level


@dataclass
class StorageConfig:
    """Data file location container"""
    data_dir: Path
    data_file: str = DEFAULT_DATA_FILE

    @property
    def data_path(self) -> Path:
        return self.data_dir / self.data_file


class Config:
    """
    Centralized configuration management

    Usage:
        from utils.config import config

        # Where the tracker document lives
        path = config.get_data_path()

        # Get app settings
        lookback = config.get_app_setting("SPARKLINE_WEEKS", 4)

        # Check feature flags
        if config.is_feature_enabled("EXCEL_EXPORT"):
            ...
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.is_cloud = is_running_on_streamlit_cloud()
        self._load_config()
        self._initialized = True

    def _load_config(self):
        """Load configuration based on environment"""
        if self.is_cloud:
            settings = self._load_cloud_settings()
        else:
            settings = self._load_local_settings()

        self._storage_config = StorageConfig(
            data_dir=Path(settings.get("TRACKER_DATA_DIR") or DEFAULT_DATA_DIR).expanduser(),
            data_file=settings.get("TRACKER_DATA_FILE") or DEFAULT_DATA_FILE,
        )
        self._load_app_config(settings)
        self._log_config_status()

    def _load_cloud_settings(self) -> Dict[str, Any]:
        """Load settings from the [TRACKER] table of Streamlit secrets"""
        import streamlit as st

        settings = dict(st.secrets.get("TRACKER", {}))
        logger.info("☁️ Using Streamlit secrets")
        return settings

    def _load_local_settings(self) -> Dict[str, Any]:
        """Load settings from local .env file and environment"""
        env_paths = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for env_path in env_paths:
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded .env from: {env_path}")
                break

        keys = [
            "TRACKER_DATA_DIR", "TRACKER_DATA_FILE", "FIRST_YEAR", "YEARS_AHEAD",
            "SPARKLINE_WEEKS", "LOG_LEVEL", "ENABLE_EXCEL_EXPORT", "ENABLE_DEBUG_MODE",
        ]
        settings = {key: os.getenv(key) for key in keys if os.getenv(key) is not None}

        logger.info("💻 Running in LOCAL environment")
        return settings

    def _load_app_config(self, settings: Dict[str, Any]):
        """Load application-specific settings"""
        debug_mode = _as_bool(settings.get("ENABLE_DEBUG_MODE"), False)

        self._app_config = {
            # Calendar
            "FIRST_YEAR": _as_int(settings.get("FIRST_YEAR"), 2020),
            "YEARS_AHEAD": _as_int(settings.get("YEARS_AHEAD"), 5),

            # Performance view
            "SPARKLINE_WEEKS": _as_int(settings.get("SPARKLINE_WEEKS"), 4),

            # Logging (debug mode forces DEBUG)
            "LOG_LEVEL": _as_log_level(settings.get("LOG_LEVEL"), debug_mode),

            # Feature flags
            "ENABLE_EXCEL_EXPORT": _as_bool(settings.get("ENABLE_EXCEL_EXPORT"), True),
            "ENABLE_DEBUG_MODE": debug_mode,
        }

    def _log_config_status(self):
        """Log configuration status"""
        logger.info(f"✅ Data file: {self._storage_config.data_path}")
        logger.info(f"✅ Excel export: {'Enabled' if self._app_config['ENABLE_EXCEL_EXPORT'] else 'Disabled'}")
        if self._app_config["ENABLE_DEBUG_MODE"]:
            logger.info("🐛 Debug mode: log level forced to DEBUG")

    # ==================== PUBLIC GETTERS ====================

    def get_data_path(self) -> Path:
        """Full path of the tracker JSON document"""
        return self._storage_config.data_path

    def get_app_setting(self, key: str, default: Any = None) -> Any:
        """Get application setting with default"""
        return self._app_config.get(key, default)

    def is_feature_enabled(self, feature: str) -> bool:
        """Check if feature is enabled"""
        key = f"ENABLE_{feature.upper()}"
        return self._app_config.get(key, True)

    # ==================== PROPERTIES ====================

    @property
    def log_level(self) -> str:
        return self._app_config["LOG_LEVEL"]


# ==================== SINGLETON INSTANCE ====================

config = Config()

__all__ = [
    'config',
    'Config',
    'StorageConfig',
]
