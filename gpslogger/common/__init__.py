"""
Common Utilities

Shared modules used across all services:
- state.py - Preference store (JSON file, atomic writes)
- config.py - Configuration dataclasses
- exceptions.py - Custom exception classes
- logging_setup.py - Structured logging setup
- debug.py - Debug-mode diagnostic sink
- scheduler.py - Fixed-interval loop
- timestamp.py - Log line and filename timestamps
"""

from .state import PreferenceStore
from .config import (
    AppConfig,
    PollerSettings,
    ExportSettings,
    NotificationSettings,
    TrackingSettings,
    GeoSettings,
    SocialSettings,
    ServerSettings,
    load_app_config,
    load_config_file,
)
from .exceptions import (
    GpsLoggerError,
    ConfigError,
    StoreError,
    ExportError,
    PostError,
    NotificationError,
    TrackingError,
)
from .logging_setup import configure_logging, get_service_logger
from .debug import DebugRecorder
from .scheduler import ScheduledLoop

__all__ = [
    # State
    "PreferenceStore",
    # Config
    "AppConfig",
    "PollerSettings",
    "ExportSettings",
    "NotificationSettings",
    "TrackingSettings",
    "GeoSettings",
    "SocialSettings",
    "ServerSettings",
    "load_app_config",
    "load_config_file",
    # Exceptions
    "GpsLoggerError",
    "ConfigError",
    "StoreError",
    "ExportError",
    "PostError",
    "NotificationError",
    "TrackingError",
    # Logging
    "configure_logging",
    "get_service_logger",
    "DebugRecorder",
    "ScheduledLoop",
]
