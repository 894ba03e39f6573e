"""
Configuration Dataclasses

Type-safe configuration structures for the logger app.
Loaded from a YAML file; every section is optional and falls back
to defaults. Directories can be overridden from the environment.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gpslogger.common.exceptions import ConfigError
from gpslogger.common.logging_setup import LOG_FORMATS, get_service_logger

logger = get_service_logger("config")

DEFAULT_HOME = Path.home() / ".gpslogger"


@dataclass
class PollerSettings:
    """Log view refresh cadence"""
    interval_s: float = 3.0


@dataclass
class ExportSettings:
    """Plain-text export destination"""
    directory: Path = DEFAULT_HOME / "exports"
    prefix: str = "export_"
    extension: str = ".txt"


@dataclass
class NotificationSettings:
    """One-shot user alerts"""
    delay_s: float = 1.0
    identifier: str = "gpsloggernotification"
    command: str = "termux-notification"


@dataclass
class TrackingSettings:
    """Background location sampling"""
    interval_s: float = 10.0
    max_logs: int = 1000  # 0 = unbounded
    command: str = "termux-location"
    provider: str = "gps"  # gps, network, passive
    timeout_s: float = 30.0


@dataclass
class GeoSettings:
    """Offline town lookup database"""
    db_path: Path = DEFAULT_HOME / "geo.db"
    max_distance_km: float = 20.0


@dataclass
class SocialSettings:
    """Social network endpoint"""
    api_url: str = "https://api.twitter.com/2/tweets"
    timeout_s: float = 10.0


@dataclass
class ServerSettings:
    """Local HTTP screen"""
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class AppConfig:
    """Complete app configuration"""
    state_dir: Path = DEFAULT_HOME / "state"
    log_level: str = "INFO"
    log_format: str = "json"
    poller: PollerSettings = field(default_factory=PollerSettings)
    export: ExportSettings = field(default_factory=ExportSettings)
    notification: NotificationSettings = field(default_factory=NotificationSettings)
    tracking: TrackingSettings = field(default_factory=TrackingSettings)
    geo: GeoSettings = field(default_factory=GeoSettings)
    social: SocialSettings = field(default_factory=SocialSettings)
    server: ServerSettings = field(default_factory=ServerSettings)


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    return section


def load_app_config(data: dict[str, Any] | None) -> AppConfig:
    """Load AppConfig from dictionary (e.g., parsed YAML)"""
    data = data or {}
    defaults = AppConfig()

    try:
        poller_data = _section(data, "poller")
        poller = PollerSettings(
            interval_s=float(poller_data.get("interval_s", 3.0)),
        )

        export_data = _section(data, "export")
        export = ExportSettings(
            directory=Path(export_data.get("directory", defaults.export.directory)).expanduser(),
            prefix=export_data.get("prefix", "export_"),
            extension=export_data.get("extension", ".txt"),
        )

        notification_data = _section(data, "notification")
        notification = NotificationSettings(
            delay_s=float(notification_data.get("delay_s", 1.0)),
            identifier=notification_data.get("identifier", "gpsloggernotification"),
            command=notification_data.get("command", "termux-notification"),
        )

        tracking_data = _section(data, "tracking")
        tracking = TrackingSettings(
            interval_s=float(tracking_data.get("interval_s", 10.0)),
            max_logs=int(tracking_data.get("max_logs", 1000)),
            command=tracking_data.get("command", "termux-location"),
            provider=tracking_data.get("provider", "gps"),
            timeout_s=float(tracking_data.get("timeout_s", 30.0)),
        )

        geo_data = _section(data, "geo")
        geo = GeoSettings(
            db_path=Path(geo_data.get("db_path", defaults.geo.db_path)).expanduser(),
            max_distance_km=float(geo_data.get("max_distance_km", 20.0)),
        )

        social_data = _section(data, "social")
        social = SocialSettings(
            api_url=social_data.get("api_url", "https://api.twitter.com/2/tweets"),
            timeout_s=float(social_data.get("timeout_s", 10.0)),
        )

        server_data = _section(data, "server")
        server = ServerSettings(
            host=server_data.get("host", "127.0.0.1"),
            port=int(server_data.get("port", 8765)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e)) from e

    if poller.interval_s <= 0 or tracking.interval_s <= 0:
        raise ConfigError("Intervals must be positive")
    if tracking.max_logs < 0:
        raise ConfigError("tracking.max_logs cannot be negative")

    state_dir = os.environ.get("GPSLOGGER_STATE_DIR") or data.get("state_dir") or defaults.state_dir
    log_level = os.environ.get("GPSLOGGER_LOG_LEVEL") or data.get("log_level") or "INFO"
    log_format = str(
        os.environ.get("GPSLOGGER_LOG_FORMAT") or data.get("log_format") or "json"
    ).lower()
    if log_format not in LOG_FORMATS:
        raise ConfigError(f"log_format must be one of {LOG_FORMATS}, got {log_format!r}")

    return AppConfig(
        state_dir=Path(state_dir).expanduser(),
        log_level=str(log_level).upper(),
        log_format=log_format,
        poller=poller,
        export=export,
        notification=notification,
        tracking=tracking,
        geo=geo,
        social=social,
        server=server,
    )


def load_config_file(config_path: str | Path | None) -> AppConfig:
    """
    Load configuration from a YAML file.

    A missing file means defaults; a malformed file raises ConfigError.
    """
    if config_path is None:
        return load_app_config({})

    path = Path(config_path).expanduser()
    if not path.exists():
        logger.warning(f"Config file not found: {path}, using defaults")
        return load_app_config({})

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")

    logger.info(f"Loaded configuration from {path}")
    return load_app_config(data)
