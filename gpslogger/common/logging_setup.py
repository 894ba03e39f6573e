"""
Structured Logging Setup

One handler on the ``gpslogger`` parent logger; every service logs
through a child of it, tagged with the service name. JSON lines by
default, plain text for interactive use.

Usage:
    logger = get_service_logger("tracking")
    logger.info("Tracking started", extra={"interval_s": 10})

    # Once, from the entry point:
    configure_logging("DEBUG", "text")
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

ROOT_LOGGER = "gpslogger"
LOG_FORMATS = ("json", "text")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "service"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` fields inlined"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", "unknown"),
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ServiceLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds service name to all logs"""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs.setdefault("extra", {})
        kwargs["extra"]["service"] = self.extra.get("service", "unknown")
        return msg, kwargs


def _level(log_level: str) -> int:
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> logging.Logger:
    """
    (Re)configure the shared handler. Safe to call more than once.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" or "text"

    Returns:
        The parent ``gpslogger`` logger
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {log_format!r}")

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(_level(log_level))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT))
    root.addHandler(handler)

    # Don't propagate to the application's root logger
    root.propagate = False
    return root


def get_service_logger(service_name: str) -> ServiceLoggerAdapter:
    """
    Get a logger adapter with service context.

    The shared handler is configured from GPSLOGGER_LOG_LEVEL and
    GPSLOGGER_LOG_FORMAT on first use until ``configure_logging`` runs.
    """
    if not logging.getLogger(ROOT_LOGGER).handlers:
        log_format = os.environ.get("GPSLOGGER_LOG_FORMAT", "json").lower()
        configure_logging(
            os.environ.get("GPSLOGGER_LOG_LEVEL", "INFO"),
            log_format if log_format in LOG_FORMATS else "json",
        )

    logger = logging.getLogger(f"{ROOT_LOGGER}.{service_name}")
    return ServiceLoggerAdapter(logger, {"service": service_name})
