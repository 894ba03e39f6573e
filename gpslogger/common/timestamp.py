"""
Timestamp Formatting Utilities

Two formats are used across the app:
- log lines carry a human-readable local time ("2021-08-27 14:30:17")
- export filenames carry a sortable local time with microseconds
  ("20210827_143017_123456") so two exports never share a name
"""

from datetime import datetime

LOG_LINE_FORMAT = "%Y-%m-%d %H:%M:%S"
FILENAME_FORMAT = "%Y%m%d_%H%M%S_%f"


def format_log_time(ts: datetime | None = None) -> str:
    """
    Format a timestamp for the start of a log line.

    Args:
        ts: The timestamp to format (defaults to local now)

    Returns:
        Local time as "YYYY-MM-DD HH:MM:SS"
    """
    return (ts or datetime.now()).strftime(LOG_LINE_FORMAT)


def format_filename_time(ts: datetime | None = None) -> str:
    """
    Format a timestamp for use inside a filename.

    Examples:
        # 2021-08-27 14:30:17.123456 → "20210827_143017_123456"
    """
    return (ts or datetime.now()).strftime(FILENAME_FORMAT)
