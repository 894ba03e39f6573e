"""
Log Repository

The persisted log: an ordered list of pre-formatted lines stored under
the ``logs`` preference key. A missing key is a valid empty state and is
reported as ``None`` so readers can tell "no logs yet" from "cleared".
"""

from gpslogger.common.state import KEY_LOGS, PreferenceStore


def _as_lines(value) -> list[str] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        return [str(value)]
    return [str(line) for line in value]


class LogRepository:
    """Read/append/clear access to the persisted log lines."""

    def __init__(self, store: PreferenceStore):
        self.store = store

    def read(self) -> list[str] | None:
        """
        Snapshot of the stored lines.

        Returns:
            Lines in insertion order, or None if nothing has been stored
        """
        return _as_lines(self.store.get(KEY_LOGS))

    def append(self, line: str, max_logs: int = 0) -> None:
        """
        Append one line, trimming the oldest when max_logs is exceeded.

        Args:
            line: Pre-formatted log line
            max_logs: Maximum number of lines kept (0 = unbounded)
        """
        def appended(current) -> list[str]:
            lines = _as_lines(current) or []
            lines.append(line)
            if max_logs > 0 and len(lines) > max_logs:
                lines = lines[-max_logs:]
            return lines

        self.store.modify(KEY_LOGS, appended)

    def clear(self) -> None:
        self.store.delete(KEY_LOGS)
