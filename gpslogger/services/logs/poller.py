"""
Log Poller

Pull-based refresh of the on-screen log text. Every tick reads the
persisted log and, when present, replaces the view text with its lines
joined by newlines. A missing log leaves the previous text untouched.
"""

from dataclasses import dataclass, field
from enum import Enum

from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.scheduler import ScheduledLoop

from .repository import LogRepository

logger = get_service_logger("logs.poller")


@dataclass
class LogView:
    """In-memory display state for the log viewer."""
    text: str = ""
    lines: list[str] = field(default_factory=list)

    def show(self, lines: list[str]) -> None:
        self.lines = list(lines)
        self.text = "\n".join(self.lines)

    def reset(self) -> None:
        self.lines = []
        self.text = ""


class PollerState(str, Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


def feed(repository: LogRepository, view: LogView) -> bool:
    """
    Copy the persisted log into the view.

    Returns:
        True if the view was updated, False if no log is stored
    """
    lines = repository.read()
    if lines is None:
        return False
    view.show(lines)
    return True


class LogPoller:
    """Refreshes a LogView from the LogRepository on a fixed cadence."""

    def __init__(
        self,
        repository: LogRepository,
        view: LogView,
        interval_s: float = 3.0,
    ):
        self.repository = repository
        self.view = view
        self.interval_s = interval_s
        self.state = PollerState.IDLE
        self._loop = ScheduledLoop(interval_s, self.refresh, name="log-poller")

    def refresh(self) -> bool:
        """Run one feed-and-update."""
        self.state = PollerState.REFRESHING
        try:
            return feed(self.repository, self.view)
        finally:
            self.state = PollerState.IDLE

    async def start(self) -> None:
        await self._loop.start()
        logger.info(f"Log poller started (interval: {self.interval_s}s)")

    def stop(self) -> None:
        self._loop.stop()
        logger.info("Log poller stopped")

    @property
    def is_running(self) -> bool:
        return self._loop.is_running

    def get_stats(self) -> dict:
        return {"state": self.state.value, **self._loop.get_stats()}
