"""
Location Tracker

Background sampler: on every tick it asks the location source for a
fix, stores it as the last-known coordinate and appends a log line.
Sampling errors become log lines too, so the user can see them.
"""

from gpslogger.common.config import TrackingSettings
from gpslogger.common.exceptions import TrackingError
from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.scheduler import ScheduledLoop
from gpslogger.common.state import PreferenceStore
from gpslogger.common.timestamp import format_log_time
from gpslogger.services.location import write_last_coordinate
from gpslogger.services.logs import LogRepository

from .source import LocationFix, LocationSource

logger = get_service_logger("tracking")


def format_fix_line(fix: LocationFix) -> str:
    line = f"{format_log_time(fix.timestamp)} {fix.latitude},{fix.longitude}"
    if fix.accuracy is not None:
        line += f" (±{fix.accuracy:.1f}m)"
    return line


def format_event_line(event: str) -> str:
    return f"{format_log_time()} {event}"


class LocationTracker:
    """Periodic location sampling into the preference store."""

    def __init__(
        self,
        store: PreferenceStore,
        repository: LogRepository,
        source: LocationSource,
        settings: TrackingSettings | None = None,
    ):
        self.store = store
        self.repository = repository
        self.source = source
        self.settings = settings or TrackingSettings()
        self._loop: ScheduledLoop | None = None

    @property
    def is_running(self) -> bool:
        return self._loop is not None and self._loop.is_running

    def _append(self, line: str) -> None:
        self.repository.append(line, self.settings.max_logs)

    async def sample(self) -> LocationFix | None:
        """Take one fix and record it."""
        try:
            fix = await self.source.current_fix()
        except TrackingError as e:
            logger.warning(f"Location sample failed: {e}")
            self._append(format_event_line(f"location error: {e.message}"))
            return None

        write_last_coordinate(self.store, fix.latitude, fix.longitude)
        self._append(format_fix_line(fix))
        logger.debug(
            f"Fix recorded: {fix.latitude},{fix.longitude}",
            extra={"provider": fix.provider, "accuracy": fix.accuracy},
        )
        return fix

    async def start_tracking(self) -> None:
        if self.is_running:
            return
        self._loop = ScheduledLoop(self.settings.interval_s, self.sample, name="tracker")
        await self._loop.start()
        self._append(format_event_line("Start locating"))
        logger.info(f"Tracking started (interval: {self.settings.interval_s}s)")

    async def stop_tracking(self, record: bool = True) -> None:
        """
        Stop sampling.

        Args:
            record: Append a "Stop locating" line (False on app shutdown)
        """
        if self._loop is None:
            return
        self._loop.stop()
        self._loop = None
        if record:
            self._append(format_event_line("Stop locating"))
        logger.info("Tracking stopped")

    def clear_logs(self) -> None:
        self.repository.clear()
        logger.info("Logs cleared")
