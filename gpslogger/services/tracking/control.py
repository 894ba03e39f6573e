"""
Tracking Control

Start/stop switch backed by the persisted ``isLogging`` flag. The start
and stop affordances are derived from that one flag, so exactly one of
them is active at any time.
"""

from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.state import KEY_IS_LOGGING, PreferenceStore

from .tracker import LocationTracker

logger = get_service_logger("tracking.control")


class TrackingControl:
    def __init__(self, store: PreferenceStore, tracker: LocationTracker):
        self.store = store
        self.tracker = tracker

    @property
    def is_logging(self) -> bool:
        return self.store.get_bool(KEY_IS_LOGGING)

    def affordances(self) -> dict[str, bool]:
        """Which button is active: start when idle, stop while logging."""
        logging_on = self.is_logging
        return {"start": not logging_on, "stop": logging_on}

    async def start(self) -> None:
        await self.tracker.start_tracking()
        self.store.set(KEY_IS_LOGGING, True)

    async def stop(self) -> None:
        await self.tracker.stop_tracking()
        self.store.set(KEY_IS_LOGGING, False)

    async def resume(self) -> None:
        """Restart sampling after launch if logging was left on."""
        if self.is_logging and not self.tracker.is_running:
            logger.info("Resuming tracking from previous session")
            await self.tracker.start_tracking()
