"""
Fixed-Interval Scheduler

Provides ScheduledLoop, which fires a callback on a fixed cadence,
accounting for callback execution time to prevent drift.

Unlike asyncio.sleep()-based loops, this scheduler:
- Fires at wall-clock interval boundaries
- Skips missed intervals instead of queueing them
- Keeps running when a callback raises
- Reports drift metrics for observability

Usage:
    def refresh():
        ...

    loop = ScheduledLoop(3.0, refresh, name="log-poller")
    await loop.start()

    # Later:
    loop.stop()
"""

import asyncio
import inspect
import time
from typing import Awaitable, Callable, Union

from gpslogger.common.logging_setup import get_service_logger

logger = get_service_logger("scheduler")

Callback = Callable[[], Union[None, Awaitable[None]]]


class ScheduledLoop:
    """
    Interval scheduler that accounts for execution time.

    The callback may be a plain function or a coroutine function.
    Ticks never overlap: the next tick is only scheduled once the
    current callback has returned.

    Attributes:
        interval: The interval in seconds between executions
        callback: Function to call each interval
        name: Name for logging/identification
    """

    def __init__(
        self,
        interval_seconds: float,
        callback: Callback,
        name: str = "unnamed",
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.interval = interval_seconds
        self.callback = callback
        self.name = name

        self._next_run: float = 0
        self._running = False
        self._task: asyncio.Task | None = None

        # Observability metrics
        self._drift_total: float = 0
        self._skipped_count: int = 0
        self._execution_count: int = 0
        self._error_count: int = 0
        self._last_execution_time: float = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the scheduled loop in a background task."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run())
        logger.debug(f"Scheduler '{self.name}' started (interval: {self.interval}s)")

    def stop(self) -> None:
        """Stop the scheduled loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            self._task = None
            logger.debug(f"Scheduler '{self.name}' stopped")

    async def _run(self) -> None:
        """Main loop that fires callback at fixed intervals."""
        # Align first run to next interval boundary
        now = time.time()
        self._next_run = ((now // self.interval) + 1) * self.interval

        while self._running:
            sleep_duration = self._next_run - time.time()
            if sleep_duration > 0:
                try:
                    await asyncio.sleep(sleep_duration)
                except asyncio.CancelledError:
                    break

            if not self._running:
                break

            self._drift_total += max(0.0, time.time() - self._next_run)

            try:
                start = time.time()
                result = self.callback()
                if inspect.isawaitable(result):
                    await result
                self._last_execution_time = time.time() - start
                self._execution_count += 1
            except asyncio.CancelledError:
                break
            except Exception as e:
                self._error_count += 1
                logger.error(f"Scheduled callback '{self.name}' error: {e}")

            # Skip missed intervals to catch up (don't queue up missed executions)
            now = time.time()
            skipped = 0
            while self._next_run <= now:
                self._next_run += self.interval
                skipped += 1

            # First skip is expected (the one we just executed)
            if skipped > 1:
                self._skipped_count += skipped - 1
                logger.warning(
                    f"Scheduler '{self.name}' skipped {skipped - 1} intervals "
                    f"(execution took {self._last_execution_time:.3f}s)"
                )

    @property
    def execution_count(self) -> int:
        """Total number of successful executions."""
        return self._execution_count

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def skipped_count(self) -> int:
        """Number of intervals skipped to catch up."""
        return self._skipped_count

    def get_stats(self) -> dict:
        """Get scheduler statistics for observability."""
        return {
            "name": self.name,
            "interval_s": self.interval,
            "running": self._running,
            "execution_count": self._execution_count,
            "error_count": self._error_count,
            "drift_total_s": round(self._drift_total, 3),
            "skipped_count": self._skipped_count,
            "last_execution_s": round(self._last_execution_time, 3),
        }
