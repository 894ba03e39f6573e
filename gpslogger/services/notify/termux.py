"""
Termux Notification Backend

Delivers notifications through the ``termux-notification`` command from
Termux:API. Permission is granted when the command is installed.
"""

import asyncio
import shutil

from gpslogger.common.exceptions import NotificationError
from gpslogger.common.logging_setup import get_service_logger

logger = get_service_logger("notify.termux")


class TermuxNotificationBackend:
    """Runs termux-notification once per scheduled alert."""

    def __init__(
        self,
        command: str = "termux-notification",
        identifier: str = "gpsloggernotification",
        timeout_s: float = 10.0,
    ):
        self.command = command
        self.identifier = identifier
        self.timeout_s = timeout_s
        self._pending: set[asyncio.Task] = set()

    async def request_permission(self) -> bool:
        return shutil.which(self.command) is not None

    def schedule(self, title: str, body: str, delay_s: float) -> None:
        """Deliver one alert after delay_s seconds. Does not wait."""
        task = asyncio.create_task(self._deliver(title, body, delay_s))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, title: str, body: str, delay_s: float) -> None:
        if delay_s > 0:
            await asyncio.sleep(delay_s)
        try:
            await self._run(title, body)
        except NotificationError as e:
            logger.warning(f"Notification not delivered: {e}", extra={"title": title})

    async def _run(self, title: str, body: str) -> None:
        args = [
            self.command,
            "--id", self.identifier,
            "--title", title,
            "--content", body,
            "--sound",
        ]
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await asyncio.wait_for(process.communicate(), self.timeout_s)
        except (OSError, asyncio.TimeoutError) as e:
            raise NotificationError(f"{self.command} failed: {e!r}") from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip() if stderr else ""
            raise NotificationError(f"{self.command} exited {process.returncode}: {message}")

        logger.debug(f"Notification delivered: {title}")
