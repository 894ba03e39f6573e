"""
Notification Emitter

Asks the platform for permission once, then schedules one-shot alerts.
Emitting is fire-and-forget: when permission is denied, or the backend
fails, the alert is dropped and the caller carries on.
"""

import asyncio
from typing import Protocol

from gpslogger.common.logging_setup import get_service_logger

logger = get_service_logger("notify")


class NotificationBackend(Protocol):
    async def request_permission(self) -> bool:
        ...

    def schedule(self, title: str, body: str, delay_s: float) -> None:
        ...


class NotificationEmitter:
    """Permission-gated one-shot alerts."""

    def __init__(self, backend: NotificationBackend, delay_s: float = 1.0):
        self.backend = backend
        self.delay_s = delay_s
        self._granted: bool | None = None
        self._permission_lock = asyncio.Lock()

    @property
    def permission(self) -> bool | None:
        """Cached permission answer (None until first requested)."""
        return self._granted

    async def ensure_permission(self) -> bool:
        """Request permission on first use; later calls return the cached answer."""
        async with self._permission_lock:
            if self._granted is None:
                try:
                    self._granted = bool(await self.backend.request_permission())
                except Exception as e:
                    logger.warning(f"Permission request failed: {e}")
                    self._granted = False
                logger.info(f"Notification permission granted: {self._granted}")
            return self._granted

    async def emit(self, title: str, body: str) -> bool:
        """
        Schedule an alert.

        Returns:
            True if the alert was handed to the platform
        """
        if not await self.ensure_permission():
            logger.debug(f"Notification suppressed (no permission): {title}")
            return False

        try:
            self.backend.schedule(title, body, self.delay_s)
        except Exception as e:
            logger.error(f"Failed to schedule notification '{title}': {e}")
            return False

        logger.info(f"Notification scheduled: {title}", extra={"title": title})
        return True
