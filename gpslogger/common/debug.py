"""
Debug Recorder

Single diagnostic sink for the ``isDebugMode`` preference. Components
call ``record`` wherever they want a trace; nothing is written unless
debug mode is switched on, and recording never affects control flow.
"""

from typing import Any

from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.state import KEY_DEBUG_MODE, PreferenceStore


class DebugRecorder:
    """
    Usage:
        debug = DebugRecorder(store)
        debug.record("SocialPostAction.run", "postTweet", response)
    """

    def __init__(self, store: PreferenceStore, service_name: str = "debug"):
        self.store = store
        self.logger = get_service_logger(service_name)

    @property
    def enabled(self) -> bool:
        return self.store.get_bool(KEY_DEBUG_MODE)

    def record(self, location: str, key: str, value: Any = "") -> None:
        try:
            if not self.enabled:
                return
            self.logger.info(
                f"[DEBUG] {location} {key}={value}",
                extra={"location": location, "key": key, "value": str(value)},
            )
        except Exception:
            self.logger.exception(f"Debug record failed at {location}")
