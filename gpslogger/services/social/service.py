"""
Social Post Action

Posts the composed location message. Missing credentials short-circuit
to a "Warning" notification without touching the network. A successful
post raises a "Tweeted" notification; a failed post is only logged.
"""

from enum import Enum
from typing import Callable

from gpslogger.common.debug import DebugRecorder
from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.state import PreferenceStore
from gpslogger.services.location import MessageComposer
from gpslogger.services.notify import NotificationEmitter

from .client import PostSuccess, SocialClient, SocialCredentials

logger = get_service_logger("social")

WARNING_TITLE = "Warning"
MISSING_KEYS_MESSAGE = "Please set keys and secrets of Twitter."
POSTED_TITLE = "Tweeted"

ClientFactory = Callable[[SocialCredentials], SocialClient]


class PostOutcome(str, Enum):
    SKIPPED_NO_CREDENTIALS = "skipped_no_credentials"
    POSTED = "posted"
    FAILED = "failed"


class SocialPostAction:
    """Compose-and-post workflow behind the post button."""

    def __init__(
        self,
        store: PreferenceStore,
        composer: MessageComposer,
        emitter: NotificationEmitter,
        client_factory: ClientFactory,
        debug: DebugRecorder | None = None,
    ):
        self.store = store
        self.composer = composer
        self.emitter = emitter
        self.client_factory = client_factory
        self.debug = debug or DebugRecorder(store)

    async def run(self) -> PostOutcome:
        credentials = SocialCredentials.from_store(self.store)
        if not credentials.is_complete:
            logger.info("Post skipped: credentials not set")
            await self.emitter.emit(WARNING_TITLE, MISSING_KEYS_MESSAGE)
            return PostOutcome.SKIPPED_NO_CREDENTIALS

        message = self.composer.compose()
        result = await self.client_factory(credentials).post(message)

        if isinstance(result, PostSuccess):
            self.debug.record("SocialPostAction.run", "postTweet", result.response)
            logger.info("Location posted", extra={"post_message": message})
            await self.emitter.emit(POSTED_TITLE, message)
            return PostOutcome.POSTED

        # Failures stay in the logs; the user is not notified
        logger.error(f"Post failed: {result.error}", extra={"post_message": message})
        return PostOutcome.FAILED
