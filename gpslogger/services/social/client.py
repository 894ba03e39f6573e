"""
Social Network Client

Posts a status update with OAuth 1.0a user-context credentials.
Results come back as a value (PostSuccess | PostFailure); the client
never raises for network or API errors.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, Union

import httpx
from authlib.integrations.httpx_client import AsyncOAuth1Client

from gpslogger.common.exceptions import PostError
from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.state import (
    KEY_ACCESS_KEY,
    KEY_ACCESS_SECRET,
    KEY_CONSUMER_KEY,
    KEY_CONSUMER_SECRET,
    PreferenceStore,
)

logger = get_service_logger("social.client")

DEFAULT_API_URL = "https://api.twitter.com/2/tweets"


@dataclass(frozen=True)
class SocialCredentials:
    """The four user secrets; any of them may be empty"""
    consumer_key: str = ""
    consumer_secret: str = ""
    access_key: str = ""
    access_secret: str = ""

    @classmethod
    def from_store(cls, store: PreferenceStore) -> "SocialCredentials":
        return cls(
            consumer_key=store.get_string(KEY_CONSUMER_KEY) or "",
            consumer_secret=store.get_string(KEY_CONSUMER_SECRET) or "",
            access_key=store.get_string(KEY_ACCESS_KEY) or "",
            access_secret=store.get_string(KEY_ACCESS_SECRET) or "",
        )

    @property
    def is_complete(self) -> bool:
        return all((
            self.consumer_key,
            self.consumer_secret,
            self.access_key,
            self.access_secret,
        ))


@dataclass
class PostSuccess:
    response: dict[str, Any] = field(default_factory=dict)


@dataclass
class PostFailure:
    error: Exception


PostResult = Union[PostSuccess, PostFailure]


class SocialClient(Protocol):
    async def post(self, message: str) -> PostResult:
        ...


class TwitterClient:
    """Status updates through the v2 tweets endpoint."""

    def __init__(
        self,
        credentials: SocialCredentials,
        api_url: str = DEFAULT_API_URL,
        timeout_s: float = 10.0,
    ):
        self.credentials = credentials
        self.api_url = api_url
        self.timeout_s = timeout_s

    def _client(self) -> AsyncOAuth1Client:
        return AsyncOAuth1Client(
            client_id=self.credentials.consumer_key,
            client_secret=self.credentials.consumer_secret,
            token=self.credentials.access_key,
            token_secret=self.credentials.access_secret,
            timeout=self.timeout_s,
        )

    async def post(self, message: str) -> PostResult:
        try:
            async with self._client() as client:
                response = await client.post(self.api_url, json={"text": message})
                response.raise_for_status()
                payload = response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            return PostFailure(PostError(f"HTTP {status}: {e.response.text}", status_code=status))
        except (httpx.HTTPError, ValueError) as e:
            return PostFailure(PostError(f"{type(e).__name__}: {e}"))

        logger.debug("Status posted", extra={"status_code": response.status_code})
        return PostSuccess(response=payload)
