"""
Social Services

- client.py - OAuth 1.0a status-update client
- service.py - Compose-and-post action with user notifications
"""

from .client import (
    PostFailure,
    PostResult,
    PostSuccess,
    SocialClient,
    SocialCredentials,
    TwitterClient,
)
from .service import (
    MISSING_KEYS_MESSAGE,
    POSTED_TITLE,
    WARNING_TITLE,
    PostOutcome,
    SocialPostAction,
)

__all__ = [
    "PostFailure",
    "PostResult",
    "PostSuccess",
    "SocialClient",
    "SocialCredentials",
    "TwitterClient",
    "MISSING_KEYS_MESSAGE",
    "POSTED_TITLE",
    "WARNING_TITLE",
    "PostOutcome",
    "SocialPostAction",
]
