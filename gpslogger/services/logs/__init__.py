"""
Log Services

- repository.py - Persisted log lines (append / read / clear)
- poller.py - Fixed-interval refresh of the on-screen log text
"""

from .poller import LogPoller, LogView, PollerState, feed
from .repository import LogRepository

__all__ = ["LogPoller", "LogView", "PollerState", "LogRepository", "feed"]
