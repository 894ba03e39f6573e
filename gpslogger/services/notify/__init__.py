"""
Notification Services

- emitter.py - Permission-gated one-shot alerts
- termux.py - termux-notification backend
"""

from .emitter import NotificationBackend, NotificationEmitter
from .termux import TermuxNotificationBackend

__all__ = ["NotificationBackend", "NotificationEmitter", "TermuxNotificationBackend"]
