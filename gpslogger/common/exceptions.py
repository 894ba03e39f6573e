"""
Custom Exception Classes for GPS Logger

Hierarchical exception structure for error handling across services.
"""


class GpsLoggerError(Exception):
    """Base exception for all GPS logger errors"""

    def __init__(self, message: str, recoverable: bool = True):
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


class ConfigError(GpsLoggerError):
    """Configuration-related errors"""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(f"Config Error: {message}", recoverable)


class StoreError(GpsLoggerError):
    """Preference store read/write errors"""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(f"Store Error: {message}", recoverable=True)


class ExportError(GpsLoggerError):
    """Log export failed - the file was not written"""

    def __init__(self, message: str, filename: str | None = None):
        self.filename = filename
        super().__init__(f"Export Error: {message}", recoverable=True)


class PostError(GpsLoggerError):
    """Social network post errors"""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(f"Post Error: {message}", recoverable=True)


class NotificationError(GpsLoggerError):
    """Platform notification errors"""

    def __init__(self, message: str):
        super().__init__(f"Notification Error: {message}", recoverable=True)


class TrackingError(GpsLoggerError):
    """Location sampling errors"""

    def __init__(self, message: str, command: str | None = None):
        self.command = command
        super().__init__(f"Tracking Error: {message}", recoverable=True)
