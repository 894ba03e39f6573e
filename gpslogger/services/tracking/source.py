"""
Location Source

Reads one fix from ``termux-location`` (Termux:API). The command prints
a JSON object with latitude, longitude, accuracy and provider fields.
"""

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from gpslogger.common.exceptions import TrackingError


@dataclass
class LocationFix:
    latitude: float
    longitude: float
    accuracy: float | None = None
    provider: str = ""
    timestamp: datetime = field(default_factory=datetime.now)


class LocationSource(Protocol):
    async def current_fix(self) -> LocationFix:
        ...


def parse_fix(raw: str) -> LocationFix:
    """Parse termux-location JSON output."""
    try:
        data = json.loads(raw)
        latitude = float(data["latitude"])
        longitude = float(data["longitude"])
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise TrackingError(f"Unreadable location output: {e!r}") from e

    accuracy = data.get("accuracy")
    return LocationFix(
        latitude=latitude,
        longitude=longitude,
        accuracy=float(accuracy) if accuracy is not None else None,
        provider=str(data.get("provider", "")),
    )


class TermuxLocationSource:
    """One-shot fixes from termux-location."""

    def __init__(
        self,
        command: str = "termux-location",
        provider: str = "gps",
        timeout_s: float = 30.0,
    ):
        self.command = command
        self.provider = provider
        self.timeout_s = timeout_s

    async def current_fix(self) -> LocationFix:
        args = [self.command, "-p", self.provider, "-r", "once"]
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TrackingError(f"Cannot run {self.command}: {e}", command=self.command) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self.timeout_s)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise TrackingError(f"timeout after {self.timeout_s}s", command=self.command) from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip() if stderr else ""
            raise TrackingError(
                f"exited {process.returncode}: {message}", command=self.command
            )

        return parse_fix(stdout.decode(errors="replace"))
