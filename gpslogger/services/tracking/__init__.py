"""
Tracking Services

- source.py - One-shot fixes from termux-location
- tracker.py - Periodic sampling into the log and last-known coordinate
- control.py - Persisted start/stop switch
"""

from .control import TrackingControl
from .source import LocationFix, LocationSource, TermuxLocationSource, parse_fix
from .tracker import LocationTracker, format_event_line, format_fix_line

__all__ = [
    "TrackingControl",
    "LocationFix",
    "LocationSource",
    "TermuxLocationSource",
    "parse_fix",
    "LocationTracker",
    "format_event_line",
    "format_fix_line",
]
