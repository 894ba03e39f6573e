"""
Location Services

- coordinate.py - Last-known coordinate and its stored text form
- geocoder.py - Offline nearest-town lookup
- composer.py - Shareable location message
"""

from .composer import MessageComposer, build_map_url, compose_message
from .coordinate import (
    UNKNOWN_LATITUDE,
    UNKNOWN_LONGITUDE,
    Coordinate,
    parse_coordinate,
    read_last_coordinate,
    write_last_coordinate,
)
from .geocoder import NullResolver, PlaceResolver, TownResolver, haversine_km

__all__ = [
    "MessageComposer",
    "build_map_url",
    "compose_message",
    "UNKNOWN_LATITUDE",
    "UNKNOWN_LONGITUDE",
    "Coordinate",
    "parse_coordinate",
    "read_last_coordinate",
    "write_last_coordinate",
    "NullResolver",
    "PlaceResolver",
    "TownResolver",
    "haversine_km",
]
