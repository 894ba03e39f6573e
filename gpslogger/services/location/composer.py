"""
Location Message Composer

Builds the shareable message for the last known position:

    "<town> https://www.google.com/maps/search/?api=1&query=<lat>,<lon>"

The town and its separating space are omitted when no town is found.
"""

from gpslogger.common.state import PreferenceStore

from .coordinate import Coordinate, read_last_coordinate
from .geocoder import NullResolver, PlaceResolver

MAP_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={latitude},{longitude}"


def build_map_url(latitude: float, longitude: float) -> str:
    """Map search link with both numbers rendered as floats (35 → 35.0)."""
    return MAP_SEARCH_URL.format(latitude=float(latitude), longitude=float(longitude))


def compose_message(coordinate: Coordinate, town: str = "") -> str:
    url = build_map_url(*coordinate.for_link())
    if town:
        return f"{town} {url}"
    return url


class MessageComposer:
    """Composes the location message from the store and a place resolver."""

    def __init__(self, store: PreferenceStore, resolver: PlaceResolver | None = None):
        self.store = store
        self.resolver = resolver or NullResolver()

    def compose(self) -> str:
        coordinate = read_last_coordinate(self.store)
        town = ""
        if coordinate.is_known:
            town = self.resolver.resolve_town(coordinate.latitude, coordinate.longitude)
        return compose_message(coordinate, town or "")
