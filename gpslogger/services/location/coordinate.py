"""
Last-Known Coordinate

The tracker stores the last fix as decimal text under
``currentLatitude`` / ``currentLongitude``. Inside the app a missing or
unparsable value is ``None``; the placeholders -91 / -181 only exist at
the map-link boundary. A parsable value is kept as stored, even outside
the valid range, and is only left out of reverse geocoding.
"""

import math
from dataclasses import dataclass

from gpslogger.common.state import (
    KEY_CURRENT_LATITUDE,
    KEY_CURRENT_LONGITUDE,
    PreferenceStore,
)

# Placeholders used in map links when no fix is known
UNKNOWN_LATITUDE = -91.0
UNKNOWN_LONGITUDE = -181.0


def _parse(value, placeholder: float) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or number == placeholder:
        return None
    return number


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair; either side may be unknown"""
    latitude: float | None = None
    longitude: float | None = None

    @property
    def is_known(self) -> bool:
        """Both sides present and on the globe."""
        return (
            self.latitude is not None
            and self.longitude is not None
            and -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
        )

    def for_link(self) -> tuple[float, float]:
        """Numeric pair for a map link, with placeholders for unknown sides."""
        latitude = UNKNOWN_LATITUDE if self.latitude is None else self.latitude
        longitude = UNKNOWN_LONGITUDE if self.longitude is None else self.longitude
        return latitude, longitude


def parse_coordinate(latitude, longitude) -> Coordinate:
    """Parse stored decimal text; anything unparsable is unknown."""
    return Coordinate(_parse(latitude, UNKNOWN_LATITUDE), _parse(longitude, UNKNOWN_LONGITUDE))


def read_last_coordinate(store: PreferenceStore) -> Coordinate:
    return parse_coordinate(
        store.get(KEY_CURRENT_LATITUDE),
        store.get(KEY_CURRENT_LONGITUDE),
    )


def write_last_coordinate(store: PreferenceStore, latitude: float, longitude: float) -> None:
    store.update({
        KEY_CURRENT_LATITUDE: str(float(latitude)),
        KEY_CURRENT_LONGITUDE: str(float(longitude)),
    })
