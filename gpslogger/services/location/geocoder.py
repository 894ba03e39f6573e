"""
Town Resolver

Offline reverse geocoding against a local SQLite database with a
``towns(name, latitude, longitude)`` table. The nearest town within
``max_distance_km`` wins; anything else resolves to "".

Building the database is out of scope: any file with that table works.
"""

import math
import sqlite3
from pathlib import Path
from typing import Protocol

from gpslogger.common.logging_setup import get_service_logger

logger = get_service_logger("location.geocoder")

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.32
BUSY_TIMEOUT_MS = 1000


class PlaceResolver(Protocol):
    def resolve_town(self, latitude: float, longitude: float) -> str:
        ...


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def longitude_ranges(longitude: float, delta: float) -> list[tuple[float, float]]:
    """
    Longitude windows covering ``longitude ± delta``, split at the antimeridian.

    Examples:
        longitude_ranges(179.9, 0.5) → [(179.4, 180.0), (-180.0, -179.6)]
    """
    low, high = longitude - delta, longitude + delta
    if delta >= 180.0:
        return [(-180.0, 180.0)]
    if low < -180.0:
        return [(-180.0, high), (low + 360.0, 180.0)]
    if high > 180.0:
        return [(low, 180.0), (-180.0, high - 360.0)]
    return [(low, high)]


class NullResolver:
    """Resolver used when no town database is configured."""

    def resolve_town(self, latitude: float, longitude: float) -> str:
        return ""


class TownResolver:
    """Nearest-town lookup in a read-only SQLite database."""

    def __init__(self, db_path: Path | str, max_distance_km: float = 20.0):
        self.db_path = Path(db_path)
        self.max_distance_km = max_distance_km

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            f"file:{self.db_path}?mode=ro",
            uri=True,
            timeout=BUSY_TIMEOUT_MS / 1000.0,
        )
        conn.row_factory = sqlite3.Row
        return conn

    def resolve_town(self, latitude: float, longitude: float) -> str:
        """
        Find the closest town to a coordinate.

        Returns:
            Town name, or "" if none is close enough or the lookup failed
        """
        if not self.db_path.exists():
            logger.debug(f"Town database not found: {self.db_path}")
            return ""

        # Bounding box prefilter, then exact distance
        lat_delta = self.max_distance_km / KM_PER_DEGREE
        cos_lat = max(math.cos(math.radians(latitude)), 0.01)
        lon_delta = min(self.max_distance_km / (KM_PER_DEGREE * cos_lat), 180.0)

        ranges = longitude_ranges(longitude, lon_delta)
        longitude_clause = " OR ".join(["longitude BETWEEN ? AND ?"] * len(ranges))
        params = [latitude - lat_delta, latitude + lat_delta]
        for low, high in ranges:
            params.extend((low, high))

        conn = None
        try:
            conn = self._get_connection()
            rows = conn.execute(
                f"""
                SELECT name, latitude, longitude
                FROM towns
                WHERE latitude BETWEEN ? AND ?
                  AND ({longitude_clause})
                """,
                params,
            ).fetchall()
        except sqlite3.Error as e:
            logger.warning(f"Town lookup failed: {e}")
            return ""
        finally:
            if conn is not None:
                conn.close()

        best_name = ""
        best_distance = self.max_distance_km
        for row in rows:
            distance = haversine_km(latitude, longitude, row["latitude"], row["longitude"])
            if distance <= best_distance:
                best_name, best_distance = row["name"] or "", distance

        return best_name
