import math
from typing import Sequence

import numpy as np

from trip_albums.domain.types import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance_km(a, b):
    """
    Great-circle (Haversine) distance between (lat, lon) points in kilometres.

    Either point may carry numpy arrays of latitudes and longitudes, in which case
    one distance per pair is returned. Scalar and array calls run the exact same
    arithmetic, so a threshold taken from one call holds for the other.
    """
    lat1, lon1 = np.radians(a[0]), np.radians(a[1])
    lat2, lon2 = np.radians(b[0]), np.radians(b[1])

    sin_dlat = np.sin((lat2 - lat1) / 2)
    sin_dlon = np.sin((lon2 - lon1) / 2)

    h = sin_dlat * sin_dlat + np.cos(lat1) * np.cos(lat2) * (sin_dlon * sin_dlon)
    h = np.clip(h, 0.0, 1.0)
    return 2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(h))


def centroid(coordinates: Sequence[Coordinate]) -> Coordinate:
    """Spherical centre of a set of points (mean of unit vectors)."""
    lat = np.radians([c[0] for c in coordinates])
    lon = np.radians([c[1] for c in coordinates])

    x = np.mean(np.cos(lat) * np.cos(lon))
    y = np.mean(np.cos(lat) * np.sin(lon))
    z = np.mean(np.sin(lat))

    center_lon = math.degrees(math.atan2(y, x))
    center_lat = math.degrees(math.atan2(z, math.hypot(x, y)))
    return (center_lat, center_lon)
