"""Earth ellipsoid constants used by the equal-area projection."""

import math
from functools import lru_cache
from typing import NamedTuple

import pyproj


class EllipsoidConstants(NamedTuple):
    """Derived constants of a reference ellipsoid, lengths in km."""
    name: str
    semi_major_axis: float
    flattening: float
    area: float
    radius_authalic: float


@lru_cache(maxsize=None)
def ellipsoid_constants(ellps: str = 'WGS84') -> EllipsoidConstants:
    """Surface area and authalic radius of a pyproj ellipsoid.

    The area of an oblate ellipsoid is
    ``2 pi a^2 (1 + (1 - e^2) / e * atanh(e))``; the authalic radius is the
    radius of the sphere with the same area.
    """
    geod = pyproj.Geod(ellps=ellps)
    a = geod.a / 1000.
    e = math.sqrt(geod.es)
    if e == 0:
        area = 4 * math.pi * a ** 2
    else:
        area = 2 * math.pi * a ** 2 * (1 + (1 - e ** 2) / e * math.atanh(e))
    return EllipsoidConstants(
        name=ellps,
        semi_major_axis=a,
        flattening=geod.f,
        area=area,
        radius_authalic=math.sqrt(area / (4 * math.pi)),
    )


WGS84 = ellipsoid_constants('WGS84')

# km^2
AREA_OF_EARTH = WGS84.area
# km
RADIUS_AUTHALIC = WGS84.radius_authalic


def _authalic_q(sin_lat: float, e: float) -> float:
    if e == 0:
        return 2 * sin_lat
    es = e * e
    return (1 - es) * (sin_lat / (1 - es * sin_lat ** 2)
                       - 1 / (2 * e) * math.log((1 - e * sin_lat) / (1 + e * sin_lat)))


def area_of_lat_lon_rectangle(lat0: float, lat1: float, lon0: float, lon1: float,
                              ellps: str = 'WGS84') -> float:
    """Area in km^2 of the region between two parallels and two meridians (degrees)."""
    geod = pyproj.Geod(ellps=ellps)
    a = geod.a / 1000.
    e = math.sqrt(geod.es)
    q0 = _authalic_q(math.sin(math.radians(min(lat0, lat1))), e)
    q1 = _authalic_q(math.sin(math.radians(max(lat0, lat1))), e)
    return abs(math.radians(lon1 - lon0)) * a ** 2 * (q1 - q0) / 2
