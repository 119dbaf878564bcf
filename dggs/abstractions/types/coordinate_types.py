# dggs/abstractions/types/coordinate_types.py
"""Coordinate value types shared by the projection and the grid engines."""

import math
from dataclasses import dataclass
from typing import NamedTuple

from ...exceptions import InvalidCoordinatesError


@dataclass(frozen=True)
class GeoCoordinates:
    """Geographic coordinates in degrees (WGS84 latitude/longitude)."""
    lat: float
    lon: float

    def __post_init__(self):
        try:
            lat = float(self.lat)
            lon = float(self.lon)
        except (TypeError, ValueError) as e:
            raise InvalidCoordinatesError(
                f"Coordinates must be numbers, got ({self.lat!r}, {self.lon!r})", e
            ) from e
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidCoordinatesError(f"Coordinates must be finite, got ({lat}, {lon})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinatesError(f"Latitude must be within [-90, 90], got {lat}")
        if not -180.0 <= lon <= 180.0:
            raise InvalidCoordinatesError(f"Longitude must be within [-180, 180], got {lon}")
        object.__setattr__(self, 'lat', lat)
        object.__setattr__(self, 'lon', lon)

    def to_tuple(self):
        return self.lat, self.lon


@dataclass(frozen=True)
class FaceCoordinates:
    """Planar coordinates on one face of the icosahedron.

    Coordinates of different faces live in different planes and cannot be
    compared with each other.
    """
    face: int
    x: float
    y: float

    def distance_to(self, other: 'FaceCoordinates') -> float:
        """Euclidean distance to another point on the same face."""
        if other.face != self.face:
            raise ValueError(
                f"Cannot measure distance between face {self.face} and face {other.face}"
            )
        return math.hypot(self.x - other.x, self.y - other.y)


class LatticeIndex(NamedTuple):
    """Integer address of a lattice point on a face.

    Columns step by half a lattice spacing; rows in odd columns are offset by
    half a row.
    """
    column: int
    row: int
