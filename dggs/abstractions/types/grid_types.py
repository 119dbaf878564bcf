# dggs/abstractions/types/grid_types.py
"""Grid system type definitions."""

from dataclasses import dataclass, field
from typing import Dict, Any, Tuple
from shapely.geometry import Point

from .coordinate_types import GeoCoordinates

CELL_ID_PREFIX = 'ISEA3H'
DEFAULT_CENTER_PRECISION = 9


@dataclass(frozen=True, eq=False)
class GridCell:
    """Grid cell identified by its resolution and geographic center.

    Two cells are equal when they have the same resolution and their centers
    agree to ``precision`` decimal places. Cells on face edges and vertices are
    reached from several faces, so identity must not depend on the last bits of
    the center.
    """
    resolution: int
    center: GeoCoordinates
    precision: int = field(default=DEFAULT_CENTER_PRECISION, repr=False)

    @property
    def lat(self) -> float:
        return self.center.lat

    @property
    def lon(self) -> float:
        return self.center.lon

    @property
    def key(self) -> Tuple[int, int, int]:
        """Canonical identity: resolution and fixed-precision center."""
        scale = 10 ** self.precision
        lat_key = round(self.center.lat * scale)
        lon_key = round(self.center.lon * scale)
        # Longitude is meaningless at the poles and -180 is +180
        if abs(lat_key) == 90 * scale:
            lon_key = 0
        elif lon_key == -180 * scale:
            lon_key = 180 * scale
        return self.resolution, lat_key, lon_key

    @property
    def cell_id(self) -> str:
        _, lat_key, lon_key = self.key
        scale = 10 ** self.precision
        return (f"{CELL_ID_PREFIX}_{self.resolution}_"
                f"{lat_key / scale:.{self.precision}f}_{lon_key / scale:.{self.precision}f}")

    @property
    def centroid(self) -> Point:
        """Center as a shapely point (x = longitude, y = latitude)."""
        return Point(self.center.lon, self.center.lat)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridCell):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for output."""
        return {
            'cell_id': self.cell_id,
            'resolution': self.resolution,
            'lat': self.center.lat,
            'lon': self.center.lon,
            'centroid_wkt': self.centroid.wkt,
        }
