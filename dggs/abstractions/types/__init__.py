"""Type definitions for the abstractions layer."""

# Coordinate types
from .coordinate_types import GeoCoordinates, FaceCoordinates, LatticeIndex

# Grid types
from .grid_types import GridCell, CELL_ID_PREFIX

__all__ = [
    'GeoCoordinates',
    'FaceCoordinates',
    'LatticeIndex',
    'GridCell',
    'CELL_ID_PREFIX',
]
