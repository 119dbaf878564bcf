"""ISEA3H discrete global grid system."""

from .abstractions.types import GeoCoordinates, FaceCoordinates, LatticeIndex, GridCell
from .exceptions import (
    GridError,
    GridConfigurationError,
    ProjectionMappingError,
    InvalidCoordinatesError
)
from .grid_systems import ISEA3HGrid, GridFactory, get_or_create_grid

__version__ = '0.1.0'

__all__ = [
    'GeoCoordinates',
    'FaceCoordinates',
    'LatticeIndex',
    'GridCell',
    'GridError',
    'GridConfigurationError',
    'ProjectionMappingError',
    'InvalidCoordinatesError',
    'ISEA3HGrid',
    'GridFactory',
    'get_or_create_grid',
]
