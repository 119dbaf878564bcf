# dggs/grid_systems/__init__.py
"""Grid system implementations."""

from .bounds_manager import BoundsManager, BoundsDefinition
from .grid_geometry import GridGeometry
from .isea3h_grid import ISEA3HGrid
from .grid_factory import (
    GridFactory,
    GridSpecification,
    get_or_create_grid
)

__all__ = [
    'BoundsManager',
    'BoundsDefinition',
    'GridGeometry',
    'ISEA3HGrid',
    'GridFactory',
    'GridSpecification',
    'get_or_create_grid'
]
