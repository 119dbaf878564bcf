"""Base grid class for discrete global grid systems."""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Set, Tuple
import logging

from ..abstractions.types import GridCell
from ..config import config as default_config

logger = logging.getLogger(__name__)


class BaseGrid(ABC):
    """
    Base class for all grid engines.

    Handles:
    - Settings (``grids.<type>`` from config, overridden by keyword arguments)
    - The lookup and enumeration contract
    - Statistics
    """

    def __init__(self,
                 resolution: int,
                 bounds: Optional[Tuple[float, float, float, float]] = None,
                 config=None,
                 **kwargs):
        """
        Initialize grid system.

        Args:
            resolution: Grid resolution level
            bounds: Default extent (minx, miny, maxx, maxy) in degrees
            config: Config instance (module config by default)
            **kwargs: Grid-specific settings overriding the configured ones
        """
        self.resolution = resolution
        self._config_source = config or default_config
        self.bounds = tuple(bounds) if bounds is not None else self._get_default_bounds()
        self.config = self._merge_config(kwargs)

    @property
    def grid_type(self) -> str:
        return self.__class__.__name__.lower().replace('grid', '')

    def _merge_config(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge kwargs with default config."""
        default_config_values = self._config_source.get(f'grids.{self.grid_type}', {}) or {}
        return {**default_config_values, **kwargs}

    def _get_default_bounds(self) -> Tuple[float, float, float, float]:
        """Get default bounds from config."""
        return tuple(self._config_source.get('grids.default_bounds', [-180, -90, 180, 90]))

    @abstractmethod
    def cell_for_location(self, lat: float, lon: float) -> GridCell:
        """
        Get the cell containing a location.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            GridCell
        """
        pass

    @abstractmethod
    def cells_for_bound(self, lat0: float, lat1: float, lon0: float, lon1: float) -> Set[GridCell]:
        """
        Get the cells intersecting a latitude/longitude box.

        Returns:
            Set of GridCell objects, a superset of the cells centered in the box
        """
        pass

    @abstractmethod
    def get_cell_id(self, x: float, y: float) -> str:
        """
        Get cell ID for a coordinate.

        Args:
            x: Longitude
            y: Latitude

        Returns:
            Cell ID
        """
        pass

    @abstractmethod
    def get_cell_by_id(self, cell_id: str) -> Optional[GridCell]:
        """
        Get cell by ID.

        Args:
            cell_id: Cell identifier

        Returns:
            GridCell or None
        """
        pass

    @abstractmethod
    def number_of_cells(self) -> int:
        """Total number of cells covering the globe."""
        pass

    def calculate_statistics(self) -> Dict[str, Any]:
        """Calculate grid statistics."""
        return {
            'grid_type': self.grid_type,
            'resolution': self.resolution,
            'cell_count': self.number_of_cells(),
            'bounds': self.bounds,
            'config': dict(self.config),
        }
