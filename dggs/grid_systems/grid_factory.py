# dggs/grid_systems/grid_factory.py
"""Factory for creating and sharing grid engines."""

import threading
from typing import Dict, List, Optional, Union, Tuple, Any, Type
import logging
from dataclasses import dataclass, field

from ..base import BaseGrid
from ..exceptions import GridConfigurationError
from .isea3h_grid import ISEA3HGrid

logger = logging.getLogger(__name__)


@dataclass
class GridSpecification:
    """Specification for grid creation."""
    grid_type: str
    resolution: int
    name: Optional[str] = None
    description: Optional[str] = None
    settings: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.name is None:
            self.name = f"{self.grid_type}_{self.resolution}"

    def cache_key(self) -> Tuple:
        return self.grid_type, self.resolution, tuple(sorted(self.settings.items()))

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            'grid_type': self.grid_type,
            'resolution': self.resolution,
            'name': self.name,
            'description': self.description,
            'settings': dict(self.settings)
        }


class GridFactory:
    """
    Factory for creating grid engines.

    Handles:
    - Grid creation from specifications
    - Sharing one engine per specification (engines are immutable)
    """

    GRID_TYPES: Dict[str, Type[BaseGrid]] = {
        'isea3h': ISEA3HGrid,
    }

    def __init__(self, config=None):
        """
        Initialize grid factory.

        Args:
            config: Config instance passed on to created grids
        """
        self.config = config
        self._grid_cache: Dict[Tuple, BaseGrid] = {}
        self._lock = threading.RLock()

    def create_grid(self, spec: Union[GridSpecification, Dict]) -> BaseGrid:
        """
        Create a grid from specification, reusing a cached one if possible.

        Args:
            spec: Grid specification

        Returns:
            Grid instance
        """
        if isinstance(spec, dict):
            spec = GridSpecification(**spec)

        grid_class = self.GRID_TYPES.get(spec.grid_type.lower())
        if grid_class is None:
            raise GridConfigurationError(
                f"Unknown grid type: {spec.grid_type}. Available: {sorted(self.GRID_TYPES)}"
            )

        key = spec.cache_key()
        with self._lock:
            grid = self._grid_cache.get(key)
            if grid is None:
                logger.info(f"Creating {spec.grid_type} grid '{spec.name}' at resolution {spec.resolution}")
                grid = grid_class(resolution=spec.resolution, config=self.config, **spec.settings)
                self._grid_cache[key] = grid
            else:
                logger.debug(f"Reusing cached grid for {spec.name}")
        return grid

    def get_grid(self, resolution: int, grid_type: str = 'isea3h', **settings) -> BaseGrid:
        return self.create_grid(GridSpecification(grid_type=grid_type, resolution=resolution, settings=settings))

    def cached_grids(self) -> List[str]:
        with self._lock:
            return [f"{key[0]}_{key[1]}" for key in self._grid_cache]

    def clear_cache(self):
        with self._lock:
            self._grid_cache.clear()


_default_factory: Optional[GridFactory] = None
_default_factory_lock = threading.Lock()


def get_default_factory() -> GridFactory:
    global _default_factory
    with _default_factory_lock:
        if _default_factory is None:
            _default_factory = GridFactory()
        return _default_factory


def get_or_create_grid(resolution: int, grid_type: str = 'isea3h', **settings) -> BaseGrid:
    """
    Get the shared grid for a resolution, creating it on first use.

    Args:
        resolution: Resolution level
        grid_type: Type of grid
        **settings: Grid settings overriding the configuration

    Returns:
        Grid instance
    """
    return get_default_factory().get_grid(resolution, grid_type, **settings)
