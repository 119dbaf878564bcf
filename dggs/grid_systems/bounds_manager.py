"""Bounds management for bounding-box cell enumeration."""

from typing import Tuple, Dict, List, Optional, Iterable, cast
from dataclasses import dataclass
import logging

from ..config import config as default_config
from ..abstractions.types import GridCell
from ..projections.wgs84 import area_of_lat_lon_rectangle

logger = logging.getLogger(__name__)


@dataclass
class BoundsDefinition:
    """Structured bounds definition in geographic coordinates."""
    name: str
    bounds: Tuple[float, float, float, float]  # minx, miny, maxx, maxy (lon/lat)
    crs: str = "EPSG:4326"
    category: str = "custom"  # global, continent, country, region, custom, chunk
    metadata: Optional[Dict] = None

    def __post_init__(self):
        if len(self.bounds) != 4:
            raise ValueError(f"Bounds must have 4 values (minx, miny, maxx, maxy), got: {self.bounds}")
        minx, miny, maxx, maxy = (float(v) for v in self.bounds)
        if minx > maxx or miny > maxy:
            raise ValueError(f"Bounds of '{self.name}' have min > max: {self.bounds}")
        if minx < -180 or maxx > 180 or miny < -90 or maxy > 90:
            raise ValueError(f"Bounds of '{self.name}' exceed the globe: {self.bounds}")
        self.bounds = (minx, miny, maxx, maxy)

    @property
    def lat_lon_range(self) -> Tuple[float, float, float, float]:
        """Bounds in the argument order of cells_for_bound: (lat0, lat1, lon0, lon1)."""
        minx, miny, maxx, maxy = self.bounds
        return miny, maxy, minx, maxx

    @property
    def area_km2(self) -> float:
        """Area on the WGS84 ellipsoid in km²."""
        minx, miny, maxx, maxy = self.bounds
        return area_of_lat_lon_rectangle(miny, maxy, minx, maxx)

    def contains(self, x: float, y: float) -> bool:
        """Check if point is within bounds."""
        return (self.bounds[0] <= x <= self.bounds[2] and
                self.bounds[1] <= y <= self.bounds[3])


class BoundsManager:
    """Resolve region names to bounds and split large bounds for enumeration."""

    # Predefined regions
    REGIONS = {
        # Global
        'global': BoundsDefinition('global', (-180, -90, 180, 90), category='global'),

        # Continents (simplified bounds)
        'africa': BoundsDefinition('africa', (-20, -35, 55, 37), category='continent'),
        'asia': BoundsDefinition('asia', (25, -10, 180, 80), category='continent'),
        'europe': BoundsDefinition('europe', (-25, 35, 50, 71), category='continent'),
        'north_america': BoundsDefinition('north_america', (-170, 15, -50, 85), category='continent'),
        'south_america': BoundsDefinition('south_america', (-85, -56, -35, 15), category='continent'),
        'oceania': BoundsDefinition('oceania', (110, -50, 180, -10), category='continent'),
        'antarctica': BoundsDefinition('antarctica', (-180, -90, 180, -60), category='continent'),

        # Climate bands
        'tropical': BoundsDefinition('tropical', (-180, -23.5, 180, 23.5), category='region'),
        'arctic': BoundsDefinition('arctic', (-180, 66.5, 180, 90), category='region'),
        'temperate_north': BoundsDefinition('temperate_north', (-180, 23.5, 180, 66.5), category='region'),
        'temperate_south': BoundsDefinition('temperate_south', (-180, -66.5, 180, -23.5), category='region'),

        # Example countries
        'usa': BoundsDefinition('usa', (-125, 24, -66, 49), category='country'),
        'brazil': BoundsDefinition('brazil', (-74, -34, -34, 5), category='country'),
        'australia': BoundsDefinition('australia', (113, -44, 154, -10), category='country'),
        'china': BoundsDefinition('china', (73, 18, 135, 54), category='country'),
    }

    def __init__(self, config=None):
        """
        Initialize bounds manager.

        Args:
            config: Config instance to read custom regions from (module config by default)
        """
        self.config = config or default_config
        self.custom_regions: Dict[str, BoundsDefinition] = {}
        self._load_custom_regions()

    def _load_custom_regions(self):
        """Load custom regions from config."""
        custom_bounds = self.config.get('processing_bounds.custom', {}) or {}

        for name, bounds_config in custom_bounds.items():
            try:
                if isinstance(bounds_config, (list, tuple)) and len(bounds_config) == 4:
                    self.custom_regions[name] = BoundsDefinition(
                        name=name,
                        bounds=cast(Tuple[float, float, float, float], tuple(bounds_config)),
                        category='custom'
                    )
                elif isinstance(bounds_config, dict):
                    self.custom_regions[name] = BoundsDefinition(
                        name=name,
                        bounds=tuple(bounds_config['bounds']),
                        category=bounds_config.get('category', 'custom'),
                        metadata=bounds_config.get('metadata')
                    )
                else:
                    logger.warning(f"Ignoring custom region '{name}': expected 4 bounds or a mapping")
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Ignoring custom region '{name}': {e}")

    def get_bounds(self, name: str) -> BoundsDefinition:
        """
        Get bounds by name.

        Args:
            name: Region name or 'minx,miny,maxx,maxy' string

        Returns:
            BoundsDefinition object
        """
        if name in self.REGIONS:
            return self.REGIONS[name]

        if name in self.custom_regions:
            return self.custom_regions[name]

        if ',' in name:
            try:
                parts = [float(x.strip()) for x in name.split(',')]
            except ValueError:
                parts = []
            if len(parts) == 4:
                return BoundsDefinition(
                    name='custom_bounds',
                    bounds=cast(Tuple[float, float, float, float], tuple(parts)),
                    category='custom'
                )

        raise ValueError(f"Unknown bounds: {name}. Available: {self.list_available()}")

    def list_available(self) -> Dict[str, List[str]]:
        """List all available bounds grouped by category."""
        available: Dict[str, List[str]] = {}
        for name, bounds_def in self.REGIONS.items():
            available.setdefault(bounds_def.category, []).append(name)
        if self.custom_regions:
            available.setdefault('custom', []).extend(self.custom_regions.keys())
        return available

    def cells_within(self, cells: Iterable[GridCell], bounds: BoundsDefinition) -> List[GridCell]:
        """
        Keep the cells whose center lies inside the bounds.

        Enumeration returns nearby cells as well; this narrows the result to
        the cells centered in the requested region.

        Args:
            cells: Grid cells
            bounds: Bounds to filter by

        Returns:
            Cells with centers inside the bounds
        """
        return [cell for cell in cells if bounds.contains(cell.lon, cell.lat)]

    def subdivide_bounds(self,
                         bounds: BoundsDefinition,
                         max_size_degrees: float = 10.0) -> List[BoundsDefinition]:
        """
        Subdivide large bounds into smaller chunks for processing.

        Chunks share their borders, so cells on a border are found from both
        sides.

        Args:
            bounds: Bounds to subdivide
            max_size_degrees: Maximum size in degrees for each chunk

        Returns:
            List of subdivided bounds
        """
        if max_size_degrees <= 0:
            raise ValueError(f"max_size_degrees must be positive, got: {max_size_degrees}")

        minx, miny, maxx, maxy = bounds.bounds
        width = maxx - minx
        height = maxy - miny

        if width <= max_size_degrees and height <= max_size_degrees:
            return [bounds]

        x_divisions = int(width / max_size_degrees) + 1
        y_divisions = int(height / max_size_degrees) + 1
        chunk_width = width / x_divisions
        chunk_height = height / y_divisions

        chunks = []
        for i in range(x_divisions):
            for j in range(y_divisions):
                chunk_bounds = (
                    minx + i * chunk_width,
                    miny + j * chunk_height,
                    maxx if i == x_divisions - 1 else minx + (i + 1) * chunk_width,
                    maxy if j == y_divisions - 1 else miny + (j + 1) * chunk_height
                )
                chunks.append(BoundsDefinition(
                    name=f"{bounds.name}_chunk_{i}_{j}",
                    bounds=chunk_bounds,
                    crs=bounds.crs,
                    category='chunk',
                    metadata={'parent': bounds.name, 'chunk_index': (i, j)}
                ))

        logger.info(f"Subdivided {bounds.name} into {len(chunks)} chunks")
        return chunks
