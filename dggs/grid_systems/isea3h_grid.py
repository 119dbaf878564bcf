# dggs/grid_systems/isea3h_grid.py
"""ISEA3H discrete global grid.

Hexagonal cells of equal area (plus 12 pentagons at the icosahedron vertices)
obtained by tiling the faces of the ISEA projection with an aperture-3
hexagonal lattice. Cells are identified by resolution and geographic center.
"""

import contextvars
import math
import numbers
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Union, List, Set, Tuple, Dict, Any

import pyproj

from ..abstractions.types import GeoCoordinates, FaceCoordinates, GridCell, CELL_ID_PREFIX
from ..base import BaseGrid
from ..exceptions import GridConfigurationError, InvalidCoordinatesError
from ..infrastructure.logging import get_logger, log_operation, grid_context
from ..projections.isea import ISEAProjection
from ..projections.wgs84 import ellipsoid_constants
from .bounds_manager import BoundsManager, BoundsDefinition
from .grid_geometry import GridGeometry

logger = get_logger(__name__)

NUMBER_OF_PENTAGONS = 12
PENTAGON_AREA_RATIO = 5 / 6.

Region = Union[str, BoundsDefinition, Tuple[float, float, float, float]]


def number_of_hexagons_on_face(internal_resolution: int) -> int:
    """H(0) = 1, H(i) = 3 H(i-1) + 1."""
    h = 1
    for _ in range(internal_resolution):
        h = 3 * h + 1
    return h


class ISEA3HGrid(BaseGrid):
    """
    ISEA3H grid at a single resolution.

    The grid is immutable after construction and can be shared between
    threads. All lengths are in km on the icosahedron whose faces have the
    area of the authalic sphere; areas are in km² on the ellipsoid.
    """

    def __init__(self, resolution: int, config=None, **kwargs):
        """
        Initialize the grid.

        Args:
            resolution: Resolution level (>= 1); resolution 1 has 20 hexagons and 12 pentagons
            config: Config instance (module config by default)
            **kwargs: Overrides of the ``grids.isea3h`` settings
                (center_precision, max_workers, max_chunk_degrees,
                edge_tolerance, sample_spacing_factor)
        """
        if isinstance(resolution, bool) or not isinstance(resolution, numbers.Integral) or resolution < 1:
            raise GridConfigurationError(f"Resolution must be an integer >= 1, got: {resolution!r}")

        resolution = int(resolution)
        super().__init__(resolution=resolution, config=config, **kwargs)

        self.precision = self._setting('center_precision', int, 9, minimum=0)
        self.max_workers = self._setting('max_workers', int, 1, minimum=1)
        self.max_chunk_degrees = self._setting('max_chunk_degrees', float, 30.0, minimum=1e-6)
        self.edge_tolerance = self._setting('edge_tolerance', float, 1e-9, minimum=0.0)
        self.sample_spacing_factor = self._setting('sample_spacing_factor', float, 0.25, minimum=1e-6)

        ellps = self._config_source.get('earth.ellipsoid', 'WGS84')
        try:
            self.earth = ellipsoid_constants(ellps)
        except (KeyError, ValueError, pyproj.exceptions.GeodError) as e:
            raise GridConfigurationError(f"Unknown ellipsoid: {ellps!r}", e) from e

        self.projection = ISEAProjection(radius=self.earth.radius_authalic)
        self.projection.set_orientation_symmetric_equator()
        self.geometry = GridGeometry.from_resolution(
            resolution, self.projection.length_of_triangle_base(), self.edge_tolerance
        )
        self._faces = tuple(range(1, self.projection.number_of_faces() + 1))
        self._orientations = {face: self.projection.face_orientation(face) for face in self._faces}

        logger.info(
            f"Created ISEA3H grid at resolution {resolution}: "
            f"{self.number_of_cells()} cells, lattice spacing {self.geometry.l:.3f} km"
        )

    def _setting(self, key: str, kind, default, minimum):
        value = self.config.get(key, default)
        try:
            if isinstance(value, bool):
                raise TypeError(f"{key} must be a number")
            converted = kind(value)
        except (TypeError, ValueError) as e:
            raise GridConfigurationError(f"Invalid setting {key}={value!r}", e) from e
        if kind is int and converted != value:
            raise GridConfigurationError(f"Setting {key} must be an integer, got: {value!r}")
        if not converted >= minimum:
            raise GridConfigurationError(f"Setting {key} must be >= {minimum}, got: {value!r}")
        return converted

    @property
    def name(self) -> str:
        return f"{CELL_ID_PREFIX}_{self.resolution}"

    # structural constants

    def diameter_of_cell_on_icosahedron(self) -> float:
        """Diameter of a cell on the icosahedron (km)."""
        return self.geometry.diameter

    def number_of_hexagon_cells(self) -> int:
        return 20 * number_of_hexagons_on_face(self.geometry.internal_resolution)

    def number_of_pentagon_cells(self) -> int:
        return NUMBER_OF_PENTAGONS

    def number_of_cells(self) -> int:
        return self.number_of_hexagon_cells() + self.number_of_pentagon_cells()

    def area_of_hexagon_cell(self) -> float:
        """Area of a hexagon cell in km²; pentagons count as 5/6 of a hexagon."""
        return self.earth.area / (self.number_of_hexagon_cells()
                                  + PENTAGON_AREA_RATIO * self.number_of_pentagon_cells())

    def area_of_pentagon_cell(self) -> float:
        return PENTAGON_AREA_RATIO * self.area_of_hexagon_cell()

    # lookup

    def cell_for_face_coordinates(self, c: FaceCoordinates) -> FaceCoordinates:
        """Center of the cell containing a point of a face plane."""
        return self.geometry.nearest_center(c)

    def cell_for_geo_coordinates(self, c: GeoCoordinates) -> GridCell:
        center = self.cell_for_face_coordinates(self.projection.sphere_to_icosahedron(c))
        return self._cell(self.projection.icosahedron_to_sphere(center))

    def cell_for_location(self, lat: float, lon: float) -> GridCell:
        return self.cell_for_geo_coordinates(GeoCoordinates(lat, lon))

    def cell_for_centroid(self, geometry) -> GridCell:
        """
        Get the cell containing the centroid of a shapely geometry.

        Args:
            geometry: Shapely geometry with x = longitude, y = latitude

        Returns:
            GridCell
        """
        if geometry is None or geometry.is_empty:
            raise InvalidCoordinatesError("Cannot take the centroid of an empty geometry")
        centroid = geometry.centroid
        return self.cell_for_location(centroid.y, centroid.x)

    def get_cell_id(self, x: float, y: float) -> str:
        return self.cell_for_location(y, x).cell_id

    def get_cell_by_id(self, cell_id: str) -> Optional[GridCell]:
        """Parse a cell id; None unless it names a cell of this grid."""
        if not isinstance(cell_id, str):
            return None
        parts = cell_id.split('_')
        if len(parts) != 4 or parts[0] != CELL_ID_PREFIX:
            return None
        try:
            resolution = int(parts[1])
            center = GeoCoordinates(float(parts[2]), float(parts[3]))
        except (ValueError, InvalidCoordinatesError):
            return None
        if resolution != self.resolution:
            return None

        cell = self.cell_for_geo_coordinates(center)
        return cell if cell.cell_id == cell_id else None

    def _cell(self, center: GeoCoordinates) -> GridCell:
        return GridCell(self.resolution, center, self.precision)

    # enumeration

    @log_operation("cells_for_bound", log_args=True)
    def cells_for_bound(self, lat0: float, lat1: float, lon0: float, lon1: float) -> Set[GridCell]:
        """
        Get all cells centered in a latitude/longitude box, and possibly some nearby cells.

        The box must not cross the antimeridian; the order of the two
        latitudes and of the two longitudes does not matter.

        Args:
            lat0: First latitude
            lat1: Second latitude
            lon0: First longitude
            lon1: Second longitude

        Returns:
            Set of GridCell
        """
        return self._cells_for_bound(lat0, lat1, lon0, lon1)

    @log_operation("cells_for_region")
    def cells_for_region(self, region: Region, bounds_manager: Optional[BoundsManager] = None) -> Set[GridCell]:
        """
        Get the cells of a named region, a 'minx,miny,maxx,maxy' string, a BoundsDefinition or a bounds tuple.

        Large regions are enumerated in chunks of at most ``max_chunk_degrees``.
        """
        bounds_manager = bounds_manager or BoundsManager(self._config_source)
        if isinstance(region, BoundsDefinition):
            bounds_def = region
        elif isinstance(region, str):
            bounds_def = bounds_manager.get_bounds(region)
        else:
            bounds_def = BoundsDefinition('custom', tuple(region))

        cells: Set[GridCell] = set()
        for chunk in bounds_manager.subdivide_bounds(bounds_def, self.max_chunk_degrees):
            cells |= self._cells_for_bound(*chunk.lat_lon_range)
        logger.info(f"Region {bounds_def.name}: {len(cells)} cells at resolution {self.resolution}")
        return cells

    def _cells_for_bound(self, lat0: float, lat1: float, lon0: float, lon1: float) -> Set[GridCell]:
        corner0 = GeoCoordinates(lat0, lon0)
        corner1 = GeoCoordinates(lat1, lon1)
        lat0, lat1 = sorted((corner0.lat, corner1.lat))
        lon0, lon1 = sorted((corner0.lon, corner1.lon))
        samples = self._box_samples(lat0, lat1, lon0, lon1)

        token = grid_context.set(self.name)
        try:
            if self.max_workers > 1:
                with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                    # worker threads start from an empty context
                    futures = [executor.submit(contextvars.copy_context().run, self._cells_for_face,
                                               face, samples, (lat0, lat1, lon0, lon1))
                               for face in self._faces]
                    results = [future.result() for future in futures]
            else:
                results = [self._cells_for_face(face, samples, (lat0, lat1, lon0, lon1))
                           for face in self._faces]
        finally:
            grid_context.reset(token)

        cells: Set[GridCell] = set()
        for face_cells in results:
            cells |= face_cells
        return cells

    def _cells_for_face(self, face: int, samples: List[GeoCoordinates],
                        box: Tuple[float, float, float, float]) -> Set[GridCell]:
        rect = self._face_rectangle(face, samples, box)
        orientation = self._orientations[face]
        if rect is None:
            logger.debug(f"Face {face} rejected: box not near the face", extra={'context': {'face': face}})
            return set()
        if not self.geometry.overlaps_face(rect, orientation):
            logger.debug(f"Face {face} rejected: box outside the face triangle", extra={'context': {'face': face}})
            return set()

        rect = self.geometry.clip_to_face(rect, orientation)
        return {self._canonical_cell(center)
                for center in self.geometry.centers_in_face(face, rect, orientation)}

    def _canonical_cell(self, center: FaceCoordinates) -> GridCell:
        # centers on face edges are reached from several faces; looking them
        # up again makes the result independent of the face they came from
        return self.cell_for_geo_coordinates(self.projection.icosahedron_to_sphere(center))

    def _box_samples(self, lat0: float, lat1: float, lon0: float, lon1: float) -> List[GeoCoordinates]:
        """Corners of the box and points along its edges, at most the sample spacing apart."""
        spacing = self._sample_spacing()
        samples = []
        n_meridian = max(1, math.ceil(math.radians(lat1 - lat0) / spacing))
        for lon in (lon0, lon1):
            samples += [GeoCoordinates(lat0 + (lat1 - lat0) * i / n_meridian, lon) for i in range(n_meridian + 1)]
        for lat in (lat0, lat1):
            length = math.radians(lon1 - lon0) * math.cos(math.radians(lat))
            n_parallel = max(1, math.ceil(length / spacing))
            samples += [GeoCoordinates(lat, lon0 + (lon1 - lon0) * i / n_parallel) for i in range(1, n_parallel)]
        return samples

    def _sample_spacing(self) -> float:
        """Angular sample spacing in radians."""
        return self.sample_spacing_factor * self.geometry.l / self.earth.radius_authalic

    def _face_rectangle(self, face: int, samples: List[GeoCoordinates],
                        box: Tuple[float, float, float, float]) -> Optional[Tuple[float, float, float, float]]:
        """Planar bounding rectangle (xmin, xmax, ymin, ymax) of the part of the box near a face."""
        lat0, lat1, lon0, lon1 = box
        reach = self.projection.angular_radius_of_face() + 2 * self._sample_spacing()
        points = [c for c in samples if self.projection.angular_distance_to_face_center(face, c) <= reach]
        points += [c for c in self.projection.vertices_of_face(face) + [self.projection.center_of_face(face)]
                   if lat0 <= c.lat <= lat1 and lon0 <= c.lon <= lon1]
        if not points:
            return None

        projected = [self.projection.sphere_to_planes_of_the_faces_of_the_icosahedron(face, c) for c in points]
        xs = [p.x for p in projected]
        ys = [p.y for p in projected]
        return min(xs), max(xs), min(ys), max(ys)

    # statistics

    def calculate_statistics(self) -> Dict[str, Any]:
        """Structural constants of the grid."""
        stats = super().calculate_statistics()
        stats.update({
            'hexagon_cells': self.number_of_hexagon_cells(),
            'pentagon_cells': self.number_of_pentagon_cells(),
            'hexagon_area_km2': self.area_of_hexagon_cell(),
            'pentagon_area_km2': self.area_of_pentagon_cell(),
            'cell_diameter_km': self.diameter_of_cell_on_icosahedron(),
            'lattice_spacing_km': self.geometry.l,
            'triangle_base_km': self.geometry.triangle_base,
            'earth_area_km2': self.earth.area,
            'ellipsoid': self.earth.name,
        })
        return stats
