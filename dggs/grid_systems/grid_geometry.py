# dggs/grid_systems/grid_geometry.py
"""Lattice geometry of the aperture-3 hexagonal grid on one icosahedron face.

All lengths are in the units of the projection's face planes (km). Lattice
computations run in canonical axes: at odd internal resolutions the lattice is
rotated by 90 degrees with respect to the face, which is handled by swapping x
and y. The face triangle itself is never swapped.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, Tuple

from ..abstractions.types import FaceCoordinates, LatticeIndex

SQRT3 = math.sqrt(3)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class GridGeometry:
    """Immutable constants of the lattice at one resolution."""
    resolution: int
    triangle_base: float
    edge_tolerance: float = 1e-9

    internal_resolution: int = field(init=False)
    swapped: bool = field(init=False)
    l: float = field(init=False)
    l_half: float = field(init=False, repr=False)
    l_third: float = field(init=False, repr=False)
    l_sixth: float = field(init=False, repr=False)
    row_spacing: float = field(init=False, repr=False)
    row_spacing_half: float = field(init=False, repr=False)
    triangle_a: float = field(init=False, repr=False)
    triangle_b: float = field(init=False, repr=False)
    triangle_c: float = field(init=False, repr=False)
    triangle_height: float = field(init=False, repr=False)
    tolerance: float = field(init=False, repr=False)

    @classmethod
    def from_resolution(cls, resolution: int, triangle_base: float,
                        edge_tolerance: float = 1e-9) -> 'GridGeometry':
        """
        Build the geometry for a resolution.

        Args:
            resolution: Resolution as used by the grid (>= 1)
            triangle_base: Side length of an icosahedron face
            edge_tolerance: Tolerance of the point-in-face test, relative to the side length

        Returns:
            GridGeometry
        """
        return cls(resolution=resolution, triangle_base=triangle_base, edge_tolerance=edge_tolerance)

    def __post_init__(self):
        r = self.resolution - 1
        l = self.triangle_base * (1 / SQRT3) ** r
        constants = {
            'internal_resolution': r,
            'swapped': r % 2 == 1,
            'l': l,
            'l_half': l / 2,
            'l_third': l / 3,
            'l_sixth': l / 6,
            'row_spacing': l / SQRT3,
            'row_spacing_half': l / (2 * SQRT3),
            'triangle_a': self.triangle_base / 2,
            'triangle_b': self.triangle_base / SQRT3,
            'triangle_c': self.triangle_base / (2 * SQRT3),
            'triangle_height': SQRT3 / 2 * self.triangle_base,
            'tolerance': self.edge_tolerance * self.triangle_base,
        }
        for name, value in constants.items():
            object.__setattr__(self, name, value)

    @property
    def diameter(self) -> float:
        """Diameter of a cell on the icosahedron."""
        return 2 * self.l / 3

    # canonical axes

    def to_canonical(self, x: float, y: float) -> Tuple[float, float]:
        return (y, x) if self.swapped else (x, y)

    def from_canonical(self, x: float, y: float) -> Tuple[float, float]:
        return (y, x) if self.swapped else (x, y)

    # lattice

    def lattice_center(self, face: int, index: LatticeIndex) -> FaceCoordinates:
        """Center of a lattice point, in face axes."""
        column, row = index
        x = column * self.l_half
        y = (row + 0.5 if column % 2 else row) * self.row_spacing
        x, y = self.from_canonical(x, y)
        return FaceCoordinates(face, x, y)

    def nearest_index(self, c: FaceCoordinates) -> LatticeIndex:
        """Lattice index of the cell containing a point of a face plane."""
        x, y = self.to_canonical(c.x, c.y)
        # nearest column without row offset, nearest row within it
        column = 2 * round_half_up(x / self.l)
        row = round_half_up(y / self.row_spacing)
        x_center = column * self.l_half
        y_center = row * self.row_spacing
        dx = abs(x - x_center)
        if dx <= self.l_sixth:
            return LatticeIndex(column, row)

        # neighbouring offset column, half a row up or down
        candidate = LatticeIndex(column + 1 if x > x_center else column - 1,
                                 row if y > y_center else row - 1)
        if dx > self.l_third:
            return candidate
        x2 = candidate.column * self.l_half
        y2 = (candidate.row + 0.5) * self.row_spacing
        if (x - x_center) ** 2 + (y - y_center) ** 2 <= (x - x2) ** 2 + (y - y2) ** 2:
            return LatticeIndex(column, row)
        return candidate

    def nearest_center(self, c: FaceCoordinates) -> FaceCoordinates:
        return self.lattice_center(c.face, self.nearest_index(c))

    # face triangle

    def contains(self, c: FaceCoordinates, orientation: int) -> bool:
        """
        Check whether a point of a face plane lies inside the face triangle.

        Args:
            c: Point in face axes
            orientation: +1 if the face's tip points to positive y, else -1

        Returns:
            True if inside or within the edge tolerance
        """
        y = orientation * c.y
        t = self.tolerance
        return (y <= SQRT3 * c.x + self.triangle_b + t
                and y <= -SQRT3 * c.x + self.triangle_b + t
                and y >= -self.triangle_c - t)

    def face_extent(self, orientation: int) -> Tuple[float, float, float, float]:
        """Bounding rectangle (xmin, xmax, ymin, ymax) of the face triangle, in face axes."""
        if orientation > 0:
            return -self.triangle_a, self.triangle_a, -self.triangle_c, self.triangle_b
        return -self.triangle_a, self.triangle_a, -self.triangle_b, self.triangle_c

    def overlaps_face(self, rect: Tuple[float, float, float, float], orientation: int) -> bool:
        """Check whether a rectangle, expanded by one lattice spacing, overlaps the face extent."""
        xmin, xmax, ymin, ymax = rect
        fxmin, fxmax, fymin, fymax = self.face_extent(orientation)
        return (xmin - self.l <= fxmax and xmax + self.l >= fxmin
                and ymin - self.l <= fymax and ymax + self.l >= fymin)

    def clip_to_face(self, rect: Tuple[float, float, float, float],
                     orientation: int) -> Tuple[float, float, float, float]:
        """Intersection of a rectangle, expanded by one lattice spacing, with the face extent.

        Only meaningful if overlaps_face() holds for the rectangle.
        """
        xmin, xmax, ymin, ymax = rect
        fxmin, fxmax, fymin, fymax = self.face_extent(orientation)
        return (max(xmin - self.l, fxmin), min(xmax + self.l, fxmax),
                max(ymin - self.l, fymin), min(ymax + self.l, fymax))

    def indices_in_rect(self, rect: Tuple[float, float, float, float]) -> Iterator[LatticeIndex]:
        """
        Lattice indices covering a rectangle given in face axes.

        The corners are snapped to lattice indices in canonical axes and the
        range is widened by one index in every direction.
        """
        xmin, xmax, ymin, ymax = rect
        x0, y0 = self.to_canonical(xmin, ymin)
        x1, y1 = self.to_canonical(xmax, ymax)
        columns = [round_half_up(x / self.l_half) for x in (x0, x1)]
        rows = [round_half_up(y / self.row_spacing - 0.5 * (column % 2))
                for column, y in zip(columns, (y0, y1))]
        for column in range(min(columns) - 1, max(columns) + 2):
            for row in range(min(rows) - 1, max(rows) + 2):
                yield LatticeIndex(column, row)

    def centers_in_face(self, face: int, rect: Tuple[float, float, float, float],
                        orientation: int) -> Iterator[FaceCoordinates]:
        """Lattice centers inside the face triangle whose index lies in the range covering rect."""
        for index in self.indices_in_rect(rect):
            center = self.lattice_center(face, index)
            if self.contains(center, orientation):
                yield center
