"""Icosahedral Snyder equal-area (ISEA) projection.

Maps the authalic sphere onto the 20 faces of an icosahedron and back,
preserving area. Each face has its own planar coordinate system with the
origin at the face center and the y axis pointing towards one of the
vertices (faces 1-5 and 11-15) or away from it (faces 6-10 and 16-20), so that
every face triangle has side ``length_of_triangle_base()``.

The projection is described in:

John P. Snyder: An Equal-Area Map Projection for Polyhedral Globes.
Cartographica, 29(1), 10-21, 1992.
"""

import math
from typing import List

import numpy as np

from ..abstractions.types import GeoCoordinates, FaceCoordinates
from ..exceptions import ProjectionMappingError, handle_projection_error
from .wgs84 import RADIUS_AUTHALIC

_GOLDEN_RATIO = (1 + math.sqrt(5)) / 2.
_NUMBER_OF_FACES = 20
_TAN_G = 3 - math.sqrt(5)  # tangent of the spherical distance from face center to vertex
_G = math.atan(_TAN_G)  # 37.37736814 deg
_G_VERTEX = math.radians(36.)  # spherical angle at a vertex between edge and radius
_THETA = math.radians(30.)  # plane angle at a vertex between edge and radius
_COT_THETA = 1 / math.tan(_THETA)
_SECTOR = 2 * math.pi / 3.  # azimuth range of one of the three sub-triangles of a face
# radius ratio R'/R for which a plane face has the area of a spherical face
_R_PRIME = math.sqrt((4 * math.pi / _NUMBER_OF_FACES) / (3 * math.sqrt(3) / 4. * _TAN_G ** 2))
_R_PRIME_TAN_G = _R_PRIME * _TAN_G
_R_PRIME_TAN_G_SQUARE = _R_PRIME_TAN_G ** 2
_NEWTON_ITERATIONS = 30
_NEWTON_TOLERANCE = 1e-15
_FACE_TIE_TOLERANCE = 1e-12


def _to_vector(c: GeoCoordinates) -> np.ndarray:
    lat = math.radians(c.lat)
    lon = math.radians(c.lon)
    return np.array([math.cos(lat) * math.cos(lon), math.cos(lat) * math.sin(lon), math.sin(lat)])


def _to_geo_coordinates(v: np.ndarray) -> GeoCoordinates:
    x, y, z = (float(value) for value in v)
    horizontal = math.hypot(x, y)
    lat = math.degrees(math.atan2(z, horizontal))
    lon = math.degrees(math.atan2(y, x)) if horizontal > 1e-15 else 0.
    return GeoCoordinates(lat, lon)


def _clip(value: float) -> float:
    return max(-1., min(1., value))


def _reduce_azimuth(azimuth: float):
    """Split an azimuth into the sub-triangle number and the azimuth within it."""
    azimuth %= 2 * math.pi
    sector = min(int(azimuth // _SECTOR), 2)
    return sector, azimuth - sector * _SECTOR


class ISEAProjection:
    """Icosahedral Snyder equal-area projection on the authalic sphere."""

    def __init__(self, radius: float = RADIUS_AUTHALIC):
        """
        Initialize the projection.

        Args:
            radius: Radius of the sphere in km (authalic radius of WGS84 by default)
        """
        if not radius > 0:
            raise ValueError(f"Radius must be positive, got: {radius}")
        self._radius = radius
        self._orientation = None
        self.set_orientation(90., 0.)

    # orientation

    def set_orientation(self, lat: float, lon: float):
        """
        Orient the icosahedron.

        In the reference position one vertex lies on the north pole and the
        faces 1-5 surround it, with face 1 starting at longitude 0. The
        icosahedron is first tilted by ``90 - lat`` degrees about the y axis,
        moving the north vertex towards longitude 180, and then turned by
        ``lon`` degrees about the polar axis.

        Args:
            lat: Latitude of the north vertex after tilting, in degrees
            lon: Rotation about the polar axis in degrees
        """
        tilt = -math.radians(90. - lat)
        turn = math.radians(lon)
        rotation_y = np.array([
            [math.cos(tilt), 0., math.sin(tilt)],
            [0., 1., 0.],
            [-math.sin(tilt), 0., math.cos(tilt)],
        ])
        rotation_z = np.array([
            [math.cos(turn), -math.sin(turn), 0.],
            [math.sin(turn), math.cos(turn), 0.],
            [0., 0., 1.],
        ])
        self._build_faces(rotation_z @ rotation_y)
        self._orientation = (lat, lon)

    def set_orientation_symmetric_equator(self):
        """Place the poles on edge midpoints such that the equator is mapped symmetrically."""
        self.set_orientation(math.degrees(math.atan(_GOLDEN_RATIO)), 0.)

    def get_orientation(self):
        return self._orientation

    def _build_faces(self, rotation: np.ndarray):
        lat_ring = math.atan(0.5)
        vertices = [GeoCoordinates(90., 0.)]
        vertices += [GeoCoordinates(math.degrees(lat_ring), self._wrap(72. * k)) for k in range(5)]
        vertices += [GeoCoordinates(-math.degrees(lat_ring), self._wrap(36. + 72. * k)) for k in range(5)]
        vertices.append(GeoCoordinates(-90., 0.))
        self._vertices = np.array([rotation @ _to_vector(v) for v in vertices])

        # (vertices, vertex the y axis is aligned with, orientation)
        faces = []
        for k in range(5):
            faces.append(((0, 1 + k, 1 + (k + 1) % 5), 0, 1))
        for k in range(5):
            faces.append(((1 + k, 1 + (k + 1) % 5, 6 + k), 6 + k, -1))
        for k in range(5):
            faces.append(((6 + k, 6 + (k + 1) % 5, 1 + (k + 1) % 5), 1 + (k + 1) % 5, 1))
        for k in range(5):
            faces.append(((6 + k, 6 + (k + 1) % 5, 11), 11, -1))

        self._face_vertices = [vertex_ids for vertex_ids, _, _ in faces]
        self._face_orientation = np.array([d for _, _, d in faces], dtype=int)
        centers = np.array([self._vertices[list(ids)].sum(axis=0) for ids in self._face_vertices])
        self._centers = centers / np.linalg.norm(centers, axis=1)[:, np.newaxis]

        # internal face frame: e_y towards the reference vertex, e_x = e_y x center
        e_y = []
        e_x = []
        for center, (_, reference, _) in zip(self._centers, faces):
            towards = self._vertices[reference] - np.dot(self._vertices[reference], center) * center
            towards /= np.linalg.norm(towards)
            e_y.append(towards)
            e_x.append(np.cross(towards, center))
        self._e_y = np.array(e_y)
        self._e_x = np.array(e_x)

    @staticmethod
    def _wrap(lon: float) -> float:
        return lon - 360. if lon > 180. else lon

    # properties of the icosahedron

    def number_of_faces(self) -> int:
        return _NUMBER_OF_FACES

    def length_of_triangle_base(self) -> float:
        """Side length of a face triangle in km."""
        return math.sqrt(3) * _R_PRIME_TAN_G * self._radius

    def angular_radius_of_face(self) -> float:
        """Spherical distance from the center of a face to its vertices (radians)."""
        return _G

    def face_orientation(self, face: int) -> int:
        """+1 if the face's reference vertex lies on its positive y axis, else -1."""
        return int(self._face_orientation[self._face_index(face)])

    def center_of_face(self, face: int) -> GeoCoordinates:
        return _to_geo_coordinates(self._centers[self._face_index(face)])

    def vertices_of_face(self, face: int) -> List[GeoCoordinates]:
        return [_to_geo_coordinates(self._vertices[i]) for i in self._face_vertices[self._face_index(face)]]

    def angular_distance_to_face_center(self, face: int, c: GeoCoordinates) -> float:
        """Spherical distance between the center of a face and a location (radians)."""
        center = self._centers[self._face_index(face)]
        p = _to_vector(c)
        return math.atan2(float(np.linalg.norm(np.cross(center, p))), float(np.dot(center, p)))

    def _face_index(self, face: int) -> int:
        if isinstance(face, bool) or not isinstance(face, (int, np.integer)) or not 1 <= face <= _NUMBER_OF_FACES:
            raise ProjectionMappingError(f"Face must be an integer within [1, {_NUMBER_OF_FACES}], got: {face!r}")
        return int(face) - 1

    # projection

    @handle_projection_error("sphere to icosahedron")
    def sphere_to_icosahedron(self, c: GeoCoordinates) -> FaceCoordinates:
        """Project a location onto the face containing it."""
        return self._project(self._face_for_vector(_to_vector(c)), _to_vector(c))

    @handle_projection_error("sphere to face plane")
    def sphere_to_planes_of_the_faces_of_the_icosahedron(self, face: int, c: GeoCoordinates) -> FaceCoordinates:
        """Project a location onto the plane of the given face, even if it lies outside the face."""
        return self._project(self._face_index(face), _to_vector(c))

    @handle_projection_error("icosahedron to sphere")
    def icosahedron_to_sphere(self, c: FaceCoordinates) -> GeoCoordinates:
        """Map face coordinates back to the sphere."""
        index = self._face_index(c.face)
        if not (math.isfinite(c.x) and math.isfinite(c.y)):
            raise ProjectionMappingError(f"Face coordinates must be finite, got ({c.x}, {c.y})")
        return _to_geo_coordinates(self._unproject(index, c.x, c.y))

    def _face_for_vector(self, p: np.ndarray) -> int:
        # nearest face center, lowest face id on boundaries
        dots = self._centers @ p
        return int(np.flatnonzero(dots >= dots.max() - _FACE_TIE_TOLERANCE)[0])

    def _project(self, index: int, p: np.ndarray) -> FaceCoordinates:
        center = self._centers[index]
        cos_z = _clip(float(np.dot(center, p)))
        sin_z = float(np.linalg.norm(np.cross(center, p)))
        z = math.atan2(sin_z, cos_z)
        if z < 1e-15:
            return FaceCoordinates(index + 1, 0., 0.)
        tangent = p - cos_z * center
        sector, az = _reduce_azimuth(math.atan2(float(np.dot(tangent, self._e_x[index])),
                                                float(np.dot(tangent, self._e_y[index]))))

        # spherical distance from the face center to the edge in this direction
        q = math.atan2(_TAN_G, math.cos(az) + math.sin(az) * _COT_THETA)
        h = math.acos(_clip(math.sin(az) * math.sin(_G_VERTEX) * math.cos(_G) - math.cos(az) * math.cos(_G_VERTEX)))
        area = az + _G_VERTEX + h - math.pi
        az_plane = math.atan2(2 * area, _R_PRIME_TAN_G_SQUARE - 2 * area * _COT_THETA)
        d_plane = _R_PRIME_TAN_G / (math.cos(az_plane) + math.sin(az_plane) * _COT_THETA)
        f = d_plane / (2 * _R_PRIME * math.sin(q / 2))
        rho = 2 * _R_PRIME * f * math.sin(z / 2) * self._radius
        az_plane += sector * _SECTOR

        d = self._face_orientation[index]
        return FaceCoordinates(index + 1, float(d * rho * math.sin(az_plane)), float(d * rho * math.cos(az_plane)))

    def _unproject(self, index: int, x: float, y: float) -> np.ndarray:
        center = self._centers[index]
        d = self._face_orientation[index]
        x = d * x / self._radius
        y = d * y / self._radius
        rho = math.hypot(x, y)
        if rho < 1e-15:
            return center.copy()
        sector, az_plane = _reduce_azimuth(math.atan2(x, y))

        area = _R_PRIME_TAN_G_SQUARE * math.sin(az_plane) / (2 * (math.cos(az_plane) + math.sin(az_plane) * _COT_THETA))
        az = self._solve_azimuth(area, az_plane)

        q = math.atan2(_TAN_G, math.cos(az) + math.sin(az) * _COT_THETA)
        d_plane = _R_PRIME_TAN_G / (math.cos(az_plane) + math.sin(az_plane) * _COT_THETA)
        f = d_plane / (2 * _R_PRIME * math.sin(q / 2))
        z = 2 * math.asin(_clip(rho / (2 * _R_PRIME * f)))
        az += sector * _SECTOR

        direction = math.cos(az) * self._e_y[index] + math.sin(az) * self._e_x[index]
        p = math.cos(z) * center + math.sin(z) * direction
        return p / np.linalg.norm(p)

    @staticmethod
    def _solve_azimuth(area: float, az: float) -> float:
        """Newton iteration for the spherical azimuth enclosing the given area."""
        for _ in range(_NEWTON_ITERATIONS):
            h = math.acos(_clip(math.sin(az) * math.sin(_G_VERTEX) * math.cos(_G) - math.cos(az) * math.cos(_G_VERTEX)))
            value = az + _G_VERTEX + h - math.pi - area
            derivative = 1 - (math.cos(az) * math.sin(_G_VERTEX) * math.cos(_G) + math.sin(az) * math.cos(_G_VERTEX)) / math.sin(h)
            step = value / derivative
            az -= step
            if abs(step) < _NEWTON_TOLERANCE:
                break
        return az
