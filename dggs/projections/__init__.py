"""Equal-area projection of the Earth onto the icosahedron."""

from .isea import ISEAProjection
from .wgs84 import AREA_OF_EARTH, RADIUS_AUTHALIC, ellipsoid_constants

__all__ = ['ISEAProjection', 'AREA_OF_EARTH', 'RADIUS_AUTHALIC', 'ellipsoid_constants']
