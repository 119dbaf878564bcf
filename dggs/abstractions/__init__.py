"""Abstractions layer: value types shared across the package."""

from .types import GeoCoordinates, FaceCoordinates, LatticeIndex, GridCell

__all__ = ['GeoCoordinates', 'FaceCoordinates', 'LatticeIndex', 'GridCell']
