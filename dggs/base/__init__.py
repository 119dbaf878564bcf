"""Base abstractions for grid engines."""

from .grid import BaseGrid

__all__ = ['BaseGrid']
