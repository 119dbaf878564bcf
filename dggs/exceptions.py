"""Grid and projection exceptions for consistent error handling."""

import functools
from typing import Optional


class GridError(Exception):
    """Base grid error."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception


class GridConfigurationError(GridError):
    """Raised when a grid is constructed with an invalid resolution or setting."""
    pass


class ProjectionMappingError(GridError):
    """Raised when the projection cannot transform a point."""
    pass


class InvalidCoordinatesError(ProjectionMappingError):
    """Raised for malformed geographic input (non-finite or out of range)."""
    pass


def handle_projection_error(operation_name: str):
    """Decorator to turn arithmetic failures inside projection code into ProjectionMappingError."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except GridError:
                raise
            except (ValueError, ZeroDivisionError, OverflowError, FloatingPointError) as e:
                raise ProjectionMappingError(
                    f"{operation_name} failed: {e}", e
                ) from e
        return wrapper
    return decorator
