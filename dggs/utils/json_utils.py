# dggs/utils/json_utils.py
"""JSON utilities for grid cells, numpy values and shapely geometries."""

import json
from pathlib import Path

import numpy as np
from shapely.geometry.base import BaseGeometry

from ..abstractions.types import GridCell, GeoCoordinates, FaceCoordinates


class ExtendedJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles the package's value types.

    Cells become their ``to_dict()``, sets of cells become lists ordered by
    cell id, geometries become WKT and numpy scalars become Python numbers.
    """

    def default(self, obj):
        if isinstance(obj, GridCell):
            return obj.to_dict()
        if isinstance(obj, (set, frozenset)):
            return sorted(obj, key=lambda item: item.cell_id if isinstance(item, GridCell) else str(item))
        if isinstance(obj, GeoCoordinates):
            return {'lat': obj.lat, 'lon': obj.lon}
        if isinstance(obj, FaceCoordinates):
            return {'face': obj.face, 'x': obj.x, 'y': obj.y}
        if isinstance(obj, BaseGeometry):
            return obj.wkt

        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return None if np.isnan(obj) else float(obj)
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()

        if isinstance(obj, Path):
            return str(obj)

        return super().default(obj)


def clean_for_json(data):
    """Clean data structure for JSON serialization."""
    if isinstance(data, dict):
        return {str(k): clean_for_json(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple)):
        return [clean_for_json(v) for v in data]
    elif isinstance(data, (set, frozenset)):
        return [clean_for_json(v) for v in ExtendedJSONEncoder().default(data)]
    elif isinstance(data, GridCell):
        return data.to_dict()
    elif isinstance(data, Path):
        return str(data)
    elif isinstance(data, np.ndarray):
        return data.tolist()
    elif isinstance(data, np.integer):
        return int(data)
    elif isinstance(data, np.floating):
        return None if np.isnan(data) else float(data)
    elif isinstance(data, np.bool_):
        return bool(data)
    else:
        return data


def dumps(data, indent=2) -> str:
    return json.dumps(data, cls=ExtendedJSONEncoder, indent=indent)
