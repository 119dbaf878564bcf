# dggs/config/defaults.py
"""Default configuration values for grid construction and logging."""

import os
from pathlib import Path

# Project path
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = Path(os.getenv('DGGS_LOGS_DIR', PROJECT_ROOT / 'logs'))

PATHS = {
    'project_root': str(PROJECT_ROOT),
    'logs_dir': str(LOGS_DIR),
}

# Grid engine settings. Engines read these once at construction.
GRIDS = {
    'default_resolution': 6,
    'default_bounds': [-180, -90, 180, 90],  # minx, miny, maxx, maxy
    'isea3h': {
        'center_precision': 9,       # decimal places of the cell identity key
        'max_workers': 1,            # > 1 enumerates faces on a thread pool
        'max_chunk_degrees': 30.0,   # region subdivision for cells_for_region
        'edge_tolerance': 1e-9,      # fraction of l0 accepted outside a face edge
        'sample_spacing_factor': 0.25,  # box edge sampling step, fraction of l
    },
}

# Ellipsoid used for the Earth surface area constant
EARTH = {
    'ellipsoid': 'WGS84',
}

LOGGING = {
    'level': 'INFO',
    'file_format': 'json',  # json or text
    'file': LOGS_DIR / 'dggs.log',
    'max_file_size': 10 * 1024 * 1024,  # 10MB
    'backup_count': 3,
}

# Named regions in addition to the built-in ones, e.g.
#   'alps': [5.0, 43.5, 16.5, 48.5]
#   'andes': {'bounds': [-80, -56, -62, 11], 'category': 'region'}
PROCESSING_BOUNDS = {
    'custom': {},
}
