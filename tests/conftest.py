"""Shared fixtures for the test suite."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

from dggs.config.config import Config
from dggs.grid_systems import ISEA3HGrid


@pytest.fixture
def test_data_dir():
    """Create a temporary directory for test data."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def test_config_file(test_data_dir):
    """Write a YAML configuration overriding some defaults."""
    config_data = {
        'grids': {
            'default_resolution': 3,
            'isea3h': {
                'center_precision': 7,
                'max_chunk_degrees': 45.0,
            },
            'dummy': {
                'spacing': 2.5,
                'label': 'from-config',
            },
        },
        'logging': {
            'level': 'DEBUG',
            'file': str(test_data_dir / 'logs' / 'test.log'),
        },
        'processing_bounds': {
            'custom': {
                'test_region': [0, 0, 10, 10],
                'alps': {'bounds': [5.0, 43.5, 16.5, 48.5], 'category': 'mountains'},
                'broken': [1, 2, 3],
            }
        }
    }

    config_path = test_data_dir / "test_config.yml"
    with open(config_path, 'w') as f:
        yaml.dump(config_data, f)

    return config_path


@pytest.fixture
def test_config(test_config_file):
    """Create a real Config instance from the test file."""
    return Config(test_config_file)


@pytest.fixture(scope='session')
def grid_r1():
    return ISEA3HGrid(1)


@pytest.fixture(scope='session')
def grid_r2():
    return ISEA3HGrid(2)


@pytest.fixture(scope='session')
def grid_r3():
    return ISEA3HGrid(3)


@pytest.fixture(scope='session')
def global_cells_r3(grid_r3):
    """All cells of resolution 3."""
    return grid_r3.cells_for_bound(-90, 90, -180, 180)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
