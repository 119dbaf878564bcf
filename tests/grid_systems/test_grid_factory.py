"""Tests for grid factory."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from dggs.exceptions import GridConfigurationError
from dggs.grid_systems import GridFactory, GridSpecification, ISEA3HGrid, get_or_create_grid


class TestGridSpecification:
    """Test GridSpecification class."""

    def test_spec_creation(self):
        """Test creating grid specification."""
        spec = GridSpecification(grid_type='isea3h', resolution=4)

        assert spec.name == 'isea3h_4'
        assert spec.settings == {}

    def test_to_dict(self):
        spec = GridSpecification('isea3h', 2, name='coarse', settings={'max_workers': 2})

        assert spec.to_dict() == {
            'grid_type': 'isea3h',
            'resolution': 2,
            'name': 'coarse',
            'description': None,
            'settings': {'max_workers': 2},
        }

    def test_cache_key_ignores_name(self):
        assert GridSpecification('isea3h', 2, name='a').cache_key() == GridSpecification('isea3h', 2).cache_key()


class TestGridFactory:
    """Test GridFactory class."""

    def test_create_grid(self, test_config):
        """Test creating a grid from a specification."""
        factory = GridFactory(test_config)
        grid = factory.create_grid(GridSpecification('isea3h', 2))

        assert isinstance(grid, ISEA3HGrid)
        assert grid.resolution == 2
        assert grid.precision == 7

    def test_create_grid_from_dict(self):
        grid = GridFactory().create_grid({'grid_type': 'ISEA3H', 'resolution': 1})
        assert isinstance(grid, ISEA3HGrid)

    def test_unknown_grid_type(self):
        with pytest.raises(GridConfigurationError):
            GridFactory().create_grid(GridSpecification('cubic', 2))

    def test_invalid_resolution(self):
        with pytest.raises(GridConfigurationError):
            GridFactory().get_grid(0)

    def test_grids_are_cached(self):
        """Equal specifications share one grid."""
        factory = GridFactory()

        assert factory.get_grid(2) is factory.get_grid(2)
        assert factory.get_grid(2) is not factory.get_grid(2, max_workers=2)
        assert factory.cached_grids() == ['isea3h_2', 'isea3h_2']

        factory.clear_cache()
        assert factory.cached_grids() == []

    def test_concurrent_creation(self):
        """Concurrent requests get the same grid."""
        factory = GridFactory()
        with ThreadPoolExecutor(max_workers=8) as executor:
            grids = list(executor.map(lambda _: factory.get_grid(3), range(16)))

        assert all(grid is grids[0] for grid in grids)

    def test_get_or_create_grid(self):
        assert get_or_create_grid(2) is get_or_create_grid(2)
        assert get_or_create_grid(2).resolution == 2
