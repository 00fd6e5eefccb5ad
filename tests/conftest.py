"""
Shared pytest fixtures and configuration for survey_grid tests.
"""

import json
from datetime import datetime

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "requires_matplotlib: requires matplotlib to be installed"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip tests based on missing dependencies."""
    try:
        import matplotlib
        matplotlib.use("Agg")
        matplotlib_available = True
    except ImportError:
        matplotlib_available = False

    for item in items:
        if "requires_matplotlib" in item.keywords and not matplotlib_available:
            item.add_marker(pytest.mark.skip(reason="matplotlib not installed"))


@pytest.fixture
def grid_record():
    """A stored grid record as the persistence layer returns it."""
    return {
        "id": 3,
        "projectId": 1,
        "name": "North field",
        "description": "Magnetometer sweep",
        "createdAt": "2024-05-01T09:30:00",
        "spacing": 10.0,
        "rows": 3,
        "cols": 3,
        "points": 9,
        "centerLat": 10.0,
        "centerLon": 20.0,
        "boundaryPoints": None,
    }


@pytest.fixture
def sample_spec():
    """A small 3x4 lattice for fast tests."""
    from survey_grid.core.lattice import GeoPoint, GridSpec

    return GridSpec.from_meters(GeoPoint(51.5, -0.12), 10.0, 3, 4)


@pytest.fixture
def grid_file(tmp_path, grid_record):
    """Grid record written to a JSON file."""
    path = tmp_path / "grid.json"
    path.write_text(json.dumps(grid_record), encoding="utf-8")
    return path


@pytest.fixture
def fixed_time():
    return datetime(2024, 5, 1, 9, 30, 0)


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
