"""
Pytest configuration and fixtures for PyFastResample test suite.

This file contains shared fixtures, test configuration, and utilities
used across the test suite.
"""
import os
import sys
import pytest
import numpy as np


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add the package root to Python path for testing
    package_root = os.path.dirname(os.path.dirname(__file__))
    if package_root not in sys.path:
        sys.path.insert(0, package_root)

    for marker in ("unit", "integration", "importtest", "slow", "gpu"):
        config.addinivalue_line("markers", f"{marker}: {marker} tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers and ordering."""
    for item in items:
        # Mark GPU tests
        if "gpu" in item.keywords:
            item.add_marker("slow")

        # Mark import tests for easy selection
        if "import" in item.name.lower() or "test_imports.py" in str(item.fspath):
            item.add_marker("importtest")


@pytest.fixture(scope="session")
def quadrant_grid():
    """2x2 single-channel grid with distinct values per cell."""
    return np.array([1, 2, 3, 4], dtype=np.uint8), 2, 2


@pytest.fixture(scope="session")
def rgba_grid():
    """3x2 RGBA grid, cell (x, y) = [10*y + x, 100 + x, 200 + y, 255]."""
    width, height = 3, 2
    cells = []
    for y in range(height):
        for x in range(width):
            cells.append([10 * y + x, 100 + x, 200 + y, 255])
    return np.array(cells, dtype=np.uint8).reshape(-1), width, height


class TestDataManager:
    """Helper class for managing test data."""

    @staticmethod
    def create_volume(nx=24, ny=20, nz=16, seed=42):
        """Create a synthetic intensity volume (nz, ny, nx) in [0, 255]."""
        rng = np.random.default_rng(seed)
        z, y, x = np.meshgrid(
            np.arange(nz), np.arange(ny), np.arange(nx), indexing="ij"
        )
        cz, cy, cx = nz / 2, ny / 2, nx / 2
        blob = 200 * np.exp(-((x - cx) ** 2 + (y - cy) ** 2 + (z - cz) ** 2) / 40.0)
        return np.clip(blob + rng.random((nz, ny, nx)) * 20, 0, 255)

    @staticmethod
    def axial_slice(volume, k):
        """Extract the k-th axial slice as a flat buffer with its dims."""
        plane = volume[k]
        height, width = plane.shape
        return plane.reshape(-1), width, height


@pytest.fixture
def test_data_manager():
    """Provide access to test data creation utilities."""
    return TestDataManager()
