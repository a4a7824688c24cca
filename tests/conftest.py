"""Shared test configuration."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from graphtraverser.testing import cyclic_triangle


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large graphs, excluded by run_tests.py by default")


@pytest.fixture
def triangle():
    """root -> {left, right}, left -> root, right -> left."""
    return cyclic_triangle()
