"""Shared pytest configuration and fixtures for the test suite.

This module centralizes:
- Path setup (eliminates sys.path hacks in individual test files)
- Pytest markers for test categorization (unit, integration, property)
- Small merge-stream fixtures shared by the tree and resmap tests
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import numpy as np
import pytest


# ==============================================================================
# Path Setup - Ensures rcl/ and scripts/ are importable
# ==============================================================================

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tests.helpers.streams import merge, stream_lines  # noqa: E402


# ==============================================================================
# Pytest Configuration
# ==============================================================================

def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "unit: Fast tests with no I/O",
    )
    config.addinivalue_line(
        "markers",
        "integration: Tests touching the file system or running the CLI scripts",
    )
    config.addinivalue_line(
        "markers",
        "property: Hypothesis property-based tests",
    )


# ==============================================================================
# Merge Stream Fixtures
# ==============================================================================

@pytest.fixture
def three_leaf_lines():
    """A, B, C merged as (A,B) -> size 2, then (AB,C) -> size 3."""
    return stream_lines([
        merge(1, 2, 1, 1, "A", "B", similarity=90.0, quality=0.4),
        merge(1, 3, 2, 1, "A", "C", similarity=60.0, quality=0.9),
    ])


@pytest.fixture
def balanced_lines():
    """Eight items merged into a perfectly balanced tree of height 3."""
    return stream_lines([
        merge(0, 1, 1, 1, "a", "b", similarity=100.0),
        merge(2, 3, 1, 1, "c", "d", similarity=99.0),
        merge(4, 5, 1, 1, "e", "f", similarity=98.0),
        merge(6, 7, 1, 1, "g", "h", similarity=97.0),
        merge(0, 2, 2, 2, "a", "c", similarity=80.0, quality=2.0),
        merge(4, 6, 2, 2, "e", "g", similarity=79.0, quality=1.0),
        merge(0, 4, 4, 4, "a", "e", similarity=50.0, quality=4.0),
    ])


@pytest.fixture
def random_linkage():
    """Single-linkage matrix over 40 random 1-D points (seeded)."""
    from scipy.cluster.hierarchy import linkage

    rng = np.random.default_rng(7)
    return linkage(rng.normal(size=(40, 1)), method="single")


# ==============================================================================
# Logging Isolation
# ==============================================================================

@pytest.fixture
def restore_root_logger():
    """Undo handler changes made by setup_cli_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
