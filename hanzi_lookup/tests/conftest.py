"""Shared pytest fixtures for the hanzi_lookup test suite.

Fixtures:
    draw: Factory turning polyline vertices into densely sampled points.
    reference_strokes: Stroke drawings of a handful of simple characters.
    make_reference: Factory analyzing strokes into a ReferenceCharacter.
    sample_database: Database built from reference_strokes.
    service: LookupService over sample_database.

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import math
import sys
from pathlib import Path

import pytest

# Add project directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hanzi_lib.analysis import CharacterAnalyzer
from hanzi_lib.api import LookupService
from hanzi_lib.database import Database
from hanzi_lib.domain import Character, ReferenceCharacter


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Stroke Fixtures
# -----------------------------------------------------------------------------

def _polyline(*vertices, step=8.0):
    """Sample a polyline through ``vertices`` roughly every ``step`` units."""
    points = [list(vertices[0])]
    for (x0, y0), (x1, y1) in zip(vertices, vertices[1:]):
        n = max(1, int(math.ceil(math.hypot(x1 - x0, y1 - y0) / step)))
        for k in range(1, n + 1):
            points.append([x0 + (x1 - x0) * k / n, y0 + (y1 - y0) * k / n])
    return points


@pytest.fixture
def draw():
    """Return a factory sampling polyline vertices into stroke points.

    Example:
        stroke = draw((30, 128), (225, 128))
    """
    return _polyline


@pytest.fixture
def reference_strokes():
    """Return drawings of simple characters as nested ``[x, y]`` lists.

    Contains 1- to 4-stroke characters. Several 3-stroke characters share
    stroke directions and differ only in proportions and positions.

    Returns:
        dict[str, list]: Character -> list of strokes.
    """
    return {
        '一': [_polyline((30, 128), (225, 128))],
        '二': [_polyline((60, 80), (195, 80)),
              _polyline((30, 180), (225, 180))],
        '十': [_polyline((40, 120), (215, 120)),
              _polyline((128, 30), (128, 225))],
        '人': [_polyline((128, 30), (50, 225)),
              _polyline((120, 100), (215, 225))],
        '三': [_polyline((60, 50), (195, 50)),
              _polyline((75, 128), (180, 128)),
              _polyline((30, 210), (225, 210))],
        '工': [_polyline((40, 40), (215, 40)),
              _polyline((128, 40), (128, 215)),
              _polyline((20, 215), (235, 215))],
        '土': [_polyline((70, 100), (185, 100)),
              _polyline((128, 30), (128, 215)),
              _polyline((20, 215), (235, 215))],
        '干': [_polyline((50, 50), (205, 50)),
              _polyline((30, 120), (225, 120)),
              _polyline((128, 50), (128, 230))],
        '大': [_polyline((30, 90), (225, 90)),
              _polyline((128, 30), (128, 110), (40, 225)),
              _polyline((135, 120), (220, 225))],
        '口': [_polyline((50, 50), (50, 210)),
              _polyline((50, 50), (205, 50), (205, 210)),
              _polyline((50, 205), (205, 205))],
        '木': [_polyline((30, 90), (225, 90)),
              _polyline((128, 30), (128, 230)),
              _polyline((125, 95), (40, 200)),
              _polyline((131, 95), (220, 200))],
    }


@pytest.fixture
def make_reference():
    """Return a factory building a ReferenceCharacter from stroke lists.

    The strokes are analyzed with default settings, exactly as a query
    would be.
    """
    analyzer = CharacterAnalyzer()

    def _make(identity, strokes):
        analyzed = analyzer.analyze(Character.from_lists(strokes))
        return ReferenceCharacter(identity, analyzed.stroke_count, analyzed.features)

    return _make


@pytest.fixture
def sample_database(reference_strokes, make_reference):
    """Return a Database with one entry per reference_strokes character."""
    return Database(
        make_reference(identity, strokes)
        for identity, strokes in reference_strokes.items()
    )


@pytest.fixture
def service(sample_database):
    """Return a LookupService over sample_database."""
    return LookupService(sample_database)
