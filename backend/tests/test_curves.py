"""Tests for the curve primitives and their factory."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.services.curves import CurveFactory, LinearRing, LineSegment, LineString  # type: ignore


def test_factory_coerces_coordinates_to_float_tuples() -> None:
    """Integer lists and numpy arrays both become tuples of floats."""
    factory = CurveFactory()
    line = factory.create_line_string([[0, 0], [1, 2]])
    assert line.coordinates == ((0.0, 0.0), (1.0, 2.0))
    assert all(isinstance(v, float) for p in line.coordinates for v in p)
    from_array = factory.create_line_string(np.array([[0, 0, 1], [1, 2, 3]]))
    assert from_array.coordinates == ((0.0, 0.0, 1.0), (1.0, 2.0, 3.0))
    assert line.factory is factory


@pytest.mark.parametrize(
    "coords",
    [
        [(0.0, 0.0)],
        [(0.0,), (1.0,)],
        [(0.0, 0.0), (1.0, 1.0, 1.0)],
        [(0.0, 0.0), (float("nan"), 1.0)],
    ],
)
def test_invalid_line_strings_are_rejected(coords) -> None:
    """Single points, bad dimensions and non-finite values raise ValueError."""
    with pytest.raises(ValueError):
        CurveFactory().create_line_string(coords)


def test_linear_ring_requires_closure_and_four_points() -> None:
    """Rings must be closed and hold at least four coordinates."""
    factory = CurveFactory()
    with pytest.raises(ValueError):
        factory.create_linear_ring([(0, 0), (1, 0), (1, 1), (0, 1)])
    with pytest.raises(ValueError):
        factory.create_linear_ring([(0, 0), (1, 0), (0, 0)])
    ring = factory.create_linear_ring([(0, 0), (1, 0), (1, 1), (0, 0)])
    assert isinstance(ring, LinearRing)
    assert ring.is_closed()
    assert factory.create_linear_ring().is_empty()


def test_line_string_accessors() -> None:
    """Coordinate access is bounds-checked and closure is detected."""
    line = CurveFactory().create_line_string([(0, 0), (3, 4), (0, 0)])
    assert line.num_points() == len(line) == 3
    assert line.coordinate_n(1) == (3.0, 4.0)
    assert line.is_closed()
    assert isinstance(line, LineString) and not isinstance(line, LinearRing)
    with pytest.raises(IndexError):
        line.coordinate_n(3)


def test_line_segment_compares_by_endpoints() -> None:
    """Segments with the same endpoints are equal and can be rewritten."""
    seg = LineSegment((0.0, 0.0), (3.0, 4.0))
    assert seg == LineSegment((0.0, 0.0), (3.0, 4.0))
    seg.p0 = (3.0, 0.0)
    assert seg != LineSegment((0.0, 0.0), (3.0, 4.0))
