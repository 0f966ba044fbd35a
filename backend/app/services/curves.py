"""
Minimal curve primitives used by the simplification services.

This module provides the small geometry layer that the tagged curve
and the Douglas–Peucker driver operate on: coordinates are plain
tuples of two or three floats, a ``LineSegment`` is a mutable pair of
coordinates and ``LineString``/``LinearRing`` wrap an immutable
coordinate sequence.  Curves are always built through a
``CurveFactory`` so that derived curves (for example the simplified
output of a tagged curve) are created by the same factory as the
curve they came from.

Coordinate input is coerced with numpy, which gives us shape and
finiteness validation in a single pass over arbitrarily nested
sequences or arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

Coordinate = Tuple[float, ...]


@dataclass
class LineSegment:
    """Directed segment between two coordinates.

    Endpoints may be rewritten by a simplification driver; use
    ``dataclasses.replace`` when a copy must leave the original alone.
    """

    p0: Coordinate
    p1: Coordinate


def _coerce_coordinates(coords: Iterable[Sequence[float]]) -> Tuple[Coordinate, ...]:
    """Validate *coords* and return them as a tuple of float tuples.

    Raises:
        ValueError: If the input is not an (N, 2) or (N, 3) array of
            finite numbers.
    """
    coords = list(coords)
    if not coords:
        return ()
    try:
        arr = np.asarray(coords, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid coordinate sequence: {exc}") from exc
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise ValueError(
            f"Coordinates must have shape (N, 2) or (N, 3), got {arr.shape}"
        )
    if not np.isfinite(arr).all():
        raise ValueError("Coordinates must be finite numbers")
    return tuple(tuple(float(v) for v in row) for row in arr)


class LineString:
    """An open curve defined by an ordered coordinate sequence.

    A line string is either empty or holds at least two coordinates.
    Instances should be created through :class:`CurveFactory`.
    """

    def __init__(self, coordinates: Tuple[Coordinate, ...], factory: "CurveFactory") -> None:
        if len(coordinates) == 1:
            raise ValueError("A line string needs 0 or at least 2 coordinates")
        self._coordinates = coordinates
        self.factory = factory

    @property
    def coordinates(self) -> Tuple[Coordinate, ...]:
        return self._coordinates

    def num_points(self) -> int:
        return len(self._coordinates)

    def coordinate_n(self, i: int) -> Coordinate:
        if not 0 <= i < len(self._coordinates):
            raise IndexError(
                f"Coordinate index {i} out of range for {len(self._coordinates)} points"
            )
        return self._coordinates[i]

    def is_empty(self) -> bool:
        return not self._coordinates

    def is_closed(self) -> bool:
        if self.is_empty():
            return False
        return self._coordinates[0] == self._coordinates[-1]

    def __len__(self) -> int:
        return len(self._coordinates)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._coordinates)!r})"


class LinearRing(LineString):
    """A closed line string: first and last coordinates coincide.

    Rings are either empty or hold at least four coordinates.
    """

    MINIMUM_VALID_SIZE = 4

    def __init__(self, coordinates: Tuple[Coordinate, ...], factory: "CurveFactory") -> None:
        super().__init__(coordinates, factory)
        if not coordinates:
            return
        if coordinates[0] != coordinates[-1]:
            raise ValueError(
                f"Points of a linear ring do not form a closed line: "
                f"{coordinates[0]} != {coordinates[-1]}"
            )
        if len(coordinates) < self.MINIMUM_VALID_SIZE:
            raise ValueError(
                f"Invalid number of points in linear ring (found {len(coordinates)}, "
                f"must be 0 or >= {self.MINIMUM_VALID_SIZE})"
            )


class CurveFactory:
    """Builds line strings and linear rings from coordinate sequences."""

    def create_line_string(self, coords: Optional[Iterable[Sequence[float]]] = None) -> LineString:
        return LineString(_coerce_coordinates(() if coords is None else coords), self)

    def create_linear_ring(self, coords: Optional[Iterable[Sequence[float]]] = None) -> LinearRing:
        return LinearRing(_coerce_coordinates(() if coords is None else coords), self)


# Shared default factory for callers that do not need their own.
DEFAULT_FACTORY = CurveFactory()


__all__ = [
    "Coordinate",
    "LineSegment",
    "LineString",
    "LinearRing",
    "CurveFactory",
    "DEFAULT_FACTORY",
]
