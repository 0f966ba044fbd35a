"""
Douglas–Peucker simplification driven through a :class:`TaggedCurve`.

The driver walks the original curve recursively: a section is
replaced by the chord joining its endpoints when every interior
vertex lies within the tolerance of that chord, otherwise it is split
at the farthest vertex and both halves are processed in order.  Result
segments are therefore appended strictly in curve order, which is the
only contract the tagged curve asks for.

Two rules keep the output usable:

- a section is never flattened if doing so would leave fewer than the
  tagged curve's ``minimum_size`` coordinates (4 for rings, 2 for
  lines), and
- for rings, the duplicated start/end vertex is itself a candidate for
  removal.  After the main pass it is merged away with
  :meth:`TaggedCurve.close_ring` when it lies within tolerance of the
  chord joining its two neighbours.

The farthest-vertex search is vectorised with numpy.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from .curves import LinearRing, LineSegment, LineString
from .tagged_curve import TaggedCurve, _env_flag

logger = logging.getLogger(__name__)

# Smallest valid coordinate counts for simplified output.
MIN_RING_SIZE: int = 4
MIN_LINE_SIZE: int = 2


def minimum_size_for(is_ring: bool) -> int:
    return MIN_RING_SIZE if is_ring else MIN_LINE_SIZE


def _farthest_point(pts: "np.ndarray", i: int, j: int) -> Tuple[int, float]:
    """Return the index and distance of the vertex in ``(i, j)`` farthest from chord ``i``–``j``.

    A degenerate chord (``pts[i] == pts[j]``, as for a whole ring)
    falls back to plain point distance.
    """
    a = pts[i]
    b = pts[j]
    inner = pts[i + 1:j]
    ab = b - a
    denom = float(np.dot(ab, ab))
    if denom == 0.0:
        dists = np.linalg.norm(inner - a, axis=1)
    else:
        t = np.clip((inner - a) @ ab / denom, 0.0, 1.0)
        proj = a + t[:, None] * ab
        dists = np.linalg.norm(inner - proj, axis=1)
    k = int(np.argmax(dists))
    return i + 1 + k, float(dists[k])


def _point_to_segment_distance(p: "np.ndarray", a: "np.ndarray", b: "np.ndarray") -> float:
    pts = np.vstack([a, p, b])
    return _farthest_point(pts, 0, 2)[1]


def simplify_tagged_curve(tagged: TaggedCurve, tolerance: float) -> TaggedCurve:
    """Fill the result of *tagged* with a simplified version of its curve.

    Args:
        tagged: A tagged curve with an empty result.
        tolerance: Maximum distance a removed vertex may lie from the
            simplified curve.  Zero keeps every vertex.

    Returns:
        The same tagged curve, for chaining.

    Raises:
        ValueError: If *tolerance* is negative or the tagged curve
            already holds result segments.
    """
    if tolerance < 0.0:
        raise ValueError(f"Tolerance must be non-negative, got {tolerance}")
    if tagged.result_size() != 0:
        raise ValueError("Tagged curve has already been simplified")

    pts = np.asarray(tagged.parent_coordinates(), dtype=float)
    kept = tagged.size()
    # Sections are processed depth-first, left before right, so appends
    # follow curve order.
    stack: List[Tuple[int, int]] = [(0, tagged.size() - 1)]
    while stack:
        i, j = stack.pop()
        if j == i + 1:
            tagged.append_result(tagged.original_segment_at(i))
            continue
        idx, dist = _farthest_point(pts, i, j)
        removable = j - i - 1
        if tolerance > 0.0 and dist <= tolerance and kept - removable >= tagged.minimum_size:
            tagged.append_result(LineSegment(tagged.coordinate_at(i), tagged.coordinate_at(j)))
            kept -= removable
            continue
        stack.append((idx, j))
        stack.append((i, idx))

    if tagged.is_ring and tolerance > 0.0:
        _merge_ring_endpoint(tagged, tolerance)

    if _env_flag("SIMPLIFY_DEBUG"):
        logger.debug(
            "Simplified curve: points %d -> %d (tolerance=%s ring=%s)",
            tagged.size(),
            tagged.result_size(),
            tolerance,
            tagged.is_ring,
        )
    return tagged


def _merge_ring_endpoint(tagged: TaggedCurve, tolerance: float) -> None:
    # Merging drops one segment; the ring must still meet its minimum size.
    if tagged.result_size() - 1 < tagged.minimum_size:
        return
    first = tagged.result_segment_at(0)
    last = tagged.result_segment_at(-1)
    dist = _point_to_segment_distance(
        np.asarray(first.p0, dtype=float),
        np.asarray(last.p0, dtype=float),
        np.asarray(first.p1, dtype=float),
    )
    if dist <= tolerance:
        removed = tagged.close_ring()
        if _env_flag("SIMPLIFY_DEBUG"):
            logger.debug("Removed ring endpoint segment %s", removed)


def simplify_curve(
    curve: LineString,
    tolerance: float,
    is_ring: Optional[bool] = None,
) -> LineString:
    """Simplify a line string or ring and return a new curve.

    Args:
        curve: Curve to simplify.  It is not modified.
        tolerance: Maximum deviation allowed for removed vertices.
        is_ring: Treat the curve as a ring.  Defaults to whether
            *curve* is a :class:`LinearRing`.

    Returns:
        A curve built by the same factory as *curve*: a
        :class:`LinearRing` for rings, a :class:`LineString` otherwise.
        Empty input is returned unchanged.
    """
    if tolerance < 0.0:
        raise ValueError(f"Tolerance must be non-negative, got {tolerance}")
    if is_ring is None:
        is_ring = isinstance(curve, LinearRing)
    if curve.is_empty():
        return curve
    tagged = TaggedCurve(curve, minimum_size_for(is_ring), is_ring)
    simplify_tagged_curve(tagged, tolerance)
    return tagged.as_ring() if is_ring else tagged.as_line()


__all__ = [
    "MIN_RING_SIZE",
    "MIN_LINE_SIZE",
    "minimum_size_for",
    "simplify_tagged_curve",
    "simplify_curve",
]
