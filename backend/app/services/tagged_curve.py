"""
Bookkeeping structure for a curve that is being simplified.

A :class:`TaggedCurve` wraps one original line string or ring and
splits it into a fixed array of :class:`TaggedSegment` objects, one
per pair of consecutive coordinates.  Each tagged segment remembers
the curve it came from and its position in that curve, so a
simplification driver can refer to "segment i" for the whole pass
even after it has moved the segment's endpoints.

Alongside the original segments the tagged curve owns the simplified
result: an ordered list of segments that the driver appends to in
curve order.  The structure never decides which vertices survive; it
only answers coordinate queries about the original and the partial
result, repairs the closing vertex of rings and extracts the final
curve.

Set the ``TAGGED_CURVE_VERIFY`` environment variable to make every
new instance check that appended segments connect to the current
tail of the result.  ``SIMPLIFY_DEBUG`` enables debug logging.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from .curves import Coordinate, LinearRing, LineSegment, LineString

logger = logging.getLogger(__name__)


@dataclass
class TaggedSegment(LineSegment):
    """A segment of an original curve tagged with its parent and index.

    ``parent`` and ``index`` identify the segment for the whole
    simplification pass; ``p0`` and ``p1`` may be rewritten by the
    driver without changing that identity.
    """

    parent: LineString = field(compare=False, repr=False)
    index: int


def _env_flag(name: str) -> bool:
    value = os.getenv(name, "")
    return value.strip().lower() not in {"", "0", "false", "no", "off"}


class TaggedCurve:
    """An original curve paired with its progressively simplified result.

    Args:
        parent: The source curve.  It is only read, never modified,
            and must outlive the tagged curve.
        minimum_size: Minimum number of coordinates the simplified
            result should keep.  The driver consults it; the tagged
            curve does not enforce it.
        is_ring: Whether the source curve is closed.
        verify: Reject appended segments that do not start where the
            current result ends.  Defaults to the
            ``TAGGED_CURVE_VERIFY`` environment variable.

    Raises:
        ValueError: If the source curve has fewer than two coordinates.
    """

    def __init__(
        self,
        parent: LineString,
        minimum_size: int,
        is_ring: bool = True,
        verify: Optional[bool] = None,
    ) -> None:
        coords = parent.coordinates
        if len(coords) < 2:
            raise ValueError(
                f"Cannot tag a curve with {len(coords)} coordinate(s); at least 2 are required"
            )
        self._parent = parent
        self._minimum_size = minimum_size
        self._is_ring = is_ring
        self._verify = _env_flag("TAGGED_CURVE_VERIFY") if verify is None else verify
        self._segments: Tuple[TaggedSegment, ...] = tuple(
            TaggedSegment(coords[i], coords[i + 1], parent, i) for i in range(len(coords) - 1)
        )
        self._result: List[LineSegment] = []
        if _env_flag("SIMPLIFY_DEBUG"):
            logger.debug(
                "TaggedCurve created: points=%d segments=%d ring=%s minimum_size=%d verify=%s",
                len(coords),
                len(self._segments),
                is_ring,
                minimum_size,
                self._verify,
            )

    # -- original curve -------------------------------------------------

    @property
    def parent_curve(self) -> LineString:
        return self._parent

    @property
    def minimum_size(self) -> int:
        return self._minimum_size

    @property
    def is_ring(self) -> bool:
        return self._is_ring

    @property
    def original_segments(self) -> Tuple[TaggedSegment, ...]:
        return self._segments

    def size(self) -> int:
        """Number of coordinates in the original curve."""
        return self._parent.num_points()

    def parent_coordinates(self) -> Tuple[Coordinate, ...]:
        return self._parent.coordinates

    def coordinate_at(self, i: int) -> Coordinate:
        """Return original coordinate *i* (``0 <= i < size()``)."""
        return self._parent.coordinate_n(i)

    def original_segment_at(self, i: int) -> TaggedSegment:
        """Return the tagged segment joining coordinates *i* and *i + 1*."""
        if not 0 <= i < len(self._segments):
            raise IndexError(
                f"Segment index {i} out of range for {len(self._segments)} segments"
            )
        return self._segments[i]

    # -- simplified result ----------------------------------------------

    def append_result(self, segment: LineSegment) -> None:
        """Append *segment* to the end of the simplified result.

        Segments must be appended in the order they occur along the
        original curve.  When verification is enabled a segment that
        does not start at the end of the current tail is rejected.
        """
        if self._verify and self._result:
            tail = self._result[-1]
            if tail.p1 != segment.p0:
                raise ValueError(
                    f"Result segment starting at {segment.p0} does not continue "
                    f"the result ending at {tail.p1}"
                )
        self._result.append(segment)

    def result_size(self) -> int:
        """Number of vertices in the simplified curve (0 when empty)."""
        count = len(self._result)
        return 0 if count == 0 else count + 1

    def result_segment_at(self, i: int) -> LineSegment:
        """Return result segment *i*; negative indices count from the end."""
        index = len(self._result) + i if i < 0 else i
        if not 0 <= index < len(self._result):
            raise IndexError(
                f"Result segment index {i} out of range for {len(self._result)} segments"
            )
        return self._result[index]

    def representative_vertex(self) -> Coordinate:
        """Return a vertex lying on the component in its current form.

        Once simplification has produced a result, the vertex must come
        from the simplified linework: otherwise a flattened line could
        jump across it without crossing any original vertex and still
        be reported as valid.  Before that, the second original
        coordinate is used rather than the first, which may be shared
        with an adjacent curve.
        """
        if self._result:
            return self._result[0].p0
        return self._parent.coordinate_n(1)

    def result_coordinates(self) -> Tuple[Coordinate, ...]:
        """Coordinates of the simplified curve, empty when nothing was kept."""
        if not self._result:
            return ()
        pts = [seg.p0 for seg in self._result]
        pts.append(self._result[-1].p1)
        return tuple(pts)

    def as_line(self) -> LineString:
        return self._parent.factory.create_line_string(self.result_coordinates())

    def as_ring(self) -> LinearRing:
        return self._parent.factory.create_linear_ring(self.result_coordinates())

    def close_ring(self) -> LineSegment:
        """Merge the closing vertex of a ring into a single shared vertex.

        The first result segment is replaced by a copy starting where the
        last result segment starts, and the last segment is removed.  A
        tagged segment's copy keeps its parent and index; the original
        segment array is left untouched.  The removed segment is returned
        so the driver can account for it.

        Raises:
            ValueError: If the curve is not a ring or fewer than two
                result segments exist.
        """
        if not self._is_ring:
            raise ValueError("close_ring() is only applicable to rings")
        if len(self._result) < 2:
            raise ValueError(
                f"close_ring() needs at least 2 result segments, found {len(self._result)}"
            )
        last = self._result.pop()
        first = replace(self._result[0], p0=last.p0)
        self._result[0] = first
        if _env_flag("SIMPLIFY_DEBUG"):
            logger.debug(
                "Ring endpoint merged: new start=%s remaining segments=%d",
                first.p0,
                len(self._result),
            )
        return last

    def __repr__(self) -> str:
        return (
            f"TaggedCurve(points={self.size()}, ring={self._is_ring}, "
            f"result_size={self.result_size()})"
        )


__all__ = ["TaggedSegment", "TaggedCurve"]
