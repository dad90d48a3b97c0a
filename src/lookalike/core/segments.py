"""Segments precomputed for nearest-point pruning.

A PrecomputedSegment carries the control box of a curve segment along with
its corners and boundary edges, so the nearest-point query can bound the
distance to the segment without solving for the true nearest point.

An IndexedCurvePath is a curve path plus one PrecomputedSegment per segment.
It is built once per letterform and is read-only afterwards.
"""

from dataclasses import dataclass

from lookalike.domain import CurvePath, Line, Point, Rect, Segment


@dataclass(frozen=True, slots=True)
class PrecomputedSegment:
    """A segment with its control box, corners and boundary edges.

    The control box is the union of the segment's endpoints and control
    points. It is not the tight bound of the curve, but always contains it.

    Attributes:
        segment: The curve segment
        bbox: Control box of the segment
        corners: The four corners of bbox
        edges: The four boundary lines of bbox
    """

    segment: Segment
    bbox: Rect
    corners: tuple[Point, Point, Point, Point]
    edges: tuple[Line, Line, Line, Line]

    @classmethod
    def from_segment(cls, segment: Segment) -> "PrecomputedSegment":
        bbox = segment.control_box()
        return cls(segment=segment, bbox=bbox, corners=bbox.corners(), edges=bbox.edges())

    def nearness(self, p: Point) -> tuple[float, float]:
        """Bound the squared distance from p to the nearest point on the segment.

        Args:
            p: The query point

        Returns:
            (min_d2, max_d2). max_d2 is the squared distance to the farthest
            corner. min_d2 is 0 when p lies in the box, else the squared
            distance to the nearest boundary edge.
        """
        max_d2 = max(p.distance_sq(c) for c in self.corners)
        if self.bbox.contains(p):
            return 0.0, max_d2
        min_d2 = min(edge.nearest(p).distance_sq for edge in self.edges)
        return min_d2, max_d2


@dataclass(frozen=True)
class IndexedCurvePath:
    """A curve path plus its precomputed segments.

    Attributes:
        path: The original curve path
        segments: One PrecomputedSegment per path segment, in path order
    """

    path: CurvePath
    segments: tuple[PrecomputedSegment, ...]

    @classmethod
    def build(cls, path: CurvePath) -> "IndexedCurvePath":
        """Index a curve path.

        Raises:
            MalformedPathError: If the path has an element with no preceding moveTo
        """
        return cls(
            path=path,
            segments=tuple(PrecomputedSegment.from_segment(s) for s in path.segments()),
        )

    def is_empty(self) -> bool:
        return not self.segments

    def __len__(self) -> int:
        return len(self.segments)
