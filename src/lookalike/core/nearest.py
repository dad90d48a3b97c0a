"""Nearest point on an indexed curve path.

Finding the true nearest point on a curve segment requires a numerical root
find, which dominates the cost of comparing letterforms. The query here runs
a branch-and-bound over the path's segments: each segment's control box gives
a cheap [min_d2, max_d2] interval, and only segments whose interval can still
beat every other candidate pay for the exact solve.

A segment is discarded only when another candidate's worst case is strictly
better than the discarded segment's best case, so the segment holding the
global nearest point always survives.
"""

from dataclasses import dataclass, field

from lookalike.core.segments import IndexedCurvePath, PrecomputedSegment
from lookalike.domain import Point
from lookalike.exceptions import EmptyPathError

NEAREST_EPSILON = 1e-7


@dataclass
class NearestCounters:
    """Instrumentation for nearest-point queries.

    Attributes:
        queries: Number of queries answered
        segments_seen: Segments whose bounds were computed
        segments_pruned: Segments discarded without an exact solve
        exact_evaluations: Exact nearest-point solves performed
    """

    queries: int = 0
    segments_seen: int = 0
    segments_pruned: int = 0
    exact_evaluations: int = 0

    def merge(self, other: "NearestCounters") -> None:
        """Add another set of counters into this one."""
        self.queries += other.queries
        self.segments_seen += other.segments_seen
        self.segments_pruned += other.segments_pruned
        self.exact_evaluations += other.exact_evaluations


@dataclass
class _Candidate:
    min_d2: float
    max_d2: float
    segment: PrecomputedSegment


@dataclass
class NearestScratch:
    """Reusable working set for nearest-point queries.

    The candidate list carries no meaning between queries; it is cleared at
    the start of every query. Counters accumulate across queries.
    """

    candidates: list[_Candidate] = field(default_factory=list)
    counters: NearestCounters = field(default_factory=NearestCounters)

    def clear(self) -> None:
        self.candidates.clear()


def nearest_point(
    p: Point,
    path: IndexedCurvePath,
    scratch: NearestScratch | None = None,
) -> Point:
    """Find the point on path closest to p.

    Args:
        p: The query point
        path: The indexed path to search
        scratch: Working set to reuse across calls (a fresh one if None)

    Returns:
        The nearest point on any segment of the path. Ties go to the
        candidate evaluated first.

    Raises:
        EmptyPathError: If the path has no segments
    """
    if path.is_empty():
        raise EmptyPathError()
    if scratch is None:
        scratch = NearestScratch()
    scratch.clear()
    candidates = scratch.candidates
    counters = scratch.counters
    counters.queries += 1

    for segment in path.segments:
        counters.segments_seen += 1
        min_d2, max_d2 = segment.nearness(p)

        if any(c.max_d2 < min_d2 for c in candidates):
            counters.segments_pruned += 1
            continue

        kept = [c for c in candidates if not max_d2 < c.min_d2]
        counters.segments_pruned += len(candidates) - len(kept)
        candidates[:] = kept
        candidates.append(_Candidate(min_d2, max_d2, segment))

    best_d2 = float("inf")
    best_point: Point | None = None
    for candidate in candidates:
        counters.exact_evaluations += 1
        curve = candidate.segment.segment
        nearest = curve.nearest(p, NEAREST_EPSILON)
        if nearest.distance_sq < best_d2:
            best_d2 = nearest.distance_sq
            best_point = curve.eval(nearest.t)

    scratch.clear()
    if best_point is None:
        raise EmptyPathError()
    return best_point


def nearest_point_exhaustive(p: Point, path: IndexedCurvePath) -> Point:
    """Find the point on path closest to p by solving every segment.

    Reference implementation for nearest_point.

    Raises:
        EmptyPathError: If the path has no segments
    """
    if path.is_empty():
        raise EmptyPathError()

    best_d2 = float("inf")
    best_point: Point | None = None
    for segment in path.segments:
        curve = segment.segment
        nearest = curve.nearest(p, NEAREST_EPSILON)
        if nearest.distance_sq < best_d2:
            best_d2 = nearest.distance_sq
            best_point = curve.eval(nearest.t)

    if best_point is None:
        raise EmptyPathError()
    return best_point
