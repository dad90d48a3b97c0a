"""Tests for segment indexing and the pruned nearest-point query."""

import math
import random

import pytest

from lookalike.core.nearest import (
    NearestCounters,
    NearestScratch,
    nearest_point,
    nearest_point_exhaustive,
)
from lookalike.core.segments import IndexedCurvePath, PrecomputedSegment
from lookalike.domain import CubicBez, CurvePath, Line, Point, QuadBez
from lookalike.exceptions import ContractViolation, EmptyPathError


def add_square(path: CurvePath, x: float, y: float, size: float) -> None:
    path.move_to(Point(x, y))
    path.line_to(Point(x + size, y))
    path.line_to(Point(x + size, y + size))
    path.line_to(Point(x, y + size))
    path.close_path()


def random_path(rng: random.Random, contours: int = 4, segments: int = 6) -> CurvePath:
    """Closed contours mixing lines, quadratics and gently curved cubics."""
    path = CurvePath()
    for _ in range(contours):
        cx, cy = rng.uniform(0, 1000), rng.uniform(0, 1000)
        current = Point(cx, cy)
        path.move_to(current)
        for _ in range(segments):
            end = Point(cx + rng.uniform(-150, 150), cy + rng.uniform(-150, 150))
            kind = rng.choice(("line", "quad", "cubic"))
            bulge = Point(rng.uniform(-30, 30), rng.uniform(-30, 30))
            if kind == "line":
                path.line_to(end)
            elif kind == "quad":
                path.quad_to(current.lerp(end, 0.5) + bulge, end)
            else:
                c1 = current.lerp(end, 1 / 3) + bulge
                c2 = current.lerp(end, 2 / 3) + bulge
                path.curve_to(c1, c2, end)
            current = end
        path.close_path()
    return path


class TestPrecomputedSegment:
    """Tests for segment bounds."""

    def test_from_segment(self):
        """Test the control box covers off-curve points."""
        seg = PrecomputedSegment.from_segment(QuadBez(Point(0, 0), Point(5, 30), Point(10, 0)))
        assert seg.bbox.max_y == 30
        assert len(seg.corners) == 4
        assert len(seg.edges) == 4

    def test_nearness_inside_box(self):
        """Test a point in the control box has a zero lower bound."""
        seg = PrecomputedSegment.from_segment(QuadBez(Point(0, 0), Point(5, 30), Point(10, 0)))
        min_d2, max_d2 = seg.nearness(Point(5, 5))
        assert min_d2 == 0.0
        # Farthest corner is (0, 30) or (10, 30)
        assert max_d2 == pytest.approx(25 + 625)

    def test_nearness_outside_box(self):
        """Test the lower bound is the distance to the nearest box edge."""
        seg = PrecomputedSegment.from_segment(Line(Point(0, 0), Point(100, 0)))
        min_d2, max_d2 = seg.nearness(Point(50, -10))
        assert min_d2 == pytest.approx(100)
        assert max_d2 == pytest.approx(50**2 + 10**2)

    def test_bounds_contain_true_distance(self):
        """Test min_d2 <= true squared distance <= max_d2 for random segments."""
        rng = random.Random(3)
        path = random_path(rng)
        indexed = IndexedCurvePath.build(path)
        for _ in range(100):
            p = Point(rng.uniform(-200, 1200), rng.uniform(-200, 1200))
            for seg in indexed.segments:
                min_d2, max_d2 = seg.nearness(p)
                d2 = seg.segment.nearest(p).distance_sq
                assert min_d2 <= d2 + 1e-9
                assert d2 <= max_d2 + 1e-9


class TestIndexedCurvePath:
    """Tests for IndexedCurvePath."""

    def test_build(self):
        """Test one precomputed segment per path segment, in order."""
        path = CurvePath()
        add_square(path, 0, 0, 10)
        indexed = IndexedCurvePath.build(path)
        assert len(indexed) == 4
        assert indexed.path is path
        assert [s.segment for s in indexed.segments] == list(path.segments())
        assert not indexed.is_empty()

    def test_empty(self):
        """Test a path of bare moveTos indexes to nothing."""
        path = CurvePath()
        path.move_to(Point(1, 1))
        assert IndexedCurvePath.build(path).is_empty()
        assert IndexedCurvePath.build(CurvePath()).is_empty()


class TestNearestPoint:
    """Tests for nearest_point."""

    def test_empty_path_raises(self):
        """Test querying an empty path is a contract violation."""
        empty = IndexedCurvePath.build(CurvePath())
        with pytest.raises(EmptyPathError):
            nearest_point(Point(0, 0), empty)
        with pytest.raises(ContractViolation):
            nearest_point_exhaustive(Point(0, 0), empty)

    def test_point_on_path(self):
        """Test a point on the outline is its own nearest point."""
        path = CurvePath()
        add_square(path, 0, 0, 100)
        nearest = nearest_point(Point(100, 40), IndexedCurvePath.build(path))
        assert nearest.distance(Point(100, 40)) == pytest.approx(0, abs=1e-9)

    def test_pruning_skips_far_segments(self):
        """Test segments that cannot be nearest are never solved exactly."""
        path = CurvePath()
        add_square(path, 0, 0, 100)
        add_square(path, 1000, 1000, 100)
        indexed = IndexedCurvePath.build(path)
        scratch = NearestScratch()

        nearest = nearest_point(Point(50, -10), indexed, scratch)

        assert nearest.x == pytest.approx(50)
        assert nearest.y == pytest.approx(0)
        counters = scratch.counters
        assert counters.queries == 1
        assert counters.segments_seen == 8
        # Bottom, right and left edges of the near square survive
        assert counters.exact_evaluations == 3
        assert counters.segments_pruned == 5

    def test_scratch_reuse(self):
        """Test a scratch buffer is empty between queries and counters accumulate."""
        path = CurvePath()
        add_square(path, 0, 0, 100)
        indexed = IndexedCurvePath.build(path)
        scratch = NearestScratch()

        first = nearest_point(Point(-5, 50), indexed, scratch)
        assert scratch.candidates == []
        second = nearest_point(Point(-5, 50), indexed, scratch)

        assert first == second
        assert scratch.counters.queries == 2

    def test_agrees_with_exhaustive_scan(self):
        """Test pruning never changes the nearest distance."""
        rng = random.Random(11)
        scratch = NearestScratch()
        for _ in range(5):
            indexed = IndexedCurvePath.build(random_path(rng))
            for _ in range(100):
                p = Point(rng.uniform(-200, 1200), rng.uniform(-200, 1200))
                pruned = nearest_point(p, indexed, scratch)
                exhaustive = nearest_point_exhaustive(p, indexed)
                assert math.isclose(
                    p.distance_sq(pruned),
                    p.distance_sq(exhaustive),
                    rel_tol=1e-9,
                    abs_tol=1e-9,
                )

        counters = scratch.counters
        assert counters.queries == 500
        assert counters.exact_evaluations < counters.segments_seen

    def test_cubic_segments(self):
        """Test cubic outlines are searched."""
        path = CurvePath()
        path.move_to(Point(100, 0))
        path.curve_to(Point(100, 55.23), Point(55.23, 100), Point(0, 100))
        path.line_to(Point(0, 0))
        path.close_path()
        indexed = IndexedCurvePath.build(path)

        nearest = nearest_point(Point(150, 150), indexed)

        assert isinstance(indexed.segments[0].segment, CubicBez)
        assert nearest.length() == pytest.approx(100, abs=0.1)


class TestNearestCounters:
    """Tests for NearestCounters."""

    def test_merge(self):
        """Test merging adds every counter."""
        a = NearestCounters(queries=1, segments_seen=4, segments_pruned=2, exact_evaluations=2)
        b = NearestCounters(queries=2, segments_seen=8, segments_pruned=1, exact_evaluations=7)
        a.merge(b)
        assert a == NearestCounters(
            queries=3, segments_seen=12, segments_pruned=3, exact_evaluations=9
        )
