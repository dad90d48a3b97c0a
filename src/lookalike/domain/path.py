"""Core geometric types for letterform outlines.

This module defines the fundamental geometric types used throughout lookalike:
- Point: A 2D point with vector arithmetic
- Rect: An axis-aligned rectangle
- Line, QuadBez, CubicBez: Curve segments that can be evaluated and queried
  for the nearest point to a given point
- CurvePath: An ordered sequence of drawing elements forming closed contours
- CurvePathPen: A fontTools pen that records into a CurvePath
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Union

from fontTools.misc.bezierTools import solveCubic
from fontTools.pens.basePen import BasePen
from fontTools.pens.svgPathPen import SVGPathPen

from lookalike.exceptions import MalformedPathError

# Grid used to bracket the roots of a cubic's nearest-point derivative
CUBIC_NEAREST_STEPS = 16


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def dot(self, other: "Point") -> float:
        """Dot product, treating both points as vectors."""
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        """Euclidean length, treating the point as a vector."""
        return math.hypot(self.x, self.y)

    def distance_sq(self, other: "Point") -> float:
        """Squared Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linear interpolation, t=0 is self and t=1 is other."""
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Nearest:
    """Result of a nearest-point query against a single segment.

    Attributes:
        t: Parameter of the nearest point on the segment
        distance_sq: Squared distance from the query point to it
    """

    t: float
    distance_sq: float


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle.

    Attributes:
        min_x: Left edge
        min_y: Bottom edge (top in y-down coordinates)
        max_x: Right edge
        max_y: Top edge (bottom in y-down coordinates)
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Rect":
        """Smallest rectangle containing all points.

        Raises:
            ValueError: If points is empty
        """
        pts = list(points)
        if not pts:
            raise ValueError("Cannot bound an empty set of points")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, p: Point) -> bool:
        """True if p lies inside or on the boundary."""
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """The four corners, in boundary order."""
        return (
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        )

    def edges(self) -> tuple["Line", "Line", "Line", "Line"]:
        """The four boundary edges connecting the corners."""
        c0, c1, c2, c3 = self.corners()
        return (Line(c0, c1), Line(c1, c2), Line(c2, c3), Line(c3, c0))

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )


def _format_number(v: float) -> str:
    return f"{v:.6g}"


def _clamp_unit(t: float) -> float:
    return max(0.0, min(1.0, t))


def _closest(p: Point, segment: "Segment", candidates: Iterable[float]) -> Nearest:
    """Pick the candidate parameter closest to p; the first one wins ties."""
    return min(
        (Nearest(t, p.distance_sq(segment.eval(t))) for t in candidates),
        key=lambda n: n.distance_sq,
    )


@dataclass(frozen=True, slots=True)
class Line:
    """A straight line segment from p0 to p1."""

    p0: Point
    p1: Point

    def eval(self, t: float) -> Point:
        return self.p0.lerp(self.p1, t)

    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1)

    def control_box(self) -> Rect:
        return Rect.from_points(self.control_points())

    def nearest(self, p: Point, accuracy: float = 1e-7) -> Nearest:  # noqa: ARG002
        """Project p onto the line, clamped to the segment.

        Args:
            p: The query point
            accuracy: Unused; the projection is exact

        Returns:
            Parameter and squared distance of the nearest point
        """
        d = self.p1 - self.p0
        length_sq = d.dot(d)
        if length_sq < 1e-12:
            return Nearest(0.0, p.distance_sq(self.p0))
        t = _clamp_unit((p - self.p0).dot(d) / length_sq)
        return Nearest(t, p.distance_sq(self.eval(t)))


@dataclass(frozen=True, slots=True)
class QuadBez:
    """A quadratic Bezier segment (TrueType curve)."""

    p0: Point
    p1: Point
    p2: Point

    def eval(self, t: float) -> Point:
        mt = 1.0 - t
        a = mt * mt
        b = 2.0 * mt * t
        c = t * t
        return Point(
            a * self.p0.x + b * self.p1.x + c * self.p2.x,
            a * self.p0.y + b * self.p1.y + c * self.p2.y,
        )

    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1, self.p2)

    def control_box(self) -> Rect:
        return Rect.from_points(self.control_points())

    def nearest(self, p: Point, accuracy: float = 1e-7) -> Nearest:  # noqa: ARG002
        """Find the nearest point on the curve to p.

        With B(t) = a*t^2 + b*t + c, the derivative of |B(t) - p|^2 is a cubic
        in t whose real roots in [0, 1] (plus the endpoints) are the only
        candidates for the minimum.
        """
        a = self.p0 - 2.0 * self.p1 + self.p2
        b = 2.0 * (self.p1 - self.p0)
        d = self.p0 - p
        roots = solveCubic(
            2.0 * a.dot(a),
            3.0 * a.dot(b),
            b.dot(b) + 2.0 * a.dot(d),
            b.dot(d),
        )
        candidates = [0.0, 1.0]
        candidates.extend(r for r in roots if 0.0 <= r <= 1.0)
        return _closest(p, self, candidates)


@dataclass(frozen=True, slots=True)
class CubicBez:
    """A cubic Bezier segment (PostScript/CFF curve)."""

    p0: Point
    p1: Point
    p2: Point
    p3: Point

    def eval(self, t: float) -> Point:
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3.0 * mt * mt * t
        c = 3.0 * mt * t * t
        d = t * t * t
        return Point(
            a * self.p0.x + b * self.p1.x + c * self.p2.x + d * self.p3.x,
            a * self.p0.y + b * self.p1.y + c * self.p2.y + d * self.p3.y,
        )

    def deriv(self, t: float) -> Point:
        """First derivative B'(t)."""
        mt = 1.0 - t
        q0 = self.p1 - self.p0
        q1 = self.p2 - self.p1
        q2 = self.p3 - self.p2
        return 3.0 * (mt * mt * q0 + 2.0 * mt * t * q1 + t * t * q2)

    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1, self.p2, self.p3)

    def control_box(self) -> Rect:
        return Rect.from_points(self.control_points())

    def _slope(self, p: Point, t: float) -> float:
        # Half the derivative of the squared distance
        return (self.eval(t) - p).dot(self.deriv(t))

    def nearest(self, p: Point, accuracy: float = 1e-7) -> Nearest:
        """Find the nearest point on the curve to p.

        The derivative of the squared distance is a quintic. Its sign is
        sampled on a uniform grid; every interval where it changes from
        negative to positive holds a local minimum, which is refined by
        bisection until the bracket is narrower than accuracy.

        Args:
            p: The query point
            accuracy: Parameter tolerance for the refined minima

        Returns:
            Parameter and squared distance of the nearest point
        """
        steps = CUBIC_NEAREST_STEPS
        ts = [i / steps for i in range(steps + 1)]
        slopes = [self._slope(p, t) for t in ts]
        candidates = list(ts)

        for i in range(steps):
            if not (slopes[i] < 0.0 < slopes[i + 1]):
                continue
            lo, hi = ts[i], ts[i + 1]
            while hi - lo > accuracy:
                mid = 0.5 * (lo + hi)
                if self._slope(p, mid) < 0.0:
                    lo = mid
                else:
                    hi = mid
            candidates.append(0.5 * (lo + hi))

        return _closest(p, self, candidates)


Segment = Union[Line, QuadBez, CubicBez]

# Drawing elements in fontTools RecordingPen form, e.g. ("lineTo", (Point,))
PathElement = tuple[str, tuple[Point, ...]]


@dataclass
class CurvePath:
    """An ordered sequence of drawing elements forming closed contours.

    Elements use the fontTools RecordingPen vocabulary: moveTo, lineTo,
    qCurveTo (one off-curve point), curveTo (two off-curve points) and
    closePath.

    Attributes:
        elements: Drawing elements in order
    """

    elements: list[PathElement] = field(default_factory=list)

    def move_to(self, p: Point) -> None:
        self.elements.append(("moveTo", (p,)))

    def line_to(self, p: Point) -> None:
        self.elements.append(("lineTo", (p,)))

    def quad_to(self, c: Point, p: Point) -> None:
        self.elements.append(("qCurveTo", (c, p)))

    def curve_to(self, c1: Point, c2: Point, p: Point) -> None:
        self.elements.append(("curveTo", (c1, c2, p)))

    def close_path(self) -> None:
        self.elements.append(("closePath", ()))

    def segments(self) -> Iterator[Segment]:
        """Decompose the path into segments.

        A closePath yields an implicit closing line when the current point
        differs from the start of the contour.

        Yields:
            Line, QuadBez or CubicBez segments in drawing order

        Raises:
            MalformedPathError: If an element has no preceding moveTo
        """
        start: Point | None = None
        last: Point | None = None
        for op, pts in self.elements:
            if op == "moveTo":
                start = last = pts[0]
                continue
            if last is None or start is None:
                raise MalformedPathError(f"'{op}' with no preceding moveTo")

            segment: Segment
            if op == "lineTo":
                segment = Line(last, pts[0])
            elif op == "qCurveTo":
                segment = QuadBez(last, pts[0], pts[1])
            elif op == "curveTo":
                segment = CubicBez(last, pts[0], pts[1], pts[2])
            elif op == "closePath":
                if last != start:
                    yield Line(last, start)
                last = start
                continue
            else:
                raise MalformedPathError(f"Unknown path element '{op}'")

            yield segment
            last = pts[-1]

    def is_empty(self) -> bool:
        """True if the path draws nothing (no segments)."""
        return all(op in ("moveTo", "closePath") for op, _ in self.elements)

    def points(self) -> Iterator[Point]:
        """All on- and off-curve points, in element order."""
        for _, pts in self.elements:
            yield from pts

    def control_box(self) -> Rect | None:
        """Bounding box of every defining point, None for a path with no points."""
        pts = list(self.points())
        if not pts:
            return None
        return Rect.from_points(pts)

    def contour_starts(self) -> list[Point]:
        """The first point of every contour."""
        return [pts[0] for op, pts in self.elements if op == "moveTo"]

    def transform(self, xx: float, yy: float, dx: float = 0.0, dy: float = 0.0) -> "CurvePath":
        """Scale then translate every point, returning a new path."""
        return CurvePath(
            [
                (op, tuple(Point(p.x * xx + dx, p.y * yy + dy) for p in pts))
                for op, pts in self.elements
            ]
        )

    def translate(self, dx: float, dy: float) -> "CurvePath":
        return self.transform(1.0, 1.0, dx, dy)

    def draw(self, pen: Any) -> None:
        """Replay the path into a fontTools pen."""
        for op, pts in self.elements:
            getattr(pen, op)(*(p.to_tuple() for p in pts))

    def to_svg(self) -> str:
        """SVG path data for the outline."""
        pen = SVGPathPen(None, ntos=_format_number)
        self.draw(pen)
        return pen.getCommands()

    def __len__(self) -> int:
        return len(self.elements)


class CurvePathPen(BasePen):
    """A fontTools pen that records an outline into a CurvePath.

    BasePen splits TrueType runs of off-curve points into single quadratic
    segments and decomposes components through the glyph set.

    Example:
        pen = CurvePathPen(font.getGlyphSet())
        glyph_set["A"].draw(pen)
        path = pen.path
    """

    def __init__(self, glyphSet: Any = None) -> None:  # noqa: N803
        super().__init__(glyphSet)
        self.path = CurvePath()

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.path.move_to(Point(*pt))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.path.line_to(Point(*pt))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.path.quad_to(Point(*pt1), Point(*pt2))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.path.curve_to(Point(*pt1), Point(*pt2), Point(*pt3))

    def _closePath(self) -> None:
        self.path.close_path()
