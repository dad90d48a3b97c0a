"""Domain models for lookalike.

This module contains the geometric and font-level models the comparison
engine works on. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Picklable for inter-process communication (parallel processing)
- Independent of fonttools implementation details

Key classes:
- Point: A 2D point with vector arithmetic
- Rect: An axis-aligned rectangle
- Line, QuadBez, CubicBez: Curve segments
- CurvePath: A sequence of drawing elements forming closed contours
- Letterform: One font's outline for one character
"""

from lookalike.domain.letterform import Letterform
from lookalike.domain.path import (
    CubicBez,
    CurvePath,
    CurvePathPen,
    Line,
    Nearest,
    Point,
    QuadBez,
    Rect,
    Segment,
)

__all__: list[str] = [
    # Geometry
    "Point",
    "Rect",
    "Nearest",
    # Segments
    "Line",
    "QuadBez",
    "CubicBez",
    "Segment",
    # Paths
    "CurvePath",
    "CurvePathPen",
    "Letterform",
]
