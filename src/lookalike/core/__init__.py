"""Core comparison algorithms for lookalike.

This module contains the core algorithms for:

- Segment indexing (control boxes, corners, boundary edges)
- Nearest-point queries with bounding-box pruning
- Approximate equality of letterforms under budgeted rules
- Grouping letterforms into equivalence classes per character

All services are designed to be:
- Free of shared state (safe for use in worker processes)
- Deterministic for a fixed input order

Key functions:
- nearest_point: Pruned nearest point on an indexed path
- nearest_point_exhaustive: Reference scan of every segment
- approximately_equal: Budgeted, asymmetric letterform comparison
- share_counts: Characters shared per set of sources

Key classes:
- PrecomputedSegment: Segment with control box, corners and edges
- IndexedCurvePath: Curve path plus its precomputed segments
- GroupingEngine: Partitions one character's letterforms into groups
- FontComparer: Orchestrates a comparison run across fonts
"""

from lookalike.core.grouping import (
    GroupingEngine,
    LetterformGroup,
    group_letterforms,
    match_limit,
    share_counts,
)
from lookalike.core.nearest import (
    NEAREST_EPSILON,
    NearestCounters,
    NearestScratch,
    nearest_point,
    nearest_point_exhaustive,
)
from lookalike.core.processor import ComparisonResult, FontComparer, group_character
from lookalike.core.segments import IndexedCurvePath, PrecomputedSegment
from lookalike.core.similarity import approximately_equal, is_approximately_equal

__all__ = [
    "NEAREST_EPSILON",
    # Processor classes
    "ComparisonResult",
    "FontComparer",
    # Grouping classes
    "GroupingEngine",
    # Segment classes
    "IndexedCurvePath",
    "LetterformGroup",
    # Nearest-point classes
    "NearestCounters",
    "NearestScratch",
    "PrecomputedSegment",
    # Functions
    "approximately_equal",
    "group_character",
    "group_letterforms",
    "is_approximately_equal",
    "match_limit",
    "nearest_point",
    "nearest_point_exhaustive",
    "share_counts",
]
