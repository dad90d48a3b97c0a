"""Approximate equality of letterforms.

Meant to work with non-adversarial, similar curves like letterforms: think of
the same "I" drawn with two different sets of drawing commands.

Every segment of the first path is sampled at t = 0.0, 0.1, ..., 1.0 and each
sample is matched against the nearest point of the second path. Each
separation falls into one of three tiers:

- at or below rules.equivalence: free
- above rules.error: the comparison fails outright
- in between: separation squared is deducted from rules.budget, and the
  comparison fails once the budget drops below zero

The comparison is asymmetric: only the first path is sampled.
"""

import logging

from lookalike.config import RulesOfSimilarity
from lookalike.core.nearest import NearestScratch, nearest_point
from lookalike.core.segments import IndexedCurvePath
from lookalike.exceptions import (
    ApproximatelyEqualError,
    BrokeTheHardDeck,
    EmptinessMismatch,
    ExhaustedBudget,
)

logger = logging.getLogger(__name__)

# Samples per segment: t = 0/10 ... 10/10, shared endpoints are sampled twice
SAMPLE_STEPS = 10


def approximately_equal(
    this: IndexedCurvePath,
    other: IndexedCurvePath,
    rules: RulesOfSimilarity,
    scratch: NearestScratch | None = None,
) -> None:
    """Check that this path is approximately equal to other.

    Args:
        this: The sampled path
        other: The path nearest points are looked up on
        rules: Thresholds, already scaled for the letterforms' UPM
        scratch: Working set for nearest-point queries

    Raises:
        EmptinessMismatch: If exactly one of the paths is empty
        BrokeTheHardDeck: If any sample is farther than rules.error
        ExhaustedBudget: If squared separations exceed rules.budget
    """
    if this.is_empty() != other.is_empty():
        raise EmptinessMismatch()
    if scratch is None:
        scratch = NearestScratch()

    budget = rules.budget
    for indexed in this.segments:
        segment = indexed.segment
        for step in range(SAMPLE_STEPS + 1):
            t = step / SAMPLE_STEPS
            pt_this = segment.eval(t)
            pt_other = nearest_point(pt_this, other, scratch)
            separation = pt_this.distance(pt_other)

            if separation <= rules.equivalence:
                continue
            if separation > rules.error:
                raise BrokeTheHardDeck(separation, rules)

            budget -= separation**2
            logger.debug(
                "Nearest %s is %s, %.2f apart. %s/%s budget remains.",
                pt_this,
                pt_other,
                separation,
                budget,
                rules.budget,
            )
            if budget < 0.0:
                logger.debug("Fail due to exhausted budget")
                raise ExhaustedBudget(rules)


def is_approximately_equal(
    this: IndexedCurvePath,
    other: IndexedCurvePath,
    rules: RulesOfSimilarity,
    scratch: NearestScratch | None = None,
) -> bool:
    """Boolean form of approximately_equal."""
    try:
        approximately_equal(this, other, rules, scratch)
    except ApproximatelyEqualError:
        return False
    return True
