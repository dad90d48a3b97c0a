"""Tests for approximate equality of letterforms."""

import logging

import pytest

from lookalike.config import RulesOfSimilarity
from lookalike.core.nearest import NearestScratch
from lookalike.core.segments import IndexedCurvePath
from lookalike.core.similarity import (
    SAMPLE_STEPS,
    approximately_equal,
    is_approximately_equal,
)
from lookalike.domain import CurvePath, Point
from lookalike.exceptions import (
    ApproximatelyEqualError,
    BrokeTheHardDeck,
    EmptinessMismatch,
    ExhaustedBudget,
)


def bar(y: float, length: float = 100.0) -> IndexedCurvePath:
    """A closed, zero-width horizontal stroke: two line segments."""
    path = CurvePath()
    path.move_to(Point(0, y))
    path.line_to(Point(length, y))
    path.close_path()
    return IndexedCurvePath.build(path)


def square(
    x: float = 0.0, y: float = 0.0, size: float = 100.0, extra: bool = False
) -> IndexedCurvePath:
    path = CurvePath()
    path.move_to(Point(x, y))
    path.line_to(Point(x + size, y))
    path.line_to(Point(x + size, y + size))
    path.line_to(Point(x, y + size))
    path.close_path()
    if extra:
        # A second, distant contour
        path.move_to(Point(500, 500))
        path.line_to(Point(520, 500))
        path.line_to(Point(520, 520))
        path.close_path()
    return IndexedCurvePath.build(path)


def bowl() -> IndexedCurvePath:
    path = CurvePath()
    path.move_to(Point(50, 0))
    path.quad_to(Point(100, 0), Point(100, 50))
    path.curve_to(Point(100, 80), Point(80, 100), Point(50, 100))
    path.quad_to(Point(0, 100), Point(0, 50))
    path.line_to(Point(0, 20))
    path.close_path()
    return IndexedCurvePath.build(path)


def empty() -> IndexedCurvePath:
    return IndexedCurvePath.build(CurvePath())


@pytest.fixture
def rules() -> RulesOfSimilarity:
    return RulesOfSimilarity()


class TestApproximatelyEqual:
    """Tests for approximately_equal."""

    @pytest.mark.parametrize("make", [square, bowl, lambda: square(extra=True)])
    def test_reflexive(self, make, rules):
        """Test every non-empty path is approximately equal to itself."""
        path = make()
        approximately_equal(path, path, rules)
        assert is_approximately_equal(path, path, rules)

    def test_both_empty(self, rules):
        """Test two empty letterforms are equal."""
        approximately_equal(empty(), empty(), rules)

    def test_one_empty(self, rules):
        """Test an empty and a non-empty letterform are never equal."""
        with pytest.raises(EmptinessMismatch, match="One of self and other is empty"):
            approximately_equal(empty(), square(), rules)
        with pytest.raises(EmptinessMismatch):
            approximately_equal(square(), empty(), rules)

    def test_within_equivalence_is_free(self):
        """Test separations at or below equivalence cost nothing."""
        rules = RulesOfSimilarity(equivalence=2.0, budget=0.0, error=25.0)
        approximately_equal(bar(1.5), bar(0.0), rules)

    def test_hard_deck_beats_budget(self):
        """Test a single sample past the error limit fails whatever the budget."""
        rules = RulesOfSimilarity(equivalence=2.0, budget=1e12, error=25.0)
        with pytest.raises(BrokeTheHardDeck) as exc_info:
            approximately_equal(bar(30.0), bar(0.0), rules)
        assert exc_info.value.separation == pytest.approx(30.0)
        assert "30.00 exceeds error limit" in str(exc_info.value)

    def test_hard_deck_with_no_budget(self):
        """Test the error limit is reported even when the budget is also exceeded."""
        rules = RulesOfSimilarity(equivalence=2.0, budget=0.0, error=25.0)
        with pytest.raises(BrokeTheHardDeck):
            approximately_equal(bar(30.0), bar(0.0), rules)

    def test_budget_is_enough(self):
        """Test accumulated squared separations within budget pass."""
        # Two segments of 11 samples each, all 3.0 apart: 22 * 9 = 198
        samples = 2 * (SAMPLE_STEPS + 1)
        rules = RulesOfSimilarity(equivalence=2.0, budget=samples * 9 + 0.5, error=25.0)
        approximately_equal(bar(3.0), bar(0.0), rules)

    def test_budget_exhausted(self):
        """Test the budget runs out once squared separations exceed it."""
        samples = 2 * (SAMPLE_STEPS + 1)
        rules = RulesOfSimilarity(equivalence=2.0, budget=samples * 9 - 0.5, error=25.0)
        with pytest.raises(ExhaustedBudget, match="Exhausted budget"):
            approximately_equal(bar(3.0), bar(0.0), rules)
        assert not is_approximately_equal(bar(3.0), bar(0.0), rules)

    def test_budget_deductions_are_logged(self, caplog):
        """Test each deduction is logged at debug level."""
        rules = RulesOfSimilarity(equivalence=2.0, budget=1000.0, error=25.0)
        with caplog.at_level(logging.DEBUG, logger="lookalike.core.similarity"):
            approximately_equal(bar(3.0), bar(0.0), rules)
        assert len([r for r in caplog.records if "budget remains" in r.getMessage()]) == 22

    def test_asymmetric(self, rules):
        """Test only the first path is sampled.

        Every point of the square lies on the square-plus-contour, but the
        extra contour is far from the plain square.
        """
        plain = square()
        with_extra = square(extra=True)
        approximately_equal(plain, with_extra, rules)
        with pytest.raises(BrokeTheHardDeck):
            approximately_equal(with_extra, plain, rules)

    def test_start_point_and_direction_do_not_matter(self, rules):
        """Test the same square drawn from another corner and backwards matches."""
        path = CurvePath()
        path.move_to(Point(100, 100))
        path.line_to(Point(100, 0))
        path.line_to(Point(0, 0))
        path.line_to(Point(0, 100))
        path.close_path()
        reversed_square = IndexedCurvePath.build(path)

        approximately_equal(square(), reversed_square, rules)
        approximately_equal(reversed_square, square(), rules)

    def test_scratch_is_used(self, rules):
        """Test a provided scratch buffer collects the query counters."""
        scratch = NearestScratch()
        approximately_equal(square(), square(), rules, scratch)
        # Four segments sampled at 11 points each
        assert scratch.counters.queries == 4 * (SAMPLE_STEPS + 1)

    def test_errors_are_verdicts(self):
        """Test the failure kinds share a base class."""
        for error in (BrokeTheHardDeck, ExhaustedBudget, EmptinessMismatch):
            assert issubclass(error, ApproximatelyEqualError)
