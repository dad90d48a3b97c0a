"""Grouping of letterforms into equivalence classes.

For one character, every source's letterform is offered in a fixed order.
A letterform joins the first existing group holding any member it matches,
otherwise it opens a new group. Membership is "matches any member", not
"matches all members", so a group can chain together letterforms that are
not pairwise similar.

Key components:
- LetterformGroup: Sources whose letterforms were judged the same
- GroupingEngine: Partitions one character's letterforms into groups
- share_counts: Counts the characters each set of sources agrees on
"""

import logging
import math
from collections.abc import Iterable, Mapping

from lookalike.config import RulesOfSimilarity
from lookalike.core.nearest import NearestScratch
from lookalike.core.segments import IndexedCurvePath
from lookalike.core.similarity import approximately_equal
from lookalike.domain import CurvePath
from lookalike.exceptions import ApproximatelyEqualError, DuplicateSourceError

logger = logging.getLogger(__name__)


class LetterformGroup:
    """A non-empty set of sources whose letterforms match for one character.

    Example:
        group = LetterformGroup("a.ttf", IndexedCurvePath.build(path))
        if group.matches(candidate, rules):
            group.insert("b.ttf", candidate)
    """

    def __init__(self, source: str, path: IndexedCurvePath) -> None:
        self._members: dict[str, IndexedCurvePath] = {source: path}

    def matches(
        self,
        candidate: IndexedCurvePath,
        rules: RulesOfSimilarity,
        scratch: NearestScratch | None = None,
    ) -> bool:
        """Check whether candidate approximately equals any member.

        Each member is the sampled side; nearest points are looked up on
        the candidate.
        """
        for source, member in self._members.items():
            try:
                approximately_equal(member, candidate, rules, scratch)
            except ApproximatelyEqualError as e:
                logger.debug("No match against %s: %s", source, e)
                continue
            return True
        return False

    def insert(self, source: str, path: IndexedCurvePath, char: str = "") -> None:
        """Add a member.

        Raises:
            DuplicateSourceError: If source is already a member
        """
        if source in self._members:
            raise DuplicateSourceError(source, char)
        self._members[source] = path

    @property
    def sources(self) -> frozenset[str]:
        return frozenset(self._members)

    @property
    def letterforms(self) -> dict[str, CurvePath]:
        """Map of source to the outline it contributed."""
        return {source: indexed.path for source, indexed in self._members.items()}

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, source: object) -> bool:
        return source in self._members

    def __repr__(self) -> str:
        return f"LetterformGroup({sorted(self._members)!r})"


class GroupingEngine:
    """Partitions the letterforms of one character into groups.

    Sources are grouped in the order they are offered. Each source may be
    offered once.

    Example:
        engine = GroupingEngine("a", rules)
        for source, path in letterforms:
            engine.offer(source, path)
        groups = engine.groups
    """

    def __init__(self, char: str, rules: RulesOfSimilarity) -> None:
        self.char = char
        self.rules = rules
        self.groups: list[LetterformGroup] = []
        self.scratch = NearestScratch()
        self.comparisons = 0
        self._placed: dict[str, int] = {}

    def offer(self, source: str, path: CurvePath) -> int:
        """Place a source's letterform in the first matching group.

        Args:
            source: Identifier of the contributing font
            path: Its outline for this engine's character

        Returns:
            Index of the group the letterform was placed in

        Raises:
            DuplicateSourceError: If source was already offered
            MalformedPathError: If path is malformed
        """
        if source in self._placed:
            raise DuplicateSourceError(source, self.char)

        candidate = IndexedCurvePath.build(path)
        for idx, group in enumerate(self.groups):
            self.comparisons += 1
            if group.matches(candidate, self.rules, self.scratch):
                group.insert(source, candidate, self.char)
                self._placed[source] = idx
                return idx

        self.groups.append(LetterformGroup(source, candidate))
        idx = len(self.groups) - 1
        self._placed[source] = idx
        return idx


def group_letterforms(
    char: str,
    entries: Iterable[tuple[str, CurvePath]],
    rules: RulesOfSimilarity,
) -> list[LetterformGroup]:
    """Group (source, path) pairs for one character, in the given order."""
    engine = GroupingEngine(char, rules)
    for source, path in entries:
        engine.offer(source, path)
    return engine.groups


def share_counts(
    groups_by_char: Mapping[str, Iterable[LetterformGroup]],
) -> dict[frozenset[str], int]:
    """Count, per set of sources, the characters on which they share a group.

    Only groups with at least two members are counted.
    """
    counts: dict[frozenset[str], int] = {}
    for groups in groups_by_char.values():
        for group in groups:
            if len(group) < 2:
                continue
            key = group.sources
            counts[key] = counts.get(key, 0) + 1
    return counts


def match_limit(char_count: int, match_pct: float) -> int:
    """Number of characters a set of sources must share to count as a match."""
    return math.ceil(char_count * match_pct / 100.0)
