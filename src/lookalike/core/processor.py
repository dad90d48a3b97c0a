"""Comparison session orchestration.

This module coordinates a full comparison run: load every font, extract one
letterform per font per test character, and group each character's
letterforms. Characters are independent, so grouping can be sharded by
character over worker processes.

Key components:
- group_character: Top-level picklable function grouping one character
- ComparisonResult: Groups per character plus aggregate scoring
- FontComparer: Main orchestrator class for comparison runs
"""

import time
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lookalike.config import LookalikeSettings, RulesOfSimilarity
from lookalike.core.grouping import GroupingEngine, LetterformGroup, match_limit, share_counts
from lookalike.domain import CurvePath
from lookalike.exceptions import ContractViolation, FontLoadError
from lookalike.io.reader import FontReader
from lookalike.utils.logging import ComparisonLogger, ComparisonStats, configure_logging


def group_character(
    char: str,
    entries: list[tuple[str, CurvePath]],
    rules_dict: dict[str, Any],
) -> dict[str, Any]:
    """Group the letterforms of a single character.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Contract violations are not captured; they propagate to the caller.

    Args:
        char: The character being compared
        entries: (source, path) pairs in the order they are to be grouped
        rules_dict: Serialized rules, already scaled for the comparison UPM

    Returns:
        Dictionary with "char", "groups", "comparisons", "counters" and
        "duration_ms"
    """
    start_time = time.time()
    engine = GroupingEngine(char, RulesOfSimilarity(**rules_dict))
    for source, path in entries:
        engine.offer(source, path)

    return {
        "char": char,
        "groups": engine.groups,
        "comparisons": engine.comparisons,
        "counters": engine.scratch.counters,
        "duration_ms": (time.time() - start_time) * 1000,
    }


@dataclass
class ComparisonResult:
    """Outcome of a comparison run.

    Attributes:
        sources: Source identifiers compared, in grouping order
        test_chars: Characters compared
        rules: Rules in effect, scaled for max_upem
        max_upem: UPM all letterforms were scaled to
        groups: Groups per character
        stats: Run statistics
    """

    sources: list[str]
    test_chars: list[str]
    rules: RulesOfSimilarity
    max_upem: int
    groups: dict[str, list[LetterformGroup]] = field(default_factory=dict)
    stats: ComparisonStats = field(default_factory=ComparisonStats)

    def share_counts(self) -> dict[frozenset[str], int]:
        """Characters shared by each set of sources that grouped together."""
        return share_counts(self.groups)

    def match_limit(self, match_pct: float) -> int:
        """Characters a set of sources must share to be reported."""
        return match_limit(len(self.test_chars), match_pct)

    def matching_sets(self, match_pct: float) -> list[tuple[frozenset[str], int]]:
        """Sets of sources sharing at least match_pct of the test characters.

        Returns:
            (sources, score) pairs, highest score first
        """
        limit = self.match_limit(match_pct)
        matches = [
            (sources, score) for sources, score in self.share_counts().items() if score >= limit
        ]
        matches.sort(key=lambda item: (-item[1], sorted(item[0])))
        return matches

    def inconsistent_chars(self) -> list[str]:
        """Characters drawn more than one way."""
        return [c for c in self.test_chars if len(self.groups.get(c, [])) > 1]


class FontComparer:
    """Orchestrates comparison of letterforms across fonts.

    Manages the complete workflow:
    1. Load every font file
    2. Scale the rules to the largest UPM seen
    3. Extract each font's letterform for every test character
    4. Group each character's letterforms, optionally in worker processes
    5. Collect groups and statistics

    Example:
        comparer = FontComparer(LookalikeSettings())
        result = comparer.compare(
            font_paths=[Path("a.ttf"), Path("b.ttf")],
            test_chars=["a", "b"],
        )
    """

    def __init__(self, config: LookalikeSettings) -> None:
        """Initialize the comparer with configuration.

        Args:
            config: Lookalike settings containing rules and comparison config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.comparison_logger = ComparisonLogger(self.logger)

    def compare(
        self,
        font_paths: Sequence[Path],
        test_chars: Sequence[str],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> ComparisonResult:
        """Compare the letterforms of test_chars across fonts.

        Args:
            font_paths: Font files to compare
            test_chars: Characters to compare
            max_workers: Worker processes (None = config default, 1 = in-process)
            progress_callback: Optional callback(completed, total, char)

        Returns:
            ComparisonResult with groups for every test character

        Raises:
            FontLoadError: If a font cannot be loaded
            ContractViolation: On duplicate sources or malformed outlines
            KeyboardInterrupt: If the run is cancelled by the user
        """
        stats = self.comparison_logger.reset()
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.comparison.max_workers

        chars = list(test_chars)
        if not font_paths:
            self.logger.warning("Not much to do with no fonts specified")
            stats.end_time = time.time()
            return ComparisonResult(
                sources=[],
                test_chars=chars,
                rules=self.config.rules,
                max_upem=1000,
                stats=stats,
            )

        paths = sorted(font_paths)
        readers = [FontReader(p) for p in paths]
        try:
            upems = self._load_fonts(readers)

            # Thresholds are relative to 1000 upem; scale to the largest
            max_upem = max(upems)
            rules = self.config.rules.scaled_for(max_upem)
            self.comparison_logger.log_rules(rules, max_upem)

            entries = self._extract_letterforms(readers, upems, max_upem, chars)
        finally:
            for reader in readers:
                reader.close()

        result = ComparisonResult(
            sources=[str(p) for p in paths],
            test_chars=chars,
            rules=rules,
            max_upem=max_upem,
            stats=stats,
        )

        self.logger.info(
            "Starting comparison",
            fonts=len(paths),
            chars=len(chars),
            max_workers=max_workers,
        )

        if max_workers is None or max_workers <= 1:
            self._group_serial(entries, rules, result, progress_callback)
        else:
            self._group_parallel(entries, rules, max_workers, result, progress_callback)

        stats.end_time = time.time()
        self.logger.info(
            "Comparison complete",
            chars=stats.char_count,
            groups=stats.group_count,
            inconsistent=len(stats.inconsistent_chars),
            comparisons=stats.comparisons,
            exact_evaluations=stats.exact_evaluations,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return result

    def _load_fonts(self, readers: list[FontReader]) -> list[int]:
        """Load every font, returning their UPMs in reader order."""
        upems: list[int] = []
        for reader in readers:
            try:
                reader.load()
                upem = reader.units_per_em
                font_format = reader.format
            except Exception as e:
                raise FontLoadError(str(reader.path), str(e)) from e
            self.comparison_logger.log_font_loaded(str(reader.path), upem, font_format)
            upems.append(upem)
        return upems

    def _extract_letterforms(
        self,
        readers: list[FontReader],
        upems: list[int],
        max_upem: int,
        chars: list[str],
    ) -> dict[str, list[tuple[str, CurvePath]]]:
        """Extract every font's letterform for every character, scaled to max_upem."""
        entries: dict[str, list[tuple[str, CurvePath]]] = {c: [] for c in chars}
        for reader, upem in zip(readers, upems):
            uniform_scale = max_upem / upem if upem != max_upem else 1.0
            source = str(reader.path)
            for char in chars:
                try:
                    path = reader.letterform_path(char, uniform_scale)
                except Exception as e:
                    raise FontLoadError(source, f"cannot draw '{char}': {e}") from e
                entries[char].append((source, path))
        return entries

    def _record(self, result: ComparisonResult, outcome: dict[str, Any]) -> None:
        char = outcome["char"]
        result.groups[char] = outcome["groups"]
        self.comparison_logger.log_character_grouped(
            char=char,
            groups=outcome["groups"],
            comparisons=outcome["comparisons"],
            counters=outcome["counters"],
        )

    def _group_serial(
        self,
        entries: dict[str, list[tuple[str, CurvePath]]],
        rules: RulesOfSimilarity,
        result: ComparisonResult,
        progress_callback: Callable[[int, int, str], None] | None,
    ) -> None:
        """Group characters one after another in this process."""
        rules_dict = rules.model_dump()
        total = len(entries)
        for completed, (char, char_entries) in enumerate(entries.items(), start=1):
            try:
                outcome = group_character(char, char_entries, rules_dict)
            except ContractViolation as e:
                self.comparison_logger.log_contract_violation(char, e)
                raise
            self._record(result, outcome)
            if progress_callback is not None:
                progress_callback(completed, total, char)

    def _group_parallel(
        self,
        entries: dict[str, list[tuple[str, CurvePath]]],
        rules: RulesOfSimilarity,
        max_workers: int,
        result: ComparisonResult,
        progress_callback: Callable[[int, int, str], None] | None,
    ) -> None:
        """Group characters in parallel using ProcessPoolExecutor.

        Each worker has its own grouping engine and scratch buffer; results
        are merged here in completion order.
        """
        rules_dict = rules.model_dump()
        total = len(entries)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for char, char_entries in entries.items():
                future = executor.submit(group_character, char, char_entries, rules_dict)
                pending_futures[future] = char

            try:
                for future in as_completed(list(pending_futures)):
                    char = pending_futures.pop(future)
                    try:
                        outcome = future.result()
                    except ContractViolation as e:
                        self.comparison_logger.log_contract_violation(char, e)
                        executor.shutdown(wait=True, cancel_futures=True)
                        raise
                    self._record(result, outcome)

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, char)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        # Report in test character order regardless of completion order
        result.groups = {c: result.groups[c] for c in entries}
