"""Logging utilities for Lookalike."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from lookalike.config import RulesOfSimilarity
    from lookalike.core.grouping import LetterformGroup
    from lookalike.core.nearest import NearestCounters


@dataclass
class ComparisonStats:
    """Statistics from a comparison run."""

    font_count: int = 0
    char_count: int = 0
    group_count: int = 0
    comparisons: int = 0
    inconsistent_chars: list[str] = field(default_factory=list)
    nearest_queries: int = 0
    segments_pruned: int = 0
    exact_evaluations: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


# Handlers installed on the root logger by the last configure_logging call
_installed_handlers: list[logging.Handler] = []

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _level(name: str) -> int:
    return logging.getLevelName(name.upper())


def _replace_handlers(root_logger: logging.Logger, handlers: list[logging.Handler]) -> None:
    """Swap the handlers from a previous configuration for new ones."""
    for old in _installed_handlers:
        root_logger.removeHandler(old)
        old.close()
    _installed_handlers[:] = handlers
    for handler in handlers:
        root_logger.addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to a file and, unless quiet, the console.

    Calling this again replaces the handlers installed by the previous call,
    so a process comparing fonts several times logs each record once.

    Args:
        log_file: Path to log file (lookalike_<timestamp>.log if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, log to the file only

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        log_file = Path(f"lookalike_{datetime.now():%Y%m%d_%H%M%S}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(_level(file_level))
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    handlers: list[logging.Handler] = [file_handler]

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(console_level))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _replace_handlers(root_logger, handlers)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("lookalike")
    logger.info(
        "Logging configured",
        log_file=str(log_file),
        file_level=file_level,
        console_level=None if quiet else console_level,
    )
    return logger


class ComparisonLogger:
    """Logger for tracking comparison progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ComparisonStats()

    def reset(self) -> ComparisonStats:
        """Start a fresh set of statistics for a new run."""
        self._stats = ComparisonStats()
        return self._stats

    def log_rules(self, rules: "RulesOfSimilarity", max_upem: int) -> None:
        """Log the rules in effect after UPM scaling."""
        self._logger.info(
            "The rules are",
            equivalence=rules.equivalence,
            budget=rules.budget,
            error=rules.error,
            upem=max_upem,
        )

    def log_font_loaded(self, path: str, upem: int, font_format: str) -> None:
        """Log a loaded font."""
        self._logger.debug("Font loaded", font=path, upem=upem, format=font_format)
        self._stats.font_count += 1

    def log_character_grouped(
        self,
        char: str,
        groups: list["LetterformGroup"],
        comparisons: int,
        counters: "NearestCounters",
    ) -> None:
        """Log the groups found for a character."""
        self._logger.debug(
            "Character grouped",
            char=char,
            groups=[sorted(g.sources) for g in groups],
            comparisons=comparisons,
            exact_evaluations=counters.exact_evaluations,
        )
        self._stats.char_count += 1
        self._stats.group_count += len(groups)
        self._stats.comparisons += comparisons
        self._stats.nearest_queries += counters.queries
        self._stats.segments_pruned += counters.segments_pruned
        self._stats.exact_evaluations += counters.exact_evaluations
        if len(groups) > 1:
            self._stats.inconsistent_chars.append(char)

    def log_contract_violation(self, char: str, error: Exception) -> None:
        """Log caller misuse that aborts the run."""
        self._logger.error(
            "Comparison aborted",
            char=char,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> ComparisonStats:
        """Get current comparison statistics."""
        return self._stats
