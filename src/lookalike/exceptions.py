"""Exception hierarchy for Lookalike."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lookalike.config.settings import RulesOfSimilarity


class LookalikeError(Exception):
    """Base exception for all Lookalike errors."""

    pass


class FontError(LookalikeError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class InputError(LookalikeError):
    """Errors in the files or codepoint lists given to a run."""

    pass


class InputFileError(InputError):
    """An input path is missing or is not a regular file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"'{path}' is not a file")


class NamFileError(InputError):
    """A .nam codepoint list contains an unparseable line."""

    def __init__(self, line: str, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"Bad nam line '{line}': {reason}")


class ApproximatelyEqualError(LookalikeError):
    """Two letterforms are not approximately equal.

    These are verdicts, not failures: grouping routinely produces them.
    """

    pass


class BrokeTheHardDeck(ApproximatelyEqualError):
    """A single sample point was farther away than the error ceiling."""

    def __init__(self, separation: float, rules: "RulesOfSimilarity") -> None:
        self.separation = separation
        self.rules = rules
        super().__init__(f"{separation:.2f} exceeds error limit. {rules!r}.")


class ExhaustedBudget(ApproximatelyEqualError):
    """Accumulated squared separations exceeded the budget."""

    def __init__(self, rules: "RulesOfSimilarity") -> None:
        self.rules = rules
        super().__init__(f"Exhausted budget. {rules!r}.")


class EmptinessMismatch(ApproximatelyEqualError):
    """Exactly one of the two letterforms is empty."""

    def __init__(self) -> None:
        super().__init__("One of self and other is empty")


class ContractViolation(LookalikeError):
    """Caller misuse. Aborts the current comparison run."""

    pass


class EmptyPathError(ContractViolation):
    """Nearest-point query issued against a path with no segments."""

    def __init__(self) -> None:
        super().__init__("Nearest point query against an empty path")

    def __reduce__(self) -> tuple:
        return (type(self), ())


class DuplicateSourceError(ContractViolation):
    """The same source was offered twice for one character."""

    def __init__(self, source: str, char: str) -> None:
        self.source = source
        self.char = char
        super().__init__(f"Multiple definitions for '{source}' '{char}'")

    def __reduce__(self) -> tuple:
        return (type(self), (self.source, self.char))


class MalformedPathError(ContractViolation):
    """Path element encountered with no preceding moveTo."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
