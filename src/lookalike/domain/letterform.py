"""Letterform representation.

A letterform is the outline one source font draws for one character.
"""

from dataclasses import dataclass

from lookalike.domain.path import CurvePath


@dataclass
class Letterform:
    """The outline a single source contributes for a single character.

    Attributes:
        source: Identifier of the contributing font (usually its file path)
        char: The character drawn
        path: The outline, possibly empty if the font lacks the character
    """

    source: str
    char: str
    path: CurvePath

    def is_empty(self) -> bool:
        """Check if the letterform has no outline.

        Missing characters and non-printing characters are empty.

        Returns:
            True if the path draws nothing, False otherwise
        """
        return self.path.is_empty()
