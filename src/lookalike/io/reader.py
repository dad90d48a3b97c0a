"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files
and extracting letterforms into domain models.
"""

from pathlib import Path

from fontTools.ttLib import TTFont

from lookalike.domain import CurvePath, Letterform
from lookalike.io.converter import fonttools_glyph_to_path


class FontReader:
    """Loads TTF/OTF fonts and extracts letterforms.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            letterform = reader.letterform("a")
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}

    @property
    def path(self) -> Path:
        return self._font_path

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path), lazy=True)
        self._cmap = self._font.getBestCmap() or {}

    def _loaded(self) -> tuple[TTFont, dict[int, str]]:
        """Return the open font and its best cmap."""
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font, self._cmap

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font, _ = self._loaded()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._loaded()[0]["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._loaded()[0]["maxp"].numGlyphs

    def has_char(self, char: str) -> bool:
        """Check if the font maps char to a glyph.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        _, cmap = self._loaded()
        return ord(char) in cmap

    def letterform_path(self, char: str, uniform_scale: float = 1.0) -> CurvePath:
        """Extract the outline for a character.

        Args:
            char: The character to look up in the cmap
            uniform_scale: Factor bringing the font to the comparison UPM

        Returns:
            The normalized outline, empty if the font lacks the character

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font, cmap = self._loaded()
        glyph_name = cmap.get(ord(char))
        if glyph_name is None:
            return CurvePath()

        glyph_set = font.getGlyphSet()
        return fonttools_glyph_to_path(glyph_set[glyph_name], glyph_set, uniform_scale)

    def letterform(self, char: str, uniform_scale: float = 1.0) -> Letterform:
        """Extract the letterform this font contributes for char."""
        return Letterform(
            source=str(self._font_path),
            char=char,
            path=self.letterform_path(char, uniform_scale),
        )

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = {}

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
