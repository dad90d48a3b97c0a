"""Sources of test characters and font files.

Test characters come either from a string or from a .nam codepoint list as
used by https://github.com/googlefonts/glyphsets. Font files come from
explicit paths and, optionally, from a checkout of https://github.com/google/fonts
where one exemplar file is picked per family directory.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from lookalike.config import ComparisonConfig
from lookalike.exceptions import InputFileError, NamFileError

logger = logging.getLogger(__name__)

FONT_SUFFIXES = (".ttf", ".otf")


def parse_nam_line(line: str) -> str | None:
    """Parse one line of a .nam file.

    Lines look like "0x0041 LATIN CAPITAL LETTER A # comment". Anything after
    a '#' is ignored.

    Args:
        line: A line of the .nam file

    Returns:
        The character, or None for blank, comment and unrecognized lines

    Raises:
        NamFileError: If the codepoint is not valid hex or not a valid character
    """
    raw = line.split("#", 1)[0].strip()
    if not raw:
        return None
    if not raw.startswith("0x"):
        logger.warning("Invalid nam line: %s", line)
        return None

    hex_digits = raw[2:].split(None, 1)[0] if len(raw) > 2 else ""
    try:
        codepoint = int(hex_digits, 16)
    except ValueError as e:
        raise NamFileError(line, "bad hex codepoint") from e
    try:
        return chr(codepoint)
    except (ValueError, OverflowError) as e:
        raise NamFileError(line, "bad codepoint") from e


def read_nam(path: Path) -> set[str]:
    """Read the characters listed in a .nam file.

    Raises:
        FileNotFoundError: If the file does not exist
        NamFileError: If a line holds an invalid codepoint
    """
    chars: set[str] = set()
    with path.open(encoding="utf-8") as f:
        for line in f:
            char = parse_nam_line(line)
            if char is not None:
                chars.add(char)
    return chars


def select_test_chars(config: ComparisonConfig) -> list[str]:
    """Unique, sorted, test characters.

    The .nam file wins over the test string when both are given. Whitespace
    is kept: it has an empty outline in every font and counts toward the score.
    """
    if config.test_nam is not None:
        chars = read_nam(config.test_nam)
    else:
        chars = set(config.test_string)
    return sorted(chars)


def _google_fonts_exemplar(family_dir: Path) -> Path | None:
    """Pick one upright font file to represent a family directory."""
    font_files = sorted(
        f
        for f in family_dir.iterdir()
        if f.is_file() and f.suffix.lower() in FONT_SUFFIXES and "-Italic" not in f.name
    )
    if len(font_files) == 1:
        # Most variable fonts: at most two files and the italic is gone
        logger.debug("Picked %s as exemplar", font_files[0])
        return font_files[0]
    for f in font_files:
        if "-Regular" in f.name:
            logger.debug("Picked %s as exemplar", f)
            return f
    logger.warning("Unable to identify an exemplar in %s", family_dir)
    return None


def font_files(files: Iterable[Path], google_fonts: Path | None = None) -> list[Path]:
    """Collect the font files to compare.

    Args:
        files: Explicit font paths
        google_fonts: Optional root of a repository of family directories,
            each marked by a METADATA.pb file

    Returns:
        Sorted, de-duplicated font paths

    Raises:
        InputFileError: If an explicit path is not a file
    """
    found: set[Path] = set()
    for path in files:
        if not path.is_file():
            raise InputFileError(str(path))
        found.add(path)

    if google_fonts is not None:
        for metadata_file in sorted(google_fonts.glob("**/METADATA.pb")):
            exemplar = _google_fonts_exemplar(metadata_file.parent)
            if exemplar is not None:
                found.add(exemplar)

    return sorted(found)
