"""Font I/O layer for lookalike.

This module handles reading font files using fonttools and writing
diagnostic output. It provides a clean abstraction layer between
fonttools and the domain models.

Key responsibilities:
- Load TTF/OTF fonts
- Extract normalized letterforms by character
- Collect test characters and font files
- Dump SVG overlays and group reports

Key classes:
- FontReader: Load fonts and extract letterforms
"""

from lookalike.io.dump import dump_glyphs, dump_groups
from lookalike.io.reader import FontReader
from lookalike.io.sources import font_files, parse_nam_line, read_nam, select_test_chars

__all__ = [
    "FontReader",
    "dump_glyphs",
    "dump_groups",
    "font_files",
    "parse_nam_line",
    "read_nam",
    "select_test_chars",
]
