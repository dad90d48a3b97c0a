"""Diagnostic output for comparison runs.

- dump_glyphs: one SVG per character overlaying every variant
- dump_groups: JSON listing each set of sources and the characters they share
"""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from lookalike.domain import CurvePath, Rect

if TYPE_CHECKING:
    from lookalike.core.grouping import LetterformGroup


def glyph_filename(char: str, inconsistent: bool) -> str:
    """Filesystem-safe SVG name for a character."""
    suffix = "-inconsistent" if inconsistent else ""
    return f"U+{ord(char):04X}{suffix}.svg"


def _svg_circle(x: float, y: float, r: float) -> str:
    return f'<circle fill="darkblue" opacity="0.25" cx="{x}" cy="{y}" r="{r}" />\n'


def glyph_svg(paths: Iterable[CurvePath]) -> str:
    """Overlay outlines in one SVG, marking the start of every contour.

    Outlines are expected in y-down coordinates, as produced by FontReader.
    """
    paths = [p for p in paths if not p.is_empty()]
    viewbox: Rect | None = None
    for path in paths:
        cbox = path.control_box()
        if cbox is not None:
            viewbox = cbox if viewbox is None else viewbox.union(cbox)
    if viewbox is None:
        viewbox = Rect(0.0, 0.0, 0.0, 0.0)

    marker_radius = viewbox.width * 0.02
    margin = 0.1 * max(viewbox.width, viewbox.height)

    parts = [
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="'
        f"{viewbox.min_x - margin} {viewbox.min_y - margin} "
        f'{viewbox.width + 2.0 * margin} {viewbox.height + 2.0 * margin}">\n'
    ]
    for path in paths:
        parts.append(f'<path opacity="0.25" d="{path.to_svg()}" />\n')
    for path in paths:
        for start in path.contour_starts():
            parts.append(_svg_circle(start.x, start.y, marker_radius))
    parts.append("</svg>\n")
    return "".join(parts)


def dump_glyphs(
    working_dir: Path,
    groups_by_char: Mapping[str, list["LetterformGroup"]],
) -> list[Path]:
    """Write one SVG per character showing every variant.

    Characters drawn more than one way get an "-inconsistent" suffix.

    Returns:
        Paths of the files written
    """
    working_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for char, groups in sorted(groups_by_char.items()):
        paths = [path for group in groups for path in group.letterforms.values()]
        out = working_dir / glyph_filename(char, inconsistent=len(groups) > 1)
        out.write_text(glyph_svg(paths), encoding="utf-8")
        written.append(out)
    return written


def dump_groups(
    working_dir: Path,
    groups_by_char: Mapping[str, list["LetterformGroup"]],
) -> Path:
    """Write the sets of sources and the characters they draw the same way.

    Only groups with at least two members are reported. Sets are ordered by
    the number of shared characters, most first.

    Returns:
        Path of the JSON file written
    """
    shared: dict[frozenset[str], list[str]] = {}
    for char, groups in sorted(groups_by_char.items()):
        for group in groups:
            if len(group) < 2:
                continue
            shared.setdefault(group.sources, []).append(char)

    report = [
        {"sources": sorted(sources), "score": len(chars), "chars": "".join(chars)}
        for sources, chars in sorted(
            shared.items(), key=lambda item: (-len(item[1]), sorted(item[0]))
        )
    ]

    working_dir.mkdir(parents=True, exist_ok=True)
    out = working_dir / "groups.json"
    out.write_text(json.dumps(report, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return out
