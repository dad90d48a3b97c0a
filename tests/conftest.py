"""Shared fixtures: small TrueType fonts built on the fly."""

from collections.abc import Callable
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

# A drawing function receives a pen and the font's UPM relative to 1000
GlyphDrawer = Callable[[TTGlyphPen, float], None]


def draw_box(pen: TTGlyphPen, scale: float) -> None:
    """A 500 x 700 rectangle, clockwise from the bottom left."""

    def s(x: float, y: float) -> tuple[int, int]:
        return round(x * scale), round(y * scale)

    pen.moveTo(s(100, 0))
    pen.lineTo(s(100, 700))
    pen.lineTo(s(600, 700))
    pen.lineTo(s(600, 0))
    pen.closePath()


def draw_box_rotated_start(pen: TTGlyphPen, scale: float) -> None:
    """The same rectangle, counter-clockwise from the top right."""

    def s(x: float, y: float) -> tuple[int, int]:
        return round(x * scale), round(y * scale)

    pen.moveTo(s(600, 700))
    pen.lineTo(s(100, 700))
    pen.lineTo(s(100, 0))
    pen.lineTo(s(600, 0))
    pen.closePath()


def draw_bowl(pen: TTGlyphPen, scale: float) -> None:
    """A rounded shape built from quadratic curves."""

    def s(x: float, y: float) -> tuple[int, int]:
        return round(x * scale), round(y * scale)

    pen.moveTo(s(350, 0))
    pen.qCurveTo(s(600, 0), s(600, 350))
    pen.qCurveTo(s(600, 700), s(350, 700))
    pen.qCurveTo(s(100, 700), s(100, 350))
    pen.qCurveTo(s(100, 0), s(350, 0))
    pen.closePath()


def draw_wedge(pen: TTGlyphPen, scale: float) -> None:
    """A triangle, nothing like the box or the bowl."""

    def s(x: float, y: float) -> tuple[int, int]:
        return round(x * scale), round(y * scale)

    pen.moveTo(s(100, 0))
    pen.lineTo(s(350, 700))
    pen.lineTo(s(600, 0))
    pen.closePath()


@pytest.fixture
def make_font(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a TrueType font mapping characters to drawn glyphs.

    Example:
        path = make_font("a.ttf", {"A": draw_box}, upem=2048)
    """

    def build(filename: str, glyphs: dict[str, GlyphDrawer], upem: int = 1000) -> Path:
        scale = upem / 1000
        glyph_names = {char: f"uni{ord(char):04X}" for char in glyphs}
        glyph_order = [".notdef", *glyph_names.values()]

        fb = FontBuilder(upem, isTTF=True)
        fb.setupGlyphOrder(glyph_order)
        fb.setupCharacterMap({ord(char): name for char, name in glyph_names.items()})

        outlines = {".notdef": TTGlyphPen(None).glyph()}
        for char, drawer in glyphs.items():
            pen = TTGlyphPen(None)
            drawer(pen, scale)
            outlines[glyph_names[char]] = pen.glyph()
        fb.setupGlyf(outlines)

        fb.setupHorizontalMetrics({name: (round(700 * scale), 0) for name in glyph_order})
        fb.setupHorizontalHeader(ascent=round(800 * scale), descent=round(-200 * scale))
        fb.setupNameTable({"familyName": filename.split(".")[0], "styleName": "Regular"})
        fb.setupOS2()
        fb.setupPost()

        out = tmp_path / filename
        fb.save(str(out))
        return out

    return build


@pytest.fixture
def drawers() -> dict[str, GlyphDrawer]:
    """Named glyph drawing functions for make_font."""
    return {
        "box": draw_box,
        "box_rotated_start": draw_box_rotated_start,
        "bowl": draw_bowl,
        "wedge": draw_wedge,
    }
