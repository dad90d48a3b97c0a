"""Converters between fonttools glyphs and domain models.

This module draws fonttools glyphs into CurvePaths, normalized so that
letterforms from different fonts can be compared directly.
"""

from typing import Any

from fontTools.misc.transform import Transform
from fontTools.pens.transformPen import TransformPen

from lookalike.domain import CurvePath, CurvePathPen


def fonttools_glyph_to_path(
    fonttools_glyph: Any,
    glyph_set: Any,
    uniform_scale: float = 1.0,
) -> CurvePath:
    """Convert a fonttools glyph to a normalized CurvePath.

    The outline is scaled by uniform_scale with y flipped (y-down, as in
    SVG), then translated so the minimum of its control box sits at (0, 0).
    Translation therefore never causes two letterforms to mismatch.

    Components are decomposed through glyph_set.

    Args:
        fonttools_glyph: The fonttools glyph object from GlyphSet
        glyph_set: The GlyphSet the glyph belongs to
        uniform_scale: Factor bringing the font to the comparison UPM

    Returns:
        The normalized outline
    """
    pen = CurvePathPen(glyph_set)
    transform = Transform(uniform_scale, 0, 0, -uniform_scale, 0, 0)
    fonttools_glyph.draw(TransformPen(pen, transform))
    return normalize_origin(pen.path)


def normalize_origin(path: CurvePath) -> CurvePath:
    """Translate path so its control box minimum is at (0, 0)."""
    cbox = path.control_box()
    if cbox is None or (cbox.min_x, cbox.min_y) == (0.0, 0.0):
        return path
    return path.translate(-cbox.min_x, -cbox.min_y)
