"""Tests for SVG and group report dumps."""

import json

from lookalike.core.grouping import LetterformGroup
from lookalike.core.segments import IndexedCurvePath
from lookalike.domain import CurvePath, Point
from lookalike.io.dump import dump_glyphs, dump_groups, glyph_filename, glyph_svg


def square(size: float = 100.0) -> CurvePath:
    path = CurvePath()
    path.move_to(Point(0, 0))
    path.line_to(Point(size, 0))
    path.line_to(Point(size, size))
    path.line_to(Point(0, size))
    path.close_path()
    return path


def make_group(*sources: str) -> LetterformGroup:
    indexed = IndexedCurvePath.build(square())
    group = LetterformGroup(sources[0], indexed)
    for source in sources[1:]:
        group.insert(source, indexed)
    return group


class TestGlyphSvg:
    """Tests for SVG overlays."""

    def test_filename(self):
        """Test names use the codepoint, flagged when inconsistent."""
        assert glyph_filename("a", inconsistent=False) == "U+0061.svg"
        assert glyph_filename("/", inconsistent=True) == "U+002F-inconsistent.svg"
        assert glyph_filename("\U0001f600", inconsistent=False) == "U+1F600.svg"

    def test_overlay(self):
        """Test each outline becomes a path with a marker at its start."""
        svg = glyph_svg([square(), square(50)])
        assert svg.startswith("<svg")
        assert 'viewBox="-10.0 -10.0 120.0 120.0"' in svg
        assert svg.count("<path") == 2
        assert svg.count("<circle") == 2
        assert svg.rstrip().endswith("</svg>")

    def test_empty_outlines_skipped(self):
        """Test empty outlines draw nothing."""
        svg = glyph_svg([CurvePath()])
        assert "<path" not in svg
        assert "viewBox" in svg


class TestDumps:
    """Tests for writing dumps to disk."""

    def test_dump_glyphs(self, tmp_path):
        """Test one SVG is written per character."""
        groups_by_char = {
            "a": [make_group("f1", "f2")],
            "b": [make_group("f1"), make_group("f2")],
        }

        written = dump_glyphs(tmp_path / "out", groups_by_char)

        assert [p.name for p in written] == ["U+0061.svg", "U+0062-inconsistent.svg"]
        assert all(p.exists() for p in written)
        assert written[1].read_text(encoding="utf-8").count("<path") == 2

    def test_dump_groups(self, tmp_path):
        """Test the report lists shared characters per set of sources."""
        groups_by_char = {
            "a": [make_group("f1", "f2")],
            "b": [make_group("f1"), make_group("f2")],
            "c": [make_group("f2", "f1")],
            "d": [make_group("f1", "f2", "f3")],
        }

        report_path = dump_groups(tmp_path, groups_by_char)

        assert report_path == tmp_path / "groups.json"
        report = json.loads(report_path.read_text(encoding="utf-8"))
        assert report == [
            {"sources": ["f1", "f2"], "score": 2, "chars": "ac"},
            {"sources": ["f1", "f2", "f3"], "score": 1, "chars": "d"},
        ]
