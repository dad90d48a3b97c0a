"""Lookalike - Find fonts that draw the same letterforms.

Lookalike compares the outlines of a set of test characters across many
TrueType/OpenType fonts and reports which fonts draw those characters the same
way, despite differences in control points, start points or winding.

Example:
    $ lookalike fonts/*.ttf

This prints every set of fonts whose letterforms match for at least
--match-pct percent of the tested characters.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
