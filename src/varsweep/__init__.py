"""Varsweep - Compare variable-font glyph geometry across the variation space.

Varsweep loads two builds of the same variable font, samples a deterministic
constellation of axis coordinates, and verifies that every glyph outline is
identical in both fonts at every sampled coordinate. Mismatches are written
out as SVG artifacts so they can be inspected side by side.

Example:
    $ varsweep MaterialSymbols-fontmake.ttf MaterialSymbols-fontc.ttf

This compares every glyph at the default, per-axis extremes and all-min /
all-max corners, and exits non-zero if any outline differs.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
