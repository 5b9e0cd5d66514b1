"""Font reader for loading variable fonts.

This module provides the FontReader class, the boundary between fonttools
and the rest of varsweep: it loads a font, reports its variation axes and
glyph names, and extracts glyph outlines at arbitrary coordinates.
"""

import re
import struct
from pathlib import Path
from typing import Any

from fontTools.pens.recordingPen import DecomposingRecordingPen
from fontTools.ttLib import TTFont, TTLibError

from varsweep.domain import Axis, Coordinate, Outline
from varsweep.exceptions import FontLoadError, GlyphNotFoundError, OutlineExtractionError
from varsweep.io.converter import recording_to_contours


class FontReader:
    """Loads a variable font and extracts outlines from it.

    The glyph set of the most recent coordinate is cached, so extracting
    every glyph at one coordinate instances the font only once.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            axes = reader.axes()
            outline = reader.outline(Coordinate.default_for(axes), "A")
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._glyph_set: Any = None
        self._glyph_set_coordinate: Coordinate | None = None
        self._glyph_order: set[str] = set()

    @property
    def path(self) -> Path:
        return self._font_path

    def load(self) -> None:
        """Load the font file.

        Tables are decompiled lazily by fonttools, so the tables every run
        needs (head, fvar) are read here to surface corruption up front.

        Raises:
            FontLoadError: If the font file is missing or cannot be parsed
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            font = TTFont(str(self._font_path))
            glyph_order = font.getGlyphOrder()
            font["head"]
            if "fvar" in font:
                font["fvar"]
        except (
            TTLibError,
            OSError,
            ValueError,
            KeyError,
            AssertionError,
            struct.error,
        ) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        self._font = font
        self._glyph_order = set(glyph_order)
        self._glyph_set = None
        self._glyph_set_coordinate = None

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for glyf fonts, 'OpenType' for CFF/CFF2 fonts
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font."""
        return len(self._require_font().getGlyphOrder())

    def axes(self) -> list[Axis]:
        """Return the variation axes in fvar declaration order.

        Returns an empty list for fonts without an fvar table; validation is
        left to the caller.
        """
        font = self._require_font()
        if "fvar" not in font:
            return []

        return [
            Axis(
                tag=raw_axis.axisTag,
                min=float(raw_axis.minValue),
                default=float(raw_axis.defaultValue),
                max=float(raw_axis.maxValue),
            )
            for raw_axis in font["fvar"].axes  # type: ignore[attr-defined]
        ]

    def glyph_names(self, pattern: re.Pattern[str] | None = None) -> list[str]:
        """Return glyph names in glyph order.

        Args:
            pattern: Optional compiled regex; only names it matches are kept

        Returns:
            Glyph names
        """
        names = self._require_font().getGlyphOrder()
        if pattern is None:
            return list(names)
        return [name for name in names if pattern.search(name)]

    def outline(self, coordinate: Coordinate, glyph_name: str) -> Outline:
        """Extract a glyph's outline at a coordinate.

        Components are decomposed at the same coordinate. Axis values outside
        the font's own range are clamped by fonttools.

        Args:
            coordinate: User-space location to instance the font at
            glyph_name: Name of the glyph to draw

        Returns:
            The glyph's Outline at that coordinate

        Raises:
            GlyphNotFoundError: If the glyph is not in the font
            OutlineExtractionError: If fonttools fails to draw the glyph
        """
        font = self._require_font()
        if glyph_name not in self._glyph_order:
            raise GlyphNotFoundError(glyph_name)

        try:
            if self._glyph_set_coordinate != coordinate:
                self._glyph_set = font.getGlyphSet(location=coordinate.as_dict())
                self._glyph_set_coordinate = coordinate
            glyph_set = self._glyph_set

            pen = DecomposingRecordingPen(glyph_set)
            glyph_set[glyph_name].draw(pen)
        except Exception as e:
            raise OutlineExtractionError(glyph_name, str(e)) from e

        return Outline(glyph_name=glyph_name, contours=recording_to_contours(pen.value))

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
        self._glyph_set = None
        self._glyph_set_coordinate = None
        self._glyph_order = set()

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
