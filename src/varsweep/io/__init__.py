"""Font I/O layer for varsweep.

This module handles reading variable fonts using fonttools. It provides a
clean abstraction layer between fonttools and the domain models.

Key responsibilities:
- Load TTF/OTF variable fonts
- Report variation axes and glyph names
- Extract glyph outlines at a variation coordinate
- Replay domain outlines into fonttools pens for rendering

Key classes:
- FontReader: Load fonts and extract outlines
"""

from varsweep.io.converter import draw_outline, recording_to_contours
from varsweep.io.reader import FontReader

__all__ = [
    "FontReader",
    "draw_outline",
    "recording_to_contours",
]
