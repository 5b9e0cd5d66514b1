"""Core comparison engine for varsweep.

This module contains the core algorithms for:

- Axis model validation (axis bounds, matching axis sets)
- Constellation generation (which coordinates to test)
- Path comparison (tolerance-bounded outline equivalence)
- Artifact rendering (SVG evidence for failures and passes)
- Run orchestration (parallel coordinate x glyph comparison)

Key functions:
- read_axes: Validated axes of a loaded font
- check_axes_match: Ensure two fonts share the same axis tags
- generate_constellation: Ordered coordinates to compare at
- find_difference: First difference between two outlines
- canonicalize_contour: Normalize a contour's start point and winding
- compare_unit: Compare one glyph at one coordinate

Key classes:
- PathComparator: Produces verdicts for outline pairs
- SvgRasterizer: Turns outlines into SVG documents
- ArtifactRenderer: Writes deterministic artifact files
- RunOrchestrator: Drives a full comparison run
"""

from varsweep.core.axes import check_axes_match, read_axes
from varsweep.core.comparator import PathComparator, canonicalize_contour, find_difference
from varsweep.core.constellation import (
    extremes_constellation,
    generate_constellation,
    grid_constellation,
)
from varsweep.core.orchestrator import (
    RunOrchestrator,
    compare_coordinate,
    compare_unit,
    union_glyph_names,
)
from varsweep.core.renderer import ArtifactRenderer, SvgRasterizer

__all__ = [
    "ArtifactRenderer",
    "PathComparator",
    "RunOrchestrator",
    "SvgRasterizer",
    "canonicalize_contour",
    "check_axes_match",
    "compare_coordinate",
    "compare_unit",
    "extremes_constellation",
    "find_difference",
    "generate_constellation",
    "grid_constellation",
    "read_axes",
    "union_glyph_names",
]
