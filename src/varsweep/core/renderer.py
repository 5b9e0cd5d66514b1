"""Artifact rendering.

Failures are rendered as one SVG per side so the two can be diffed by eye;
passes are rendered as a single image with both sides overlaid. Filenames
follow ``{outcome}.{scenario}.{side}.{index}.svg`` (side omitted for passes),
where ``index`` is the coordinate's position in the constellation, so reruns
always produce the same names.
"""

import html
import math
from pathlib import Path
from urllib.parse import quote

from fontTools.pens.svgPathPen import SVGPathPen

from varsweep.config import ArtifactConfig
from varsweep.domain import ComparisonResult, Outline
from varsweep.exceptions import ArtifactWriteError
from varsweep.io import draw_outline

SVG_NS = "http://www.w3.org/2000/svg"

LEFT_FILL = "#1f77b4"
RIGHT_FILL = "#d62728"
SOLID_FILL = "#000000"

def _ntos(value: float) -> str:
    return f"{round(value, 2):g}"


def safe_name(name: str) -> str:
    """Percent-encode a glyph or scenario name for use as a filename component.

    The encoding is reversible, so distinct names never share a file.
    """
    return quote(name, safe="")


def outline_to_svg_path(outline: Outline) -> str:
    """Convert an outline to SVG path data (font coordinates, y up)."""
    pen = SVGPathPen(None, ntos=_ntos)
    draw_outline(outline, pen)
    return pen.getCommands()


class SvgRasterizer:
    """Turns outlines into SVG documents.

    Glyphs are drawn with the y axis flipped so they appear upright, inside
    a viewBox fitted to their bounds plus a UPM-relative margin.
    """

    def __init__(self, units_per_em: int = 1000, margin: float = 0.05) -> None:
        self.units_per_em = units_per_em
        self.margin = margin * units_per_em

    def _view_box(self, *outlines: Outline) -> tuple[float, float, float, float]:
        boxes = [b for b in (o.bounding_box() for o in outlines) if b is not None]
        if boxes:
            x_min = min(b[0] for b in boxes)
            y_min = min(b[1] for b in boxes)
            x_max = max(b[2] for b in boxes)
            y_max = max(b[3] for b in boxes)
        else:
            x_min, y_min = 0.0, 0.0
            x_max = y_max = float(self.units_per_em)

        m = self.margin
        return (x_min - m, -y_max - m, (x_max - x_min) + 2 * m, (y_max - y_min) + 2 * m)

    def _paths(self, outlines: tuple[Outline, ...]) -> list[str]:
        if len(outlines) == 1:
            styles = [f'fill="{SOLID_FILL}"']
        else:
            styles = [
                f'fill="{LEFT_FILL}" fill-opacity="0.5"',
                f'fill="{RIGHT_FILL}" fill-opacity="0.5"',
            ]
        return [
            f'<path d="{outline_to_svg_path(outline)}" {style} transform="scale(1 -1)"/>'
            for outline, style in zip(outlines, styles)
        ]

    def _document(
        self,
        view_box: tuple[float, float, float, float],
        body: list[str],
        title: str | None = None,
        position: tuple[float, float] | None = None,
    ) -> str:
        x, y, w, h = view_box
        attrs = f'viewBox="{_ntos(x)} {_ntos(y)} {_ntos(w)} {_ntos(h)}"'
        if position is not None:
            px, py = position
            size = self.units_per_em + 2 * self.margin
            attrs += (
                f' x="{_ntos(px)}" y="{_ntos(py)}"'
                f' width="{_ntos(size)}" height="{_ntos(size)}"'
            )
        else:
            attrs = f'xmlns="{SVG_NS}" ' + attrs

        lines = [f"<svg {attrs}>"]
        if title:
            lines.append(f"  <title>{html.escape(title)}</title>")
        lines.extend(f"  {line}" for line in body)
        lines.append("</svg>")
        return "\n".join(lines)

    def rasterize(self, outlines: Outline | tuple[Outline, Outline]) -> bytes:
        """Render one outline, or a (left, right) pair overlaid.

        Args:
            outlines: A single outline or a (left, right) pair

        Returns:
            UTF-8 encoded SVG document
        """
        if isinstance(outlines, Outline):
            outlines = (outlines,)

        document = self._document(
            self._view_box(*outlines),
            self._paths(outlines),
            title=outlines[0].glyph_name,
        )
        return (document + "\n").encode("utf-8")

    def rasterize_sheet(self, pairs: list[tuple[Outline, Outline]]) -> bytes:
        """Render many (left, right) pairs overlaid in a square grid.

        Every cell shares one viewBox fitted to all outlines on the sheet,
        so glyphs keep their relative scale and position.
        """
        columns = max(1, math.ceil(math.sqrt(len(pairs))))
        rows = max(1, math.ceil(len(pairs) / columns))
        cell = self.units_per_em + 2 * self.margin
        view_box = self._view_box(*(outline for pair in pairs for outline in pair))

        cells = []
        for i, pair in enumerate(pairs):
            row, column = divmod(i, columns)
            nested = self._document(
                view_box,
                self._paths(pair),
                title=pair[0].glyph_name,
                position=(column * cell, row * cell),
            )
            cells.extend(nested.splitlines())

        document = self._document((0.0, 0.0, columns * cell, rows * cell), cells)
        return (document + "\n").encode("utf-8")


def format_segments(outline: Outline, header: str) -> str:
    """Dump an outline's points, one ``x y type`` line per point.

    Contours are separated by blank lines.
    """
    lines = [f"# {header}"]
    for contour_idx, contour in enumerate(outline.contours):
        lines.append(f"# contour {contour_idx} ({len(contour)} points)")
        for point in contour.points:
            lines.append(f"{point.x!r} {point.y!r} {point.point_type.value}")
        lines.append("")
    return "\n".join(lines) + "\n"


class ArtifactRenderer:
    """Writes failure and confirmation artifacts to the staging directory.

    Example:
        renderer = ArtifactRenderer(ArtifactConfig(output_dir=Path("/tmp")), upm)
        paths = renderer.render_failure(result)
    """

    EXTENSION = "svg"

    def __init__(self, config: ArtifactConfig, units_per_em: int = 1000) -> None:
        self.config = config
        self.rasterizer = SvgRasterizer(units_per_em=units_per_em, margin=config.margin)

    def artifact_path(
        self,
        outcome: str,
        scenario: str,
        index: int,
        side: str | None = None,
        ext: str = EXTENSION,
    ) -> Path:
        """Deterministic path ``{outcome}.{scenario}.{side?}.{index}.{ext}``."""
        parts = [outcome, safe_name(scenario)]
        if side is not None:
            parts.append(side)
        parts.extend([str(index), ext])
        return self.config.output_dir / ".".join(parts)

    def _write(self, path: Path, content: bytes) -> Path:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise ArtifactWriteError(str(path), str(e)) from e
        return path

    def render_failure(self, result: ComparisonResult) -> list[Path]:
        """Render each available side of a failing unit independently.

        A side whose glyph is missing from its font is not rendered.

        Returns:
            Paths written, left side first

        Raises:
            ArtifactWriteError: If a file cannot be written
        """
        written = []
        for side, outline in (("left", result.left), ("right", result.right)):
            if outline is None:
                continue

            path = self.artifact_path("fail", result.glyph_name, result.coordinate_index, side)
            written.append(self._write(path, self.rasterizer.rasterize(outline)))

            if self.config.write_segments:
                header = f"{result.glyph_name} {side} at {result.coordinate.label()}"
                segments_path = path.with_suffix(".segments")
                written.append(
                    self._write(segments_path, format_segments(outline, header).encode("utf-8"))
                )
        return written

    def render_pass(self, result: ComparisonResult) -> Path:
        """Render a passing unit as one combined image.

        Raises:
            ArtifactWriteError: If the file cannot be written
        """
        if result.left is None or result.right is None:
            raise ValueError(f"Result for '{result.glyph_name}' carries no outlines")

        path = self.artifact_path("pass", result.glyph_name, result.coordinate_index)
        return self._write(path, self.rasterizer.rasterize((result.left, result.right)))

    def render_confirmation(self, pairs: list[tuple[Outline, Outline]]) -> Path:
        """Render the combined confirmation sheet for a fully passing run.

        Raises:
            ArtifactWriteError: If the file cannot be written
        """
        path = self.artifact_path("pass", self.config.confirmation_scenario, 0)
        return self._write(path, self.rasterizer.rasterize_sheet(pairs))
