"""Shared fixtures: small variable fonts built with fontTools FontBuilder."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont
from fontTools.ttLib.tables.DefaultTable import DefaultTable
from fontTools.ttLib.tables.TupleVariation import TupleVariation

from varsweep.config import VarsweepSettings

# (tag, min, default, max, name)
WGHT_OPSZ = [
    ("wght", 100.0, 400.0, 900.0, "Weight"),
    ("opsz", 8.0, 14.0, 144.0, "Optical Size"),
]

SQUARE = [[(100, 0), (500, 0), (500, 400), (100, 400)]]
RING = [
    [(50, 0), (550, 0), (550, 500), (50, 500)],
    [(150, 100), (150, 400), (450, 400), (450, 100)],
]
BAR = [[(250, 0), (350, 0), (350, 700), (250, 700)]]

DEFAULT_GLYPHS = {"A": SQUARE, "O": RING, "I": BAR}

# Per glyph, per axis tag: (dx, dy) applied to every point at the axis max
DEFAULT_VARIATIONS = {
    "A": {"wght": (20, 0), "opsz": (0, 30)},
    "O": {"wght": (0, 40)},
    "I": {"opsz": (10, 10)},
}


def _draw_glyph(contours):
    pen = TTGlyphPen(None)
    for contour in contours:
        pen.moveTo(contour[0])
        for point in contour[1:]:
            pen.lineTo(point)
        pen.closePath()
    return pen.glyph()


def build_variable_font(
    path: Path,
    axes=WGHT_OPSZ,
    glyphs=None,
    variations=None,
    upm: int = 1000,
) -> Path:
    """Build and save a TrueType variable font.

    Args:
        path: Output path
        axes: fvar axes as (tag, min, default, max, name)
        glyphs: Glyph name -> list of polygon contours (on-curve points)
        variations: Glyph name -> {axis tag: (dx, dy) at that axis max}
        upm: Units per em

    Returns:
        The output path
    """
    glyphs = DEFAULT_GLYPHS if glyphs is None else glyphs
    variations = DEFAULT_VARIATIONS if variations is None else variations

    glyph_order = [".notdef", *glyphs]
    fb = FontBuilder(upm, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({})

    drawn = {".notdef": TTGlyphPen(None).glyph()}
    drawn.update({name: _draw_glyph(contours) for name, contours in glyphs.items()})
    fb.setupGlyf(drawn)

    fb.setupHorizontalMetrics({name: (600, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupOS2()
    fb.setupPost()
    fb.setupMaxp()
    fb.setupNameTable({"familyName": "Varsweep Test", "styleName": "Regular"})

    if not axes:
        fb.save(str(path))
        return path

    fb.setupFvar(axes=axes, instances=[])

    gvar: dict[str, list[TupleVariation]] = {name: [] for name in glyph_order}
    axis_tags = {axis[0] for axis in axes}
    for name, per_axis in variations.items():
        if name not in glyphs:
            continue
        point_count = sum(len(c) for c in glyphs[name])
        for tag, (dx, dy) in per_axis.items():
            if tag not in axis_tags:
                continue
            deltas = [(dx, dy)] * point_count + [(0, 0)] * 4
            gvar[name].append(TupleVariation({tag: (0.0, 1.0, 1.0)}, deltas))
    fb.setupGvar(gvar)

    fb.save(str(path))
    return path


@pytest.fixture
def font_factory(tmp_path: Path):
    """Build a font under tmp_path: factory(filename, **build_variable_font kwargs)."""

    def factory(filename: str, **kwargs) -> Path:
        return build_variable_font(tmp_path / filename, **kwargs)

    return factory


@pytest.fixture
def left_font(tmp_path: Path) -> Path:
    """The reference variable font."""
    return build_variable_font(tmp_path / "left.ttf")


@pytest.fixture
def identical_font(tmp_path: Path) -> Path:
    """A second build identical to left_font."""
    return build_variable_font(tmp_path / "identical.ttf")


@pytest.fixture
def heavier_font(tmp_path: Path) -> Path:
    """Differs from left_font only in how far 'A' moves at wght max."""
    variations = dict(DEFAULT_VARIATIONS)
    variations["A"] = {"wght": (35, 0), "opsz": (0, 30)}
    return build_variable_font(tmp_path / "heavier.ttf", variations=variations)


@pytest.fixture
def artifact_dir(tmp_path: Path) -> Path:
    """Empty artifact staging directory."""
    path = tmp_path / "artifacts"
    path.mkdir()
    return path


@pytest.fixture
def settings(artifact_dir: Path, tmp_path: Path) -> VarsweepSettings:
    """In-process settings writing artifacts and logs under tmp_path."""
    settings = VarsweepSettings()
    settings.artifacts.output_dir = artifact_dir
    settings.logging.log_file = tmp_path / "varsweep.log"
    settings.processing.max_workers = 1
    return settings


@pytest.fixture
def extended_font(tmp_path: Path) -> Path:
    """left_font plus a glyph 'Z' the other fixtures lack."""
    glyphs = {**DEFAULT_GLYPHS, "Z": BAR}
    return build_variable_font(tmp_path / "extended.ttf", glyphs=glyphs)


@pytest.fixture
def rewound_font(tmp_path: Path) -> Path:
    """left_font with 'A' drawn clockwise from another start point."""
    glyphs = dict(DEFAULT_GLYPHS)
    glyphs["A"] = [[(500, 400), (500, 0), (100, 0), (100, 400)]]
    return build_variable_font(tmp_path / "rewound.ttf", glyphs=glyphs)


@pytest.fixture
def corrupt_fvar_font(left_font: Path, tmp_path: Path) -> Path:
    """left_font with its fvar table truncated to 6 bytes."""
    font = TTFont(str(left_font))
    fvar = DefaultTable("fvar")
    fvar.data = b"\x00\x01\x00\x00\x00\x10"
    font["fvar"] = fvar
    path = tmp_path / "corrupt-fvar.ttf"
    font.save(str(path))
    font.close()
    return path
