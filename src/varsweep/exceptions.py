"""Exception hierarchy for Varsweep."""


class VarsweepError(Exception):
    """Base exception for all Varsweep errors."""

    pass


class ConfigurationError(VarsweepError):
    """Invalid run configuration (e.g. a malformed glyph filter)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FontError(VarsweepError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class AxisError(VarsweepError):
    """Errors related to variation axes."""

    pass


class AxisParseError(AxisError):
    """Font has no usable variation axes, or an axis is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid variation axes in '{path}': {reason}")


class AxisMismatchError(AxisError):
    """The two fonts do not declare the same set of axis tags."""

    def __init__(self, left_only: list[str], right_only: list[str]) -> None:
        self.left_only = left_only
        self.right_only = right_only
        parts = []
        if left_only:
            parts.append(f"only in left: {', '.join(left_only)}")
        if right_only:
            parts.append(f"only in right: {', '.join(right_only)}")
        super().__init__(f"Axis tag sets differ ({'; '.join(parts)})")


class GlyphError(VarsweepError):
    """Errors related to a single glyph."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")


class OutlineExtractionError(GlyphError):
    """Error drawing a glyph outline at a coordinate."""

    def __init__(self, glyph_name: str, reason: str) -> None:
        self.glyph_name = glyph_name
        self.reason = reason
        super().__init__(f"Could not extract outline of '{glyph_name}': {reason}")


class ArtifactError(VarsweepError):
    """Errors related to artifact output."""

    pass


class ArtifactWriteError(ArtifactError):
    """Error writing an artifact file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write artifact '{path}': {reason}")

