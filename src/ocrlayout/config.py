from dataclasses import dataclass


class ConfigValidationError(ValueError):
    """Raised when a LayoutConfig field has an invalid value."""


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name}={value} must be > 0")


@dataclass
class LayoutConfig:
    """Tunables for text-layout reconstruction."""

    # ── Column clustering (vertical modes) ─────────────────────────────
    # Glyph width (px) assumed when no symbol carries usable geometry.
    default_char_width: float = 15.0
    # Column threshold = average char width * this multiplier.
    column_threshold_mult: float = 0.75

    # ── Cross-list symbol matching ─────────────────────────────────────
    # Centroid tolerance (px) for horizontal-paragraph matching.
    horizontal_match_tol: float = 5.0
    # Top-left tolerance (px) for vertical-paragraph matching.
    vertical_match_tol: float = 2.0

    # ── Geometry ───────────────────────────────────────────────────────
    # Symbols with fewer vertices get zeroed geometry.
    min_symbol_vertices: int = 4
    # Polygons with fewer vertices are skipped when listing boundaries.
    min_boundary_vertices: int = 3
    # Vision omits zero-valued coordinates; optionally read absent as 0.
    missing_coordinate_as_zero: bool = False

    # ── Text assembly ──────────────────────────────────────────────────
    # Language used when neither caller nor page supplies one.
    default_language: str = "en"
    # Joins paragraphs in paragraph modes.
    paragraph_separator: str = "\n\n"
    # Joins columns in vertical-parallel mode.
    column_separator: str = "\n"

    # ── Overlay rendering ──────────────────────────────────────────────
    overlay_outline_width: int = 2
    overlay_label_font_base: int = 10
    overlay_label_font_floor: int = 8
    overlay_label_bg_alpha: int = 200

    def __post_init__(self) -> None:
        """Validate field ranges to catch misconfiguration early."""
        for name in (
            "default_char_width",
            "column_threshold_mult",
            "horizontal_match_tol",
            "vertical_match_tol",
        ):
            _check_positive(name, getattr(self, name))

        for name in (
            "min_symbol_vertices",
            "min_boundary_vertices",
            "overlay_outline_width",
            "overlay_label_font_base",
            "overlay_label_font_floor",
        ):
            val = getattr(self, name)
            if val < 1:
                raise ConfigValidationError(f"{name}={val} must be >= 1")

        if not (0 <= self.overlay_label_bg_alpha <= 255):
            raise ConfigValidationError(
                f"overlay_label_bg_alpha={self.overlay_label_bg_alpha} "
                f"out of range [0, 255]"
            )

        if not self.default_language:
            raise ConfigValidationError("default_language must be non-empty")
