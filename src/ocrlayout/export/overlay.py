from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from ..config import LayoutConfig
from ..flatten import Boundary, Level, boundaries
from ..models import SymbolRecord, TextAnnotation

# Default outline colour per tree level
LEVEL_COLORS: Dict[str, tuple] = {
    Level.blocks.value: (255, 0, 0, 200),  # Red
    Level.paragraphs.value: (0, 0, 255, 200),  # Blue
    Level.words.value: (0, 180, 0, 180),  # Green
    Level.symbols.value: (255, 165, 0, 160),  # Orange
}

# Label prefixes for each level
LABEL_PREFIXES = {
    Level.blocks.value: "B",
    Level.paragraphs.value: "P",
    Level.words.value: "W",
    Level.symbols.value: "S",
    "columns": "C",
}

# Palette for clustered columns, cycled in reading order
COLUMN_COLORS = [
    (255, 0, 0, 180),  # Red
    (0, 0, 255, 180),  # Blue
    (0, 180, 0, 180),  # Green
    (255, 165, 0, 180),  # Orange
    (128, 0, 128, 180),  # Purple
    (0, 200, 200, 180),  # Cyan
    (255, 105, 180, 180),  # Pink
    (139, 69, 19, 180),  # Brown
]


def _get_color(color_overrides: Optional[Dict[str, tuple]], key: str) -> tuple | None:
    """Colour for *key*: the override if given (None disables), else the default."""
    if color_overrides and key in color_overrides:
        return color_overrides[key]
    return LEVEL_COLORS.get(key)


def _scale_point(x: float, y: float, scale: float) -> Tuple[float, float]:
    """Scale (x, y) by *scale* for overlay rendering."""
    return (x * scale, y * scale)


def _load_font(scale: float, cfg: LayoutConfig | None) -> Tuple[ImageFont.ImageFont, int]:
    _font_base = cfg.overlay_label_font_base if cfg else 10
    _font_floor = cfg.overlay_label_font_floor if cfg else 8
    font_size = max(_font_floor, int(_font_base * scale))
    try:
        font = ImageFont.truetype("arial.ttf", font_size)
    except (OSError, IOError):
        font = ImageFont.load_default()
    return font, font_size


def _draw_label(
    draw: ImageDraw.ImageDraw,
    x: float,
    y: float,
    label: str,
    color: tuple,
    font: ImageFont.ImageFont,
    font_size: int,
    bg_alpha: int = 200,
) -> None:
    """Draw *label* just above the point (x, y) on a light background."""
    pos = (x, y - font_size - 2)
    bbox = draw.textbbox(pos, label, font=font)
    bg_bbox = (bbox[0] - 1, bbox[1] - 1, bbox[2] + 1, bbox[3] + 1)
    draw.rectangle(bg_bbox, fill=(255, 255, 255, bg_alpha))
    text_color = (color[0], color[1], color[2]) if len(color) >= 3 else (0, 0, 0)
    draw.text(pos, label, fill=text_color, font=font)


def _new_canvas(
    width: float,
    height: float,
    scale: float,
    background: Image.Image | None,
) -> Image.Image:
    img_w = max(1, int(width * scale))
    img_h = max(1, int(height * scale))
    if background is not None:
        img = background.convert("RGBA")
        if img.size != (img_w, img_h):
            img = img.resize((img_w, img_h))
        return img
    return Image.new("RGBA", (img_w, img_h), (255, 255, 255, 255))


def _is_finite(values: Iterable[float]) -> bool:
    return all(math.isfinite(v) for v in values)


def _page_size(
    annotation: TextAnnotation, outlines: Iterable[Boundary]
) -> Tuple[float, float]:
    """First page's reported size, else the extent of the outlines plus a margin."""
    if annotation.pages:
        page = annotation.pages[0]
        if page.width and page.height and _is_finite((page.width, page.height)):
            return (page.width, page.height)
    outlines = list(outlines)
    if not outlines:
        return (1.0, 1.0)
    return (
        max(b.max_x for b in outlines) + 10.0,
        max(b.max_y for b in outlines) + 10.0,
    )


def draw_boundaries_overlay(
    annotation: TextAnnotation,
    out_path: Path,
    level: Union[Level, str] = Level.paragraphs,
    scale: float = 1.0,
    background: Image.Image | None = None,
    color_overrides: Optional[Dict[str, tuple]] = None,
    cfg: LayoutConfig | None = None,
    page_width: float | None = None,
    page_height: float | None = None,
) -> int:
    """Outline every node at *level* and save the result as a PNG.

    Labels read ``B0``, ``P0-1``, ``W0-1-2``, ``S0-1-2-3`` following the
    node's block/paragraph/word/symbol indices.  Outlines with non-finite
    coordinates are skipped.  Returns the number of outlines drawn; a
    ``None`` colour override for the level draws none.
    """
    level = Level(level)
    outlines = [b for b in boundaries(annotation, level, cfg) if _is_finite(b.bbox())]
    if page_width is None or page_height is None:
        page_width, page_height = _page_size(annotation, outlines)

    img = _new_canvas(page_width, page_height, scale, background)
    draw = ImageDraw.Draw(img, "RGBA")

    color = _get_color(color_overrides, level.value)
    if color is None:
        img.save(out_path, format="PNG")
        return 0

    _outline_w = cfg.overlay_outline_width if cfg else 2
    _bg_alpha = cfg.overlay_label_bg_alpha if cfg else 200
    font, font_size = _load_font(scale, cfg)
    prefix = LABEL_PREFIXES[level.value]

    for b in outlines:
        pts = [_scale_point(x, y, scale) for x, y in b.points]
        draw.line(pts + [pts[0]], fill=color, width=_outline_w)
        # "Para 0-1" → "P0-1"
        suffix = b.label.split(" ", 1)[-1]
        sx, sy = _scale_point(b.min_x, b.min_y, scale)
        _draw_label(draw, sx, sy, f"{prefix}{suffix}", color, font, font_size, _bg_alpha)

    img.save(out_path, format="PNG")
    return len(outlines)


def _record_box(rec: SymbolRecord) -> Tuple[float, float, float, float]:
    return (
        rec.top_left_x,
        rec.top_left_y,
        rec.top_left_x + rec.width,
        rec.top_left_y + rec.height,
    )


def _column_bbox(
    column: Sequence[SymbolRecord],
) -> Optional[Tuple[float, float, float, float]]:
    """Union of the finite symbol boxes in *column*, or None if there are none."""
    boxes = [bb for bb in (_record_box(r) for r in column) if _is_finite(bb)]
    if not boxes:
        return None
    return (
        min(bb[0] for bb in boxes),
        min(bb[1] for bb in boxes),
        max(bb[2] for bb in boxes),
        max(bb[3] for bb in boxes),
    )


def draw_columns_overlay(
    columns: List[List[SymbolRecord]],
    out_path: Path,
    page_width: float | None = None,
    page_height: float | None = None,
    scale: float = 1.0,
    background: Image.Image | None = None,
    cfg: LayoutConfig | None = None,
) -> None:
    """Render clustered columns colour-coded in reading order.

    Each column is outlined around the union of its symbol boxes and
    labelled ``C1``, ``C2``, … (rightmost first).  Symbols inside a column
    are outlined thinly in the same colour.  Symbols with non-finite
    geometry are left out of the drawing but keep the column numbering.
    """
    nonempty = [c for c in columns if c]
    boxes = [bb for bb in (_column_bbox(c) for c in nonempty) if bb is not None]
    if page_width is None or page_height is None:
        page_width = max((bb[2] for bb in boxes), default=0.0) + 10.0
        page_height = max((bb[3] for bb in boxes), default=0.0) + 10.0

    img = _new_canvas(page_width, page_height, scale, background)
    overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay, "RGBA")

    _outline_w = cfg.overlay_outline_width if cfg else 2
    _bg_alpha = cfg.overlay_label_bg_alpha if cfg else 200
    font, font_size = _load_font(scale, cfg)

    for col_idx, column in enumerate(nonempty, start=1):
        col_box = _column_bbox(column)
        if col_box is None:
            continue
        color = COLUMN_COLORS[(col_idx - 1) % len(COLUMN_COLORS)]
        for rec in column:
            box = _record_box(rec)
            if rec.width <= 0 or rec.height <= 0 or not _is_finite(box):
                continue
            sx0, sy0 = _scale_point(box[0], box[1], scale)
            sx1, sy1 = _scale_point(box[2], box[3], scale)
            draw.rectangle([(sx0, sy0), (sx1, sy1)], outline=color, width=1)
        x0, y0, x1, y1 = col_box
        sx0, sy0 = _scale_point(x0, y0, scale)
        sx1, sy1 = _scale_point(x1, y1, scale)
        draw.rectangle([(sx0, sy0), (sx1, sy1)], outline=color, width=_outline_w)
        _draw_label(
            draw,
            sx0,
            sy0,
            f"{LABEL_PREFIXES['columns']}{col_idx}",
            color,
            font,
            font_size,
            _bg_alpha,
        )

    img = Image.alpha_composite(img, overlay)
    img.save(out_path, format="PNG")
