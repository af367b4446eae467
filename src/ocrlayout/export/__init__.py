"""Export — visual QA overlays.

Public API
----------
- :func:`draw_boundaries_overlay` — outline blocks / paragraphs / words / symbols
- :func:`draw_columns_overlay` — colour-code clustered columns in reading order
"""

from .overlay import draw_boundaries_overlay, draw_columns_overlay

__all__ = [
    "draw_boundaries_overlay",
    "draw_columns_overlay",
]
