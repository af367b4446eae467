"""
Reconstruct readable text from a saved OCR annotation.
Usage:
    ocrlayout page.json --mode vertical-paragraph --language ja
    ocrlayout page.json --direction vertical --grouping parallel --overlay out.png --level symbols
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import LayoutConfig
from .flatten import Level
from .ingest import IngestError, load_annotation
from .pipeline import DIRECTIONS, GROUPINGS, LayoutMode, reconstruct, select_mode

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ocrlayout",
        description="Rebuild reading-order text from an OCR annotation JSON file",
    )
    parser.add_argument("annotation", type=Path, help="Vision annotation JSON file")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in LayoutMode],
        default=None,
        help="Layout mode (overrides --direction/--grouping)",
    )
    parser.add_argument(
        "--direction", choices=DIRECTIONS, default="horizontal", help="Writing direction"
    )
    parser.add_argument(
        "--grouping", choices=GROUPINGS, default="parallel", help="Token grouping"
    )
    parser.add_argument(
        "--language",
        default=None,
        help="Language code (default: first detected language, else 'en')",
    )
    parser.add_argument(
        "--overlay", type=Path, default=None, help="Write a boundary overlay PNG here"
    )
    parser.add_argument(
        "--level",
        choices=[lv.value for lv in Level],
        default=Level.paragraphs.value,
        help="Tree level outlined by --overlay",
    )
    parser.add_argument(
        "--missing-as-zero",
        action="store_true",
        help="Read absent vertex coordinates as 0",
    )
    parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Print diagnostics JSON to stderr",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        annotation = load_annotation(args.annotation)
    except IngestError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    cfg = LayoutConfig(missing_coordinate_as_zero=args.missing_as_zero)
    mode = LayoutMode(args.mode) if args.mode else select_mode(args.direction, args.grouping)
    result = reconstruct(annotation, language_code=args.language, mode=mode, cfg=cfg)

    sys.stdout.write(result.text)
    if result.text:
        sys.stdout.write("\n")

    if args.overlay is not None:
        from .export.overlay import draw_boundaries_overlay

        n = draw_boundaries_overlay(annotation, args.overlay, level=args.level, cfg=cfg)
        log.info("Overlay saved -> %s (%d outlines)", args.overlay, n)

    if args.diagnostics:
        print(json.dumps(result.to_dict()["diagnostics"], indent=2), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
