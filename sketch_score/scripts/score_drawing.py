#!/usr/bin/env python3
"""
Score a drawing image against a reference logo from the command line.

Usage:
    python -m sketch_score.scripts.score_drawing drawing.png logo.png
    python -m sketch_score.scripts.score_drawing drawing.png logo.png --size 128 --json

Prints the total score and the per-metric breakdown. With ``--json`` the
output is the same payload the game client receives:

    {"score": 87, "breakdown": {"pixelScore": ..., ...}}

Exit status is 2 when either image is missing, empty or unreadable.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from sketch_score.config import default_config
from sketch_score.imaging.decoder import DecodeError
from sketch_score.scoring.scorer import score
from sketch_score.validation import InputValidationError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sketch-score",
        description="Score a freehand drawing against a reference logo (0-100).",
    )
    parser.add_argument("drawing", type=Path, help="Drawing image file")
    parser.add_argument("target", type=Path, help="Reference logo image file")
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help=f"Canvas side length (default {default_config().canvas_size})",
    )
    parser.add_argument("--json", action="store_true", help="Print the JSON response payload")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log the scoring breakdown")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        drawing = args.drawing.read_bytes()
        target = args.target.read_bytes()
        result = score(drawing, target, size=args.size)
    except FileNotFoundError as e:
        print(f"Error: {e.filename} not found", file=sys.stderr)
        return 2
    except (DecodeError, InputValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_response()))
        return 0

    b = result.breakdown
    print(f"Score: {result.total_score}")
    if result.insufficient_content:
        print("  Drawing has too little content to compare.")
        return 0
    print(f"  Pixel: {b.pixel_score:6.2f}  -> {b.pixel_contribution:6.2f}")
    print(f"  SSIM:  {b.ssim_score:6.2f}  -> {b.ssim_contribution:6.2f}")
    print(f"  Edge:  {b.edge_score:6.2f}  -> {b.edge_contribution:6.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
