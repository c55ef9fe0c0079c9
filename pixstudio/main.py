"""Command-line entry point for PixelPal.

This tool loads an image, crops it to a square, applies optional tone
adjustments, converts it to 16x16 or 32x32 pixel art with a k-means
palette and optional Floyd–Steinberg dithering, applies optional scripted
edits, and saves the result as PNG.

All processing occurs on NumPy arrays; Pillow is used only for
loading and saving.

Usage example:
    python -m pixstudio.main -i photo.jpg -o sprite.png --size 32 --colors 12 --scale 8
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .config import SUPPORTED_SIZES, ConversionConfig, load_palette_file
from .editor import EditSession
from .errors import PixStudioError
from .utils.adjust import Adjustments
from .utils.color import hex_to_rgb, rgb_to_hex
from .utils.crop import center_square, crop_sampler
from .utils.loader import open_sampler
from .utils.palette import DEFAULT_PALETTE

logger = logging.getLogger(__name__)

Edit = Tuple[int, int, str]

DEFAULT_COLORS = 20


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="pixelpal",
        description=(
            "Turn an image into small pixel art: crop, adjust, reduce to a "
            "k-means palette, dither, then optionally touch up pixels."
        ),
    )

    parser.add_argument("-i", "--input", required=True, help="Path to input image file")
    parser.add_argument("-o", "--output", required=True, help="Path to output PNG file")

    parser.add_argument(
        "--size",
        type=int,
        default=32,
        choices=list(SUPPORTED_SIZES),
        help="Output grid size in pixels (16 or 32).",
    )
    parser.add_argument(
        "--colors",
        type=int,
        default=None,
        help=(
            "Number of palette colors to extract (1..palette size). "
            f"Default: {DEFAULT_COLORS} or the palette size if smaller."
        ),
    )
    parser.add_argument(
        "--palette",
        type=str,
        default=None,
        help="Comma-separated seed palette, e.g. '#000000,#FFFFFF,#DC2626'.",
    )
    parser.add_argument(
        "--palette-file",
        type=str,
        default=None,
        help="JSON palette file: a list of hex colors or {\"colors\": [...]}.",
    )
    parser.add_argument(
        "--dither",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Floyd–Steinberg dithering.",
    )
    parser.add_argument("--brightness", type=float, default=0.0, help="Brightness, -100..100.")
    parser.add_argument("--contrast", type=float, default=0.0, help="Contrast, -100..100.")
    parser.add_argument("--saturation", type=float, default=0.0, help="Saturation, -100..100.")
    parser.add_argument("--hue", type=float, default=0.0, help="Hue rotation in degrees, 0..359.")
    parser.add_argument(
        "--crop",
        type=str,
        default=None,
        help="Square crop 'X,Y,SIZE' in source pixels. Default: largest centered square.",
    )
    parser.add_argument(
        "--paint",
        action="append",
        default=[],
        metavar="X,Y,#HEX",
        help="Paint one pixel after generation. Repeatable.",
    )
    parser.add_argument(
        "--fill",
        action="append",
        default=[],
        metavar="X,Y,#HEX",
        help="Flood fill from a pixel after generation. Repeatable.",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=1,
        help="Nearest-neighbor upscale factor (>=1) applied on export.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    return parser.parse_args(argv)


def _parse_ints(text: str, count: int, what: str) -> List[int]:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != count:
        raise ValueError(f"{what} must have {count} comma-separated values, got {text!r}")
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise ValueError(f"{what} must contain integers, got {text!r}") from None


def _parse_edit(text: str, flag: str) -> Edit:
    parts = text.split(",", 2)
    if len(parts) != 3:
        raise ValueError(f"{flag} expects X,Y,#HEX, got {text!r}")
    x, y = _parse_ints(",".join(parts[:2]), 2, flag)
    color = rgb_to_hex(*hex_to_rgb(parts[2].strip()))
    return x, y, color


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs.

    Also normalizes ``ns.crop``, ``ns.paint`` and ``ns.fill`` into tuples.

    Parameters
    ----------
    ns : argparse.Namespace
        Parsed CLI arguments.
    """
    if ns.scale < 1:
        raise ValueError("--scale must be an integer >= 1")
    if ns.colors is not None and ns.colors < 1:
        raise ValueError("--colors must be >= 1")
    if ns.palette and ns.palette_file:
        raise ValueError("--palette and --palette-file are mutually exclusive")
    if not Path(ns.input).exists():
        raise ValueError(f"Input file not found: {ns.input}")
    if ns.crop is not None:
        x, y, side = _parse_ints(ns.crop, 3, "--crop")
        if x < 0 or y < 0 or side < 1:
            raise ValueError("--crop needs X, Y >= 0 and SIZE >= 1")
        ns.crop = (x, y, side)
    ns.paint = [_parse_edit(p, "--paint") for p in ns.paint]
    ns.fill = [_parse_edit(f, "--fill") for f in ns.fill]


def build_config(ns: argparse.Namespace) -> ConversionConfig:
    """Assemble and validate a ``ConversionConfig`` from parsed arguments."""
    if ns.palette_file:
        palette = load_palette_file(ns.palette_file)
    elif ns.palette:
        palette = [p.strip() for p in ns.palette.split(",") if p.strip()]
    else:
        palette = list(DEFAULT_PALETTE)

    adjustments = Adjustments(
        brightness=ns.brightness,
        contrast=ns.contrast,
        saturation=ns.saturation,
        hue=ns.hue,
    )
    cfg = ConversionConfig(
        size=ns.size,
        colors=ns.colors if ns.colors is not None else min(DEFAULT_COLORS, len(palette)),
        palette=tuple(palette),
        dither=ns.dither,
        adjustments=adjustments,
    )
    return cfg.validate()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing.

    Returns
    -------
    int
        0 on success, 2 for invalid arguments or configuration, 1 when
        reading or writing a file fails.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        validate_args(args)
        config = build_config(args)
    except OSError as e:
        logger.error("Could not read palette file: %s", e)
        return 1
    except (PixStudioError, ValueError) as e:
        logger.error("Argument error: %s", e)
        return 2

    # 1) Load (Pillow -> NumPy RGB uint8)
    try:
        image = open_sampler(args.input)
    except OSError as e:
        logger.error("Could not load %s: %s", args.input, e)
        return 1
    logger.info("loaded %s (%dx%d)", args.input, image.width, image.height)

    # 2) Crop to a square
    if args.crop is None:
        left, top, side = center_square(image.width, image.height)
    else:
        left, top, side = args.crop
    try:
        source = crop_sampler(image, left, top, side, side)
    except ValueError as e:
        logger.error("Argument error: %s", e)
        return 2

    # 3) Adjust, downsample, extract palette, quantize
    session = EditSession(source, config)
    logger.info(
        "generated %dx%d pixel art with %d colors (dither=%s)",
        config.size, config.size, len(session.palette), config.dither,
    )

    # 4) Scripted edits
    for x, y, color in args.paint:
        if not session.paint(x, y, color):
            logger.warning("--paint %d,%d,%s changed nothing", x, y, color)
    for x, y, color in args.fill:
        if not session.fill(x, y, color):
            logger.warning("--fill %d,%d,%s changed nothing", x, y, color)

    # 5) Save (NumPy -> Pillow)
    try:
        session.export(args.output, scale=args.scale)
    except OSError as e:
        logger.error("Could not write %s: %s", args.output, e)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
