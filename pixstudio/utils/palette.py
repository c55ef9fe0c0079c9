"""Palette definitions, parsing, and palette extraction by seeded k-means.

Extraction is Lloyd's algorithm with centroids seeded from a fixed base
palette instead of random picks, so converting the same image twice
always yields the same palette.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

import numpy as np

from ..errors import ConfigurationError, ParseError
from .color import RGB, ColorLike, to_rgb

Array = np.ndarray

logger = logging.getLogger(__name__)

MAX_PALETTE_SIZE = 64
DEFAULT_ITERATIONS = 10

DEFAULT_PALETTE: List[str] = [
    "#000000",  # Black
    "#FFFFFF",  # White
    "#1C1917",  # Dark Gray
    "#78716C",  # Medium Gray
    "#D6D3D1",  # Light Gray
    "#F97316",  # Orange
    "#EA580C",  # Dark Orange
    "#FED7AA",  # Peach
    "#DC2626",  # Red
    "#16A34A",  # Green
    "#0EA5E9",  # Blue
    "#8B5CF6",  # Purple
    "#FBBF24",  # Yellow
    "#A78BFA",  # Light Purple
    "#86EFAC",  # Light Green
    "#FCA5A5",  # Light Red
    "#7DD3FC",  # Light Blue
    "#92400E",  # Brown
    "#F3F4F6",  # Off White
    "#FDE68A",  # Light Yellow
]


def parse_palette(entries: Iterable[ColorLike], strict: bool = False) -> List[RGB]:
    """Convert hex strings / RGB triples into a list of RGB tuples.

    Malformed entries are dropped with a warning so that one typo does not
    sink a whole palette file. With ``strict=True`` the first bad entry
    raises ``ParseError`` instead.
    """
    out: List[RGB] = []
    for entry in entries:
        try:
            out.append(to_rgb(entry))
        except (ParseError, ValueError, TypeError):
            if strict:
                raise
            logger.warning("rejecting palette entry %r", entry)
    return out


def palette_array(palette: Sequence[ColorLike]) -> Array:
    """Palette as a (P, 3) uint8 array."""
    return np.array([to_rgb(c) for c in palette], dtype=np.uint8).reshape(-1, 3)


def _round_half_up(values: Array) -> Array:
    return np.floor(values + 0.5)


def extract_palette(
    buffer: Array,
    k: int,
    seed_palette: Sequence[ColorLike],
    iterations: int = DEFAULT_ITERATIONS,
    stride: int = 1,
) -> List[RGB]:
    """Derive ``k`` representative colors from ``buffer``.

    Parameters
    ----------
    buffer : np.ndarray
        uint8 image of shape (H, W, 3) or (H, W, 4).
    k : int
        Number of colors to return (>=1).
    seed_palette : sequence of hex strings or RGB triples
        Initial centroids; the first ``k`` entries are used.
    iterations : int
        Number of assign/update rounds.
    stride : int
        Use every ``stride``-th pixel in row-major order.

    Returns
    -------
    list[tuple[int, int, int]]
        ``k`` colors in centroid order.

    Raises
    ------
    ConfigurationError
        If ``k`` is not positive or ``seed_palette`` has fewer than ``k``
        entries. Checked before any clustering work.
    """
    if k < 1:
        raise ConfigurationError(f"palette size must be >= 1, got {k}")
    if len(seed_palette) < k:
        raise ConfigurationError(
            f"seed palette has {len(seed_palette)} colors but {k} were requested"
        )
    if iterations < 0:
        raise ConfigurationError("iterations must be >= 0")
    if stride < 1:
        raise ConfigurationError("stride must be >= 1")
    if not isinstance(buffer, np.ndarray) or buffer.ndim != 3 or buffer.shape[2] not in (3, 4):
        raise ValueError("buffer must be an array with shape (H, W, 3) or (H, W, 4)")

    centroids = palette_array(list(seed_palette)[:k]).astype(np.float64)
    pixels = buffer[..., :3].reshape(-1, 3)[::stride].astype(np.float64)
    if pixels.shape[0] == 0:
        iterations = 0

    for _ in range(iterations):
        diff = pixels[:, None, :] - centroids[None, :, :]
        dist2 = np.einsum("pkc,pkc->pk", diff, diff)
        # argmin keeps the lowest index on ties
        labels = np.argmin(dist2, axis=1)

        counts = np.bincount(labels, minlength=k)
        sums = np.zeros((k, 3), dtype=np.float64)
        np.add.at(sums, labels, pixels)

        # Empty clusters keep their previous centroid.
        filled = counts > 0
        centroids[filled] = _round_half_up(sums[filled] / counts[filled, None])

    logger.debug("extracted %d colors from %d samples in %d iterations", k, pixels.shape[0], iterations)
    return [(int(c[0]), int(c[1]), int(c[2])) for c in centroids]


__all__ = [
    "MAX_PALETTE_SIZE",
    "DEFAULT_ITERATIONS",
    "DEFAULT_PALETTE",
    "parse_palette",
    "palette_array",
    "extract_palette",
]
