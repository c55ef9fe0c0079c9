"""Nearest palette color lookup using the perceptually weighted RGB distance."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from ..utils.color import PERCEPTUAL_WEIGHTS, RGB, ColorLike, to_rgb, weighted_distance

Array = np.ndarray


def nearest_color(r: int, g: int, b: int, palette: Sequence[ColorLike]) -> RGB:
    """Return the palette entry closest to (r, g, b).

    Linear scan with ``weighted_distance``; the first entry wins on ties.
    """
    if len(palette) == 0:
        raise ValueError("palette must not be empty")
    best = to_rgb(palette[0])
    best_d = weighted_distance((r, g, b), best)
    for entry in palette[1:]:
        rgb = to_rgb(entry)
        d = weighted_distance((r, g, b), rgb)
        if d < best_d:
            best, best_d = rgb, d
    return best


def nearest_indices(pixels: Array, pal: Array) -> Array:
    """Index of the nearest palette row for each pixel.

    Parameters
    ----------
    pixels : np.ndarray
        (N, 3) array of RGB values.
    pal : np.ndarray
        (P, 3) palette array.

    Returns
    -------
    np.ndarray
        (N,) int64 array; ties resolve to the lowest palette index.
    """
    w = np.asarray(PERCEPTUAL_WEIGHTS, dtype=np.float64)
    diff = pixels.astype(np.float64)[:, None, :] - pal.astype(np.float64)[None, :, :]
    dist2 = np.einsum("npc,c,npc->np", diff, w, diff)
    return np.argmin(dist2, axis=1)


def map_nearest(rgb: Array, pal: Array) -> Array:
    """Replace every pixel of an (H, W, 3) image by its nearest palette color."""
    H, W, _ = rgb.shape
    idx = nearest_indices(rgb.reshape(-1, 3), pal)
    return pal[idx].reshape(H, W, 3).astype(np.uint8)


__all__ = ["nearest_color", "nearest_indices", "map_nearest"]
