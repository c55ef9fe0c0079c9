"""Floyd–Steinberg error diffusion onto an arbitrary palette.

Pixels are visited in row-major order. Each one is replaced by its nearest
palette color (weighted RGB distance) and the per-channel error is pushed
to the unvisited neighbours:

       *   7
    3  5  1        (/16)

Neighbour values are clamped to [0, 255] after every push. The kernel is
compiled with Numba.
"""
from __future__ import annotations

import numpy as np
from numba import njit

from ..utils.color import PERCEPTUAL_WEIGHTS

Array = np.ndarray


@njit(cache=True)
def _diffuse(work: np.ndarray, y: int, x: int, e0: float, e1: float, e2: float, factor: float) -> None:
    H, W, _ = work.shape
    if y >= H or x < 0 or x >= W:
        return
    v0 = work[y, x, 0] + e0 * factor
    v1 = work[y, x, 1] + e1 * factor
    v2 = work[y, x, 2] + e2 * factor
    work[y, x, 0] = min(255.0, max(0.0, v0))
    work[y, x, 1] = min(255.0, max(0.0, v1))
    work[y, x, 2] = min(255.0, max(0.0, v2))


@njit(cache=True)
def _floyd_impl(work: np.ndarray, pal: np.ndarray, weights: np.ndarray, out_idx: np.ndarray) -> None:
    H, W, _ = work.shape
    P = pal.shape[0]
    for y in range(H):
        for x in range(W):
            old0 = work[y, x, 0]
            old1 = work[y, x, 1]
            old2 = work[y, x, 2]

            best = 0
            best_d = np.inf
            for i in range(P):
                d0 = old0 - pal[i, 0]
                d1 = old1 - pal[i, 1]
                d2 = old2 - pal[i, 2]
                d = weights[0] * d0 * d0 + weights[1] * d1 * d1 + weights[2] * d2 * d2
                if d < best_d:
                    best_d = d
                    best = i
            out_idx[y, x] = best

            err0 = old0 - pal[best, 0]
            err1 = old1 - pal[best, 1]
            err2 = old2 - pal[best, 2]
            _diffuse(work, y, x + 1, err0, err1, err2, 7.0 / 16.0)
            _diffuse(work, y + 1, x - 1, err0, err1, err2, 3.0 / 16.0)
            _diffuse(work, y + 1, x, err0, err1, err2, 5.0 / 16.0)
            _diffuse(work, y + 1, x + 1, err0, err1, err2, 1.0 / 16.0)


def dither_floyd(arr: Array, pal: Array) -> Array:
    """Apply Floyd–Steinberg dithering against a fixed palette.

    Parameters
    ----------
    arr : np.ndarray
        Input RGB image (H, W, 3), dtype=uint8. Not modified.
    pal : np.ndarray
        Palette of shape (P, 3), dtype=uint8, P >= 1.

    Returns
    -------
    np.ndarray
        Dithered image (uint8) whose pixels are all palette members.
    """
    H, W, _ = arr.shape
    work = arr.astype(np.float64).copy()
    pal_f = np.ascontiguousarray(pal, dtype=np.float64)
    weights = np.asarray(PERCEPTUAL_WEIGHTS, dtype=np.float64)
    out_idx = np.zeros((H, W), dtype=np.int64)

    _floyd_impl(work, pal_f, weights, out_idx)

    return pal.astype(np.uint8)[out_idx]


__all__ = ["dither_floyd"]
