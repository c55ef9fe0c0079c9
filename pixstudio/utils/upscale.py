"""Nearest-neighbor magnification so exported pixel art keeps crisp squares."""
from __future__ import annotations

import numpy as np

Array = np.ndarray

DEFAULT_DISPLAY_SIZE = 512


def upscale_nearest(arr: Array, factor: int) -> Array:
    """Repeat every pixel of an RGB/RGBA buffer into a ``factor`` x ``factor`` block.

    Raises ``ValueError`` for non-image shapes or ``factor < 1``.
    """
    if not isinstance(arr, np.ndarray) or arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError("arr must be an image with shape (H, W, 3) or (H, W, 4)")
    if factor < 1:
        raise ValueError("factor must be >= 1")
    if factor == 1:
        return arr.copy()
    block = np.ones((factor, factor, 1), dtype=np.uint8)
    return np.kron(arr, block).astype(np.uint8)


def display_factor(size: int, display_size: int = DEFAULT_DISPLAY_SIZE) -> int:
    """Largest integer factor that keeps ``size`` pixels within ``display_size``."""
    if size < 1:
        raise ValueError("size must be >= 1")
    return max(1, display_size // size)


def magnify_for_display(arr: Array, display_size: int = DEFAULT_DISPLAY_SIZE) -> Array:
    """Nearest-neighbor upscale so the longer edge is as close to ``display_size`` as an integer factor allows."""
    return upscale_nearest(arr, display_factor(max(arr.shape[0], arr.shape[1]), display_size))


__all__ = ["DEFAULT_DISPLAY_SIZE", "upscale_nearest", "display_factor", "magnify_for_display"]
