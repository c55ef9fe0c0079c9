"""Area-averaging downsampling of source images to the pixel-art grid.

Each output cell is the mean of the source pixels its footprint covers,
weighted by how much of each source pixel falls inside the footprint. This
anti-aliases the input before palette quantization instead of picking one
representative pixel per block.
"""
from __future__ import annotations

import logging

import numpy as np

from .color import to_u8
from .sampler import PixelSampler, read_sampler

Array = np.ndarray

logger = logging.getLogger(__name__)


def _coverage_weights(src_len: int, dst_len: int) -> Array:
    """Row-normalized (dst_len, src_len) matrix of source coverage per output cell."""
    scale = src_len / dst_len
    starts = np.arange(dst_len, dtype=np.float64) * scale
    ends = starts + scale
    idx = np.arange(src_len, dtype=np.float64)
    overlap = np.minimum(ends[:, None], idx[None, :] + 1.0) - np.maximum(starts[:, None], idx[None, :])
    overlap = np.clip(overlap, 0.0, None)
    return overlap / overlap.sum(axis=1, keepdims=True)


def resample_area(arr: Array, new_h: int, new_w: int) -> Array:
    """Resize an RGB image to (new_h, new_w) by area averaging.

    Parameters
    ----------
    arr : np.ndarray
        Input array of shape (H, W, 3), dtype=uint8.
    new_h : int
        Target height (>=1).
    new_w : int
        Target width (>=1).

    Returns
    -------
    np.ndarray
        Resized uint8 image of shape (new_h, new_w, 3).
    """
    if not isinstance(arr, np.ndarray) or arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError("arr must be an RGB image with shape (H, W, 3)")
    if new_h < 1 or new_w < 1:
        raise ValueError("new_h and new_w must be >= 1")

    H, W, _ = arr.shape
    if H == new_h and W == new_w:
        return arr.copy()

    wy = _coverage_weights(H, new_h)
    wx = _coverage_weights(W, new_w)
    rows = np.einsum("yh,hwc->ywc", wy, arr.astype(np.float64))
    out = np.einsum("xw,ywc->yxc", wx, rows)
    return to_u8(out)


def downsample(sampler: PixelSampler, target_size: int) -> Array:
    """Resample a source image to a ``target_size`` x ``target_size`` RGBA buffer.

    Non-square sources are stretched per axis; cropping to a square is the
    caller's job.

    Parameters
    ----------
    sampler : PixelSampler
        Source pixels.
    target_size : int
        Output edge length in pixels (>=1).

    Returns
    -------
    np.ndarray
        Array of shape (target_size, target_size, 4), dtype=uint8, alpha 255.
    """
    if target_size < 1:
        raise ValueError("target_size must be >= 1")
    src = read_sampler(sampler)
    rgb = resample_area(src, target_size, target_size)
    logger.debug("downsampled %dx%d -> %dx%d", src.shape[1], src.shape[0], target_size, target_size)

    out = np.empty((target_size, target_size, 4), dtype=np.uint8)
    out[..., :3] = rgb
    out[..., 3] = 255
    return out


__all__ = ["resample_area", "downsample"]
