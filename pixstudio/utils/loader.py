"""Image loading and PNG export using Pillow, with NumPy arrays.

All processing in this project happens on NumPy arrays. These helpers only
convert between files, Pillow images and ``uint8`` arrays at the edges.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps

from .sampler import ArraySampler

Array = np.ndarray


def load_image(path: Union[str, Path]) -> Array:
    """Load an image file into an RGB NumPy array (uint8).

    EXIF orientation is applied so the array matches what viewers show.

    Parameters
    ----------
    path : str | Path
        Path to an image supported by Pillow.

    Returns
    -------
    np.ndarray
        Array of shape (H, W, 3), dtype=uint8, in RGB order.
    """
    p = Path(path)
    with Image.open(p) as im:
        im = ImageOps.exif_transpose(im)
        arr = np.array(im.convert("RGB"), dtype=np.uint8)
    return arr


def open_sampler(path: Union[str, Path]) -> ArraySampler:
    """Decode an image file and wrap it as a pixel sampler."""
    return ArraySampler(load_image(path))


def save_png(buffer: Array, path: Union[str, Path]) -> Path:
    """Write an RGBA buffer losslessly as PNG at its native resolution.

    Parameters
    ----------
    buffer : np.ndarray
        Array of shape (H, W, 4) or (H, W, 3), dtype=uint8.
    path : str | Path
        Output path. A ``.png`` suffix is enforced.

    Returns
    -------
    Path
        The path actually written.
    """
    if not isinstance(buffer, np.ndarray):
        raise TypeError("buffer must be a NumPy array")
    if buffer.dtype != np.uint8:
        raise TypeError("buffer must have dtype=uint8")
    if buffer.ndim != 3 or buffer.shape[2] not in (3, 4):
        raise ValueError("buffer must have shape (H, W, 3) or (H, W, 4)")

    p = Path(path)
    if p.suffix.lower() != ".png":
        p = p.with_suffix(".png")
    # Pillow infers RGB / RGBA from the trailing channel count.
    Image.fromarray(np.ascontiguousarray(buffer)).save(p, format="PNG")
    return p
