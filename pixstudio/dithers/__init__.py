"""Palette quantization with optional dithering.

Exported API
------------
- quantize(buffer, palette, dither=True)
- nearest_color(r, g, b, palette)

Implementation notes
--------------------
Both paths match colors with the weighted RGB distance (R:G:B = 2:4:3).
Without dithering every pixel maps independently. With dithering the
Floyd–Steinberg kernel in ``floyd`` diffuses the error in row-major order,
so each call must start from the undithered buffer; ``quantize`` always
works on a private copy.
"""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..errors import ConfigurationError
from ..utils.color import ColorLike
from ..utils.palette import palette_array
from . import floyd
from .nearest import map_nearest, nearest_color

Array = np.ndarray

logger = logging.getLogger(__name__)


def quantize(buffer: Array, palette: Sequence[ColorLike], dither: bool = True) -> Array:
    """Map every pixel of ``buffer`` onto ``palette``.

    Parameters
    ----------
    buffer : np.ndarray
        uint8 image of shape (H, W, 3) or (H, W, 4). Alpha is copied through.
    palette : sequence of hex strings or RGB triples
        Target colors, at least one.
    dither : bool
        Diffuse quantization error with Floyd–Steinberg.

    Returns
    -------
    np.ndarray
        New uint8 array with the same shape as ``buffer``.
    """
    if not isinstance(buffer, np.ndarray) or buffer.ndim != 3 or buffer.shape[2] not in (3, 4):
        raise ValueError("buffer must be an array with shape (H, W, 3) or (H, W, 4)")
    if buffer.dtype != np.uint8:
        raise TypeError("buffer must have dtype=uint8")
    if len(palette) == 0:
        raise ConfigurationError("palette must contain at least one color")

    pal = palette_array(palette)
    rgb = buffer[..., :3]
    if dither:
        mapped = floyd.dither_floyd(rgb, pal)
    else:
        mapped = map_nearest(rgb, pal)
    logger.debug("quantized %dx%d to %d colors (dither=%s)", buffer.shape[1], buffer.shape[0], len(pal), dither)

    out = buffer.copy()
    out[..., :3] = mapped
    return out


__all__ = ["quantize", "nearest_color"]
