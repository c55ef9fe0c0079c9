"""Image -> pixel art generation.

Stages, always starting from the pristine source:

1. tone adjustment (skipped when all sliders are zero)
2. area-averaging downsample to ``size`` x ``size``
3. palette extraction seeded from the configured palette
4. nearest-color mapping, optionally Floyd–Steinberg dithered
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .config import ConversionConfig
from .dithers import quantize
from .utils.adjust import adjust
from .utils.color import RGB
from .utils.palette import extract_palette
from .utils.pixelate import downsample
from .utils.sampler import ArraySampler, PixelSampler, read_sampler

Array = np.ndarray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    pixels: Array
    palette: List[RGB]


def generate(source: PixelSampler, config: Optional[ConversionConfig] = None) -> GenerationResult:
    """Convert ``source`` into an N x N RGBA buffer.

    Parameters
    ----------
    source : PixelSampler
        The (already cropped) source image.
    config : ConversionConfig | None
        Settings; defaults to ``ConversionConfig()``.

    Returns
    -------
    GenerationResult
        The generated buffer (alpha 255) and the palette it was mapped to.

    Raises
    ------
    ConfigurationError
        If ``config`` is invalid. Raised before any pixel is read.
    """
    cfg = (config or ConversionConfig()).validate()

    rgb = read_sampler(source)
    if not cfg.adjustments.is_identity:
        rgb = adjust(rgb, cfg.adjustments)
    small = downsample(ArraySampler(rgb), cfg.size)

    palette = extract_palette(small, cfg.colors, cfg.palette, iterations=cfg.iterations)
    pixels = quantize(small, palette, dither=cfg.dither)
    logger.debug("generated %dx%d image from %dx%d source", cfg.size, cfg.size, source.width, source.height)
    return GenerationResult(pixels=pixels, palette=palette)


__all__ = ["GenerationResult", "generate"]
