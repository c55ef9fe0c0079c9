from __future__ import annotations

# Alias package: re-export public API from the implementation package.
from pixstudio.config import ConversionConfig, load_palette_file  # noqa: F401
from pixstudio.dithers import nearest_color, quantize  # noqa: F401
from pixstudio.editor import EditSession, HistoryStack, PixelCanvas, Tool  # noqa: F401
from pixstudio.errors import ConfigurationError, ParseError, PixStudioError  # noqa: F401
from pixstudio.pipeline import GenerationResult, generate  # noqa: F401
from pixstudio.utils.adjust import Adjustments, adjust  # noqa: F401
from pixstudio.utils.color import (  # noqa: F401
    distance,
    hex_to_rgb,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
    weighted_distance,
)
from pixstudio.utils.crop import CropBox, center_square, crop_sampler  # noqa: F401
from pixstudio.utils.loader import load_image, open_sampler, save_png  # noqa: F401
from pixstudio.utils.palette import DEFAULT_PALETTE, extract_palette  # noqa: F401
from pixstudio.utils.pixelate import downsample  # noqa: F401
from pixstudio.utils.sampler import ArraySampler, PixelSampler  # noqa: F401
from pixstudio.utils.upscale import upscale_nearest  # noqa: F401

__all__ = [
    "ConversionConfig",
    "load_palette_file",
    "quantize",
    "nearest_color",
    "EditSession",
    "HistoryStack",
    "PixelCanvas",
    "Tool",
    "PixStudioError",
    "ParseError",
    "ConfigurationError",
    "GenerationResult",
    "generate",
    "Adjustments",
    "adjust",
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "distance",
    "weighted_distance",
    "CropBox",
    "center_square",
    "crop_sampler",
    "load_image",
    "open_sampler",
    "save_png",
    "DEFAULT_PALETTE",
    "extract_palette",
    "downsample",
    "ArraySampler",
    "PixelSampler",
    "upscale_nearest",
]
