"""Utility modules for pixstudio.

Modules:
- color: RGB/HSL/hex conversions and color distances.
- sampler: Read-only pixel samplers over decoded images.
- adjust: Brightness/contrast/saturation/hue adjustments.
- pixelate: Area-averaging downsampling to the pixel-art grid.
- palette: Default palette, palette parsing, seeded k-means extraction.
- crop: Square crop-box geometry.
- loader: Pillow <-> NumPy loading and PNG export.
- upscale: Nearest-neighbor magnification.
"""
from .color import hex_to_rgb, rgb_to_hex, rgb_to_hsl, hsl_to_rgb, distance, weighted_distance
from .sampler import PixelSampler, ArraySampler, CroppedSampler, read_sampler
from .adjust import Adjustments, adjust
from .pixelate import downsample, resample_area
from .palette import DEFAULT_PALETTE, extract_palette, parse_palette
from .crop import CropBox, center_square, crop_sampler
from .loader import load_image, open_sampler, save_png
from .upscale import upscale_nearest, magnify_for_display

__all__ = [
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "distance",
    "weighted_distance",
    "PixelSampler",
    "ArraySampler",
    "CroppedSampler",
    "read_sampler",
    "Adjustments",
    "adjust",
    "downsample",
    "resample_area",
    "DEFAULT_PALETTE",
    "extract_palette",
    "parse_palette",
    "CropBox",
    "center_square",
    "crop_sampler",
    "load_image",
    "open_sampler",
    "save_png",
    "upscale_nearest",
    "magnify_for_display",
]
