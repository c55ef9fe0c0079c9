"""Color-space conversions and color distances.

Scalar helpers (``rgb_to_hsl``, ``hsl_to_rgb``, ``hex_to_rgb``, ...) work on
single colors; the ``*_array`` variants operate on NumPy arrays of shape
(..., 3) and are what the scalar helpers call internally, so both paths
share one implementation.

RGB values use the 0..255 scale. HSL components are normalized to [0, 1].
"""
from __future__ import annotations

import math
import re
from typing import Sequence, Tuple, Union

import numpy as np

from ..errors import ParseError

Array = np.ndarray
RGB = Tuple[int, int, int]
ColorLike = Union[str, Sequence[int]]

# R:G:B weights for palette matching. Green differences are the most visible.
PERCEPTUAL_WEIGHTS: Tuple[float, float, float] = (2.0, 4.0, 3.0)

_HEX_RE = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


def rgb_to_hsl_array(rgb: Array) -> Array:
    """Convert RGB values (0..255 scale) to HSL in [0, 1].

    Parameters
    ----------
    rgb : np.ndarray
        Array of shape (..., 3). Any numeric dtype; values outside 0..255 are
        converted with the same formulas rather than rejected.

    Returns
    -------
    np.ndarray
        float64 array of shape (..., 3) holding (h, s, l).
    """
    rgbf = np.asarray(rgb, dtype=np.float64) / 255.0
    r = rgbf[..., 0]
    g = rgbf[..., 1]
    b = rgbf[..., 2]

    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    light = (mx + mn) / 2.0
    d = mx - mn
    chromatic = d != 0

    with np.errstate(divide="ignore", invalid="ignore"):
        sat = np.where(light > 0.5, d / (2.0 - mx - mn), d / (mx + mn))
        hue = np.where(
            mx == r,
            (g - b) / d + np.where(g < b, 6.0, 0.0),
            np.where(mx == g, (b - r) / d + 2.0, (r - g) / d + 4.0),
        ) / 6.0

    sat = np.where(chromatic, sat, 0.0)
    hue = np.where(chromatic, hue, 0.0)
    return np.stack([hue, sat, light], axis=-1)


def _hue_to_channel(p: Array, q: Array, t: Array) -> Array:
    t = np.where(t < 0.0, t + 1.0, t)
    t = np.where(t > 1.0, t - 1.0, t)
    return np.where(
        t < 1.0 / 6.0,
        p + (q - p) * 6.0 * t,
        np.where(
            t < 0.5,
            q,
            np.where(t < 2.0 / 3.0, p + (q - p) * (2.0 / 3.0 - t) * 6.0, p),
        ),
    )


def hsl_to_rgb_array(hsl: Array) -> Array:
    """Convert HSL in [0, 1] back to RGB on the 0..255 scale.

    The result is float64 and neither rounded nor clamped, so callers can
    choose how to bring it back to 8 bits.
    """
    hslf = np.asarray(hsl, dtype=np.float64)
    h = hslf[..., 0]
    s = hslf[..., 1]
    light = hslf[..., 2]

    q = np.where(light < 0.5, light * (1.0 + s), light + s - light * s)
    p = 2.0 * light - q
    out = np.stack(
        [
            _hue_to_channel(p, q, h + 1.0 / 3.0),
            _hue_to_channel(p, q, h),
            _hue_to_channel(p, q, h - 1.0 / 3.0),
        ],
        axis=-1,
    )
    out = np.where((s == 0)[..., None], light[..., None], out)
    return out * 255.0


def to_u8(values: Array) -> Array:
    """Round half up and clamp float channel values into uint8.

    Values are first snapped to 9 decimals so that an exact .5 which picked
    up float noise in a /255 * 255 round trip still rounds up.
    """
    return np.clip(np.floor(np.round(values, 9) + 0.5), 0, 255).astype(np.uint8)


def rgb_to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Convert one RGB color (0..255) to an (h, s, l) tuple in [0, 1]."""
    h, s, light = rgb_to_hsl_array(np.array([r, g, b], dtype=np.float64))
    return float(h), float(s), float(light)


def hsl_to_rgb(h: float, s: float, light: float) -> RGB:
    """Convert one HSL color in [0, 1] to an 8-bit RGB tuple."""
    rgb = to_u8(hsl_to_rgb_array(np.array([h, s, light], dtype=np.float64)))
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


def hex_to_rgb(value: str) -> RGB:
    """Parse ``#RRGGBB`` or ``RRGGBB`` (case-insensitive).

    Raises
    ------
    ParseError
        If ``value`` is not a string of exactly six hex digits with an
        optional leading ``#``.
    """
    if not isinstance(value, str):
        raise ParseError(value)
    m = _HEX_RE.fullmatch(value)
    if m is None:
        raise ParseError(value)
    return int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format an RGB color as ``#RRGGBB`` (uppercase, zero padded)."""
    channels = (int(r), int(g), int(b))
    for c in channels:
        if not 0 <= c <= 255:
            raise ValueError(f"channel out of range 0..255: {c}")
    return "#{:02X}{:02X}{:02X}".format(*channels)


def to_rgb(color: ColorLike) -> RGB:
    """Accept a hex string or a 3-sequence and return an RGB tuple."""
    if isinstance(color, str):
        return hex_to_rgb(color)
    if len(color) < 3:
        raise ValueError("color sequence must have 3 channels")
    r, g, b = (int(color[0]), int(color[1]), int(color[2]))
    for c in (r, g, b):
        if not 0 <= c <= 255:
            raise ValueError(f"channel out of range 0..255: {c}")
    return r, g, b


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Plain Euclidean distance in RGB space."""
    dr = float(a[0]) - float(b[0])
    dg = float(a[1]) - float(b[1])
    db = float(a[2]) - float(b[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def weighted_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance with R:G:B weighted 2:4:3, used for palette matching."""
    wr, wg, wb = PERCEPTUAL_WEIGHTS
    dr = float(a[0]) - float(b[0])
    dg = float(a[1]) - float(b[1])
    db = float(a[2]) - float(b[2])
    return math.sqrt(wr * dr * dr + wg * dg * dg + wb * db * db)


__all__ = [
    "RGB",
    "ColorLike",
    "PERCEPTUAL_WEIGHTS",
    "rgb_to_hsl_array",
    "hsl_to_rgb_array",
    "to_u8",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "hex_to_rgb",
    "rgb_to_hex",
    "to_rgb",
    "distance",
    "weighted_distance",
]
