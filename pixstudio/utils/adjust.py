"""Brightness / contrast / saturation / hue adjustment of pixel buffers.

Adjustments are always applied to the pristine source buffer. Feeding an
already adjusted buffer back in would compound 8-bit rounding on every
slider change, so callers keep the original around and re-run from it.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..errors import ConfigurationError
from .color import hsl_to_rgb_array, rgb_to_hsl_array, to_u8

Array = np.ndarray

# Pixels converted per pass; bounds the float64 temporaries of the HSL math.
_BAND_PIXELS = 1 << 18


@dataclass(frozen=True)
class Adjustments:
    """Tonal adjustment parameters.

    brightness, contrast and saturation are in [-100, 100]; hue is a rotation
    in degrees in [0, 360).
    """

    brightness: float = 0.0
    contrast: float = 0.0
    saturation: float = 0.0
    hue: float = 0.0

    def __post_init__(self) -> None:
        for name in ("brightness", "contrast", "saturation"):
            value = float(getattr(self, name))
            if not -100.0 <= value <= 100.0:
                raise ConfigurationError(f"{name} must be in [-100, 100], got {value}")
        if not 0.0 <= float(self.hue) < 360.0:
            raise ConfigurationError(f"hue must be in [0, 360), got {self.hue}")

    @property
    def is_identity(self) -> bool:
        return self.brightness == 0 and self.contrast == 0 and self.saturation == 0 and self.hue == 0


def adjust(buffer: Array, adjustments: Adjustments) -> Array:
    """Apply ``adjustments`` to every pixel of ``buffer``.

    Parameters
    ----------
    buffer : np.ndarray
        uint8 array of shape (H, W, 3) or (H, W, 4). Alpha, if present, is
        copied through untouched.
    adjustments : Adjustments
        Parameters to apply.

    Returns
    -------
    np.ndarray
        New uint8 array with the same shape as ``buffer``.
    """
    if not isinstance(buffer, np.ndarray) or buffer.ndim != 3 or buffer.shape[2] not in (3, 4):
        raise ValueError("buffer must be an array with shape (H, W, 3) or (H, W, 4)")
    if buffer.dtype != np.uint8:
        raise TypeError("buffer must have dtype=uint8")

    out = buffer.copy()
    H, W, _ = buffer.shape
    rows = max(1, _BAND_PIXELS // max(1, W))
    for top in range(0, H, rows):
        band = slice(top, top + rows)
        out[band, :, :3] = _adjust_rgb(buffer[band, :, :3], adjustments)
    return out


def _adjust_rgb(rgb_u8: Array, adjustments: Adjustments) -> Array:
    contrast_factor = (adjustments.contrast + 100.0) / 100.0
    saturation_factor = (adjustments.saturation + 100.0) / 100.0

    rgb = rgb_u8.astype(np.float64)
    rgb += adjustments.brightness / 100.0 * 255.0
    rgb = ((rgb / 255.0 - 0.5) * contrast_factor + 0.5) * 255.0

    # Unclamped RGB may push saturation to +/-inf; treat that as fully saturated.
    hsl = rgb_to_hsl_array(rgb)
    del rgb
    sat = np.nan_to_num(hsl[..., 1], nan=0.0, posinf=1.0, neginf=0.0)
    hsl[..., 1] = np.clip(sat * saturation_factor, 0.0, 1.0)
    hsl[..., 0] = (hsl[..., 0] + adjustments.hue / 360.0) % 1.0
    return to_u8(hsl_to_rgb_array(hsl))


__all__ = ["Adjustments", "adjust"]
