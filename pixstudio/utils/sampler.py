"""Read-only pixel samplers over decoded source images.

A sampler is the boundary between whatever decoded the image and the
conversion pipeline: it only needs ``width``, ``height`` and
``sample(x, y) -> (r, g, b)``. Samplers that are backed by an array also
provide ``to_array()`` so the pipeline can skip per-pixel calls.
"""
from __future__ import annotations

from typing import Protocol, Tuple

import numpy as np
from PIL import Image

Array = np.ndarray


class PixelSampler(Protocol):
    """Anything exposing image dimensions and per-coordinate RGB reads."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def sample(self, x: int, y: int) -> Tuple[int, int, int]: ...


class ArraySampler:
    """Sampler backed by an (H, W, 3) or (H, W, 4) uint8 array.

    The array is copied on construction so later changes by the caller
    cannot leak into a conversion that is already holding the sampler.
    """

    def __init__(self, pixels: Array) -> None:
        if not isinstance(pixels, np.ndarray) or pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError("pixels must be an array with shape (H, W, 3) or (H, W, 4)")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("pixels must not be empty")
        self._rgb = np.ascontiguousarray(pixels[..., :3], dtype=np.uint8).copy()
        self._rgb.flags.writeable = False

    @classmethod
    def from_image(cls, image: Image.Image) -> "ArraySampler":
        """Build a sampler from a Pillow image (converted to RGB)."""
        return cls(np.array(image.convert("RGB"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self._rgb.shape[1])

    @property
    def height(self) -> int:
        return int(self._rgb.shape[0])

    def sample(self, x: int, y: int) -> Tuple[int, int, int]:
        assert 0 <= x < self.width and 0 <= y < self.height, (x, y)
        r, g, b = self._rgb[y, x]
        return int(r), int(g), int(b)

    def to_array(self) -> Array:
        return self._rgb


class CroppedSampler:
    """Rectangular view into another sampler, addressed from (0, 0)."""

    def __init__(self, base: PixelSampler, left: int, top: int, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("crop width and height must be >= 1")
        if left < 0 or top < 0 or left + width > base.width or top + height > base.height:
            raise ValueError(
                f"crop ({left}, {top}, {width}x{height}) outside source "
                f"{base.width}x{base.height}"
            )
        self._base = base
        self._left = int(left)
        self._top = int(top)
        self._width = int(width)
        self._height = int(height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def sample(self, x: int, y: int) -> Tuple[int, int, int]:
        assert 0 <= x < self._width and 0 <= y < self._height, (x, y)
        return self._base.sample(self._left + x, self._top + y)

    def to_array(self) -> Array:
        base_arr = getattr(self._base, "to_array", None)
        if callable(base_arr):
            arr = base_arr()
            return arr[self._top:self._top + self._height, self._left:self._left + self._width, :3]
        return _gather(self)


def _gather(sampler: PixelSampler) -> Array:
    out = np.empty((sampler.height, sampler.width, 3), dtype=np.uint8)
    for y in range(sampler.height):
        for x in range(sampler.width):
            out[y, x] = sampler.sample(x, y)
    return out


def read_sampler(sampler: PixelSampler) -> Array:
    """Materialize a sampler as an (H, W, 3) uint8 array.

    Uses ``to_array()`` when the sampler offers it, otherwise reads every
    coordinate through ``sample``.
    """
    if sampler.width < 1 or sampler.height < 1:
        raise ValueError("sampler has no pixels")
    fast = getattr(sampler, "to_array", None)
    if callable(fast):
        arr = np.asarray(fast(), dtype=np.uint8)
        if arr.shape != (sampler.height, sampler.width, 3):
            raise ValueError(f"sampler array has shape {arr.shape}, expected "
                             f"{(sampler.height, sampler.width, 3)}")
        return arr
    return _gather(sampler)


__all__ = ["PixelSampler", "ArraySampler", "CroppedSampler", "read_sampler"]
