"""Square crop-box geometry.

The interactive cropper (dragging, handles) lives in the UI; this module
holds the math behind it so every front end moves, resizes and maps the
box the same way. Boxes are expressed in whatever space the caller uses
(typically the displayed image size) and mapped to source pixels with
``to_source``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from .sampler import CroppedSampler, PixelSampler

Handle = Literal["n", "s", "e", "w", "ne", "nw", "se", "sw"]
Bounds = Tuple[float, float]

MIN_CROP_SIZE = 100.0
INITIAL_FRACTION = 0.6


def _clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


@dataclass(frozen=True)
class CropBox:
    """Square region with top-left corner (x, y) and edge length ``size``."""

    x: float
    y: float
    size: float

    @classmethod
    def centered(cls, width: float, height: float, fraction: float = INITIAL_FRACTION) -> "CropBox":
        """Box centered in a ``width`` x ``height`` area, ``fraction`` of the shorter side."""
        if not 0.0 < fraction <= 1.0:
            raise ValueError("fraction must be in (0, 1]")
        size = min(width, height) * fraction
        return cls((width - size) / 2.0, (height - size) / 2.0, size)

    def moved(self, dx: float, dy: float, bounds: Bounds) -> "CropBox":
        """Translate by (dx, dy), keeping the box inside ``bounds``."""
        width, height = bounds
        nx = _clamp(self.x + dx, 0.0, max(0.0, width - self.size))
        ny = _clamp(self.y + dy, 0.0, max(0.0, height - self.size))
        return CropBox(nx, ny, self.size)

    def resized(
        self,
        handle: Handle,
        dx: float,
        dy: float,
        bounds: Bounds,
        min_size: float = MIN_CROP_SIZE,
    ) -> "CropBox":
        """Drag ``handle`` by (dx, dy).

        The opposite edge or corner stays anchored, the box stays square
        (the shorter of the dragged width/height wins) and is then pulled
        back inside ``bounds``.
        """
        if handle not in ("n", "s", "e", "w", "ne", "nw", "se", "sw"):
            raise ValueError(f"unknown handle: {handle!r}")
        x, y, w, h = self.x, self.y, self.size, self.size
        if "w" in handle:
            w = max(min_size, self.size - dx)
            x = self.x + (self.size - w)
        elif "e" in handle:
            w = max(min_size, self.size + dx)
        if "n" in handle:
            h = max(min_size, self.size - dy)
            y = self.y + (self.size - h)
        elif "s" in handle:
            h = max(min_size, self.size + dy)

        size = min(w, h)
        width, height = bounds
        x = max(0.0, x)
        y = max(0.0, y)
        if x + size > width:
            size = width - x
        if y + size > height:
            size = height - y
        return CropBox(x, y, size)

    def to_source(
        self, display_w: float, display_h: float, source_w: int, source_h: int
    ) -> Tuple[int, int, int, int]:
        """Map the box from display space to integer source pixels.

        Returns ``(left, top, width, height)`` clipped to the source image.
        """
        sx = source_w / display_w
        sy = source_h / display_h
        left = int(_clamp(round(self.x * sx), 0, source_w - 1))
        top = int(_clamp(round(self.y * sy), 0, source_h - 1))
        width = int(_clamp(round(self.size * sx), 1, source_w - left))
        height = int(_clamp(round(self.size * sy), 1, source_h - top))
        return left, top, width, height


def center_square(width: int, height: int) -> Tuple[int, int, int]:
    """Largest centered square in a ``width`` x ``height`` image as (left, top, side)."""
    side = min(width, height)
    return (width - side) // 2, (height - side) // 2, side


def crop_sampler(sampler: PixelSampler, left: int, top: int, width: int, height: int) -> CroppedSampler:
    """View of ``sampler`` restricted to the given source rectangle."""
    return CroppedSampler(sampler, left, top, width, height)


__all__ = [
    "Handle",
    "MIN_CROP_SIZE",
    "INITIAL_FRACTION",
    "CropBox",
    "center_square",
    "crop_sampler",
]
