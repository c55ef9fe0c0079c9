"""The editable N x N RGBA pixel-art canvas."""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from ..utils.color import ColorLike, rgb_to_hex, to_rgb

Array = np.ndarray

_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class PixelCanvas:
    """Owns one square RGBA buffer and the in-place edits on it.

    Coordinates come straight from pointer input, so anything outside
    ``[0, size)`` is ignored rather than treated as an error.
    """

    def __init__(self, pixels: Array) -> None:
        if not isinstance(pixels, np.ndarray) or pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError("pixels must be an RGBA array with shape (N, N, 4)")
        if pixels.shape[0] != pixels.shape[1] or pixels.shape[0] == 0:
            raise ValueError(f"canvas must be square and non-empty, got {pixels.shape[:2]}")
        self._pixels = np.array(pixels, dtype=np.uint8, copy=True)

    @property
    def size(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> Array:
        """Read-only view of the live buffer, for rendering."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def paint(self, x: int, y: int, color: ColorLike) -> bool:
        """Set one pixel to ``color`` with full alpha. Returns whether anything changed."""
        if not self.in_bounds(x, y):
            return False
        r, g, b = to_rgb(color)
        px = self._pixels[y, x]
        if px[0] == r and px[1] == g and px[2] == b and px[3] == 255:
            return False
        px[:] = (r, g, b, 255)
        return True

    def paint_many(self, points: Iterable[Tuple[int, int]], color: ColorLike) -> int:
        """Paint a stroke; returns the number of pixels that changed."""
        rgb = to_rgb(color)
        return sum(1 for x, y in points if self.paint(x, y, rgb))

    def pick(self, x: int, y: int) -> Optional[str]:
        """Hex color at (x, y), or ``None`` outside the canvas."""
        if not self.in_bounds(x, y):
            return None
        r, g, b = self._pixels[y, x, :3]
        return rgb_to_hex(r, g, b)

    def region_at(self, x: int, y: int) -> Array:
        """Boolean mask of the 4-connected same-color region containing (x, y).

        Empty when (x, y) is outside the canvas.
        """
        n = self.size
        region = np.zeros((n, n), dtype=bool)
        if not self.in_bounds(x, y):
            return region

        same = np.all(self._pixels[..., :3] == self._pixels[y, x, :3], axis=-1)
        # Marked on push so every pixel enters the frontier at most once.
        seen = np.zeros((n, n), dtype=bool)
        seen[y, x] = True
        frontier = [(x, y)]
        while frontier:
            cx, cy = frontier.pop()
            assert 0 <= cx < n and 0 <= cy < n
            if not same[cy, cx]:
                continue
            region[cy, cx] = True
            for dx, dy in _NEIGHBOURS:
                nx, ny = cx + dx, cy + dy
                if 0 <= nx < n and 0 <= ny < n and not seen[ny, nx]:
                    seen[ny, nx] = True
                    frontier.append((nx, ny))
        return region

    def flood_fill(self, x: int, y: int, color: ColorLike) -> int:
        """Fill the region at (x, y) with ``color``; returns pixels changed.

        Filling with the region's own color is a no-op and does no traversal.
        """
        if not self.in_bounds(x, y):
            return 0
        r, g, b = to_rgb(color)
        target = self._pixels[y, x, :3]
        if target[0] == r and target[1] == g and target[2] == b:
            return 0
        region = self.region_at(x, y)
        self._pixels[region] = (r, g, b, 255)
        return int(region.sum())

    def snapshot(self) -> Array:
        """Read-only copy of the current buffer."""
        snap = self._pixels.copy()
        snap.flags.writeable = False
        return snap

    def restore(self, snapshot: Array) -> None:
        """Copy ``snapshot`` into the live buffer."""
        if snapshot.shape != self._pixels.shape:
            raise ValueError(f"snapshot shape {snapshot.shape} does not match canvas {self._pixels.shape}")
        np.copyto(self._pixels, snapshot)


__all__ = ["PixelCanvas"]
