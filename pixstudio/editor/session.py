"""One editing session: a pristine source, its generated canvas and history."""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from ..config import ConversionConfig
from ..pipeline import generate
from ..utils.adjust import Adjustments
from ..utils.color import RGB, ColorLike
from ..utils.loader import save_png
from ..utils.sampler import PixelSampler
from ..utils.upscale import upscale_nearest
from .canvas import PixelCanvas
from .history import DEFAULT_LIMIT, HistoryStack

Array = np.ndarray

logger = logging.getLogger(__name__)


class Tool(str, Enum):
    PAINT = "paint"
    FILL = "fill"
    PICK = "pick"


class EditSession:
    """Ties generation to manual editing.

    The canvas is rebuilt from the untouched source on every
    ``regenerate``, which also wipes the history. Edits that change the
    canvas record exactly one history entry each; edits that change
    nothing record none. After every public call ``history.current``
    holds the same pixels as ``canvas.pixels``.
    """

    def __init__(
        self,
        source: PixelSampler,
        config: Optional[ConversionConfig] = None,
        history_limit: Optional[int] = DEFAULT_LIMIT,
    ) -> None:
        self._source = source
        self._config = config or ConversionConfig()
        result = generate(self._source, self._config)
        self.palette: List[RGB] = result.palette
        self.canvas = PixelCanvas(result.pixels)
        self.history = HistoryStack(self.canvas.snapshot(), limit=history_limit)

    @property
    def config(self) -> ConversionConfig:
        return self._config

    @property
    def source(self) -> PixelSampler:
        return self._source

    @property
    def pixels(self) -> Array:
        return self.canvas.pixels

    def regenerate(
        self,
        config: Optional[ConversionConfig] = None,
        source: Optional[PixelSampler] = None,
    ) -> None:
        """Re-run generation from the pristine source and start a fresh history.

        Nothing in the session changes if generation raises.
        """
        new_config = config or self._config
        new_source = source or self._source
        result = generate(new_source, new_config)

        self._config = new_config
        self._source = new_source
        self.palette = result.palette
        self.canvas = PixelCanvas(result.pixels)
        self.history.reset(self.canvas.snapshot())
        logger.debug("regenerated canvas (%d colors)", len(self.palette))

    def set_adjustments(self, adjustments: Adjustments) -> None:
        self.regenerate(self._config.replace(adjustments=adjustments))

    def _commit(self, changed: bool) -> bool:
        if changed:
            self.history.push(self.canvas.snapshot())
        return changed

    def paint(self, x: int, y: int, color: ColorLike) -> bool:
        return self._commit(self.canvas.paint(x, y, color))

    def stroke(self, points: Iterable[Tuple[int, int]], color: ColorLike) -> int:
        """Paint several pixels as one undoable edit; returns pixels changed."""
        changed = self.canvas.paint_many(points, color)
        self._commit(changed > 0)
        return changed

    def fill(self, x: int, y: int, color: ColorLike) -> int:
        changed = self.canvas.flood_fill(x, y, color)
        self._commit(changed > 0)
        return changed

    def pick(self, x: int, y: int) -> Optional[str]:
        return self.canvas.pick(x, y)

    def apply_tool(self, tool: Union[Tool, str], x: int, y: int, color: Optional[ColorLike] = None) -> Optional[str]:
        """Run ``tool`` at (x, y).

        Returns the picked hex color for ``Tool.PICK`` and ``None`` otherwise.
        Paint and fill require ``color``.
        """
        tool = Tool(tool)
        if tool is Tool.PICK:
            return self.pick(x, y)
        if color is None:
            raise ValueError(f"{tool.value} requires a color")
        if tool is Tool.PAINT:
            self.paint(x, y, color)
        else:
            self.fill(x, y, color)
        return None

    def undo(self) -> bool:
        snap = self.history.undo()
        if snap is None:
            return False
        self.canvas.restore(snap)
        return True

    def redo(self) -> bool:
        snap = self.history.redo()
        if snap is None:
            return False
        self.canvas.restore(snap)
        return True

    def export(self, path: Union[str, Path], scale: int = 1) -> Path:
        """Save the canvas as PNG, optionally magnified by an integer ``scale``."""
        pixels = np.array(self.canvas.pixels)
        if scale != 1:
            pixels = upscale_nearest(pixels, scale)
        written = save_png(pixels, path)
        logger.info("saved %dx%d image to %s", pixels.shape[1], pixels.shape[0], written)
        return written


__all__ = ["Tool", "EditSession"]
