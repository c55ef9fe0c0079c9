"""Manual editing of generated pixel art.

Modules:
- canvas: the N x N RGBA buffer with paint, flood fill and pick.
- history: linear undo/redo of immutable snapshots.
- session: generation plus editing with history bookkeeping.
"""
from .canvas import PixelCanvas
from .history import HistoryStack
from .session import EditSession, Tool

__all__ = ["PixelCanvas", "HistoryStack", "EditSession", "Tool"]
