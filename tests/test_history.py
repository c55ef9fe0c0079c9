import numpy as np
import pytest

from pixstudio.editor.history import HistoryStack


def _frame(value):
    return np.full((2, 2, 4), value, dtype=np.uint8)


def test_initial_state():
    h = HistoryStack(_frame(0))
    assert len(h) == 1
    assert h.index == 0
    assert not h.can_undo and not h.can_redo
    assert h.undo() is None
    assert h.redo() is None


def test_empty_history():
    h = HistoryStack()
    assert len(h) == 0
    assert h.current is None
    assert h.undo() is None


def test_undo_redo_walks_entries():
    h = HistoryStack(_frame(0))
    h.push(_frame(1))
    h.push(_frame(2))
    assert h.undo()[0, 0, 0] == 1
    assert h.undo()[0, 0, 0] == 0
    assert h.undo() is None
    assert h.redo()[0, 0, 0] == 1
    assert h.redo()[0, 0, 0] == 2
    assert h.redo() is None


def test_push_after_undo_truncates_redo_branch():
    h = HistoryStack(_frame(0))
    h.push(_frame(1))
    h.push(_frame(2))
    h.undo()
    h.undo()
    h.push(_frame(9))
    assert len(h) == 2
    assert not h.can_redo
    assert h.current[0, 0, 0] == 9
    assert h.undo()[0, 0, 0] == 0


def test_snapshots_do_not_alias_caller_buffer():
    live = _frame(0)
    h = HistoryStack(live)
    live[:] = 5
    assert h.current[0, 0, 0] == 0
    with pytest.raises(ValueError):
        h.current[0, 0, 0] = 3


def test_limit_drops_oldest():
    h = HistoryStack(_frame(0), limit=3)
    for v in (1, 2, 3, 4):
        h.push(_frame(v))
    assert len(h) == 3
    assert h.index == 2
    assert h.undo()[0, 0, 0] == 3
    assert h.undo()[0, 0, 0] == 2
    assert h.undo() is None


def test_reset():
    h = HistoryStack(_frame(0))
    h.push(_frame(1))
    h.reset(_frame(7))
    assert len(h) == 1
    assert h.current[0, 0, 0] == 7


def test_invalid_limit():
    with pytest.raises(ValueError):
        HistoryStack(limit=0)


def test_default_history_is_unbounded():
    h = HistoryStack(_frame(0))
    for v in range(1, 151):
        h.push(_frame(v % 256))
    assert len(h) == 151
    while h.undo() is not None:
        pass
    assert h.current[0, 0, 0] == 0
