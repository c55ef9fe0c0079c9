import numpy as np
import pytest

from pixstudio.config import ConversionConfig
from pixstudio.editor import EditSession, Tool
from pixstudio.errors import ConfigurationError
from pixstudio.pipeline import generate
from pixstudio.utils.adjust import Adjustments
from pixstudio.utils.sampler import ArraySampler


def _solid_source(color=(255, 0, 0), size=64):
    return ArraySampler(np.full((size, size, 3), color, dtype=np.uint8))


def _noisy_source(seed=0, shape=(48, 40)):
    return ArraySampler(np.random.default_rng(seed).integers(0, 256, size=shape + (3,), dtype=np.uint8))


def _assert_in_sync(session):
    np.testing.assert_array_equal(session.history.current, session.pixels)


def test_solid_red_generates_solid_red_32():
    result = generate(_solid_source(), ConversionConfig(size=32))
    assert result.pixels.shape == (32, 32, 4)
    assert (result.pixels[..., :3] == (255, 0, 0)).all()
    assert (result.pixels[..., 3] == 255).all()
    assert (255, 0, 0) in result.palette


def test_generate_respects_size_and_color_count():
    result = generate(_noisy_source(), ConversionConfig(size=16, colors=5))
    assert result.pixels.shape == (16, 16, 4)
    assert len(result.palette) == 5
    colors = {tuple(int(c) for c in px) for px in result.pixels[..., :3].reshape(-1, 3)}
    assert colors <= set(result.palette)


def test_generate_is_deterministic():
    cfg = ConversionConfig(size=16, colors=8)
    a = generate(_noisy_source(), cfg)
    b = generate(_noisy_source(), cfg)
    np.testing.assert_array_equal(a.pixels, b.pixels)
    assert a.palette == b.palette


def test_generate_validates_before_reading():
    class Exploding:
        width = 4
        height = 4

        def sample(self, x, y):
            raise AssertionError("should not be read")

    with pytest.raises(ConfigurationError):
        generate(Exploding(), ConversionConfig(colors=3, palette=("#000000",)))


def test_paint_pushes_one_entry():
    session = EditSession(_solid_source())
    assert len(session.history) == 1
    assert session.paint(5, 5, "#000000")
    assert len(session.history) == 2
    diff = np.any(session.pixels != session.history.undo(), axis=-1)
    assert int(diff.sum()) == 1


def test_noop_edits_push_nothing():
    session = EditSession(_solid_source())
    assert not session.paint(5, 5, "#FF0000")
    assert session.fill(0, 0, "#FF0000") == 0
    assert not session.paint(-1, 3, "#000000")
    assert session.stroke([(99, 99)], "#000000") == 0
    assert len(session.history) == 1


def test_stroke_is_one_entry():
    session = EditSession(_solid_source())
    assert session.stroke([(0, 0), (1, 0), (2, 0)], "#00FF00") == 3
    assert len(session.history) == 2
    assert session.undo()
    assert (session.pixels[..., :3] == (255, 0, 0)).all()


def test_fill_uniform_canvas():
    session = EditSession(_solid_source(), ConversionConfig(size=16))
    assert session.fill(3, 3, "#0000FF") == 16 * 16
    _assert_in_sync(session)


def test_undo_redo_restore_canvas():
    session = EditSession(_solid_source())
    original = session.pixels.copy()
    session.paint(1, 1, "#000000")
    painted = session.pixels.copy()
    assert session.undo()
    np.testing.assert_array_equal(session.pixels, original)
    _assert_in_sync(session)
    assert not session.undo()
    assert session.redo()
    np.testing.assert_array_equal(session.pixels, painted)
    assert not session.redo()


def test_edit_after_undo_discards_redo():
    session = EditSession(_solid_source())
    session.paint(1, 1, "#000000")
    session.paint(2, 2, "#000000")
    session.undo()
    session.paint(3, 3, "#FFFFFF")
    assert not session.history.can_redo
    assert len(session.history) == 3


def test_regenerate_resets_history():
    session = EditSession(_solid_source())
    session.paint(1, 1, "#000000")
    session.regenerate(source=_solid_source(color=(0, 0, 255)))
    assert len(session.history) == 1
    assert (session.pixels[..., :3] == (0, 0, 255)).all()
    _assert_in_sync(session)


def test_failed_regenerate_leaves_session_untouched():
    session = EditSession(_solid_source())
    session.paint(1, 1, "#000000")
    before = session.pixels.copy()
    with pytest.raises(ConfigurationError):
        session.regenerate(ConversionConfig(size=64))
    np.testing.assert_array_equal(session.pixels, before)
    assert len(session.history) == 2


def test_set_adjustments_regenerates_from_source():
    session = EditSession(_solid_source(color=(255, 0, 0)), ConversionConfig(dither=False))
    session.set_adjustments(Adjustments(hue=120))
    assert (session.pixels[..., :3] == (0, 255, 0)).all()
    session.set_adjustments(Adjustments())
    assert (session.pixels[..., :3] == (255, 0, 0)).all()


def test_apply_tool_dispatch():
    session = EditSession(_solid_source())
    assert session.apply_tool(Tool.PICK, 0, 0) == "#FF0000"
    assert session.apply_tool("paint", 0, 0, "#000000") is None
    assert session.pick(0, 0) == "#000000"
    session.apply_tool(Tool.FILL, 5, 5, "#FFFFFF")
    assert session.pick(31, 31) == "#FFFFFF"
    assert session.pick(0, 0) == "#000000"
    with pytest.raises(ValueError):
        session.apply_tool(Tool.PAINT, 0, 0)


def test_export_native_and_scaled(tmp_path):
    from PIL import Image

    session = EditSession(_solid_source(), ConversionConfig(size=16))
    native = session.export(tmp_path / "art.png")
    scaled = session.export(tmp_path / "big", scale=4)
    assert scaled.suffix == ".png"
    with Image.open(native) as im:
        assert im.size == (16, 16)
        assert im.mode == "RGBA"
    with Image.open(scaled) as im:
        assert im.size == (64, 64)


def test_single_seed_red_fills_whole_canvas():
    source = ArraySampler(np.full((2, 2, 3), (255, 0, 0), dtype=np.uint8))
    cfg = ConversionConfig(size=32, colors=1, palette=("#FF0000",), dither=False)
    result = generate(source, cfg)
    assert result.pixels.shape == (32, 32, 4)
    assert int(np.all(result.pixels == (255, 0, 0, 255), axis=-1).sum()) == 1024
    assert result.palette == [(255, 0, 0)]


def test_undo_reaches_generated_state_after_many_edits():
    session = EditSession(_solid_source())
    fresh = session.pixels.copy()
    for i in range(101):
        assert session.paint(i % 2, 0, "#000000" if i % 4 < 2 else "#00FF00")
    assert len(session.history) == 102
    while session.undo():
        pass
    np.testing.assert_array_equal(session.pixels, fresh)
