import numpy as np
import pytest

from pixstudio.editor.canvas import PixelCanvas


def _blank(n=8, color=(10, 20, 30)):
    buf = np.empty((n, n, 4), dtype=np.uint8)
    buf[..., :3] = color
    buf[..., 3] = 255
    return buf


def test_canvas_copies_its_input():
    src = _blank()
    canvas = PixelCanvas(src)
    canvas.paint(0, 0, "#FFFFFF")
    assert tuple(src[0, 0, :3]) == (10, 20, 30)


def test_pixels_view_is_read_only():
    canvas = PixelCanvas(_blank())
    with pytest.raises(ValueError):
        canvas.pixels[0, 0, 0] = 1


@pytest.mark.parametrize("shape", [(4, 5, 4), (4, 4, 3), (0, 0, 4)])
def test_rejects_non_square_or_non_rgba(shape):
    with pytest.raises(ValueError):
        PixelCanvas(np.zeros(shape, dtype=np.uint8))


def test_paint_single_pixel():
    canvas = PixelCanvas(_blank())
    assert canvas.paint(5, 5, "#ff0000")
    px = canvas.pixels
    assert tuple(px[5, 5]) == (255, 0, 0, 255)
    assert int((px[..., 0] == 255).sum()) == 1


def test_paint_same_color_reports_no_change():
    canvas = PixelCanvas(_blank())
    assert not canvas.paint(1, 1, (10, 20, 30))


def test_paint_sets_full_alpha():
    buf = _blank()
    buf[..., 3] = 0
    canvas = PixelCanvas(buf)
    assert canvas.paint(0, 0, (10, 20, 30))
    assert canvas.pixels[0, 0, 3] == 255


@pytest.mark.parametrize("xy", [(-1, 0), (0, -1), (8, 0), (0, 8)])
def test_out_of_bounds_is_silent(xy):
    canvas = PixelCanvas(_blank())
    before = canvas.snapshot()
    assert canvas.paint(*xy, "#FFFFFF") is False
    assert canvas.pick(*xy) is None
    assert canvas.flood_fill(*xy, "#FFFFFF") == 0
    np.testing.assert_array_equal(canvas.pixels, before)


def test_pick_returns_uppercase_hex():
    canvas = PixelCanvas(_blank(color=(171, 205, 239)))
    assert canvas.pick(3, 3) == "#ABCDEF"


def test_flood_fill_uniform_canvas_touches_every_pixel():
    canvas = PixelCanvas(_blank(n=16))
    assert canvas.flood_fill(7, 9, "#000000") == 16 * 16
    assert (canvas.pixels[..., :3] == 0).all()


def test_flood_fill_same_color_is_noop():
    canvas = PixelCanvas(_blank())
    assert canvas.flood_fill(0, 0, "#0A141E") == 0


def test_flood_fill_is_four_connected():
    buf = _blank(n=5, color=(255, 255, 255))
    # black wall down column 2 with a diagonal-only gap
    buf[:, 2, :3] = 0
    buf[2, 2, :3] = 255
    buf[2, 1, :3] = 0
    buf[2, 3, :3] = 0
    canvas = PixelCanvas(buf)
    changed = canvas.flood_fill(0, 0, (255, 0, 0))
    region = np.all(canvas.pixels[..., :3] == (255, 0, 0), axis=-1)
    assert changed == int(region.sum())
    assert not region[:, 3:].any()
    assert not region[2, 2]


def test_region_at_ignores_alpha():
    buf = _blank(n=4)
    buf[0, 0, 3] = 0
    canvas = PixelCanvas(buf)
    assert canvas.region_at(3, 3).all()


def test_paint_many_counts_changes():
    canvas = PixelCanvas(_blank())
    assert canvas.paint_many([(0, 0), (1, 0), (1, 0), (99, 99)], "#FFFFFF") == 2


def test_snapshot_restore():
    canvas = PixelCanvas(_blank())
    snap = canvas.snapshot()
    canvas.paint(2, 2, "#FFFFFF")
    assert snap[2, 2, 0] == 10
    canvas.restore(snap)
    np.testing.assert_array_equal(canvas.pixels, snap)
    with pytest.raises(ValueError):
        canvas.restore(np.zeros((4, 4, 4), dtype=np.uint8))
