import json
import logging

import pytest

from pixstudio.config import ConversionConfig, load_palette_file
from pixstudio.errors import ConfigurationError
from pixstudio.utils.adjust import Adjustments
from pixstudio.utils.palette import DEFAULT_PALETTE


def test_defaults_are_valid():
    cfg = ConversionConfig().validate()
    assert cfg.size == 32
    assert cfg.colors == 20
    assert list(cfg.palette) == DEFAULT_PALETTE
    assert cfg.dither is True
    assert cfg.adjustments == Adjustments()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"size": 24},
        {"colors": 0},
        {"colors": 21},
        {"palette": ()},
        {"palette": ("#000000", "oops"), "colors": 1},
        {"palette": tuple(["#000000"] * 65), "colors": 1},
        {"iterations": -1},
    ],
)
def test_invalid_configs(kwargs):
    with pytest.raises(ConfigurationError):
        ConversionConfig(**kwargs).validate()


def test_replace_and_with_adjustments():
    cfg = ConversionConfig()
    small = cfg.replace(size=16)
    assert small.size == 16 and cfg.size == 32
    warm = cfg.with_adjustments(hue=30, saturation=10)
    assert warm.adjustments == Adjustments(saturation=10, hue=30)
    assert cfg.adjustments.is_identity


def test_load_palette_list(tmp_path):
    path = tmp_path / "p.json"
    path.write_text(json.dumps(["#000000", "ffffff"]), encoding="utf-8")
    assert load_palette_file(path) == ["#000000", "#FFFFFF"]


def test_load_palette_object_skips_bad_entries(tmp_path, caplog):
    path = tmp_path / "p.json"
    path.write_text(json.dumps({"name": "Mix", "colors": ["#dc2626", "bad", "#16A34A"]}), encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        colors = load_palette_file(path)
    assert colors == ["#DC2626", "#16A34A"]
    assert "bad" in caplog.text


@pytest.mark.parametrize("content", ["not json", json.dumps({"name": "x"}), json.dumps(["nope"])])
def test_load_palette_rejects_unusable_files(tmp_path, content):
    path = tmp_path / "p.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_palette_file(path)


def test_load_palette_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_palette_file(tmp_path / "missing.json")
