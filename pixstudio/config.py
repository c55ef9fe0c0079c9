"""Conversion settings and palette files.

A palette file is JSON: either a plain list of hex strings or an object
with a ``"colors"`` list (extra keys such as ``"name"`` are ignored)::

    {"name": "Warm", "colors": ["#000000", "#F97316", "#FED7AA"]}
"""
from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from .errors import ConfigurationError
from .utils.adjust import Adjustments
from .utils.color import rgb_to_hex
from .utils.palette import DEFAULT_ITERATIONS, DEFAULT_PALETTE, MAX_PALETTE_SIZE, parse_palette

logger = logging.getLogger(__name__)

SUPPORTED_SIZES = (16, 32)


@dataclass(frozen=True)
class ConversionConfig:
    """Everything the generator needs besides the source image.

    ``palette`` seeds the k-means centroids; only its first ``colors``
    entries are used.
    """

    size: int = 32
    colors: int = 20
    palette: Tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_PALETTE))
    dither: bool = True
    adjustments: Adjustments = field(default_factory=Adjustments)
    iterations: int = DEFAULT_ITERATIONS

    def validate(self) -> "ConversionConfig":
        """Raise ``ConfigurationError`` on any invalid field; returns ``self``."""
        if self.size not in SUPPORTED_SIZES:
            raise ConfigurationError(f"size must be one of {SUPPORTED_SIZES}, got {self.size}")
        if len(self.palette) == 0:
            raise ConfigurationError("palette must contain at least one color")
        if len(self.palette) > MAX_PALETTE_SIZE:
            raise ConfigurationError(
                f"palette has {len(self.palette)} colors, the maximum is {MAX_PALETTE_SIZE}"
            )
        try:
            parse_palette(self.palette, strict=True)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"palette contains an invalid color: {e}") from e
        if not 1 <= self.colors <= len(self.palette):
            raise ConfigurationError(
                f"colors must be between 1 and the palette size ({len(self.palette)}), got {self.colors}"
            )
        if self.iterations < 0:
            raise ConfigurationError("iterations must be >= 0")
        if not isinstance(self.adjustments, Adjustments):
            raise ConfigurationError("adjustments must be an Adjustments instance")
        return self

    def replace(self, **changes) -> "ConversionConfig":
        return dataclasses.replace(self, **changes)

    def with_adjustments(self, **values: float) -> "ConversionConfig":
        """Copy with some adjustment sliders changed, e.g. ``with_adjustments(hue=90)``."""
        return self.replace(adjustments=dataclasses.replace(self.adjustments, **values))


def load_palette_file(path: Union[str, Path]) -> List[str]:
    """Read a JSON palette file and return its colors as ``#RRGGBB`` strings.

    Malformed entries are skipped with a warning. A file that is not JSON,
    has the wrong layout or yields no usable colors raises
    ``ConfigurationError``. I/O failures propagate as ``OSError``.
    """
    p = Path(path)
    with p.open("r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{p}: not valid JSON ({e})") from e

    if isinstance(data, dict):
        data = data.get("colors")
    if not isinstance(data, list):
        raise ConfigurationError(f"{p}: expected a list of colors or an object with a 'colors' list")

    colors = [rgb_to_hex(*rgb) for rgb in parse_palette(data)]
    if not colors:
        raise ConfigurationError(f"{p}: palette file contains no valid colors")
    logger.debug("loaded %d colors from %s", len(colors), p)
    return colors


__all__ = ["SUPPORTED_SIZES", "ConversionConfig", "load_palette_file"]
