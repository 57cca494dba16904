"""
canvas.py - RGBA pixel surface used by the renderer.

Wraps a Pillow image. Every primitive writes pixels directly (the last write
wins); nothing is alpha-blended with what is already on the canvas.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from mousepad_grid.config import RGBA, TRANSPARENT


class Canvas:
    """A width x height grid of RGBA pixels."""

    def __init__(self, image: Image.Image):
        if image.mode != "RGBA":
            raise ValueError(f"Canvas needs an RGBA image, got mode {image.mode!r}")
        self.image = image
        # Draw() on an RGBA image without a mode argument does not blend.
        self._draw = ImageDraw.Draw(image)

    @classmethod
    def new(cls, width: int, height: int, background: RGBA = TRANSPARENT) -> "Canvas":
        return cls(Image.new("RGBA", (width, height), background))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def max_x(self) -> int:
        return self.image.width - 1

    @property
    def max_y(self) -> int:
        return self.image.height - 1

    def get_pixel(self, x: int, y: int) -> RGBA:
        return self.image.getpixel((x, y))

    def set_pixel(self, x: int, y: int, color: RGBA) -> None:
        self.image.putpixel((x, y), color)

    def rect(self, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
        """Unfilled 1-pixel outline; both corners are inclusive."""
        self._draw.rectangle((x0, y0, x1, y1), outline=color, width=1)

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
        """Solid rectangle; both corners are inclusive."""
        self._draw.rectangle((x0, y0, x1, y1), fill=color)

    def line(self, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
        """1-pixel straight line including both end points."""
        self._draw.line(((x0, y0), (x1, y1)), fill=color, width=1)

    def to_array(self) -> np.ndarray:
        """Copy of the pixels as a (height, width, 4) uint8 array."""
        return np.array(self.image, dtype=np.uint8)

    def save(self, path: str | Path) -> Path:
        """
        Write the canvas as a non-interlaced RGBA PNG.

        Write errors (permissions, full disk) propagate unchanged.

        Returns:
            The path written
        """
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(out, format="PNG")
        return out
