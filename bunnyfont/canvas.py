"""ImageCanvas - CPU rendering of a grid of chars into a Pillow image."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
from PIL import Image

from bunnyfont.backends.image import Rgba
from bunnyfont.char import BunnyChar
from bunnyfont.font import BunnyFont


class ImageCanvas:
    """
    Grid of ``columns x rows`` cells, each holding at most one char.

    Rendering samples every pixel through ``BunnyFont.char_pixel``, so the
    font texture must provide pixel access (e.g. ``ImageSource``).
    """

    def __init__(
        self,
        font: BunnyFont,
        columns: int,
        rows: int,
        clear_color: Optional[Rgba] = None,
    ):
        if columns <= 0 or rows <= 0:
            raise ValueError(f"Canvas size must be positive, got {columns}x{rows}")
        self.font = font
        self.columns = columns
        self.rows = rows
        self.clear_color = clear_color if clear_color is not None else Rgba.TRANSPARENT
        self._cells: Dict[Tuple[int, int], BunnyChar] = {}

    @property
    def pixel_size(self) -> Tuple[int, int]:
        char_width, char_height = self.font.char_dimensions()
        return (self.columns * char_width, self.rows * char_height)

    def put(self, char: BunnyChar, pos: Tuple[int, int]) -> None:
        col, row = pos
        if not (0 <= col < self.columns and 0 <= row < self.rows):
            raise IndexError(f"Cell {pos} is outside of {self.columns}x{self.rows} canvas")
        self._cells[(col, row)] = char

    def get(self, pos: Tuple[int, int]) -> Optional[BunnyChar]:
        return self._cells.get(tuple(pos))

    def clear(self) -> None:
        self._cells.clear()

    def render(self) -> np.ndarray:
        """Canvas pixels as uint8 array of shape (height, width, 4)."""
        width, height = self.pixel_size
        char_width, char_height = self.font.char_dimensions()

        out = np.empty((height, width, 4), dtype=np.float64)
        out[:, :] = self.clear_color.components()

        for (col, row), char in self._cells.items():
            x0 = col * char_width
            y0 = row * char_height
            out[y0:y0 + char_height, x0:x0 + char_width] = self.font.render_char(char)

        return np.rint(np.clip(out, 0.0, 1.0) * 255.0).astype(np.uint8)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.render())
