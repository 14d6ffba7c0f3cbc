"""BunnyFont - glyph addressing and CPU sampling over a fixed-grid atlas."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Generic, Tuple, TypeVar

import numpy as np

from bunnyfont import log
from bunnyfont.backends.base import Color, PixelIndexable, SourceImage
from bunnyfont.backends.image import ImageSource
from bunnyfont.char import BunnyChar
from bunnyfont.char_transforms import transform_pixel

T = TypeVar("T", bound=SourceImage)


class BunnyFont(Generic[T]):
    """
    Font atlas cut into equal ``char_width x char_height`` cells.

    Glyphs are addressed by row-major index: ``index = y * charset_width + x``.
    The atlas is never modified, so a font may be shared by any number of
    renderers.
    """

    def __init__(self, texture: T, char_size: Tuple[int, int]):
        char_width, char_height = char_size
        texture_width, texture_height = texture.pixel_dimensions()

        if char_width <= 0 or char_height <= 0:
            raise ValueError(f"Char size must be positive, got {char_width}x{char_height}")
        if texture_width % char_width != 0:
            raise ValueError(
                f"Font width {texture_width} is not multiple of char width {char_width}"
            )
        if texture_height % char_height != 0:
            raise ValueError(
                f"Font height {texture_height} is not multiple of char height {char_height}"
            )

        self._texture = texture
        self._char_width = int(char_width)
        self._char_height = int(char_height)

    @property
    def texture(self) -> T:
        return self._texture

    def __len__(self) -> int:
        return self.total_char_indices()

    def __repr__(self) -> str:
        w, h = self.charset_dimensions()
        return f"BunnyFont({w}x{h} chars of {self._char_width}x{self._char_height})"

    def char_dimensions(self) -> Tuple[int, int]:
        return (self._char_width, self._char_height)

    def charset_dimensions(self) -> Tuple[int, int]:
        """The dimensions of the font, in chars."""
        texture_width, texture_height = self._texture.pixel_dimensions()
        return (texture_width // self._char_width, texture_height // self._char_height)

    def total_char_indices(self) -> int:
        charset_width, charset_height = self.charset_dimensions()
        return charset_width * charset_height

    glyph_count = total_char_indices

    def highest_char_index(self) -> int:
        return self.total_char_indices() - 1

    def get_src_uvs(self, index: int) -> Tuple[float, float, float, float]:
        """
        Normalized atlas rectangle ``(u, v, du, dv)`` of a glyph.

        Indices past the end are not checked and give a rectangle outside
        the atlas.
        """
        texture_width, texture_height = self._texture.pixel_dimensions()

        du = self._char_width / texture_width
        dv = self._char_height / texture_height

        x_index, y_index = self.get_char_pos_from_index(index)
        return (x_index * du, y_index * dv, du, dv)

    uv_rect = get_src_uvs

    def get_index_from_char_pos(self, x: int, y: int) -> int:
        charset_width, _ = self.charset_dimensions()
        return y * charset_width + x

    def get_char_pos_from_index(self, index: int) -> Tuple[int, int]:
        charset_width, _ = self.charset_dimensions()
        return (index % charset_width, index // charset_width)

    index_from_char_pos = get_index_from_char_pos
    char_pos_from_index = get_char_pos_from_index

    def char_pos_at_point(self, px: float, py: float, scaling: float = 1.0) -> Tuple[int, int]:
        """Grid cell under a point of a surface showing the atlas at ``scaling``."""
        return (
            int(math.floor(px / (self._char_width * scaling))),
            int(math.floor(py / (self._char_height * scaling))),
        )

    # --- CPU sampling ---

    def char_pixel(self, char: BunnyChar, x: int, y: int) -> Color:
        """
        Colour of local pixel ``(x, y)`` of ``char`` after rotation and mirroring.

        Atlas texels act as a coverage mask: the result interpolates from the
        background (or from the texel itself when the char has no background)
        towards the foreground.
        """
        if not isinstance(self._texture, PixelIndexable):
            raise TypeError(f"{type(self._texture).__name__} does not provide pixel access")

        if not 0 <= char.index < self.total_char_indices():
            raise IndexError(
                f"Char index {char.index} is outside of font with {self.total_char_indices()} chars"
            )

        char_x, char_y = self.get_char_pos_from_index(char.index)
        char_width, char_height = self.char_dimensions()

        if not (0 <= x < char_width and 0 <= y < char_height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside of {char_width}x{char_height} char"
            )

        x, y = transform_pixel(char.rotation, char.mirror, x, y, char_width, char_height)

        texture_pixel = self._texture.get_pixel_at(
            x + char_x * char_width,
            y + char_y * char_height,
        )
        scalar = texture_pixel.into_scalar()
        if not 0.0 <= scalar <= 1.0:
            raise ValueError(
                f"Coverage {scalar} of {texture_pixel!r} is outside of [0, 1]"
            )

        if char.background is not None:
            return char.background.lerp(char.foreground, scalar)
        return texture_pixel.lerp(char.foreground, scalar)

    def render_char(self, char: BunnyChar) -> np.ndarray:
        """All pixels of ``char`` as a float array of shape (height, width, 4)."""
        char_width, char_height = self.char_dimensions()
        out = np.empty((char_height, char_width, 4), dtype=np.float64)
        for y in range(char_height):
            for x in range(char_width):
                out[y, x] = self.char_pixel(char, x, y).components()
        return out


def load_font(path: str | Path, char_size: Tuple[int, int]) -> BunnyFont[ImageSource]:
    """
    Load an atlas image with Pillow and cut it into ``char_size`` cells.

    Raises FileNotFoundError or FontLoadError for unreadable files and
    ValueError when the image does not divide into whole cells.
    """
    source = ImageSource.from_file(path)
    font = BunnyFont(source, char_size)
    log.debug(f"Loaded font {path}: {font!r}")
    return font
