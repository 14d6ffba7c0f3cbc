"""CPU image backend: RGBA colours and numpy-backed atlases loaded with Pillow."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from bunnyfont.backends.base import Color, PixelIndexable, SourceImage


class FontLoadError(OSError):
    """Raised when an atlas image exists but cannot be decoded."""


@dataclass(frozen=True)
class Rgba(Color):
    """RGBA colour with float components in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_components(cls, r: float, g: float, b: float, a: float) -> "Rgba":
        return cls(float(r), float(g), float(b), float(a))

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int, a: int = 255) -> "Rgba":
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def components(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def lerp(self, other: "Rgba", scalar: float) -> "Rgba":
        return Rgba(
            self.r + (other.r - self.r) * scalar,
            self.g + (other.g - self.g) * scalar,
            self.b + (other.b - self.b) * scalar,
            self.a + (other.a - self.a) * scalar,
        )

    def into_scalar(self) -> float:
        """Mean of the colour channels weighted by alpha."""
        return (self.r + self.g + self.b) / 3.0 * self.a


Rgba.WHITE = Rgba(1.0, 1.0, 1.0, 1.0)
Rgba.BLACK = Rgba(0.0, 0.0, 0.0, 1.0)
Rgba.TRANSPARENT = Rgba(0.0, 0.0, 0.0, 0.0)


class ImageSource(SourceImage, PixelIndexable):
    """
    Atlas pixels held as a numpy array of shape (height, width, 4), uint8.

    The array is made read-only; the atlas never changes after loading.
    """

    def __init__(self, data: np.ndarray):
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(f"Expected array of shape (height, width, 4), got {data.shape}")
        self._data = np.ascontiguousarray(data, dtype=np.uint8)
        self._data.setflags(write=False)

    @classmethod
    def from_image(cls, image: Image.Image) -> "ImageSource":
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    @classmethod
    def from_file(cls, path: str | Path) -> "ImageSource":
        """
        Load atlas from an image file.

        Raises:
            FileNotFoundError: no file at ``path``.
            FontLoadError: the file is not a decodable image.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Font image not found: {path}")
        try:
            with Image.open(path) as image:
                return cls.from_image(image)
        except (UnidentifiedImageError, OSError) as exc:
            raise FontLoadError(f"Cannot decode font image {path}: {exc}") from exc

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    def pixel_dimensions(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def get_pixel_at(self, x: int, y: int) -> Rgba:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside of {self.width}x{self.height} image")
        r, g, b, a = self._data[y, x]
        return Rgba.from_bytes(int(r), int(g), int(b), int(a))
