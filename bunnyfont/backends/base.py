"""Backend interfaces decoupling font code from specific rendering libraries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import TYPE_CHECKING, Sequence, Tuple, Type, TypeVar

if TYPE_CHECKING:
    from bunnyfont.batch import DrawCommand

C = TypeVar("C", bound="Color")


class Key(IntEnum):
    """Keys the indexer reacts to, valued as GLFW key codes."""

    UNKNOWN = -1
    SPACE = 32

    R = 82
    X = 88
    Y = 89

    ESCAPE = 256


class MouseButton(IntEnum):
    OTHER = -1
    LEFT = 0


class Action(IntEnum):
    OTHER = -1
    PRESS = 1


class Color(ABC):
    """Four-component RGBA value supplied by a backend."""

    @classmethod
    @abstractmethod
    def from_components(cls: Type[C], r: float, g: float, b: float, a: float) -> C:
        ...

    @abstractmethod
    def components(self) -> Tuple[float, float, float, float]:
        """RGBA components normalized to [0, 1]."""
        ...

    @abstractmethod
    def lerp(self: C, other: C, scalar: float) -> C:
        """Interpolate from ``self`` (scalar 0) towards ``other`` (scalar 1)."""
        ...

    @abstractmethod
    def into_scalar(self) -> float:
        """Coverage of this texel in [0, 1]."""
        ...


class SourceImage(ABC):
    """Image with known pixel dimensions, usable as a font atlas."""

    @abstractmethod
    def pixel_dimensions(self) -> Tuple[int, int]:
        """(width, height) in pixels."""
        ...


class PixelIndexable(ABC):
    """Image offering random access to its pixels (CPU sampling path)."""

    @abstractmethod
    def get_pixel_at(self, x: int, y: int) -> Color:
        ...


class RenderTarget(ABC):
    """Consumer of batched glyph draw commands."""

    @abstractmethod
    def submit(self, layer: str, commands: Sequence["DrawCommand"]) -> None:
        """
        Draw ``commands`` in order.

        ``layer`` is "background" or "foreground". Commands flagged ``solid``
        are drawn as flat quads of their colour and ignore ``src``.
        """
        ...
