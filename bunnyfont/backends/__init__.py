"""Backend interfaces and the CPU image backend.

GPU backends live in ``bunnyfont.backends.opengl`` and
``bunnyfont.backends.glfw`` and need a display to be used.
"""

from __future__ import annotations

from .base import (
    Action,
    Color,
    Key,
    MouseButton,
    PixelIndexable,
    RenderTarget,
    SourceImage,
)
from .image import FontLoadError, ImageSource, Rgba

__all__ = [
    "Action",
    "Color",
    "Key",
    "MouseButton",
    "PixelIndexable",
    "RenderTarget",
    "SourceImage",
    "FontLoadError",
    "ImageSource",
    "Rgba",
]
