"""
BunnyFont - bitmap fonts and tile sprites cut from a fixed-grid atlas.

Main modules:
- char_transforms - rotation / mirror algebra and its matrices
- font - glyph addressing and CPU sampling
- char - glyph descriptor
- batch - per-frame draw command batching
- canvas - CPU rendering into Pillow images
"""

from .char_transforms import (
    CharMirror,
    CharRotation,
    compose_mirror,
    compose_rotation,
    placement_transform,
    transform_pixel,
)
from .char import BunnyChar
from .font import BunnyFont, load_font
from .batch import DrawCommand, FontBatch
from .canvas import ImageCanvas
from .backends.image import FontLoadError, ImageSource, Rgba

__version__ = '0.1.0'

__all__ = [
    # Transforms
    'CharMirror',
    'CharRotation',
    'compose_mirror',
    'compose_rotation',
    'placement_transform',
    'transform_pixel',
    # Font
    'BunnyChar',
    'BunnyFont',
    'load_font',
    'DrawCommand',
    'FontBatch',
    'ImageCanvas',
    # CPU backend
    'FontLoadError',
    'ImageSource',
    'Rgba',
]
