"""BunnyChar - one glyph to draw: atlas index, colours, rotation and mirror."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Optional, TypeVar

from bunnyfont.char_transforms import CharMirror, CharRotation

C = TypeVar("C")


@dataclass(frozen=True)
class BunnyChar(Generic[C]):
    """
    Immutable glyph descriptor.

    Attributes:
        index: Row-major glyph index in the atlas.
        foreground: Colour the glyph coverage is blended towards.
        background: Colour painted under the glyph. None leaves the
            background as sampled from the atlas (CPU) or unpainted (GPU).
        rotation: Quarter-turn rotation applied first.
        mirror: Mirror applied after the rotation.

    The ``with_*`` methods return modified copies:

        char = BunnyChar(0x41, white).with_rotation(CharRotation.ROTATION_90)
    """

    index: int
    foreground: C
    background: Optional[C] = None
    rotation: CharRotation = CharRotation.NONE
    mirror: CharMirror = CharMirror.NONE

    def with_index(self, index: int) -> "BunnyChar[C]":
        return replace(self, index=index)

    def with_foreground(self, foreground: C) -> "BunnyChar[C]":
        return replace(self, foreground=foreground)

    def with_background(self, background: Optional[C]) -> "BunnyChar[C]":
        return replace(self, background=background)

    def with_rotation(self, rotation: CharRotation) -> "BunnyChar[C]":
        return replace(self, rotation=CharRotation(rotation))

    def with_mirror(self, mirror: CharMirror) -> "BunnyChar[C]":
        return replace(self, mirror=CharMirror(mirror))

    def rotated(self, rotation: CharRotation) -> "BunnyChar[C]":
        """Copy with ``rotation`` composed after the current rotation."""
        return self.with_rotation(self.rotation.then(rotation))

    def mirrored(self, mirror: CharMirror) -> "BunnyChar[C]":
        """Copy with ``mirror`` composed after the current mirror."""
        return self.with_mirror(self.mirror.then(mirror))
