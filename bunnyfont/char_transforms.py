"""Rotation and mirroring of glyph cells.

Both transforms form four-element groups:
    rotations compose by adding quarter turns modulo 4,
    mirrors compose by xor-ing independent X and Y flip bits.

Each element has two realisations:
    * a 3x3 homogeneous matrix acting on the unit glyph cell
      (column vectors, ``M @ (x, y, 1)``), used by the batch renderer;
    * a permutation of integer pixel coordinates inside a ``w x h`` cell,
      used by the CPU sampler.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Tuple

import numpy as np


class CharRotation(IntEnum):
    """Rotation of a glyph by whole quarter turns (clockwise with y up)."""

    NONE = 0
    ROTATION_90 = 1
    ROTATION_180 = 2
    ROTATION_270 = 3

    @property
    def degrees(self) -> int:
        return 90 * int(self)

    def then(self, other: "CharRotation") -> "CharRotation":
        """Rotation equal to applying ``self`` and then ``other``."""
        return CharRotation((int(self) + int(other)) % 4)

    def inverse(self) -> "CharRotation":
        return CharRotation((4 - int(self)) % 4)

    def to_transform(self) -> np.ndarray:
        """Affine transform of the unit cell, keeping it anchored at the origin."""
        return _ROTATION_TRANSFORMS[self].copy()

    def into_rotation(self) -> float:
        """Rotation angle in radians, as taken by sprite draw parameters."""
        return math.radians(self.degrees)

    def apply_to_pixel(self, x: int, y: int, width: int, height: int) -> Tuple[int, int]:
        """Source coordinates of local pixel ``(x, y)`` of a rotated cell."""
        x_inv = width - 1 - x
        y_inv = height - 1 - y
        if self is CharRotation.ROTATION_90:
            return y_inv, x
        if self is CharRotation.ROTATION_180:
            return x_inv, y_inv
        if self is CharRotation.ROTATION_270:
            return y, x_inv
        return x, y


class CharMirror(IntEnum):
    """Mirroring of a glyph; bit 0 flips the X axis, bit 1 flips the Y axis."""

    NONE = 0
    MIRROR_X = 1
    MIRROR_Y = 2
    MIRROR_BOTH = 3

    @classmethod
    def from_flags(cls, flip_x: bool, flip_y: bool) -> "CharMirror":
        return cls(int(bool(flip_x)) | (int(bool(flip_y)) << 1))

    @property
    def flip_x(self) -> bool:
        return bool(int(self) & 1)

    @property
    def flip_y(self) -> bool:
        return bool(int(self) & 2)

    def then(self, other: "CharMirror") -> "CharMirror":
        """Mirror equal to applying ``self`` and then ``other``."""
        return CharMirror(int(self) ^ int(other))

    def inverse(self) -> "CharMirror":
        return self

    def to_transform(self) -> np.ndarray:
        """Diagonal +-1 scale with the translation that keeps the cell in place."""
        sx, sy = self.into_scale()
        return np.array([
            [sx, 0.0, 1.0 if self.flip_x else 0.0],
            [0.0, sy, 1.0 if self.flip_y else 0.0],
            [0.0, 0.0, 1.0],
        ])

    def into_scale(self) -> Tuple[float, float]:
        """Per-axis scale factors, as taken by sprite draw parameters."""
        return (-1.0 if self.flip_x else 1.0, -1.0 if self.flip_y else 1.0)

    def apply_to_pixel(self, x: int, y: int, width: int, height: int) -> Tuple[int, int]:
        """Source coordinates of local pixel ``(x, y)`` of a mirrored cell."""
        if self.flip_x:
            x = width - 1 - x
        if self.flip_y:
            y = height - 1 - y
        return x, y


_ROTATION_TRANSFORMS = {
    CharRotation.NONE: np.eye(3),
    # (x, y) -> (y, 1 - x)
    CharRotation.ROTATION_90: np.array([
        [0.0, 1.0, 0.0],
        [-1.0, 0.0, 1.0],
        [0.0, 0.0, 1.0],
    ]),
    # (x, y) -> (1 - x, 1 - y)
    CharRotation.ROTATION_180: np.array([
        [-1.0, 0.0, 1.0],
        [0.0, -1.0, 1.0],
        [0.0, 0.0, 1.0],
    ]),
    # (x, y) -> (1 - y, x)
    CharRotation.ROTATION_270: np.array([
        [0.0, -1.0, 1.0],
        [1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0],
    ]),
}


def compose_rotation(a: CharRotation, b: CharRotation) -> CharRotation:
    """Apply ``a`` and then ``b``."""
    return CharRotation(a).then(CharRotation(b))


def compose_mirror(a: CharMirror, b: CharMirror) -> CharMirror:
    """Apply ``a`` and then ``b``."""
    return CharMirror(a).then(CharMirror(b))


def translation(x: float, y: float) -> np.ndarray:
    m = np.eye(3)
    m[0, 2] = x
    m[1, 2] = y
    return m


def scale(sx: float, sy: float) -> np.ndarray:
    return np.diag([sx, sy, 1.0])


def placement_transform(
    rotation: CharRotation,
    mirror: CharMirror,
    dest: Tuple[float, float],
    cell_size: Tuple[float, float],
    scaling: float = 1.0,
) -> np.ndarray:
    """
    Transform from unit-cell space to destination space.

    ``Scale(cell_size * scaling) @ Translate(dest) @ Mirror @ Rotation``:
    the glyph is rotated first, then mirrored, then moved to ``dest``
    (measured in cells) and scaled to pixels.
    """
    cell_w, cell_h = cell_size
    return (
        scale(scaling * cell_w, scaling * cell_h)
        @ translation(dest[0], dest[1])
        @ CharMirror(mirror).to_transform()
        @ CharRotation(rotation).to_transform()
    )


def transform_pixel(
    rotation: CharRotation,
    mirror: CharMirror,
    x: int,
    y: int,
    width: int,
    height: int,
) -> Tuple[int, int]:
    """
    Rotate, then mirror local pixel coordinates of a ``width x height`` cell.

    Raises IndexError when the result leaves the cell, which happens when a
    non-square cell is rotated by an odd number of quarter turns.
    """
    x, y = CharRotation(rotation).apply_to_pixel(x, y, width, height)
    x, y = CharMirror(mirror).apply_to_pixel(x, y, width, height)
    if not (0 <= x < width and 0 <= y < height):
        raise IndexError(
            f"Char coordinates ({x}, {y}) are out of bounds for {width}x{height} char, "
            "this may be caused by rotating a non-square char"
        )
    return x, y
