"""FontBatch - per-frame list of glyph draw commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from bunnyfont import log
from bunnyfont.backends.base import Color, RenderTarget
from bunnyfont.char import BunnyChar
from bunnyfont.char_transforms import placement_transform
from bunnyfont.font import BunnyFont

BACKGROUND = "background"
FOREGROUND = "foreground"


@dataclass(frozen=True, eq=False)
class DrawCommand:
    """
    One textured quad.

    Attributes:
        src: Normalized atlas rectangle (u, v, du, dv).
        transform: 3x3 matrix mapping the unit quad to destination pixels.
        color: Tint multiplied with the sampled texel.
        solid: Draw a flat quad of ``color``, ignoring ``src``.
    """

    src: Tuple[float, float, float, float]
    transform: np.ndarray
    color: Color
    solid: bool = False

    def corners(self) -> np.ndarray:
        """Destination positions of the unit quad corners (0,0), (1,0), (1,1), (0,1)."""
        unit = np.array([
            [0.0, 1.0, 1.0, 0.0],
            [0.0, 0.0, 1.0, 1.0],
            [1.0, 1.0, 1.0, 1.0],
        ])
        return (self.transform @ unit)[:2].T


class FontBatch:
    """
    Accumulates draw commands for the glyphs of one frame.

    Callers clear and re-populate the batch every frame. The batch is not
    synchronized; ``add``, ``clear`` and ``draw`` must not overlap.

    Background quads cover the whole cell. They are drawn flat by default;
    with ``background_index`` set they use that atlas glyph instead, which
    suits atlases that carry a filled block glyph.
    """

    def __init__(
        self,
        font: BunnyFont,
        scaling: float = 1.0,
        background_index: Optional[int] = None,
    ):
        self._font = font
        self._scaling = float(scaling)
        self._background_index = background_index
        self._foreground: List[DrawCommand] = []
        self._background: List[DrawCommand] = []

    @property
    def font(self) -> BunnyFont:
        return self._font

    @property
    def scaling(self) -> float:
        return self._scaling

    def set_scaling(self, scaling: float) -> None:
        self._scaling = float(scaling)

    @property
    def background_index(self) -> Optional[int]:
        return self._background_index

    def tile_width(self) -> float:
        return self._scaling * self._font.char_dimensions()[0]

    def tile_height(self) -> float:
        return self._scaling * self._font.char_dimensions()[1]

    def tile_size(self) -> Tuple[float, float]:
        return (self.tile_width(), self.tile_height())

    def __len__(self) -> int:
        return len(self._foreground) + len(self._background)

    def add(self, char: BunnyChar, dest: Tuple[float, float]) -> None:
        """Queue ``char`` at grid cell ``dest`` (in cells, not pixels)."""
        transform = placement_transform(
            char.rotation,
            char.mirror,
            dest,
            self._font.char_dimensions(),
            self._scaling,
        )

        if char.background is not None:
            if self._background_index is None:
                self._background.append(
                    DrawCommand((0.0, 0.0, 1.0, 1.0), transform, char.background, solid=True)
                )
            else:
                self._background.append(
                    DrawCommand(self._font.get_src_uvs(self._background_index), transform, char.background)
                )

        self._foreground.append(
            DrawCommand(self._font.get_src_uvs(char.index), transform, char.foreground)
        )

    def clear(self) -> None:
        self._foreground.clear()
        self._background.clear()

    def commands(self) -> List[DrawCommand]:
        """All queued commands in draw order, backgrounds first."""
        return self._background + self._foreground

    def draw(self, target: RenderTarget) -> None:
        log.debug(
            f"FontBatch: drawing {len(self._background)} background "
            f"and {len(self._foreground)} foreground quads"
        )
        if self._background:
            target.submit(BACKGROUND, list(self._background))
        if self._foreground:
            target.submit(FOREGROUND, list(self._foreground))
