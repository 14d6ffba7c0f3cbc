"""Vertex data of glyph quads, shared by GPU backends."""

from __future__ import annotations

from typing import Sequence

import numpy as np

# position(2) + texcoord(2) + color(4)
VERTEX_FLOATS = 8
VERTEX_STRIDE = VERTEX_FLOATS * 4

# Two triangles over the unit quad corners (0,0), (1,0), (1,1), (0,1).
QUAD_CORNERS = np.array([
    [0.0, 0.0], [1.0, 0.0], [1.0, 1.0],
    [0.0, 0.0], [1.0, 1.0], [0.0, 1.0],
])


def ortho_projection(width: float, height: float) -> np.ndarray:
    """Screen-space projection: (0, 0) top-left, (width, height) bottom-right."""
    return np.array([
        [2.0 / width, 0.0, 0.0, -1.0],
        [0.0, -2.0 / height, 0.0, 1.0],
        [0.0, 0.0, -1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ], dtype=np.float32)


def quad_vertices(commands: Sequence) -> np.ndarray:
    """
    Interleaved triangle vertices for draw commands.

    Returns float32 array of shape (6 * len(commands), 8).
    """
    out = np.empty((6 * len(commands), VERTEX_FLOATS), dtype=np.float32)
    homogeneous = np.hstack([QUAD_CORNERS, np.ones((6, 1))]).T

    for i, cmd in enumerate(commands):
        u, v, du, dv = cmd.src
        block = out[6 * i:6 * (i + 1)]
        block[:, 0:2] = (cmd.transform @ homogeneous)[:2].T
        block[:, 2] = u + QUAD_CORNERS[:, 0] * du
        block[:, 3] = v + QUAD_CORNERS[:, 1] * dv
        block[:, 4:8] = cmd.color.components()
    return out
