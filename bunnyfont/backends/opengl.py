"""OpenGL backend: atlas textures and a sprite renderer for glyph batches."""

from __future__ import annotations

import ctypes
from typing import Dict, List, Sequence, Tuple

import numpy as np
from OpenGL import GL as gl

from bunnyfont import log
from bunnyfont.backends.base import RenderTarget, SourceImage
from bunnyfont.backends.image import ImageSource
from bunnyfont.backends.vertices import VERTEX_STRIDE, ortho_projection, quad_vertices

SPRITE_VERT = """
#version 330 core

layout(location = 0) in vec2 a_position;
layout(location = 1) in vec2 a_texcoord;
layout(location = 2) in vec4 a_color;

uniform mat4 u_projection;

out vec2 v_texcoord;
out vec4 v_color;

void main()
{
    v_texcoord = a_texcoord;
    v_color = a_color;
    gl_Position = u_projection * vec4(a_position, 0.0, 1.0);
}
"""

SPRITE_FRAG = """
#version 330 core

in vec2 v_texcoord;
in vec4 v_color;

uniform sampler2D u_texture;

out vec4 frag_color;

void main()
{
    frag_color = texture(u_texture, v_texcoord) * v_color;
}
"""


class ShaderCompilationError(RuntimeError):
    """Raised when GLSL compilation or program linking fails."""


def _compile_shader(source: str, shader_type: int) -> int:
    shader = gl.glCreateShader(shader_type)
    gl.glShaderSource(shader, source)
    gl.glCompileShader(shader)
    status = gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS)
    if not status:
        info = gl.glGetShaderInfoLog(shader)
        raise ShaderCompilationError(info.decode("utf-8") if isinstance(info, bytes) else str(info))
    return shader


def _link_program(shaders: List[int]) -> int:
    program = gl.glCreateProgram()

    for shader in shaders:
        gl.glAttachShader(program, shader)

    gl.glLinkProgram(program)
    status = gl.glGetProgramiv(program, gl.GL_LINK_STATUS)
    if not status:
        info = gl.glGetProgramInfoLog(program)
        raise ShaderCompilationError(info.decode("utf-8") if isinstance(info, bytes) else str(info))

    for shader in shaders:
        gl.glDetachShader(program, shader)
        gl.glDeleteShader(shader)

    return program


class GLTexture(SourceImage):
    """RGBA texture uploaded from an ImageSource, sampled with nearest filtering."""

    def __init__(self, source: ImageSource):
        self._size = source.pixel_dimensions()
        self._handle: int | None = None
        self._upload(source.data)

    @classmethod
    def white_1x1(cls) -> "GLTexture":
        return cls(ImageSource(np.full((1, 1, 4), 255, dtype=np.uint8)))

    def _upload(self, data: np.ndarray):
        width, height = self._size
        self._handle = gl.glGenTextures(1)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._handle)
        gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
        gl.glTexImage2D(
            gl.GL_TEXTURE_2D, 0, gl.GL_RGBA8,
            width, height, 0, gl.GL_RGBA, gl.GL_UNSIGNED_BYTE, data
        )
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_NEAREST)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)
        gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        log.debug(f"GLTexture: uploaded {width}x{height} texture {self._handle}")

    def pixel_dimensions(self) -> Tuple[int, int]:
        return self._size

    def bind(self, unit: int = 0):
        gl.glActiveTexture(gl.GL_TEXTURE0 + unit)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self._handle or 0)

    def delete(self):
        if self._handle is not None:
            gl.glDeleteTextures(1, [self._handle])
            self._handle = None


class SpriteRenderer(RenderTarget):
    """
    Draws glyph batches as alpha-blended tinted quads.

    Requires a current OpenGL 3.3 core context for construction and use.
    """

    def __init__(self, atlas: GLTexture):
        self._atlas = atlas
        self._white = GLTexture.white_1x1()
        self._program = _link_program([
            _compile_shader(SPRITE_VERT, gl.GL_VERTEX_SHADER),
            _compile_shader(SPRITE_FRAG, gl.GL_FRAGMENT_SHADER),
        ])
        self._uniform_cache: Dict[str, int] = {}
        self._projection = np.eye(4, dtype=np.float32)
        self._vao = gl.glGenVertexArrays(1)
        self._vbo = gl.glGenBuffers(1)

        gl.glBindVertexArray(self._vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)
        for index, (size, offset) in enumerate(((2, 0), (2, 2), (4, 4))):
            gl.glEnableVertexAttribArray(index)
            gl.glVertexAttribPointer(
                index, size, gl.GL_FLOAT, gl.GL_FALSE,
                VERTEX_STRIDE, ctypes.c_void_p(offset * 4),
            )
        gl.glBindVertexArray(0)

    def _uniform_location(self, name: str) -> int:
        if name not in self._uniform_cache:
            self._uniform_cache[name] = gl.glGetUniformLocation(self._program, name)
        return self._uniform_cache[name]

    def set_screen_size(self, width: float, height: float) -> None:
        self._projection = ortho_projection(width, height)

    def clear(self, color: Tuple[float, float, float, float]) -> None:
        gl.glClearColor(*color)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)

    def submit(self, layer: str, commands: Sequence) -> None:
        if not commands:
            return

        gl.glUseProgram(self._program)
        gl.glUniformMatrix4fv(self._uniform_location("u_projection"), 1, gl.GL_TRUE, self._projection)
        gl.glUniform1i(self._uniform_location("u_texture"), 0)
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
        gl.glBindVertexArray(self._vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)

        for solid, run in _runs(commands):
            vertices = quad_vertices(run)
            (self._white if solid else self._atlas).bind(0)
            gl.glBufferData(gl.GL_ARRAY_BUFFER, vertices.nbytes, vertices, gl.GL_STREAM_DRAW)
            gl.glDrawArrays(gl.GL_TRIANGLES, 0, vertices.shape[0])

        gl.glBindVertexArray(0)
        gl.glUseProgram(0)

    def delete(self):
        if self._vao is None:
            return
        gl.glDeleteVertexArrays(1, [self._vao])
        gl.glDeleteBuffers(1, [self._vbo])
        gl.glDeleteProgram(self._program)
        self._white.delete()
        self._vao = self._vbo = None


def _runs(commands: Sequence):
    """Split commands into consecutive runs sharing the ``solid`` flag."""
    runs = []
    for cmd in commands:
        if runs and runs[-1][0] == cmd.solid:
            runs[-1][1].append(cmd)
        else:
            runs.append((cmd.solid, [cmd]))
    return runs
