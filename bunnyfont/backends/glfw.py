"""GLFW-based window backend."""

from __future__ import annotations

import sys
from typing import Callable

import glfw

from bunnyfont.backends.base import Action, Key, MouseButton


def _translate(enum_type, value: int, fallback):
    try:
        return enum_type(value)
    except ValueError:
        return fallback


class GLFWWindow:
    """Fixed-size window with an OpenGL 3.3 core context."""

    def __init__(self, width: int, height: int, title: str):
        if not glfw.init():
            raise RuntimeError("Failed to initialize GLFW")
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.RESIZABLE, glfw.FALSE)
        if sys.platform == "darwin":
            glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)

        self._window = glfw.create_window(width, height, title, None, None)
        if not self._window:
            raise RuntimeError("Failed to create GLFW window")
        glfw.make_context_current(self._window)

    def close(self):
        if self._window:
            glfw.destroy_window(self._window)
            self._window = None

    def should_close(self) -> bool:
        return self._window is None or glfw.window_should_close(self._window)

    def set_should_close(self, flag: bool):
        if self._window is not None:
            glfw.set_window_should_close(self._window, flag)

    def make_current(self):
        if self._window is not None:
            glfw.make_context_current(self._window)

    def swap_buffers(self):
        if self._window is not None:
            glfw.swap_buffers(self._window)

    def framebuffer_size(self):
        return glfw.get_framebuffer_size(self._window)

    def window_size(self):
        return glfw.get_window_size(self._window)

    def get_cursor_pos(self):
        return glfw.get_cursor_pos(self._window)

    def set_mouse_button_callback(self, callback: Callable):
        def wrapper(_win, button, action, mods):
            callback(
                self,
                _translate(MouseButton, button, MouseButton.OTHER),
                _translate(Action, action, Action.OTHER),
                mods,
            )
        glfw.set_mouse_button_callback(self._window, wrapper)

    def set_key_callback(self, callback: Callable):
        def wrapper(_win, key, scancode, action, mods):
            callback(
                self,
                _translate(Key, key, Key.UNKNOWN),
                scancode,
                _translate(Action, action, Action.OTHER),
                mods,
            )
        glfw.set_key_callback(self._window, wrapper)


def poll_events():
    glfw.poll_events()


def terminate():
    glfw.terminate()
