"""
Indexer - shows a font atlas and prints the index of the clicked glyph.

Usage:
    python -m bunnyfont.apps.indexer font.png --width 8 --height 8 --scaling 2
    bunnyfont-indexer font.png -W 8 -H 8 --transforms

With --transforms, R rotates every glyph by a quarter turn and X / Y
toggle mirroring along the corresponding axis.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence, Tuple

from bunnyfont import log
from bunnyfont.backends.base import Action, Key, MouseButton
from bunnyfont.backends.image import Rgba
from bunnyfont.batch import FontBatch
from bunnyfont.char import BunnyChar
from bunnyfont.char_transforms import CharMirror, CharRotation
from bunnyfont.font import BunnyFont, load_font
from bunnyfont.settings import IndexerSettings


class IndexerState:
    """Window-independent part of the indexer: current transforms and input handling."""

    def __init__(self, font: BunnyFont, scaling: int = 1, transforms: bool = False):
        self.font = font
        self.scaling = scaling
        self.transforms = transforms
        self.rotation = CharRotation.NONE
        self.mirror = CharMirror.NONE

    def window_size(self) -> Tuple[int, int]:
        width, height = self.font.texture.pixel_dimensions()
        return (width * self.scaling, height * self.scaling)

    def click(self, x: float, y: float) -> Optional[str]:
        """Report line for a click at window point (x, y), None outside the atlas."""
        char_x, char_y = self.font.char_pos_at_point(x, y, self.scaling)
        charset_width, charset_height = self.font.charset_dimensions()
        if not (0 <= char_x < charset_width and 0 <= char_y < charset_height):
            return None

        index = self.font.get_index_from_char_pos(char_x, char_y)
        return f"X: {char_x}, Y: {char_y}, Index: 0x{index:03X} ({index})"

    def key(self, key: Key) -> Optional[str]:
        """Compose the transform bound to ``key``; returns the new state line."""
        if not self.transforms:
            return None

        if key == Key.R:
            self.rotation = self.rotation.then(CharRotation.ROTATION_90)
        elif key == Key.X:
            self.mirror = self.mirror.then(CharMirror.MIRROR_X)
        elif key == Key.Y:
            self.mirror = self.mirror.then(CharMirror.MIRROR_Y)
        else:
            return None
        return f"Rotation: {self.rotation.name}, Mirror: {self.mirror.name}"

    def fill(self, batch: FontBatch) -> None:
        """Queue every glyph of the font at its own grid position."""
        batch.clear()
        template = BunnyChar(0, Rgba.WHITE, None, self.rotation, self.mirror)
        for index in range(len(self.font)):
            batch.add(template.with_index(index), self.font.get_char_pos_from_index(index))


def run(state: IndexerState) -> None:
    from bunnyfont.backends import glfw as glfw_backend
    from bunnyfont.backends.opengl import GLTexture, SpriteRenderer

    width, height = state.window_size()
    window = glfw_backend.GLFWWindow(width, height, "BunnyFont indexer")
    try:
        renderer = SpriteRenderer(GLTexture(state.font.texture))
        batch = FontBatch(state.font, state.scaling)

        def on_mouse(_window, button, action, _mods):
            if button != MouseButton.LEFT or action != Action.PRESS:
                return
            line = state.click(*window.get_cursor_pos())
            if line is not None:
                print(line)

        def on_key(_window, key, _scancode, action, _mods):
            if action != Action.PRESS:
                return
            if key == Key.ESCAPE:
                window.set_should_close(True)
                return
            line = state.key(key)
            if line is not None:
                print(line)

        window.set_mouse_button_callback(on_mouse)
        window.set_key_callback(on_key)

        from OpenGL import GL as gl

        while not window.should_close():
            fb_width, fb_height = window.framebuffer_size()
            gl.glViewport(0, 0, fb_width, fb_height)
            renderer.set_screen_size(*window.window_size())
            renderer.clear((0.0, 0.0, 0.0, 1.0))

            state.fill(batch)
            batch.draw(renderer)

            window.swap_buffers()
            glfw_backend.poll_events()

        renderer.delete()
    finally:
        window.close()
        glfw_backend.terminate()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show a font atlas and print the index of clicked glyphs"
    )
    parser.add_argument(
        "font_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to the font image (default: last used font)",
    )
    parser.add_argument(
        "--width", "-W",
        dest="char_width",
        type=int,
        default=None,
        help="Width of a single char",
    )
    parser.add_argument(
        "--height", "-H",
        dest="char_height",
        type=int,
        default=None,
        help="Height of a single char",
    )
    parser.add_argument(
        "--scaling", "-s",
        type=int,
        default=None,
        help="Scaling factor (default: 1)",
    )
    parser.add_argument(
        "--transforms", "-t",
        action="store_true",
        help="Enable R / X / Y keys for rotation and mirroring",
    )
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        help="INI file to keep settings in instead of the user settings store",
    )
    return parser


def resolve_options(args: argparse.Namespace, settings: IndexerSettings):
    """Merge command line with stored settings; returns (path, char_size, scaling) or None."""
    font_path = args.font_path or settings.get_font_path()
    if font_path is None:
        log.error("No font path given and none remembered")
        return None

    if (args.char_width is None) != (args.char_height is None):
        log.error("--width and --height must be given together")
        return None

    char_size = settings.get_char_size()
    if args.char_width is not None:
        char_size = (args.char_width, args.char_height)
    elif char_size is None:
        log.error("Char size is required: pass --width and --height")
        return None

    scaling = args.scaling if args.scaling is not None else settings.get_scaling()
    if scaling < 1:
        log.error(f"Scaling must be at least 1, got {scaling}")
        return None

    return font_path, char_size, scaling


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    log.set_level(log.Level.INFO)

    args = build_parser().parse_args(argv)
    settings = IndexerSettings(args.settings)

    options = resolve_options(args, settings)
    if options is None:
        return 1
    font_path, char_size, scaling = options

    try:
        font = load_font(font_path, char_size)
    except (OSError, ValueError) as e:
        log.error(e, f"Failed to load font {font_path}")
        return 1

    settings.set_font_path(font_path)
    settings.set_char_size(char_size)
    settings.set_scaling(scaling)
    settings.sync()

    log.info(f"{font_path}: {font!r}, scaling {scaling}")
    run(IndexerState(font, scaling, args.transforms))
    return 0


if __name__ == "__main__":
    sys.exit(main())
