"""Minimal demo that renders a line of text with a CP437-style atlas into a PNG."""

from __future__ import annotations

import sys

from bunnyfont import BunnyChar, CharMirror, CharRotation, ImageCanvas, Rgba, load_font


def build_canvas(font_path: str, char_size: tuple[int, int], text: str) -> ImageCanvas:
    font = load_font(font_path, char_size)
    canvas = ImageCanvas(font, len(text), 2, clear_color=Rgba(0.0, 0.0, 0.0, 1.0))

    base = BunnyChar(0, Rgba(1.0, 0.8, 0.2, 1.0), Rgba(0.1, 0.1, 0.3, 1.0))
    for col, ch in enumerate(text):
        char = base.with_index(ord(ch) % len(font))
        canvas.put(char, (col, 0))
        canvas.put(char.with_rotation(CharRotation.ROTATION_180).with_mirror(CharMirror.MIRROR_X), (col, 1))
    return canvas


def main():
    if len(sys.argv) < 5:
        print("usage: render_text.py FONT.png CHAR_W CHAR_H OUT.png [TEXT]")
        sys.exit(1)
    text = sys.argv[5] if len(sys.argv) > 5 else "Hello, bunny!"
    canvas = build_canvas(sys.argv[1], (int(sys.argv[2]), int(sys.argv[3])), text)
    canvas.to_image().save(sys.argv[4])


if __name__ == "__main__":
    main()
