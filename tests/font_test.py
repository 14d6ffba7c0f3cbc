import unittest

import numpy as np
import pytest
from PIL import Image

from bunnyfont.backends.base import PixelIndexable, SourceImage
from bunnyfont.backends.image import FontLoadError, ImageSource, Rgba
from bunnyfont.char import BunnyChar
from bunnyfont.char_transforms import CharMirror, CharRotation
from bunnyfont.font import BunnyFont, load_font

RED = Rgba(1.0, 0.0, 0.0, 1.0)
BLUE = Rgba(0.0, 0.0, 1.0, 1.0)


class SizedTexture(SourceImage):
    """Texture with dimensions only, like a GPU texture."""

    def __init__(self, width, height):
        self._size = (width, height)

    def pixel_dimensions(self):
        return self._size


class FlatTexture(SourceImage, PixelIndexable):
    """Every texel has the same colour."""

    def __init__(self, width, height, color):
        self._size = (width, height)
        self.color = color

    def pixel_dimensions(self):
        return self._size

    def get_pixel_at(self, x, y):
        return self.color


def make_atlas():
    """8x8 atlas of four 4x4 glyphs, opaque black with a few white texels."""
    data = np.zeros((8, 8, 4), dtype=np.uint8)
    data[:, :, 3] = 255
    data[0, 1] = (255, 255, 255, 255)  # glyph 0, local (1, 0)
    data[4 + 2, 4 + 3] = (255, 255, 255, 255)  # glyph 3, local (3, 2)
    return ImageSource(data)


class TestAddressing(unittest.TestCase):
    def setUp(self):
        self.font = BunnyFont(SizedTexture(128, 128), (8, 8))

    def test_dimensions(self):
        self.assertEqual(self.font.char_dimensions(), (8, 8))
        self.assertEqual(self.font.charset_dimensions(), (16, 16))
        self.assertEqual(len(self.font), 256)
        self.assertEqual(self.font.glyph_count(), 256)
        self.assertEqual(self.font.highest_char_index(), 255)

    def test_index_round_trip(self):
        for index in range(len(self.font)):
            x, y = self.font.get_char_pos_from_index(index)
            self.assertEqual(self.font.get_index_from_char_pos(x, y), index)

    def test_row_major(self):
        self.assertEqual(self.font.get_char_pos_from_index(17), (1, 1))
        self.assertEqual(self.font.get_char_pos_from_index(31), (15, 1))
        self.assertEqual(self.font.index_from_char_pos(2, 3), 50)

    def test_uv_rect(self):
        self.assertEqual(self.font.uv_rect(0), (0.0, 0.0, 1 / 16, 1 / 16))
        self.assertEqual(self.font.uv_rect(17), (1 / 16, 1 / 16, 1 / 16, 1 / 16))

    def test_uv_rect_past_end_is_not_checked(self):
        u, v, du, dv = self.font.get_src_uvs(256)
        self.assertEqual((u, v), (0.0, 1.0))

    def test_rectangular_cells(self):
        font = BunnyFont(SizedTexture(64, 48), (8, 12))
        self.assertEqual(font.charset_dimensions(), (8, 4))
        self.assertEqual(font.uv_rect(9), (1 / 8, 1 / 4, 1 / 8, 1 / 4))

    def test_char_pos_at_point(self):
        self.assertEqual(self.font.char_pos_at_point(17.0, 33.0, 2), (1, 2))
        self.assertEqual(self.font.char_pos_at_point(15.9, 0.0, 2), (0, 0))


class TestConstruction(unittest.TestCase):
    def test_not_divisible(self):
        with self.assertRaises(ValueError):
            BunnyFont(SizedTexture(100, 100), (7, 7))

    def test_height_not_divisible(self):
        with self.assertRaises(ValueError):
            BunnyFont(SizedTexture(64, 60), (8, 8))

    def test_zero_char_size(self):
        with self.assertRaises(ValueError):
            BunnyFont(SizedTexture(64, 64), (0, 8))


class TestCharPixel(unittest.TestCase):
    def setUp(self):
        self.font = BunnyFont(make_atlas(), (4, 4))

    def test_plain(self):
        char = BunnyChar(0, RED, BLUE)
        self.assertEqual(self.font.char_pixel(char, 1, 0), RED)
        self.assertEqual(self.font.char_pixel(char, 0, 0), BLUE)

    def test_glyph_offset(self):
        char = BunnyChar(3, RED, BLUE)
        self.assertEqual(self.font.char_pixel(char, 3, 2), RED)
        self.assertEqual(self.font.char_pixel(char, 1, 0), BLUE)

    def test_without_background_keeps_texel(self):
        char = BunnyChar(0, RED)
        self.assertEqual(self.font.char_pixel(char, 1, 0), RED)
        self.assertEqual(self.font.char_pixel(char, 0, 0), Rgba(0.0, 0.0, 0.0, 1.0))

    def test_rotation(self):
        char = BunnyChar(0, RED, BLUE, rotation=CharRotation.ROTATION_90)
        self.assertEqual(self.font.char_pixel(char, 0, 2), RED)
        self.assertEqual(self.font.char_pixel(char, 1, 0), BLUE)

    def test_mirror(self):
        char = BunnyChar(0, RED, BLUE, mirror=CharMirror.MIRROR_X)
        self.assertEqual(self.font.char_pixel(char, 2, 0), RED)
        self.assertEqual(self.font.char_pixel(char, 1, 0), BLUE)

    def test_rotation_then_mirror(self):
        char = BunnyChar(0, RED, BLUE, CharRotation.ROTATION_90, CharMirror.MIRROR_X)
        self.assertEqual(self.font.char_pixel(char, 0, 1), RED)

    def test_deterministic(self):
        char = BunnyChar(3, RED, None, CharRotation.ROTATION_270, CharMirror.MIRROR_Y)
        for x in range(4):
            for y in range(4):
                self.assertEqual(self.font.char_pixel(char, x, y), self.font.char_pixel(char, x, y))

    def test_out_of_cell(self):
        char = BunnyChar(0, RED, BLUE)
        with self.assertRaises(IndexError):
            self.font.char_pixel(char, 4, 0)
        with self.assertRaises(IndexError):
            self.font.char_pixel(char, 0, -1)

    def test_index_outside_font(self):
        # wrapping -1 around would land on the lit texel of glyph 3
        with self.assertRaises(IndexError):
            self.font.char_pixel(BunnyChar(-1, RED, BLUE), 3, 2)
        with self.assertRaises(IndexError):
            self.font.char_pixel(BunnyChar(4, RED, BLUE), 0, 0)

    def test_render_char(self):
        pixels = self.font.render_char(BunnyChar(0, RED, BLUE))
        self.assertEqual(pixels.shape, (4, 4, 4))
        np.testing.assert_allclose(pixels[0, 1], RED.components())
        np.testing.assert_allclose(pixels[3, 3], BLUE.components())


class TestBlending(unittest.TestCase):
    def test_background_midpoint(self):
        font = BunnyFont(FlatTexture(8, 8, Rgba(0.5, 0.5, 0.5, 1.0)), (8, 8))
        white = Rgba(1.0, 1.0, 1.0, 1.0)
        black = Rgba(0.0, 0.0, 0.0, 1.0)
        self.assertEqual(font.char_pixel(BunnyChar(0, white, black), 3, 3), Rgba(0.5, 0.5, 0.5, 1.0))

    def test_coverage_out_of_range(self):
        font = BunnyFont(FlatTexture(8, 8, Rgba(2.0, 2.0, 2.0, 1.0)), (8, 8))
        with self.assertRaises(ValueError):
            font.char_pixel(BunnyChar(0, RED, BLUE), 0, 0)

    def test_non_square_rotation(self):
        font = BunnyFont(FlatTexture(8, 4, Rgba(1.0, 1.0, 1.0, 1.0)), (4, 2))
        char = BunnyChar(0, RED, rotation=CharRotation.ROTATION_90)
        self.assertEqual(font.char_pixel(char, 0, 0), RED)
        with self.assertRaises(IndexError):
            font.char_pixel(char, 3, 0)

    def test_requires_pixel_access(self):
        font = BunnyFont(SizedTexture(8, 8), (8, 8))
        with self.assertRaises(TypeError):
            font.char_pixel(BunnyChar(0, RED), 0, 0)


def test_load_font(tmp_path):
    path = tmp_path / "font.png"
    Image.new("RGBA", (32, 16), (255, 255, 255, 0)).save(path)

    font = load_font(path, (8, 8))
    assert font.charset_dimensions() == (4, 2)
    assert font.texture.get_pixel_at(0, 0) == Rgba(1.0, 1.0, 1.0, 0.0)


def test_load_font_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_font(tmp_path / "missing.png", (8, 8))


def test_load_font_corrupt(tmp_path):
    path = tmp_path / "font.png"
    path.write_bytes(b"not an image")
    with pytest.raises(FontLoadError):
        load_font(path, (8, 8))


def test_load_font_bad_geometry(tmp_path):
    path = tmp_path / "font.png"
    Image.new("RGBA", (30, 16)).save(path)
    with pytest.raises(ValueError):
        load_font(path, (8, 8))
