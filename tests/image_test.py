import unittest

import numpy as np

from bunnyfont.backends.image import ImageSource, Rgba


class TestRgba(unittest.TestCase):
    def test_from_components(self):
        color = Rgba.from_components(1, 0, 0.5, 1)
        self.assertEqual(color, Rgba(1.0, 0.0, 0.5, 1.0))
        self.assertIsInstance(color.r, float)
        self.assertEqual(color.components(), (1.0, 0.0, 0.5, 1.0))

    def test_from_bytes(self):
        self.assertEqual(Rgba.from_bytes(255, 0, 0), Rgba(1.0, 0.0, 0.0, 1.0))

    def test_into_scalar(self):
        self.assertEqual(Rgba.WHITE.into_scalar(), 1.0)
        self.assertEqual(Rgba.BLACK.into_scalar(), 0.0)
        self.assertEqual(Rgba(1.0, 1.0, 1.0, 0.0).into_scalar(), 0.0)


class TestImageSource(unittest.TestCase):
    def setUp(self):
        data = np.zeros((2, 3, 4), dtype=np.uint8)
        data[1, 2] = (255, 255, 255, 255)
        self.image = ImageSource(data)

    def test_dimensions(self):
        self.assertEqual(self.image.pixel_dimensions(), (3, 2))

    def test_get_pixel_at(self):
        self.assertEqual(self.image.get_pixel_at(2, 1), Rgba.WHITE)
        self.assertEqual(self.image.get_pixel_at(0, 0), Rgba.TRANSPARENT)

    def test_negative_coordinates_do_not_wrap(self):
        with self.assertRaises(IndexError):
            self.image.get_pixel_at(-1, 0)
        with self.assertRaises(IndexError):
            self.image.get_pixel_at(0, -1)

    def test_past_end(self):
        with self.assertRaises(IndexError):
            self.image.get_pixel_at(3, 0)

    def test_read_only(self):
        self.assertFalse(self.image.data.flags.writeable)
