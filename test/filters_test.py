import unittest

import numpy as np

from filters import grayscale
from sampler import PixelBuffer


class GrayscaleTest(unittest.TestCase):

    def setUp(self):
        self.pixels = PixelBuffer(
            np.array([
                10, 20, 31, 200,
                255, 255, 254, 0,
                0, 0, 1, 255,
                90, 60, 30, 17,
            ], dtype=np.uint8),
            2, 2
        )

    def test_averages_color_channels(self):
        gray = grayscale(self.pixels)
        self.assertEqual((20, 20, 20, 200), gray.pixel(0, 0))
        self.assertEqual((255, 255, 255, 0), gray.pixel(1, 0))
        self.assertEqual((0, 0, 0, 255), gray.pixel(0, 1))
        self.assertEqual((60, 60, 60, 17), gray.pixel(1, 1))

    def test_returns_new_buffer(self):
        gray = grayscale(self.pixels)
        self.assertIsNot(gray, self.pixels)
        self.assertEqual((2, 2), (gray.width, gray.height))
        self.assertEqual((10, 20, 31, 200), self.pixels.pixel(0, 0))


if __name__ == '__main__':
    unittest.main()
