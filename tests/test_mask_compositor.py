import unittest

import numpy as np

from tests._test_path import SRC, gradient_image  # noqa: F401

from edgepass.imaging.compositor import composite_on_white
from edgepass.imaging.mask import BACKGROUND, FOREGROUND, ellipse_mask


class TestEllipseMask(unittest.TestCase):
    def test_center_foreground_origin_background(self):
        for w in (2, 3, 4, 7, 350):
            for h in (2, 3, 5, 450):
                m = ellipse_mask(w, h)
                self.assertEqual(m.shape, (h, w))
                self.assertEqual(m[h // 2, w // 2], FOREGROUND, (w, h))
                self.assertEqual(m[0, 0], BACKGROUND, (w, h))

    def test_all_corners_background(self):
        for w, h in [(8, 8), (9, 12), (350, 450), (500, 500), (600, 600)]:
            m = ellipse_mask(w, h)
            for y, x in [(0, 0), (0, w - 1), (h - 1, 0), (h - 1, w - 1)]:
                self.assertEqual(m[y, x], BACKGROUND, (w, h, x, y))

    def test_binary_values(self):
        m = ellipse_mask(120, 80)
        self.assertEqual(set(np.unique(m).tolist()), {0, 255})
        self.assertEqual(m.dtype, np.uint8)

    def test_axis_extent(self):
        # Semi-axis 0.40*50 = 20 around x=25 on the center row; the boundary is inclusive.
        m = ellipse_mask(50, 50)
        self.assertEqual(m[25, 4], BACKGROUND)
        self.assertEqual(m[25, 5], FOREGROUND)
        self.assertEqual(m[25, 45], FOREGROUND)
        self.assertEqual(m[25, 46], BACKGROUND)

    def test_invalid_size(self):
        with self.assertRaises(ValueError):
            ellipse_mask(0, 10)


class TestCompositor(unittest.TestCase):
    def test_no_mask_copies_every_pixel(self):
        img = gradient_image(40, 30)
        out = composite_on_white(img)
        self.assertTrue(np.array_equal(out, img))

    def test_mask_whitens_background(self):
        img = np.full((500, 500, 3), 37, dtype=np.uint8)
        out = composite_on_white(img, ellipse_mask(500, 500))
        self.assertEqual(tuple(out[0, 0]), (255, 255, 255))
        self.assertEqual(tuple(out[250, 250]), (37, 37, 37))

    def test_threshold_is_strict(self):
        img = np.zeros((1, 3, 3), dtype=np.uint8)
        mask = np.array([[128, 129, 0]], dtype=np.uint8)
        out = composite_on_white(img, mask)
        self.assertEqual(tuple(out[0, 0]), (255, 255, 255))
        self.assertEqual(tuple(out[0, 1]), (0, 0, 0))
        self.assertEqual(tuple(out[0, 2]), (255, 255, 255))

    def test_rgba_input_drops_alpha(self):
        img = np.zeros((4, 4, 4), dtype=np.uint8)
        img[:, :, 0] = 200
        img[:, :, 3] = 0
        out = composite_on_white(img)
        self.assertEqual(out.shape, (4, 4, 3))
        self.assertEqual(tuple(out[1, 1]), (200, 0, 0))

    def test_mask_shape_mismatch(self):
        with self.assertRaises(ValueError):
            composite_on_white(gradient_image(10, 10), ellipse_mask(5, 5))
