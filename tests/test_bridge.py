import io
import unittest
from unittest.mock import patch

from PIL import Image

from tests._test_path import SRC, gradient_image, make_png_bytes  # noqa: F401

from edgepass import bridge
from edgepass.core.errors import EncodeError, GeometryDegenerate
from edgepass.engine import PassportEngine


class TestBridge(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = bridge.init_engine("/data/models")
        cls.src = make_png_bytes(gradient_image(800, 800))

    def test_init_returns_handle(self):
        self.assertIsInstance(self.engine, PassportEngine)
        self.assertEqual(self.engine.model_path, "/data/models")
        self.assertTrue(bridge.check_init(self.engine))
        self.assertFalse(bridge.check_init(None))

    def test_version(self):
        self.assertEqual(bridge.version(), "EdgePass Core v0.1.0")

    def test_generate_success(self):
        res = bridge.generate(self.engine, self.src, 4, None, -1.0, -1.0, 0)
        self.assertTrue(res.ok)
        self.assertIsNone(res.error)
        with Image.open(io.BytesIO(res.output)) as img:
            self.assertEqual(img.size, (350, 450))

    def test_generate_with_face_hint_and_unknown_standard(self):
        res = bridge.generate(self.engine, self.src, 77, b"suit", 400.0, 300.0, 1)
        self.assertTrue(res.ok)
        with Image.open(io.BytesIO(res.output)) as img:
            self.assertEqual(img.size, (450, 550))

    def test_sentinel_means_no_hint(self):
        self.assertIsNone(bridge._face_center_from_host(-1.0, -1.0))
        self.assertIsNone(bridge._face_center_from_host(None, 3.0))
        c = bridge._face_center_from_host(-1.0, 10.0)
        self.assertEqual((c.x, c.y), (-1.0, 10.0))

    def test_not_initialized(self):
        res = bridge.generate(None, self.src, 1)
        self.assertFalse(res.ok)
        self.assertEqual(res.error, "not_initialized")
        self.assertIsNone(res.output)

    def test_decode_failure(self):
        res = bridge.generate(self.engine, b"nope", 1)
        self.assertEqual(res.error, "decode")
        self.assertIsNone(res.output)

    def test_empty_input(self):
        res = bridge.generate(self.engine, b"", 1)
        self.assertEqual(res.error, "decode")

    def test_encode_and_geometry_failures_are_distinct(self):
        with patch.object(self.engine, "process", side_effect=EncodeError("disk full")):
            self.assertEqual(bridge.generate(self.engine, self.src, 1).error, "encode")
        with patch.object(self.engine, "process", side_effect=GeometryDegenerate((1, 1), (2, 2))):
            self.assertEqual(bridge.generate(self.engine, self.src, 1).error, "geometry")

    def test_unexpected_fault_is_contained(self):
        with patch.object(self.engine, "process", side_effect=MemoryError("oom")):
            res = bridge.generate(self.engine, self.src, 1)
        self.assertEqual(res.error, "internal")
        self.assertIn("MemoryError", res.message)

        # Engine still usable afterwards.
        self.assertTrue(bridge.generate(self.engine, self.src, 1).ok)

    def test_non_finite_face_center_means_no_hint(self):
        for x, y in ((float("nan"), 10.0), (10.0, float("inf")), (float("-inf"), float("nan"))):
            self.assertIsNone(bridge._face_center_from_host(x, y))
            res = bridge.generate(self.engine, self.src, 4, None, x, y, 1)
            self.assertTrue(res.ok, res.message)
            with Image.open(io.BytesIO(res.output)) as img:
                self.assertEqual(img.size, (350, 450))
