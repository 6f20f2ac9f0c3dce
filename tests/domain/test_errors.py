import unittest

import numpy as np

from src.tapegrad.domain._errors import (
    DTypeMismatchError,
    GradientShapeError,
    GradientsFrozenError,
    RankError,
    ShapeMismatchError,
    TapeOwnershipError,
    UnknownUpscaleMethodError,
)


class TestErrorTaxonomy(unittest.TestCase):
    def test_shape_mismatch_carries_shapes_and_op(self):
        e = ShapeMismatchError((2, 3), (3, 2), op="add")
        self.assertIsInstance(e, ValueError)
        self.assertEqual(e.expected, (2, 3))
        self.assertEqual(e.got, (3, 2))
        self.assertEqual(e.op, "add")
        self.assertIn("add:", str(e))
        self.assertIn("(2, 3)", str(e))

    def test_shape_mismatch_without_op(self):
        e = ShapeMismatchError((1,), (2,))
        self.assertIsNone(e.op)
        self.assertTrue(str(e).startswith("shape mismatch"))

    def test_rank_error_is_shape_mismatch(self):
        e = RankError(5, op="Tensor")
        self.assertIsInstance(e, ShapeMismatchError)
        self.assertEqual(e.rank, 5)
        self.assertIn("rank 5", str(e))

    def test_gradient_shape_error_is_shape_mismatch(self):
        self.assertTrue(issubclass(GradientShapeError, ShapeMismatchError))

    def test_dtype_mismatch_is_type_error(self):
        e = DTypeMismatchError(np.dtype(np.float32), np.dtype(np.float64), op="mul")
        self.assertIsInstance(e, TypeError)
        self.assertIn("float32", str(e))
        self.assertIn("float64", str(e))
        self.assertEqual(e.op, "mul")

    def test_lifecycle_errors_are_runtime_errors(self):
        self.assertTrue(issubclass(TapeOwnershipError, RuntimeError))
        self.assertTrue(issubclass(GradientsFrozenError, RuntimeError))

    def test_unknown_upscale_method_lists_available(self):
        e = UnknownUpscaleMethodError("cubic", ("bilinear", "nearest"))
        self.assertIsInstance(e, ValueError)
        self.assertEqual(e.name, "cubic")
        self.assertIn("'cubic'", str(e))
        self.assertIn("bilinear, nearest", str(e))

    def test_unknown_upscale_method_with_empty_registry(self):
        self.assertIn("<none>", str(UnknownUpscaleMethodError("x", ())))


if __name__ == "__main__":
    unittest.main()
