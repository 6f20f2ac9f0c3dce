import unittest

import numpy as np

import src.tapegrad as tg


class TestPackageApi(unittest.TestCase):
    def test_version(self):
        self.assertEqual(tg.__version__, "0.1.0")

    def test_public_names(self):
        for name in (
            "Tensor",
            "TensorId",
            "Gradients",
            "GradientTape",
            "NoTape",
            "WithTape",
            "BackwardOp",
            "Upscale2D",
            "Upscale2DBy",
            "NearestNeighbor",
            "Bilinear",
            "ShapeMismatchError",
            "TapeOwnershipError",
            "configure_logging",
            "get_settings",
        ):
            self.assertTrue(hasattr(tg, name), name)

    def test_end_to_end(self):
        t = tg.tensor2d([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        grads = t.trace().sum_last_dim().mean().backward()
        np.testing.assert_allclose(grads.ref_gradient(t), np.full((2, 3), 0.5))

    def test_end_to_end_upscale(self):
        x = tg.tensor3d(np.ones((1, 2, 2)))
        y = tg.Upscale2DBy(2)(x.trace())
        grads = y.sum().backward()
        np.testing.assert_allclose(grads.ref_gradient(x), np.full((1, 2, 2), 4.0))


if __name__ == "__main__":
    unittest.main()
