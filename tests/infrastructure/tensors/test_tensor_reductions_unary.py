import unittest

import numpy as np

from src.tapegrad.infrastructure.tensor._tensor import Tensor


class TestSumAndMean(unittest.TestCase):
    def setUp(self) -> None:
        self.x_np = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], dtype=np.float32)

    def test_sum_forward_and_backward(self):
        t = Tensor(self.x_np)
        s = t.trace().sum()
        self.assertEqual(s.shape, ())
        self.assertEqual(s.item(), 21.0)

        grads = s.backward()
        np.testing.assert_allclose(grads.ref_gradient(t), np.ones((2, 3)))

    def test_mean_forward_and_backward(self):
        t = Tensor(self.x_np)
        m = t.trace().mean()
        self.assertEqual(m.shape, ())
        self.assertAlmostEqual(m.item(), 3.5, places=6)

        grads = m.backward()
        np.testing.assert_allclose(grads.ref_gradient(t), np.full((2, 3), 1.0 / 6.0))

    def test_mean_of_scalar_is_identity(self):
        t = Tensor(4.0)
        m = t.trace().mean()
        self.assertEqual(m.item(), 4.0)
        np.testing.assert_allclose(m.backward().ref_gradient(t), 1.0)

    def test_mean_matches_sum_scaled(self):
        t = Tensor(self.x_np)
        g_mean = t.trace().mean().backward().ref_gradient(t)
        g_sum = (t.trace().sum() * (1.0 / 6.0)).backward().ref_gradient(t)
        np.testing.assert_allclose(g_mean, g_sum, rtol=1e-6)

    def test_sum_rank4(self):
        x = np.random.RandomState(0).randn(2, 3, 4, 5).astype(np.float32)
        t = Tensor(x)
        s = t.trace().sum()
        np.testing.assert_allclose(s.item(), x.sum(), rtol=1e-5)
        np.testing.assert_allclose(s.backward().ref_gradient(t), np.ones(x.shape))


class TestUnary(unittest.TestCase):
    def setUp(self) -> None:
        self.x_np = np.array([0.5, 1.0, 2.0], dtype=np.float32)

    def test_exp(self):
        t = Tensor(self.x_np)
        y = t.trace().exp()
        np.testing.assert_allclose(y.data, np.exp(self.x_np), rtol=1e-6)

        grads = y.sum().backward()
        np.testing.assert_allclose(grads.ref_gradient(t), np.exp(self.x_np), rtol=1e-6)

    def test_log(self):
        t = Tensor(self.x_np)
        y = t.trace().log()
        np.testing.assert_allclose(y.data, np.log(self.x_np), rtol=1e-6)

        grads = y.sum().backward()
        np.testing.assert_allclose(grads.ref_gradient(t), 1.0 / self.x_np, rtol=1e-6)

    def test_log_of_nonpositive_follows_numpy(self):
        y = Tensor([0.0, -1.0]).log()
        self.assertTrue(np.isneginf(y.data[0]))
        self.assertTrue(np.isnan(y.data[1]))

    def test_neg(self):
        t = Tensor(self.x_np)
        y = -t.trace()
        np.testing.assert_allclose(y.data, -self.x_np)

        grads = y.sum().backward()
        np.testing.assert_allclose(grads.ref_gradient(t), -np.ones(3))

    def test_log_exp_composition(self):
        t = Tensor(self.x_np)
        y = t.trace().exp().log()
        np.testing.assert_allclose(y.data, self.x_np, rtol=1e-5)

        grads = y.sum().backward()
        np.testing.assert_allclose(grads.ref_gradient(t), np.ones(3), rtol=1e-5)

    def test_unary_preserves_shape_and_dtype(self):
        t = Tensor(np.ones((2, 2, 2)), dtype=np.float64)
        for y in (t.exp(), t.log(), -t):
            self.assertEqual(y.shape, (2, 2, 2))
            self.assertEqual(y.dtype, np.float64)


if __name__ == "__main__":
    unittest.main()
