import unittest

import numpy as np

from src.tapegrad.domain._errors import GradientShapeError, GradientsFrozenError
from src.tapegrad.infrastructure.tensor._gradients import Gradients, TensorRef
from src.tapegrad.infrastructure.tensor._tensor import Tensor
from src.tapegrad.infrastructure.tensor._tensor_id import TensorId


def ref(shape, dtype=np.float32, tensor_id=None) -> TensorRef:
    return TensorRef(tensor_id or TensorId.mint(), tuple(shape), np.dtype(dtype))


class TestTensorId(unittest.TestCase):
    def test_minted_ids_are_unique(self):
        ids = {TensorId.mint() for _ in range(100)}
        self.assertEqual(len(ids), 100)

    def test_ids_compare_by_value(self):
        self.assertEqual(TensorId(7), TensorId(7))
        self.assertNotEqual(TensorId(7), TensorId(8))
        self.assertLess(TensorId(1), TensorId(2))

    def test_id_is_immutable(self):
        tid = TensorId.mint()
        with self.assertRaises(Exception):
            tid.value = 0  # type: ignore[misc]


class TestGradients(unittest.TestCase):
    def test_get_or_zero_allocates_zeros_lazily(self):
        g = Gradients()
        r = ref((2, 3))
        self.assertNotIn(r.id, g)

        buf = g.get_or_zero(r.id, r.shape, r.dtype)

        self.assertIn(r.id, g)
        self.assertEqual(buf.shape, (2, 3))
        self.assertEqual(buf.dtype, np.float32)
        np.testing.assert_array_equal(buf, np.zeros((2, 3)))

    def test_get_or_zero_returns_same_buffer(self):
        g = Gradients()
        r = ref((3,))
        g.get_or_zero(r.id, r.shape)[...] = 1.0
        np.testing.assert_array_equal(g.get_or_zero(r.id, r.shape), np.ones(3))

    def test_get_or_zero_rejects_shape_change(self):
        g = Gradients()
        r = ref((2, 3))
        g.get_or_zero(r.id, r.shape)
        with self.assertRaises(GradientShapeError):
            g.get_or_zero(r.id, (3, 2))

    def test_scalar_buffer(self):
        g = Gradients()
        r = ref(())
        buf = g.get_or_zero(r.id, ())
        self.assertEqual(buf.shape, ())
        self.assertEqual(float(buf), 0.0)

    def test_accumulate_is_additive(self):
        g = Gradients()
        r = ref((2,))
        g.accumulate(r, np.array([1.0, 2.0]))
        g.accumulate(r, np.array([0.5, 0.5]))
        np.testing.assert_allclose(g.get(r.id), [1.5, 2.5])

    def test_accumulate_rejects_wrong_shape(self):
        g = Gradients()
        r = ref((2,))
        with self.assertRaises(GradientShapeError):
            g.accumulate(r, np.ones((3,)))

    def test_mut_and_ref_distinct_ids(self):
        g = Gradients()
        a, b = ref((2,)), ref((2,))
        g.accumulate(b, np.array([3.0, 4.0]))

        mut, ro = g.mut_and_ref(a, b)
        mut += ro

        np.testing.assert_allclose(g.get(a.id), [3.0, 4.0])
        self.assertFalse(ro.flags.writeable)
        with self.assertRaises(ValueError):
            ro[0] = 1.0

    def test_mut_and_ref_allocates_both(self):
        g = Gradients()
        a, b = ref((2, 2)), ref((2,))
        mut, ro = g.mut_and_ref(a, b)
        self.assertEqual(mut.shape, (2, 2))
        self.assertEqual(ro.shape, (2,))
        self.assertEqual(len(g), 2)

    def test_mut_and_ref_same_id_reads_snapshot(self):
        g = Gradients()
        a = ref((2,))
        g.accumulate(a, np.array([1.0, 2.0]))

        mut, ro = g.mut_and_ref(a, a)
        mut += ro
        mut += ro

        # Reading a snapshot: 1 + 1 + 1, not 1 -> 2 -> 4.
        np.testing.assert_allclose(g.get(a.id), [3.0, 6.0])

    def test_get_missing_returns_none(self):
        self.assertIsNone(Gradients().get(TensorId.mint()))

    def test_get_is_read_only(self):
        g = Gradients()
        r = ref((2,))
        g.get_or_zero(r.id, r.shape)
        with self.assertRaises(ValueError):
            g.get(r.id)[0] = 5.0

    def test_ref_gradient_missing_returns_zeros(self):
        t = Tensor([[1.0, 2.0], [3.0, 4.0]])
        grad = Gradients().ref_gradient(t)
        self.assertEqual(grad.shape, (2, 2))
        self.assertEqual(grad.dtype, t.dtype)
        np.testing.assert_array_equal(grad, np.zeros((2, 2)))

    def test_ref_gradient_looks_up_by_id(self):
        t = Tensor([1.0, 2.0])
        g = Gradients()
        g.accumulate(t.ref(), np.array([5.0, 6.0], dtype=np.float32))
        np.testing.assert_allclose(g.ref_gradient(t), [5.0, 6.0])
        np.testing.assert_allclose(g.ref_gradient(t.clone()), [5.0, 6.0])

    def test_freeze_blocks_mutation(self):
        g = Gradients()
        r = ref((2,))
        g.accumulate(r, np.ones(2))
        self.assertIs(g.freeze(), g)
        self.assertTrue(g.frozen)

        with self.assertRaises(GradientsFrozenError):
            g.get_or_zero(r.id, r.shape)
        with self.assertRaises(GradientsFrozenError):
            g.accumulate(r, np.ones(2))
        with self.assertRaises(GradientsFrozenError):
            g.mut_and_ref(r, r)

        # Reading still works.
        np.testing.assert_allclose(g.get(r.id), [1.0, 1.0])

    def test_iteration_and_len(self):
        g = Gradients()
        r1, r2 = ref((1,)), ref((2,))
        g.get_or_zero(r1.id, r1.shape)
        g.get_or_zero(r2.id, r2.shape)
        self.assertEqual(len(g), 2)
        self.assertEqual(set(g), {r1.id, r2.id})


if __name__ == "__main__":
    unittest.main()
