from unittest import TestCase
import unittest

import numpy as np

from gradgraph.domain._errors import ShapeMismatchError
from gradgraph.infrastructure.tensor import Tensor


class TestTensorAddition(TestCase):

    def test_add_elementwise(self):
        t4 = Tensor((3,), [5.0, 6.0, 1.5])
        t5 = Tensor((3,), [5.2, 6.5, 1.9])
        t6 = t4 + t5
        np.testing.assert_allclose(t6.values, [10.2, 12.5, 3.4], rtol=1e-6)
        self.assertAlmostEqual(t6.at([0]).item(), 10.2, places=5)
        self.assertAlmostEqual(t6.at([1]).item(), 12.5, places=5)
        self.assertAlmostEqual(t6.at([2]).item(), 3.4, places=5)

    def test_add_leaves_operands_untouched(self):
        a = Tensor((2,), [1.0, 2.0])
        b = Tensor((2,), [3.0, 4.0])
        c = a + b
        self.assertIsNot(c, a)
        np.testing.assert_array_equal(a.values, [1.0, 2.0])
        np.testing.assert_array_equal(b.values, [3.0, 4.0])

    def test_iadd_in_place(self):
        t6 = Tensor((3,), [10.2, 12.5, 3.4])
        t7 = Tensor((3,), [1.0, 2.0, 3.0])
        before = t6
        t6 += t7
        self.assertIs(t6, before)
        np.testing.assert_allclose(t6.values, [11.2, 14.5, 6.4], rtol=1e-6)

    def test_iadd_matches_add(self):
        a = Tensor((2, 2), [1, 2, 3, 4])
        b = Tensor((2, 2), [0.5, 0.5, 0.5, 0.5])
        expected = a + b
        a += b
        np.testing.assert_array_equal(a.values, expected.values)

    def test_add_scalars(self):
        c = Tensor.scalar(1.5) + Tensor.scalar(2.0)
        self.assertEqual(c.shape, ())
        self.assertEqual(c.item(), 3.5)

    def test_shape_mismatch_raises(self):
        a = Tensor((2,), [1, 2])
        b = Tensor((3,), [1, 2, 3])
        with self.assertRaises(ShapeMismatchError):
            _ = a + b
        with self.assertRaises(ShapeMismatchError):
            a += b
        np.testing.assert_array_equal(a.values, [1, 2])

    def test_same_size_different_shape_raises(self):
        a = Tensor((2, 3), np.zeros(6))
        b = Tensor((3, 2), np.zeros(6))
        with self.assertRaises(ShapeMismatchError):
            _ = a + b

    def test_add_non_tensor_raises_type_error(self):
        with self.assertRaises(TypeError):
            _ = Tensor((1,), [1.0]) + 1.0


if __name__ == "__main__":
    unittest.main()
