import unittest

import numpy as np

from gradgraph.domain._operation import Operation
from gradgraph.infrastructure._operations import DotFn, ExpFn, MultiplyFn
from gradgraph.infrastructure.tensor import Tensor


def make_tensor(arr) -> Tensor:
    return Tensor.from_numpy(np.asarray(arr, dtype=np.float32))


class TestOperationInterface(unittest.TestCase):

    def test_operation_is_abstract(self) -> None:
        with self.assertRaises(TypeError):
            Operation()  # type: ignore[abstract]

    def test_concrete_operations_are_operations(self) -> None:
        t = make_tensor([1.0])
        for op in (ExpFn(), MultiplyFn(t), DotFn(t)):
            self.assertIsInstance(op, Operation)


class TestExpFn(unittest.TestCase):

    def test_forward_values(self) -> None:
        x_np = np.array([[0.0, 1.0], [-1.0, 2.0]], dtype=np.float32)
        y = ExpFn().forward(make_tensor(x_np))
        self.assertEqual(y.shape, (2, 2))
        np.testing.assert_allclose(y.to_numpy(), np.exp(x_np), rtol=1e-6, atol=1e-6)

    def test_backward_is_exp_of_input(self) -> None:
        x_np = np.array([0.2, -0.7, 1.3], dtype=np.float32)
        x = make_tensor(x_np)
        grad = ExpFn().backward(x)
        np.testing.assert_allclose(grad.to_numpy(), np.exp(x_np), rtol=1e-6, atol=1e-6)

    def test_does_not_mutate_input(self) -> None:
        x = make_tensor([0.5, 1.5])
        fn = ExpFn()
        out = fn.forward(x)
        grad = fn.backward(x)
        np.testing.assert_array_equal(x.values, [0.5, 1.5])
        self.assertIsNot(out, x)
        self.assertIsNot(grad, x)


class TestMultiplyFn(unittest.TestCase):

    def test_forward_elementwise_product(self) -> None:
        a = make_tensor([2.0, 3.0])
        b = make_tensor([4.0, 5.0])
        out = MultiplyFn(b).forward(a)
        np.testing.assert_array_equal(out.values, [8.0, 15.0])

    def test_backward_is_captured_operand(self) -> None:
        a = make_tensor([[2.0, 3.0], [1.0, 0.0]])
        b = make_tensor([[4.0, 5.0], [6.0, 7.0]])
        grad = MultiplyFn(b).backward(a)
        self.assertEqual(grad.shape, (2, 2))
        np.testing.assert_array_equal(grad.to_numpy(), b.to_numpy())

    def test_backward_returns_fresh_tensor(self) -> None:
        a = make_tensor([1.0])
        b = make_tensor([2.0])
        grad = MultiplyFn(b).backward(a)
        grad.values[0] = 10.0
        self.assertEqual(b.values[0], 2.0)


class TestDotFn(unittest.TestCase):

    def test_forward_scalars(self) -> None:
        out = DotFn(Tensor.scalar(4.0)).forward(Tensor.scalar(3.0))
        self.assertEqual(out.shape, ())
        self.assertEqual(out.item(), 12.0)

    def test_forward_vectors(self) -> None:
        out = DotFn(make_tensor([4.0, 5.0, 6.0])).forward(make_tensor([1.0, 2.0, 3.0]))
        self.assertEqual(out.shape, ())
        self.assertEqual(out.item(), 32.0)

    def test_forward_trailing_aligned_contraction(self) -> None:
        x_np = np.arange(6, dtype=np.float32).reshape(2, 3)
        w_np = np.array([1.0, 10.0, 100.0], dtype=np.float32)
        out = DotFn(make_tensor(w_np)).forward(make_tensor(x_np))
        self.assertEqual(out.item(), float(np.sum(x_np * w_np)))

    def test_backward_equal_shapes_is_operand(self) -> None:
        a = make_tensor([1.0, 2.0, 3.0])
        b = make_tensor([4.0, 5.0, 6.0])
        np.testing.assert_array_equal(DotFn(b).backward(a).values, b.values)
        np.testing.assert_array_equal(DotFn(a).backward(b).values, a.values)

    def test_backward_higher_rank_input_broadcasts_operand(self) -> None:
        x = make_tensor(np.zeros((2, 3)))
        w = make_tensor([1.0, 2.0, 3.0])
        grad = DotFn(w).backward(x)
        self.assertEqual(grad.shape, (2, 3))
        np.testing.assert_array_equal(grad.to_numpy(), [[1, 2, 3], [1, 2, 3]])

    def test_backward_lower_rank_input_sums_leading_blocks(self) -> None:
        x_np = np.arange(6, dtype=np.float32).reshape(2, 3)
        w = make_tensor([1.0, 2.0, 3.0])
        grad = DotFn(make_tensor(x_np)).backward(w)
        self.assertEqual(grad.shape, (3,))
        np.testing.assert_array_equal(grad.values, x_np.sum(axis=0))

    def test_backward_scalar_operand_against_matrix(self) -> None:
        x_np = np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32)
        grad = DotFn(make_tensor(x_np)).backward(Tensor.scalar(2.0))
        self.assertEqual(grad.shape, ())
        self.assertEqual(grad.item(), 10.0)


if __name__ == "__main__":
    unittest.main()
