import unittest

import gradgraph


class TestPublicApi(unittest.TestCase):

    def test_exports_resolve(self) -> None:
        for name in gradgraph.__all__:
            self.assertTrue(hasattr(gradgraph, name), msg=name)

    def test_end_to_end_through_package_root(self) -> None:
        ag = gradgraph.Engine()
        a = ag.make_tensor((2,), [2, 3], requires_grad=True)
        b = ag.make_tensor((2,), [4, 5], requires_grad=True)
        c = ag.multiply(a, b)
        ag.backward(c)
        self.assertEqual(str(ag.gradient(a)), "[4, 5]")
        self.assertEqual(str(ag.gradient(b)), "[2, 3]")

    def test_errors_catchable_by_base_class(self) -> None:
        ag = gradgraph.Engine()
        a = ag.make_tensor((2,), [1, 2])
        b = ag.make_tensor((3,), [1, 2, 3])
        with self.assertRaises(gradgraph.GradGraphError):
            ag.multiply(a, b)
        with self.assertRaises(gradgraph.GradGraphError):
            ag.dot(a, b)


if __name__ == "__main__":
    unittest.main()
