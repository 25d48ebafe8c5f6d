"""
Autograd engine facade.

`Engine` owns one `ComputationGraph` and is the public entrypoint for
building and differentiating computations:

- `make_tensor` creates leaf tensors,
- `multiply`, `dot` and `exp` compute a value and record how it was produced,
- `backward` runs a backward pass from a chosen output,
- `gradient` reads the gradient written to any registered tensor.

Every builder validates its operands before touching the graph, so a failed
call leaves the graph exactly as it was.
"""

from __future__ import annotations

import logging
from numbers import Number
from typing import Optional, Sequence, Union

from ..domain._errors import DimensionMismatchError, ShapeMismatchError
from ._config import EngineConfig
from ._operations import DotFn, ExpFn, MultiplyFn
from .graph import ComputationGraph, TensorHandle
from .tensor import Tensor

logger = logging.getLogger(__name__)


class Engine:
    """
    Reverse-mode autograd over dense tensors.

    Parameters
    ----------
    config : Optional[EngineConfig], optional
        Engine settings. Defaults to `EngineConfig()`.

    Examples
    --------
    >>> engine = Engine()
    >>> a = engine.make_tensor(3.0, requires_grad=True)
    >>> b = engine.make_tensor(4.0, requires_grad=True)
    >>> c = engine.dot(a, b)
    >>> engine.backward(c)
    >>> engine.gradient(a).item()
    4.0
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self._config = config if config is not None else EngineConfig()
        self._graph = ComputationGraph()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def graph(self) -> ComputationGraph:
        return self._graph

    def make_tensor(
        self,
        data: Union[Tensor, Number, Sequence[int]],
        values: Optional[Sequence[Number]] = None,
        *,
        requires_grad: bool = False,
    ) -> TensorHandle:
        """
        Create a leaf tensor and register it in the graph.

        Parameters
        ----------
        data : Tensor, number, or Sequence[int]
            - a `Tensor`: registered as a copy; non-floating tensors are cast
              to the configured dtype,
            - a number: registered as a scalar,
            - a shape: combined with `values` into a tensor.
        values : Sequence[Number], optional
            Flat row-major values. Required when `data` is a shape, and not
            allowed otherwise.
        requires_grad : bool, optional
            Advisory flag recorded on the leaf node. Defaults to False.

        Returns
        -------
        TensorHandle
            Handle to the new leaf.

        Raises
        ------
        ShapeMismatchError
            If `values` does not match the product of the shape.
        TypeError
            If the arguments do not describe a tensor.
        """
        dtype = self._config.dtype
        if isinstance(data, Tensor):
            if values is not None:
                raise TypeError("values must not be given together with a Tensor")
            if data.dtype.kind == "f":
                tensor = data.copy()
            else:
                tensor = Tensor(data.shape, data.values, dtype=dtype)
        elif isinstance(data, Number):
            if values is not None:
                raise TypeError("values must not be given together with a scalar")
            tensor = Tensor.scalar(data, dtype=dtype)
        elif isinstance(data, Sequence):
            if values is None:
                raise TypeError("values are required when a shape is given")
            tensor = Tensor(data, values, dtype=dtype)
        else:
            raise TypeError(
                f"make_tensor expects a Tensor, a number or a shape, got {type(data).__name__}"
            )

        return self._graph.add_value_node(tensor, is_leaf=True, requires_grad=requires_grad)

    def multiply(self, a: TensorHandle, b: TensorHandle) -> TensorHandle:
        """
        Elementwise product `a * b`.

        Two `MultiplyFn`s are recorded: one capturing `b` (edge to `a`) and
        one capturing `a` (edge to `b`), so both partial derivatives are
        recoverable.

        Raises
        ------
        ShapeMismatchError
            If `a` and `b` have different shapes.
        """
        a_node = self._graph.node(a)
        b_node = self._graph.node(b)
        if not Tensor.check_shapes(a_node.tensor, b_node.tensor):
            raise ShapeMismatchError(
                "Shapes of tensors must be equal for multiply",
                expected=a_node.tensor.shape,
                actual=b_node.tensor.shape,
            )

        for_a = MultiplyFn(b_node.tensor)
        for_b = MultiplyFn(a_node.tensor)
        result = self._graph.add_value_node(for_a.forward(a_node.tensor), is_leaf=False)
        self._graph.add_operation_edge(for_a, result, a)
        self._graph.add_operation_edge(for_b, result, b)
        return result

    def dot(self, a: TensorHandle, b: TensorHandle) -> TensorHandle:
        """
        Sum-of-products contraction of `a` with `b`, producing a scalar.

        `b` is aligned with the trailing dimensions of `a`.

        Raises
        ------
        DimensionMismatchError
            If `a` has fewer dimensions than `b`, or the trailing dimensions
            of `a` differ from `b`'s shape.
        """
        a_node = self._graph.node(a)
        b_node = self._graph.node(b)
        a_shape = a_node.tensor.shape
        b_shape = b_node.tensor.shape
        if len(a_shape) < len(b_shape):
            raise DimensionMismatchError(
                "Left operand of dot must have at least as many dimensions as the right",
                a_shape,
                b_shape,
            )
        if tuple(a_shape[len(a_shape) - len(b_shape) :]) != tuple(b_shape):
            raise DimensionMismatchError(
                "Trailing dimensions of the left operand must equal the right shape",
                a_shape,
                b_shape,
            )

        for_a = DotFn(b_node.tensor)
        for_b = DotFn(a_node.tensor)
        result = self._graph.add_value_node(for_a.forward(a_node.tensor), is_leaf=False)
        self._graph.add_operation_edge(for_a, result, a)
        self._graph.add_operation_edge(for_b, result, b)
        return result

    def exp(self, a: TensorHandle) -> TensorHandle:
        """
        Elementwise exponential of `a`.
        """
        a_node = self._graph.node(a)
        fn = ExpFn()
        result = self._graph.add_value_node(fn.forward(a_node.tensor), is_leaf=False)
        self._graph.add_operation_edge(fn, result, a)
        return result

    def backward(self, tensor: TensorHandle) -> None:
        """
        Run a backward pass from `tensor`, seeding its gradient with ones.
        """
        self._graph.propagate_gradients(tensor)
        logger.debug("backward pass from node %d finished", tensor.node_id)

    def gradient(self, tensor: TensorHandle) -> Optional[Tensor]:
        """
        Return the gradient last written to `tensor`, or None if no backward
        pass has reached it.
        """
        return self._graph.get_gradient(tensor)
