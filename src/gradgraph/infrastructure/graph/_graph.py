"""
Append-only computation graph and reverse-mode gradient propagation.

The graph is an arena: value nodes and operation edges are stored in lists
and addressed by their position. Callers never hold nodes directly; they hold
`TensorHandle`s, which name a graph and a node id. Nothing is ever removed,
so every handle stays valid for the lifetime of its graph.

Propagation semantics
---------------------
`propagate_gradients` walks producer edges depth-first from the output,
visiting edges of a node in registration order and descending into each
input before moving on to the next edge. For every edge it:

1. evaluates the operation's local derivative at the edge's input tensor,
2. multiplies the *first element* of that derivative by the *first element*
   of the current node's gradient, and
3. assigns the result as the input node's gradient, replacing any earlier
   value.

Gradients are therefore not accumulated across multiple paths, and the chain
rule is only exact while gradients stay scalar. Both behaviours are part of
the engine's observable contract.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterator, Optional

import numpy as np

from ...domain._errors import GraphLookupError
from ...domain._operation import Operation
from ..tensor import Tensor
from ._handle import TensorHandle
from ._nodes import OperationEdge, ValueNode

logger = logging.getLogger(__name__)

_graph_ids = itertools.count()


class ComputationGraph:
    """
    Bipartite graph of value nodes and operation edges.

    Notes
    -----
    - The graph exclusively owns its nodes, edges and the tensors they wrap.
    - Not thread-safe; a graph is driven by one caller at a time.
    """

    def __init__(self) -> None:
        self._graph_id = next(_graph_ids)
        self._nodes: list[ValueNode] = []
        self._edges: list[OperationEdge] = []

    @property
    def graph_id(self) -> int:
        return self._graph_id

    @property
    def nodes(self) -> tuple[ValueNode, ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> tuple[OperationEdge, ...]:
        return tuple(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, handle: TensorHandle) -> ValueNode:
        """
        Resolve a handle to its value node.

        Raises
        ------
        GraphLookupError
            If the handle belongs to another graph or names an unknown node.
        """
        if not isinstance(handle, TensorHandle):
            raise TypeError(f"Expected a TensorHandle, got {type(handle).__name__}")
        if handle.graph_id != self._graph_id:
            raise GraphLookupError(
                f"Handle belongs to graph {handle.graph_id}, not graph {self._graph_id}"
            )
        if not 0 <= handle.node_id < len(self._nodes):
            raise GraphLookupError(
                f"Node {handle.node_id} is not registered in graph {self._graph_id}"
            )
        return self._nodes[handle.node_id]

    def add_value_node(
        self, tensor: Tensor, is_leaf: bool, requires_grad: bool = False
    ) -> TensorHandle:
        """
        Register `tensor` as a new value node.

        Parameters
        ----------
        tensor : Tensor
            The value to record. The graph takes ownership of it and marks
            its buffer read-only; in-place writes afterwards raise ValueError.
        is_leaf : bool
            True for tensors created directly by the engine.
        requires_grad : bool, optional
            Advisory flag stored on the node. Defaults to False.

        Returns
        -------
        TensorHandle
            Handle naming the new node.
        """
        node = ValueNode(
            node_id=len(self._nodes),
            tensor=tensor,
            is_leaf=bool(is_leaf),
            requires_grad=bool(requires_grad),
        )
        # registered tensors are immutable; operations capture them by reference
        tensor.values.flags.writeable = False
        self._nodes.append(node)
        logger.debug("graph %d: registered %r", self._graph_id, node)
        return TensorHandle(self._graph_id, node.node_id, tensor)

    def add_operation_edge(
        self, operation: Operation, output: TensorHandle, input: TensorHandle
    ) -> OperationEdge:
        """
        Record that `operation` produced `output` from `input`.

        Both handles must already be registered. The edge is appended to
        `output.producers` and `input.consumers`.
        """
        output_node = self.node(output)
        input_node = self.node(input)

        edge = OperationEdge(
            edge_id=len(self._edges),
            operation=operation,
            output=output_node,
            input=input_node,
        )
        output_node.producers.append(edge)
        input_node.consumers.append(edge)
        self._edges.append(edge)
        logger.debug("graph %d: registered %r", self._graph_id, edge)
        return edge

    def propagate_gradients(self, output: TensorHandle) -> None:
        """
        Run a backward pass from `output`.

        The output's gradient is seeded with ones of its shape, then gradients
        are written depth-first into every node reachable through producer
        edges. See the module docstring for the exact update rule.
        """
        root = self.node(output)
        seed = Tensor(
            root.tensor.shape,
            np.ones(root.tensor.element_count, dtype=root.tensor.dtype),
            dtype=root.tensor.dtype,
        )
        root.gradient = seed
        logger.debug("graph %d: backward from node %d", self._graph_id, root.node_id)

        if root.is_leaf:
            return

        # (node gradient, pending producer edges) per level of the walk
        stack: list[tuple[Tensor, Iterator[OperationEdge]]] = [
            (seed, iter(list(root.producers)))
        ]
        while stack:
            grad, pending = stack[-1]
            edge = next(pending, None)
            if edge is None:
                stack.pop()
                continue

            local = edge.local_gradient()
            if local.element_count and grad.element_count:
                local.values[0] *= grad.values[0]
            edge.input.gradient = local
            logger.debug(
                "graph %d: node %d gradient set via edge %d",
                self._graph_id,
                edge.input.node_id,
                edge.edge_id,
            )

            if not edge.input.is_leaf:
                stack.append((local, iter(list(edge.input.producers))))

    def get_gradient(self, handle: TensorHandle) -> Optional[Tensor]:
        """
        Return the gradient stored on `handle`'s node, or None if unset.
        """
        return self.node(handle).gradient
