"""
Graph records: value nodes and operation edges.

A `ValueNode` wraps one tensor inside the graph together with its provenance
and its gradient slot. An `OperationEdge` links a producing operation, the
output node it produced, and the specific input node it consumed.
"""

from dataclasses import dataclass, field
from typing import Optional

from ...domain._operation import Operation
from ..tensor import Tensor


@dataclass(eq=False)
class ValueNode:
    """
    Graph record wrapping one tensor.

    Attributes
    ----------
    node_id : int
        Position of the node in the owning graph's arena.
    tensor : Tensor
        The value this node represents.
    is_leaf : bool
        True for tensors created directly by the engine.
    requires_grad : bool
        Advisory flag recorded at leaf creation. Propagation does not consult it.
    producers : list[OperationEdge]
        Edges whose output is this node, in registration order.
    consumers : list[OperationEdge]
        Edges that take this node as input, in registration order.
    gradient : Optional[Tensor]
        Gradient assigned by the most recent backward write, or None.
    """

    node_id: int
    tensor: Tensor
    is_leaf: bool
    requires_grad: bool = False
    producers: list["OperationEdge"] = field(default_factory=list)
    consumers: list["OperationEdge"] = field(default_factory=list)
    gradient: Optional[Tensor] = None

    def __repr__(self) -> str:
        return (
            f"ValueNode(id={self.node_id}, shape={self.tensor.shape}, "
            f"is_leaf={self.is_leaf}, requires_grad={self.requires_grad})"
        )


@dataclass(eq=False)
class OperationEdge:
    """
    Graph record linking an operation to one of its inputs.

    Attributes
    ----------
    edge_id : int
        Position of the edge in the owning graph's arena.
    operation : Operation
        Operation that maps `input.tensor` to `output.tensor`. Binary
        operations capture their other operand.
    output : ValueNode
        The node the operation produced.
    input : ValueNode
        The node the operation consumed.
    """

    edge_id: int
    operation: Operation
    output: ValueNode
    input: ValueNode

    def local_gradient(self) -> Tensor:
        """
        Return the operation's local derivative evaluated at the input tensor.
        """
        return self.operation.backward(self.input.tensor)

    def __repr__(self) -> str:
        return (
            f"OperationEdge(id={self.edge_id}, op={type(self.operation).__name__}, "
            f"{self.input.node_id} -> {self.output.node_id})"
        )
