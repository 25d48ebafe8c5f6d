"""
Computation graph: arena of value nodes and operation edges.
"""

from ._graph import ComputationGraph
from ._handle import TensorHandle
from ._nodes import OperationEdge, ValueNode

__all__ = [
    ComputationGraph.__name__,
    TensorHandle.__name__,
    OperationEdge.__name__,
    ValueNode.__name__,
]
