"""
Opaque handles to tensors registered in a computation graph.
"""

from dataclasses import dataclass, field
from typing import Sequence, Union

from ..tensor import Tensor

Number = Union[int, float]


@dataclass(frozen=True)
class TensorHandle:
    """
    Reference to a value node in a specific `ComputationGraph`.

    Handles are returned by every creation call and accepted by every graph
    and engine API. Equality and hashing use `(graph_id, node_id)` only.

    Attributes
    ----------
    graph_id : int
        Identifier of the owning graph.
    node_id : int
        Index of the node in the owning graph's arena.
    tensor : Tensor
        The registered tensor. Its buffer is read-only; use `tensor.copy()`
        to obtain a writable value.
    """

    graph_id: int
    node_id: int
    tensor: Tensor = field(compare=False, repr=False)

    @property
    def shape(self) -> tuple[int, ...]:
        return self.tensor.shape

    @property
    def n_dims(self) -> int:
        return self.tensor.n_dims

    def item(self) -> Number:
        return self.tensor.item()

    def at(self, index: Sequence[int]) -> Tensor:
        return self.tensor.at(index)

    def __str__(self) -> str:
        return str(self.tensor)
