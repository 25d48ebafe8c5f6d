"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the minimal properties required for
a tensor to be consumed by operations and registered in a computation graph.

Notes
-----
The protocol is intentionally free of autograd state: tensors are pure
values, and gradients live on graph nodes rather than on the tensors.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a dense, shape-tagged numeric array stored as a flat,
    row-major sequence of elements.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor. An empty tuple denotes a scalar.
        """
        ...

    @property
    def n_dims(self) -> int:
        """
        Return the number of dimensions (rank) of the tensor.
        """
        ...

    @property
    def element_count(self) -> int:
        """
        Return the number of elements (product of `shape`, 1 for scalars).
        """
        ...

    @property
    def values(self) -> Any:
        """
        Return the flat, row-major element buffer.
        """
        ...

    def at(self, index: Sequence[int]) -> "ITensor":
        """
        Return the sub-tensor obtained by fixing the leading coordinates.
        """
        ...

    def item(self) -> Number:
        """
        Return the sole element of a 0-dimensional tensor.
        """
        ...

    def to_numpy(self) -> Any:
        """
        Return a shaped copy of the element buffer.
        """
        ...
