"""
Tensor indexing mixin (NumPy CPU backend).

This module defines `TensorShapeAndIndexingMixin`, which implements the
index-based accessors of the concrete Tensor:

- `at(partial_index)`: sub-tensor obtained by fixing leading coordinates
- `t[i, j, ...]`: read/write of a single element by full index
- `iter(t)`: sub-tensors along the first dimension

Design notes
------------
- This mixin is intended to be inherited by the concrete `Tensor` class.
- To avoid circular imports, the implementation does not import `Tensor`
  directly; new tensors are constructed via `self.__class__`.
- `at` returns a *copy* (not a view), so published tensors stay immutable.
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence

import numpy as np

from ...domain._errors import IndexOutOfBoundsError
from ...domain._tensor import ITensor


class TensorShapeAndIndexingMixin(ITensor):
    """
    Index-based accessors for the concrete Tensor implementation.

    Notes
    -----
    - Methods assume the host class provides `.shape`, `.n_dims`, `.dtype`
      and a flat `._data` ndarray in row-major order.
    """

    def _normalize_index(self, index: Any) -> tuple[int, ...]:
        if isinstance(index, (int, np.integer)):
            return (int(index),)
        return tuple(int(i) for i in index)

    def _check_coordinates(self, index: tuple[int, ...]) -> None:
        for coord, dim in zip(index, self.shape):
            if coord < 0 or coord >= dim:
                raise IndexOutOfBoundsError(index, self.shape)

    def _flat_offset(self, index: tuple[int, ...]) -> int:
        """
        Return the flat offset of the block addressed by a (partial) index.

        The stride of coordinate `k` is the product of all dimensions after it.
        """
        offset = 0
        stride = int(np.prod(self.shape[len(index) :], dtype=np.int64))
        for coord, dim in zip(reversed(index), reversed(self.shape[: len(index)])):
            offset += stride * coord
            stride *= dim
        return offset

    def at(self, index: Sequence[int]) -> "ITensor":
        """
        Return the sub-tensor obtained by fixing the first `len(index)` coordinates.

        Parameters
        ----------
        index : Sequence[int]
            Partial index with `0 < len(index) <= n_dims`.

        Returns
        -------
        Tensor
            A new tensor of shape `shape[len(index):]` holding a copy of the
            addressed block. Fixing every coordinate yields a scalar.

        Raises
        ------
        IndexOutOfBoundsError
            If the index is empty, longer than `n_dims`, or any coordinate is
            outside its dimension.
        """
        index = self._normalize_index(index)
        if not 0 < len(index) <= self.n_dims:
            raise IndexOutOfBoundsError(index, self.shape)
        self._check_coordinates(index)

        sub_shape = tuple(self.shape[len(index) :])
        count = int(np.prod(sub_shape, dtype=np.int64))
        offset = self._flat_offset(index)

        TensorClass = self.__class__
        return TensorClass(
            sub_shape, self._data[offset : offset + count].copy(), dtype=self.dtype
        )

    def _element_offset(self, key: Any) -> int:
        index = self._normalize_index(key if isinstance(key, tuple) else (key,))
        if len(index) != self.n_dims:
            raise IndexOutOfBoundsError(index, self.shape)
        self._check_coordinates(index)
        return self._flat_offset(index)

    def __getitem__(self, key: Any) -> Any:
        """
        Read one element by full index (`t[i, j]`, or `t[()]` for scalars).

        Raises
        ------
        IndexOutOfBoundsError
            If the index arity differs from `n_dims` or a coordinate is out of
            range.
        """
        return self._data[self._element_offset(key)].item()

    def __setitem__(self, key: Any, value: Any) -> None:
        """
        Write one element by full index.

        Notes
        -----
        Tensors registered in a graph have a read-only buffer, so writing into
        them raises ValueError.
        """
        self._data[self._element_offset(key)] = value

    def __iter__(self) -> Iterator["ITensor"]:
        """
        Iterate over the sub-tensors along the first dimension.

        Raises
        ------
        TypeError
            If the tensor is 0-dimensional.
        """
        if self.n_dims == 0:
            raise TypeError("iteration over a 0-d tensor")
        return (self.at([i]) for i in range(self.shape[0]))
