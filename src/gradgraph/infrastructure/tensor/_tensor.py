"""
Concrete Tensor implementation (NumPy backend).

This module provides a concrete `Tensor` implementation that satisfies the
domain-level `ITensor` protocol. Elements are stored in a flat, row-major
NumPy buffer together with an explicit shape tuple.

Design notes
------------
- Tensors are plain values: they carry no autograd state. Provenance and
  gradients are recorded by the computation graph, keyed by handles.
- Binary arithmetic requires exact shape matches; there is no broadcasting.
- Textual rendering follows a fixed convention consumed by logging/CLI code:
  scalars render as the bare value, 2-D tensors as bracketed rows separated
  by newlines, and every other rank as one flat bracketed list.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np

from ...domain._errors import NotAScalarError, ShapeMismatchError
from ...domain._tensor import ITensor
from ._shape_and_indexing import TensorShapeAndIndexingMixin

Number = Union[int, float]


def _format_number(value: Any) -> str:
    # six significant digits, like a default C++ ostream
    return f"{float(value):g}"


class Tensor(TensorShapeAndIndexingMixin, ITensor):
    """
    Dense N-dimensional tensor backed by a flat NumPy buffer.

    Parameters
    ----------
    shape : Sequence[int]
        Tensor shape. An empty sequence denotes a scalar.
    values : Sequence[Number] or np.ndarray
        Flat, row-major element values. Multi-dimensional arrays are flattened.
    dtype : np.dtype, optional
        Element dtype. Defaults to np.float32.

    Raises
    ------
    ShapeMismatchError
        If the number of values differs from the product of `shape`.
    ValueError
        If a dimension size is negative.
    """

    def __init__(
        self,
        shape: Sequence[int],
        values: Union[Sequence[Number], np.ndarray],
        *,
        dtype: np.dtype = np.float32,
    ) -> None:
        shape = tuple(int(d) for d in shape)
        if any(d < 0 for d in shape):
            raise ValueError(f"Tensor dimensions must be non-negative, got {shape}")

        data = np.array(values, dtype=dtype).reshape(-1)
        element_count = int(np.prod(shape, dtype=np.int64))
        if data.size != element_count:
            raise ShapeMismatchError(
                "Number of values must equal the product of the shape",
                expected=element_count,
                actual=data.size,
            )

        self._shape = shape
        self._dtype = np.dtype(dtype)
        self._data = data

    @classmethod
    def scalar(cls, value: Number, *, dtype: np.dtype = np.float32) -> "Tensor":
        """
        Construct a 0-dimensional tensor holding `value`.
        """
        return cls((), [value], dtype=dtype)

    @classmethod
    def from_numpy(cls, arr: Any, *, dtype: np.dtype = np.float32) -> "Tensor":
        """
        Construct a tensor with the shape and values of an array-like.
        """
        arr = np.asarray(arr, dtype=dtype)
        return cls(arr.shape, arr, dtype=dtype)

    @staticmethod
    def zero_as(t: "Tensor") -> "Tensor":
        """
        Return a zero-filled tensor with the same shape and dtype as `t`.
        """
        return t.__class__(t.shape, np.zeros(t.element_count, dtype=t.dtype), dtype=t.dtype)

    @staticmethod
    def empty_as(t: "Tensor") -> "Tensor":
        """
        Return an uninitialized tensor with the same shape and dtype as `t`.

        Notes
        -----
        Element values are whatever the allocator returns; callers must write
        every element before reading.
        """
        return t.__class__(t.shape, np.empty(t.element_count, dtype=t.dtype), dtype=t.dtype)

    @staticmethod
    def check_shapes(first: "Tensor", second: "Tensor") -> bool:
        """
        Return True iff both tensors have the same rank and dimension sizes.
        """
        return first.n_dims == second.n_dims and tuple(first.shape) == tuple(second.shape)

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def n_dims(self) -> int:
        return len(self._shape)

    @property
    def element_count(self) -> int:
        return int(self._data.size)

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def values(self) -> np.ndarray:
        """
        Return the flat, row-major element buffer.

        Notes
        -----
        The returned array is the tensor's own storage, not a copy; in-place
        writes are visible through the tensor.
        """
        return self._data

    def to_numpy(self) -> np.ndarray:
        """
        Return a copy of the elements shaped as `self.shape`.
        """
        return self._data.reshape(self._shape).copy()

    def copy(self) -> "Tensor":
        return self.__class__(self._shape, self._data.copy(), dtype=self._dtype)

    def item(self) -> Number:
        """
        Return the sole element of a scalar tensor.

        Raises
        ------
        NotAScalarError
            If the tensor has one or more dimensions.
        """
        if self.n_dims != 0:
            raise NotAScalarError(self._shape)
        return self._data[0].item()

    def _require_same_shape(self, other: "Tensor", op: str) -> None:
        if not isinstance(other, Tensor):
            raise TypeError(f"{op} expects a Tensor, got {type(other).__name__}")
        if not Tensor.check_shapes(self, other):
            raise ShapeMismatchError(
                f"Shapes of tensors must be equal for {op}",
                expected=self._shape,
                actual=other.shape,
            )

    def __iadd__(self, other: "Tensor") -> "Tensor":
        """
        Add `other` elementwise into this tensor in place.

        Raises
        ------
        ShapeMismatchError
            If the shapes differ.
        """
        self._require_same_shape(other, "+=")
        self._data += other.values.astype(self._dtype, copy=False)
        return self

    def __add__(self, other: "Tensor") -> "Tensor":
        """
        Return the elementwise sum as a new tensor.

        Raises
        ------
        ShapeMismatchError
            If the shapes differ.
        """
        self._require_same_shape(other, "+")
        result = self.copy()
        result += other
        return result

    def __str__(self) -> str:
        data = self._data
        if self.n_dims == 0:
            return _format_number(data[0])
        if self.n_dims == 2:
            rows, cols = self._shape
            lines = []
            for i in range(rows):
                row = ", ".join(_format_number(v) for v in data[i * cols : (i + 1) * cols])
                lines.append(("[" if i == 0 else " ") + "[" + row + "]")
            if not lines:
                return "[]"
            return "\n".join(lines) + "]"
        return "[" + ", ".join(_format_number(v) for v in data) + "]"

    def __repr__(self) -> str:
        return f"Tensor(shape={self._shape}, dtype={self._dtype})"
