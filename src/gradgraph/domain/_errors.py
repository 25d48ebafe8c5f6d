"""
Tensor and graph exceptions for gradgraph.

This module defines the error taxonomy raised by the tensor, operation and
graph layers. Every error derives from `GradGraphError` and from the closest
built-in exception, so callers can catch either the framework-specific type
or the conventional Python one (e.g. `ValueError`, `IndexError`).

All errors are raised eagerly at the violating call. The core never retries
and never commits a partial graph mutation before raising.
"""

from typing import Sequence


class GradGraphError(Exception):
    """
    Base class for all gradgraph errors.
    """


class ShapeMismatchError(GradGraphError, ValueError):
    """
    Raised when two shapes (or a shape and a value count) must match but do not.

    Typical sources are tensor construction with the wrong number of values,
    `+` / `+=` between tensors of different shapes, and `Engine.multiply`.

    Attributes
    ----------
    expected : object
        The shape (or element count) that was required.
    actual : object
        The shape (or element count) that was received.
    """

    def __init__(self, message: str, expected: object, actual: object) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        message : str
            Human-readable description of the failing operation.
        expected : object
            The shape or element count the operation required.
        actual : object
            The shape or element count it received.
        """
        super().__init__(f"{message} (expected {expected}, got {actual})")
        self.expected = expected
        self.actual = actual


class DimensionMismatchError(GradGraphError, ValueError):
    """
    Raised when two tensors cannot be contracted by `dot`.

    Contraction requires the left operand to have at least as many dimensions
    as the right one, and the trailing dimensions of the left shape to equal
    the right shape.

    Attributes
    ----------
    left : tuple[int, ...]
        Shape of the left operand.
    right : tuple[int, ...]
        Shape of the right operand.
    """

    def __init__(self, message: str, left: Sequence[int], right: Sequence[int]) -> None:
        super().__init__(f"{message} (left shape {tuple(left)}, right shape {tuple(right)})")
        self.left = tuple(left)
        self.right = tuple(right)


class IndexOutOfBoundsError(GradGraphError, IndexError):
    """
    Raised when an index has the wrong arity or a coordinate is out of range.

    Attributes
    ----------
    index : tuple[int, ...]
        The offending index.
    shape : tuple[int, ...]
        Shape of the indexed tensor.
    """

    def __init__(self, index: Sequence[int], shape: Sequence[int]) -> None:
        super().__init__(
            f"Index {tuple(index)} is invalid for tensor of shape {tuple(shape)}."
        )
        self.index = tuple(index)
        self.shape = tuple(shape)


class NotAScalarError(GradGraphError, ValueError):
    """
    Raised when `item()` is called on a tensor with one or more dimensions.
    """

    def __init__(self, shape: Sequence[int]) -> None:
        super().__init__(
            f"item() is only available for scalars; tensor has shape {tuple(shape)} "
            f"(n_dims={len(shape)})."
        )
        self.shape = tuple(shape)


class GraphLookupError(GradGraphError, LookupError):
    """
    Raised when a handle does not belong to the graph it is used with.

    This signals API misuse (a handle from another engine, or a fabricated
    node id), not bad input data.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
