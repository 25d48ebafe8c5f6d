"""
Concrete differentiable operations (NumPy backend).

This module contains the infrastructure-level implementations of the
operations the engine can record:

- `ExpFn`: elementwise exponential
- `MultiplyFn`: elementwise product with a captured operand
- `DotFn`: trailing-aligned sum-of-products contraction with a captured operand

Each operation implements `forward(x)` and `backward(x)`, where `backward`
returns the *local* derivative evaluated at the forward input. A binary
product `a * b` is recorded as two operations: one capturing `b` (used for the
forward value and for the derivative with respect to `a`) and one capturing
`a` (for the derivative with respect to `b`).

Notes
-----
- Operations never validate shapes. `Engine.multiply` and `Engine.dot`
  validate operands before building operations.
- All results are freshly allocated tensors.
"""

import numpy as np

from ..domain._operation import Operation
from .tensor import Tensor


class ExpFn(Operation):
    """
    Elementwise exponential.

    Implements:

        out = exp(x)

    Backward:

        d(exp(x))/dx = exp(x)
    """

    def forward(self, x: Tensor) -> Tensor:
        return Tensor(x.shape, np.exp(x.values), dtype=x.dtype)

    def backward(self, x: Tensor) -> Tensor:
        return Tensor(x.shape, np.exp(x.values), dtype=x.dtype)

    def __repr__(self) -> str:
        return "ExpFn()"


class MultiplyFn(Operation):
    """
    Elementwise multiplication by a fixed operand.

    Implements:

        out = x * operand

    Backward:

        d(x * operand)/dx = operand

    Parameters
    ----------
    operand : Tensor
        The other factor. Must have the same shape as every `x` passed in.
    """

    def __init__(self, operand: Tensor) -> None:
        self.operand = operand

    def forward(self, x: Tensor) -> Tensor:
        return Tensor(x.shape, x.values * self.operand.values, dtype=x.dtype)

    def backward(self, x: Tensor) -> Tensor:
        return Tensor(x.shape, self.operand.values.copy(), dtype=x.dtype)

    def __repr__(self) -> str:
        return f"MultiplyFn(operand={self.operand!r})"


class DotFn(Operation):
    """
    Sum-of-products contraction with a fixed operand.

    Implements:

        out = sum(x * operand)

    where the lower-rank tensor is aligned with the trailing dimensions of the
    higher-rank one and repeated across its leading dimensions. The output is
    always a 0-dimensional tensor.

    Backward:

        d(out)/dx = operand, broadcast to the shape of x

    When `x` is the lower-rank side of the contraction, each element of `x`
    meets one element of every leading block of `operand`, so the derivative
    is `operand` summed over its leading dimensions. For equal shapes both
    cases reduce to `operand` itself.

    Parameters
    ----------
    operand : Tensor
        The other side of the contraction.
    """

    def __init__(self, operand: Tensor) -> None:
        self.operand = operand

    def forward(self, x: Tensor) -> Tensor:
        total = np.sum(x.to_numpy() * self.operand.to_numpy())
        return Tensor.scalar(total, dtype=x.dtype)

    def backward(self, x: Tensor) -> Tensor:
        other = self.operand.to_numpy()
        if x.n_dims >= self.operand.n_dims:
            local = np.broadcast_to(other, x.shape)
        else:
            local = other.reshape((-1,) + tuple(x.shape)).sum(axis=0)
        return Tensor(x.shape, local, dtype=x.dtype)

    def __repr__(self) -> str:
        return f"DotFn(operand={self.operand!r})"
