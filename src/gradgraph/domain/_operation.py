"""
Differentiable operation interface definitions.

This module defines the abstract base class for operations recorded in the
computation graph. Concrete subclasses implement the forward computation and
the local derivative with respect to their single input.

Unlike function-level autograd systems that receive the upstream gradient,
an `Operation` here only computes the *local* derivative evaluated at the
input. Binary operations are expressed as two unary operations, each one
capturing the *other* operand at construction time. The graph is responsible
for combining local derivatives with the downstream gradient.
"""

from abc import ABC, abstractmethod

from ._tensor import ITensor


class Operation(ABC):
    """
    Abstract base class for differentiable operations.

    Notes
    -----
    - Both methods take the tensor that the operation consumed on the forward
      pass and return a freshly allocated tensor. Neither mutates its input.
    - Operations do not validate operand shapes; builders (e.g. `Engine`)
      validate before constructing an operation.
    """

    @abstractmethod
    def forward(self, x: ITensor) -> ITensor:
        """
        Perform the forward computation.

        Parameters
        ----------
        x : ITensor
            Input tensor.

        Returns
        -------
        ITensor
            The output tensor.
        """
        ...

    @abstractmethod
    def backward(self, x: ITensor) -> ITensor:
        """
        Compute the local derivative of the output with respect to `x`.

        Parameters
        ----------
        x : ITensor
            The same input tensor that was passed to `forward`.

        Returns
        -------
        ITensor
            Local derivative, shaped like `x`.
        """
        ...
