"""
NumPy-backed tensor implementation.

The concrete `Tensor` is assembled from a core class and cohesive mixins
(currently `TensorShapeAndIndexingMixin`). Only `Tensor` is part of the
public interface.
"""

from ._tensor import Tensor

__all__ = [Tensor.__name__]
