"""
gradgraph: a minimal reverse-mode automatic-differentiation engine.

Build leaf tensors through an `Engine`, combine them with `multiply`, `dot`
and `exp`, then call `backward` on an output and read `gradient` on any
upstream tensor.
"""

import logging

from .domain._errors import (
    DimensionMismatchError,
    GradGraphError,
    GraphLookupError,
    IndexOutOfBoundsError,
    NotAScalarError,
    ShapeMismatchError,
)
from .domain._operation import Operation
from .domain._tensor import ITensor
from .infrastructure._config import EngineConfig
from .infrastructure._engine import Engine
from .infrastructure._operations import DotFn, ExpFn, MultiplyFn
from .infrastructure.graph import ComputationGraph, OperationEdge, TensorHandle, ValueNode
from .infrastructure.tensor import Tensor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ComputationGraph",
    "DimensionMismatchError",
    "DotFn",
    "Engine",
    "EngineConfig",
    "ExpFn",
    "GradGraphError",
    "GraphLookupError",
    "ITensor",
    "IndexOutOfBoundsError",
    "MultiplyFn",
    "NotAScalarError",
    "Operation",
    "OperationEdge",
    "ShapeMismatchError",
    "Tensor",
    "TensorHandle",
    "ValueNode",
]
