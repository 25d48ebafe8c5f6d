"""
Engine configuration.
"""

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class EngineConfig:
    """
    Settings applied by an `Engine` to the tensors it creates.

    Attributes
    ----------
    dtype : np.dtype
        Element dtype for tensors built from Python numbers or sequences.
        Defaults to np.float32. Floating tensors passed in already
        constructed keep their own dtype; other tensors are cast to this one.
    """

    dtype: np.dtype = field(default=np.dtype(np.float32))

    def __post_init__(self) -> None:
        dtype = np.dtype(self.dtype)
        if dtype.kind != "f":
            raise ValueError(f"EngineConfig.dtype must be a real floating dtype, got {dtype}")
        object.__setattr__(self, "dtype", dtype)
