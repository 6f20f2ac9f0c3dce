from ._errors import (
    ShapeMismatchError,
    RankError,
    GradientShapeError,
    DTypeMismatchError,
    TapeOwnershipError,
    GradientsFrozenError,
    UnknownUpscaleMethodError,
)
from ._tape import ITapeHolder, IGradientTape, BackwardFn
from ._tensor import ITensor
from ._module import IModule
from ._function import Kernel

__all__ = [
    ShapeMismatchError.__name__,
    RankError.__name__,
    GradientShapeError.__name__,
    DTypeMismatchError.__name__,
    TapeOwnershipError.__name__,
    GradientsFrozenError.__name__,
    UnknownUpscaleMethodError.__name__,
    ITapeHolder.__name__,
    IGradientTape.__name__,
    "BackwardFn",
    ITensor.__name__,
    IModule.__name__,
    Kernel.__name__,
]
