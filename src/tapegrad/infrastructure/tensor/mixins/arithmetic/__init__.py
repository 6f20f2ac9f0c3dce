"""
Arithmetic mixins and backend implementations for Tensor operations.

- ``+``, ``-``, ``*``, ``/`` with tensor or real-scalar operands
- reflected variants for scalar left operands

Implementation modules are imported for their side effect of registering
control paths.
"""

from ._tensor_arithmetic import *
from ._base import TensorMixinArithmetic

__all__ = [
    TensorMixinArithmetic.__name__,
]
