"""
Unary mixins and backend implementations for Tensor operations.

- ``exp``     : elementwise exponential
- ``log``     : elementwise natural logarithm
- ``__neg__`` : elementwise negation (unary minus)

Implementation modules are imported for their side effect of registering
control paths.
"""

from ._tensor_exp import *
from ._tensor_log import *
from ._tensor_neg import *
from ._base import TensorMixinUnary

__all__ = [
    TensorMixinUnary.__name__,
]
