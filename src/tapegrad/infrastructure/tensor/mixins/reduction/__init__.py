"""
Reduction mixins and backend implementations for Tensor operations.

- ``sum_last_dim`` : sum over the last axis
- ``sum``          : sum over every axis
- ``mean``         : arithmetic mean over every axis

The implementation modules are imported for their side effect of
registering control paths. Only the mixin is public.
"""

from ._tensor_sum_last_dim import *
from ._tensor_sum import *
from ._tensor_mean import *
from ._base import TensorMixinReduction

__all__ = [
    TensorMixinReduction.__name__,
]
