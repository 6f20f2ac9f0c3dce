"""
Spatial mixins and backend implementations for Tensor operations.

- ``upscale2d``    : resample to a fixed ``(OH, OW)``
- ``upscale2d_by`` : resample by integer factors
"""

from ._tensor_upscale2d import *
from ._base import TensorMixinSpatial

__all__ = [
    TensorMixinSpatial.__name__,
]
