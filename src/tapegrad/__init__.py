"""
tapegrad: reverse-mode automatic differentiation over fixed-shape tensors.

Operations applied to a traced tensor record backward operations on a tape
that moves from each operand to each result; `Tensor.backward` replays the
tape in reverse into a `Gradients` store keyed by tensor identity.

    >>> t = Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    >>> grads = t.trace().sum_last_dim().mean().backward()
    >>> grads.ref_gradient(t)
    array([[0.5, 0.5, 0.5],
           [0.5, 0.5, 0.5]], dtype=float32)
"""

from .domain import (
    ShapeMismatchError,
    RankError,
    GradientShapeError,
    DTypeMismatchError,
    TapeOwnershipError,
    GradientsFrozenError,
    UnknownUpscaleMethodError,
)
from .infrastructure._config import Settings, get_settings, reload_settings
from .infrastructure._logging import configure_logging
from .infrastructure._module import Module
from .infrastructure.tensor import (
    TensorId,
    Gradients,
    TensorRef,
    GradientTape,
    NoTape,
    WithTape,
    BackwardKind,
    BackwardOp,
    Tensor,
    tensor0d,
    tensor1d,
    tensor2d,
    tensor3d,
    tensor4d,
    zeros,
    ones,
)
from .infrastructure.upscale import (
    UpscaleMethod,
    NearestNeighbor,
    Bilinear,
    Upscale2D,
    Upscale2DBy,
)

__version__ = "0.1.0"
