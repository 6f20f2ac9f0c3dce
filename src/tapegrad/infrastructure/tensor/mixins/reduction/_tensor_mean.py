"""
NumPy implementation of Tensor.mean using control-path dispatch.

The mean is recorded as its own broadcast-reduce operation with a ``1/n``
scale; it does not reuse the sum record, so composing ``sum_last_dim`` and
``mean`` yields two independent backward records.
"""

import numpy as np

from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import move_tape_and_add_backward_op
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager

from ._base import TensorMixinReduction as TMR


@tensor_control_path_manager(TMR, TMR.mean, NUMPY_BACKEND)
def tensor_mean_numpy(self):
    """
    Arithmetic mean of all elements.

    Notes
    -----
    - ``numel == 1`` (including rank 0) makes the mean an identity.
    - An empty tensor has no mean; NumPy's nan result is propagated with
      a zero backward scale.
    """
    Tensor = type(self)
    n = self.numel()
    value = np.mean(self.data) if n else np.nan
    result = Tensor._wrap(np.asarray(value, dtype=self.dtype), dtype=self.dtype)
    axes = tuple(range(self.ndim))
    scale = 1.0 / n if n else 0.0
    return move_tape_and_add_backward_op(
        self,
        result,
        lambda x, r: BackwardOp(
            BackwardKind.BROADCAST_REDUCE, "mean", x, r, axes=axes, scale=scale
        ),
    )
