"""
NumPy implementation of Tensor.exp via control-path dispatch.

Backward rule:
    d(exp(x))/dx = exp(x)
The forward output buffer is reused as the local derivative.
"""

import numpy as np

from .....domain._tensor import ITensor
from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import move_tape_and_add_backward_op
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager

from ._base import TensorMixinUnary as TMU


@tensor_control_path_manager(TMU, TMU.exp, NUMPY_BACKEND)
def tensor_exp_numpy(self: ITensor) -> "ITensor":
    """
    NumPy control path for elementwise exponential (Tensor.exp).

    Parameters
    ----------
    self : ITensor
        Input tensor.

    Returns
    -------
    ITensor
        A tensor of the same shape and dtype as `self` containing
        `exp(self)` elementwise. It takes over the tape holder of `self`.

    Notes
    -----
    The read-only result buffer doubles as the local derivative stored in
    the elementwise backward record, so nothing is recomputed on replay.
    """
    Tensor = type(self)
    out = np.exp(self.data).astype(self.dtype, copy=False)
    result = Tensor._wrap(out, dtype=self.dtype)
    return move_tape_and_add_backward_op(
        self,
        result,
        lambda x, r: BackwardOp(BackwardKind.ELEMENTWISE, "exp", x, r, local=result.data),
    )
