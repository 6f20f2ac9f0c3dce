"""
NumPy implementation of Tensor.log via control-path dispatch.

Backward rule:
    d(log(x))/dx = 1 / x
Non-positive inputs follow NumPy semantics (``-inf`` / ``nan``) in the
forward pass; no error is raised.
"""

import numpy as np

from .....domain._tensor import ITensor
from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import move_tape_and_add_backward_op
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager

from ._base import TensorMixinUnary as TMU


@tensor_control_path_manager(TMU, TMU.log, NUMPY_BACKEND)
def tensor_log_numpy(self: ITensor) -> "ITensor":
    """
    NumPy control path for the elementwise natural logarithm (Tensor.log).

    The local derivative ``1 / x`` is only computed when `self` is traced.
    """
    Tensor = type(self)
    x_data = self.data
    with np.errstate(divide="ignore", invalid="ignore"):
        out = np.log(x_data).astype(self.dtype, copy=False)
    result = Tensor._wrap(out, dtype=self.dtype)

    def make_op(x, r):
        with np.errstate(divide="ignore"):
            local = (1.0 / x_data).astype(x_data.dtype, copy=False)
        return BackwardOp(BackwardKind.ELEMENTWISE, "log", x, r, local=local)

    return move_tape_and_add_backward_op(self, result, make_op)
