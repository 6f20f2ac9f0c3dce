"""
NumPy implementation of Tensor.__neg__ via control-path dispatch.
"""

import numpy as np

from .....domain._tensor import ITensor
from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import move_tape_and_add_backward_op
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager

from ._base import TensorMixinUnary as TMU


@tensor_control_path_manager(TMU, TMU.__neg__, NUMPY_BACKEND)
def tensor_neg_numpy(self: ITensor) -> "ITensor":
    """
    NumPy control path for unary negation (``-tensor``).

    Returns a tensor of the same shape and dtype holding `-self`. The
    backward record scales the result gradient by the constant ``-1``.
    """
    Tensor = type(self)
    result = Tensor._wrap(np.negative(self.data), dtype=self.dtype)
    return move_tape_and_add_backward_op(
        self,
        result,
        lambda x, r: BackwardOp(BackwardKind.ELEMENTWISE, "neg", x, r, local=-1.0),
    )
