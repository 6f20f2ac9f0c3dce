"""
NumPy implementation of Tensor.sum_last_dim using control-path dispatch.
"""

from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import move_tape_and_add_backward_op
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager
from ....ops.reduce_cpu import sum_last_dim_forward

from ._base import TensorMixinReduction as TMR


@tensor_control_path_manager(TMR, TMR.sum_last_dim, NUMPY_BACKEND)
def tensor_sum_last_dim_numpy(self):
    """
    NumPy implementation of Tensor.sum_last_dim.

    The forward value is computed from the input buffer only. If the input
    carries a live tape, the tape moves onto the result together with a
    broadcast-reduce record over the last axis (no axis for rank 0, where the
    backward is the identity).
    """
    Tensor = type(self)
    result = Tensor._wrap(sum_last_dim_forward(self.data), dtype=self.dtype)
    axes = (self.ndim - 1,) if self.ndim else ()
    return move_tape_and_add_backward_op(
        self,
        result,
        lambda x, r: BackwardOp(
            BackwardKind.BROADCAST_REDUCE, "sum_last_dim", x, r, axes=axes
        ),
    )
