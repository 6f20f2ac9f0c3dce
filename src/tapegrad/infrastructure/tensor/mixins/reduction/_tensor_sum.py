"""
NumPy implementation of Tensor.sum using control-path dispatch.
"""

from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import move_tape_and_add_backward_op
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager
from ....ops.reduce_cpu import sum_all_forward

from ._base import TensorMixinReduction as TMR


@tensor_control_path_manager(TMR, TMR.sum, NUMPY_BACKEND)
def tensor_sum_numpy(self):
    """
    Full reduction to a rank-0 tensor. Backward broadcasts the scalar
    gradient to every input element.
    """
    Tensor = type(self)
    result = Tensor._wrap(sum_all_forward(self.data), dtype=self.dtype)
    axes = tuple(range(self.ndim))
    return move_tape_and_add_backward_op(
        self,
        result,
        lambda x, r: BackwardOp(BackwardKind.BROADCAST_REDUCE, "sum", x, r, axes=axes),
    )
