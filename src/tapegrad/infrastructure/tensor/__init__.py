from ._tensor_id import TensorId
from ._gradients import Gradients, TensorRef
from ._gradient_tape import GradientTape
from ._tape_holders import NoTape, WithTape, TapeHolder, merge_holders
from ._backward_ops import BackwardKind, BackwardOp
from ._tape_transfer import (
    move_tape_and_add_backward_op,
    merge_tapes_and_add_backward_ops,
)
from ._tensor import Tensor
from ._factories import tensor0d, tensor1d, tensor2d, tensor3d, tensor4d, zeros, ones

__all__ = [
    TensorId.__name__,
    Gradients.__name__,
    TensorRef.__name__,
    GradientTape.__name__,
    NoTape.__name__,
    WithTape.__name__,
    "TapeHolder",
    merge_holders.__name__,
    BackwardKind.__name__,
    BackwardOp.__name__,
    move_tape_and_add_backward_op.__name__,
    merge_tapes_and_add_backward_ops.__name__,
    Tensor.__name__,
    tensor0d.__name__,
    tensor1d.__name__,
    tensor2d.__name__,
    tensor3d.__name__,
    tensor4d.__name__,
    zeros.__name__,
    ones.__name__,
]
