"""
Tape ownership transfer for differentiable operations.

Every differentiable operation follows the same protocol:

1. compute the forward value from the operand buffers only;
2. wrap it in a result tensor with a fresh id and a `NoTape` holder;
3. move the operand's holder onto the result (for binary operations, merge
   the holders of both operands);
4. if that holder records, register the backward operation(s), which capture
   the operand and result `TensorRef`s plus any metadata.

The helpers below implement steps 3-4. Backward operations are built through
a factory that is only invoked when the holder records, so a forward pass on
`NoTape` tensors constructs nothing.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from ...domain._tape import BackwardFn
from ._gradients import TensorRef
from ._tape_holders import merge_holders

T = TypeVar("T")


def move_tape_and_add_backward_op(
    t, result: T, make_op: Callable[[TensorRef, TensorRef], BackwardFn]
) -> T:
    """
    Move the holder of `t` onto `result` and record one backward operation.

    Parameters
    ----------
    t : Tensor
        Operand. Its holder is taken; afterwards it holds `NoTape`.
    result : Tensor
        Freshly created result (holding `NoTape`).
    make_op : Callable[[TensorRef, TensorRef], BackwardFn]
        Factory ``make_op(operand_ref, result_ref)``.

    Returns
    -------
    Tensor
        `result`, now owning the operand's holder.
    """
    holder = t.take_tape()
    if holder.is_recording:
        holder.add_operation(make_op(t.ref(), result.ref()))
    return result.put_tape(holder)


def merge_tapes_and_add_backward_ops(
    lhs,
    rhs,
    result: T,
    make_ops: Callable[[TensorRef, TensorRef, TensorRef], Iterable[BackwardFn]],
) -> T:
    """
    Merge the holders of both operands onto `result` and record the backward
    operations of a binary operation.

    Parameters
    ----------
    lhs, rhs : Tensor
        Operands. Both holders are taken.
    result : Tensor
        Freshly created result.
    make_ops : Callable
        Factory ``make_ops(lhs_ref, rhs_ref, result_ref)`` yielding one
        backward operation per operand.
    """
    holder = merge_holders(lhs.take_tape(), rhs.take_tape())
    if holder.is_recording:
        for op in make_ops(lhs.ref(), rhs.ref(), result.ref()):
            holder.add_operation(op)
    return result.put_tape(holder)
