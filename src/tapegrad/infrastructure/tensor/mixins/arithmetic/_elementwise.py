"""
Shared forward/backward wiring for binary elementwise operations.

Each arithmetic operation supplies its forward function and the local
derivatives with respect to each operand; this module handles operand
coercion, dtype/shape validation and tape movement.

A real scalar operand is a constant: it gets no tensor, no id and no
backward record.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Callable, Optional

import numpy as np

from .....domain._errors import DTypeMismatchError
from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import (
    merge_tapes_and_add_backward_ops,
    move_tape_and_add_backward_op,
)
from ....ops.broadcast_cpu import broadcast_result_shape

Local = Optional[Callable[[Any, Any], Any]]
"""``local(a, b) -> d(out)/d(operand)``; None means the identity."""


def binary_elementwise(
    self,
    other: Any,
    op_name: str,
    forward: Callable[[Any, Any], Any],
    d_lhs: Local,
    d_rhs: Local,
    *,
    reflected: bool = False,
):
    """
    Apply a binary elementwise operation and record its backward.

    Parameters
    ----------
    self : Tensor
        Tensor operand.
    other : Tensor or Real
        Second operand.
    op_name : str
        Operation name used in errors and backward records.
    forward : Callable
        ``forward(a, b)`` on NumPy buffers / scalars.
    d_lhs, d_rhs : Callable or None
        Local derivatives with respect to the left and right operands.
    reflected : bool, optional
        If True, `self` is the right operand (``other <op> self``).
        Only supported for scalar `other`.
    """
    Tensor = type(self)

    if isinstance(other, Tensor):
        if other.dtype != self.dtype:
            raise DTypeMismatchError(self.dtype, other.dtype, op=op_name)
        lhs, rhs = (other, self) if reflected else (self, other)
        broadcast_result_shape(lhs.shape, rhs.shape, op_name)
        a, b = lhs.data, rhs.data
        result = Tensor._wrap(
            np.asarray(forward(a, b)).astype(self.dtype, copy=False), dtype=self.dtype
        )

        def make_ops(lhs_ref, rhs_ref, res_ref):
            yield BackwardOp(
                BackwardKind.ELEMENTWISE,
                op_name,
                lhs_ref,
                res_ref,
                local=None if d_lhs is None else d_lhs(a, b),
            )
            yield BackwardOp(
                BackwardKind.ELEMENTWISE,
                op_name,
                rhs_ref,
                res_ref,
                local=None if d_rhs is None else d_rhs(a, b),
            )

        return merge_tapes_and_add_backward_ops(lhs, rhs, result, make_ops)

    if isinstance(other, Real):
        scalar = self.dtype.type(other)
        a, b = (scalar, self.data) if reflected else (self.data, scalar)
        result = Tensor._wrap(
            np.asarray(forward(a, b)).astype(self.dtype, copy=False), dtype=self.dtype
        )
        d_self = d_rhs if reflected else d_lhs

        def make_op(x_ref, res_ref):
            return BackwardOp(
                BackwardKind.ELEMENTWISE,
                op_name,
                x_ref,
                res_ref,
                local=None if d_self is None else d_self(a, b),
            )

        return move_tape_and_add_backward_op(self, result, make_op)

    return NotImplemented
