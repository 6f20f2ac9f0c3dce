"""
Backward operation records.

A backward operation is represented as a small immutable record tagged with a
`BackwardKind` rather than as an opaque closure. Each record carries the
`TensorRef`s of its operand(s) and result plus whatever metadata it needs
to map the result's gradient back onto the operand's shape. Records are
callable, ``op(grads)``, and dispatch on their kind through a class-level
rule registry:

- ``BROADCAST_REDUCE`` : gradient of a sum/mean reduction, broadcast back
                         along the reduced axes and scaled
- ``ELEMENTWISE``      : gradient times a saved local derivative, summed back
                         to the operand shape when broadcasting happened
- ``SCATTER_GATHER``   : gradient of a gather-style forward (e.g. upscaling),
                         scattered back through a kernel's `backward`

Because records are plain data, a tape can be inspected with `describe()`
for debugging without executing anything.

Usage example
-------------
Registering a rule:

    @BackwardOp.register_rule(BackwardKind.ELEMENTWISE)
    def _elementwise(op, grads): ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, TypeVar

import numpy as np

from ..ops.broadcast_cpu import sum_to_shape
from ..ops.reduce_cpu import broadcast_add_backward
from ._gradients import Gradients, TensorRef

F = TypeVar("F", bound=Callable[..., None])


class BackwardKind(Enum):
    """Category of a backward operation."""

    BROADCAST_REDUCE = "broadcast_reduce"
    ELEMENTWISE = "elementwise"
    SCATTER_GATHER = "scatter_gather"


@dataclass(frozen=True, eq=False)
class BackwardOp:
    """
    One recorded backward operation.

    Attributes
    ----------
    kind : BackwardKind
        Category selecting the rule that executes this record.
    op_name : str
        Name of the forward operation (for inspection only).
    operand : TensorRef
        Tensor receiving the gradient.
    result : TensorRef
        Tensor whose gradient is read.
    axes : tuple[int, ...], optional
        ``BROADCAST_REDUCE``: axes that the forward pass reduced.
    scale : float, optional
        ``BROADCAST_REDUCE``: factor applied to the broadcast gradient.
    local : np.ndarray or float, optional
        ``ELEMENTWISE``: local derivative d(result)/d(operand), broadcastable
        against the result shape.
    kernel : Any, optional
        ``SCATTER_GATHER``: object exposing
        ``backward(grad_x, grad_out)`` that scatters the gradient.
    """

    RULES: ClassVar[Dict[BackwardKind, Callable[["BackwardOp", Gradients], None]]] = {}

    kind: BackwardKind
    op_name: str
    operand: TensorRef
    result: TensorRef
    axes: Tuple[int, ...] = ()
    scale: float = 1.0
    local: Optional[Any] = field(default=None, repr=False)
    kernel: Optional[Any] = None

    @classmethod
    def register_rule(cls, kind: BackwardKind, *, overwrite: bool = False) -> Callable[[F], F]:
        """
        Decorator registering the executor for `kind`.

        Parameters
        ----------
        kind : BackwardKind
            Kind handled by the decorated function.
        overwrite : bool, optional
            If False (default), raises if `kind` already has a rule.
        """

        def decorator(func: F) -> F:
            if not overwrite and kind in cls.RULES:
                raise ValueError(f"Backward rule already registered: {kind!r}")
            cls.RULES[kind] = func
            return func

        return decorator

    def __call__(self, grads: Gradients) -> None:
        try:
            rule = self.RULES[self.kind]
        except KeyError as e:
            raise NotImplementedError(f"No backward rule for {self.kind!r}") from e
        rule(self, grads)

    def describe(self) -> Dict[str, Any]:
        """Return a plain-data summary of this record."""
        out: Dict[str, Any] = {
            "kind": self.kind.value,
            "op": self.op_name,
            "operand": self.operand.id.value,
            "operand_shape": self.operand.shape,
            "result": self.result.id.value,
            "result_shape": self.result.shape,
        }
        if self.kind is BackwardKind.BROADCAST_REDUCE:
            out["axes"] = self.axes
            out["scale"] = self.scale
        if self.kernel is not None:
            out["kernel"] = getattr(self.kernel, "name", type(self.kernel).__name__)
        return out


@BackwardOp.register_rule(BackwardKind.BROADCAST_REDUCE)
def _broadcast_reduce(op: BackwardOp, grads: Gradients) -> None:
    grad_x, grad_out = grads.mut_and_ref(op.operand, op.result)
    broadcast_add_backward(grad_x, grad_out, op.axes, op.scale)


@BackwardOp.register_rule(BackwardKind.ELEMENTWISE)
def _elementwise(op: BackwardOp, grads: Gradients) -> None:
    grad_x, grad_out = grads.mut_and_ref(op.operand, op.result)
    contribution = grad_out if op.local is None else grad_out * op.local
    grad_x += sum_to_shape(np.asarray(contribution, dtype=grad_x.dtype), grad_x.shape)


@BackwardOp.register_rule(BackwardKind.SCATTER_GATHER)
def _scatter_gather(op: BackwardOp, grads: Gradients) -> None:
    grad_x, grad_out = grads.mut_and_ref(op.operand, op.result)
    op.kernel.backward(grad_x, grad_out)
