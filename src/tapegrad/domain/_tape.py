"""
Tape interface definitions.

A *tape holder* is attached to every tensor and decides whether operations
applied to that tensor are recorded for differentiation. There are exactly
two implementations in the infrastructure layer:

- `NoTape`   : drops every operation, allocates nothing
- `WithTape` : owns a `GradientTape` and appends every operation to it

A *backward operation* is any one-shot callable that receives the
`Gradients` store of the running backward pass and accumulates the gradient
of its operands from the (already populated) gradient of its result.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

BackwardFn = Callable[[Any], None]
"""Signature of a backward operation: ``fn(grads) -> None``."""


@runtime_checkable
class IGradientTape(Protocol):
    """
    Ordered record of backward operations.

    Notes
    -----
    - Operations are appended in forward order and executed in reverse.
    - Executing a tape consumes it; afterwards it holds no entries.
    """

    def add_operation(self, operation: BackwardFn) -> None: ...

    def execute(self, grads: Any) -> Any: ...

    def __len__(self) -> int: ...


@runtime_checkable
class ITapeHolder(Protocol):
    """
    Strategy deciding whether an operation participates in differentiation.

    This protocol cannot fail: `add_operation` is pure bookkeeping.
    """

    @property
    def is_recording(self) -> bool:
        """Return True if operations added to this holder are kept."""
        ...

    def add_operation(self, operation: BackwardFn) -> None:
        """
        Record (or drop) a backward operation.

        Parameters
        ----------
        operation : BackwardFn
            One-shot callable executed during the backward pass.
        """
        ...
