"""
Tape holders.

Every tensor carries exactly one tape holder, which decides whether
operations applied to the tensor are recorded:

- `NoTape`   : zero-size marker. `add_operation` drops the operation
               unexecuted, so forward passes without gradients pay no
               bookkeeping cost.
- `WithTape` : exclusively owns one `GradientTape` and appends every
               operation to it in call order.

Holders are moved between tensors (see `Tensor.take_tape`), never copied.
"""

from __future__ import annotations

from typing import Union

from typing_extensions import TypeVar

from ...domain._tape import BackwardFn
from ._gradient_tape import GradientTape


class NoTape:
    """
    Tape holder that records nothing.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "NoTape()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoTape)

    def __hash__(self) -> int:
        return hash(NoTape)

    @property
    def is_recording(self) -> bool:
        return False

    def add_operation(self, operation: BackwardFn) -> None:
        pass


class WithTape:
    """
    Tape holder owning a live `GradientTape`.

    Parameters
    ----------
    tape : GradientTape, optional
        Tape to own. A fresh empty tape is allocated when omitted.
    """

    __slots__ = ("_tape",)

    def __init__(self, tape: GradientTape | None = None) -> None:
        self._tape = tape if tape is not None else GradientTape()

    def __repr__(self) -> str:
        return f"WithTape({self._tape!r})"

    @property
    def is_recording(self) -> bool:
        return True

    @property
    def tape(self) -> GradientTape:
        return self._tape

    def add_operation(self, operation: BackwardFn) -> None:
        self._tape.add_operation(operation)

    def merge(self, other: "TapeHolder") -> "WithTape":
        """
        Absorb the entries of another holder into this one.

        Merging with `NoTape` is a no-op. Returns self.
        """
        if isinstance(other, WithTape):
            self._tape.merge(other._tape)
        return self


TapeHolder = Union[NoTape, WithTape]

H = TypeVar("H", NoTape, WithTape, default=NoTape)
"""Tape-holder type parameter of `Tensor`."""


def merge_holders(a: TapeHolder, b: TapeHolder) -> TapeHolder:
    """
    Combine the holders of two operands into the holder of their result.

    The result records if either operand did.
    """
    if isinstance(a, WithTape):
        return a.merge(b)
    if isinstance(b, WithTape):
        return b
    return NoTape()
