"""
Shape-, dtype- and tape-related exceptions for tapegrad.

This module defines the small error taxonomy of the tape/gradient engine.
Almost every failure is structural: an operation was given operands whose
shapes or element types disagree, or a tape/gradient store was used outside
of its lifecycle. These are programmer errors and are raised immediately at
the call site that caused them; nothing in the engine retries or swallows
them.

A missing gradient is deliberately *not* an error. See
`Gradients.ref_gradient`.
"""

from typing import Any, Optional


class ShapeMismatchError(ValueError):
    """
    Raised when an operation receives a tensor whose shape disagrees with
    the shape the operation requires.

    Attributes
    ----------
    expected : Any
        The shape (or shape description) the operation required.
    got : Any
        The shape that was actually supplied.
    op : str, optional
        Name of the operation that detected the mismatch.
    """

    def __init__(self, expected: Any, got: Any, op: Optional[str] = None) -> None:
        where = f"{op}: " if op else ""
        super().__init__(f"{where}shape mismatch, expected {expected}, got {got}.")
        self.expected = expected
        self.got = got
        self.op = op


class RankError(ShapeMismatchError):
    """
    Raised when a tensor is constructed with a rank outside the supported
    range (0..4).
    """

    def __init__(self, rank: int, op: Optional[str] = None) -> None:
        super().__init__("rank in 0..4", f"rank {rank}", op)
        self.rank = rank


class GradientShapeError(ShapeMismatchError):
    """
    Raised when a gradient buffer already exists for a tensor id but its
    shape differs from the shape requested by a backward operation.

    Gradient buffers are never silently resized.
    """


class DTypeMismatchError(TypeError):
    """
    Raised when two tensor operands of a binary operation carry different
    element types.
    """

    def __init__(self, dtype_a: Any, dtype_b: Any, op: Optional[str] = None) -> None:
        where = f"{op}: " if op else ""
        super().__init__(f"{where}dtype mismatch: '{dtype_a}' vs '{dtype_b}'.")
        self.dtype_a = dtype_a
        self.dtype_b = dtype_b
        self.op = op


class TapeOwnershipError(RuntimeError):
    """
    Raised when a tensor that already owns a live tape is traced again.

    Re-tracing would replace the live tape with an empty one and the
    recorded operations would be lost.
    """


class GradientsFrozenError(RuntimeError):
    """
    Raised when a `Gradients` store is mutated after the backward pass that
    produced it has finished.
    """


class UnknownUpscaleMethodError(ValueError):
    """
    Raised when an interpolation method is requested by a name that has not
    been registered.
    """

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        listed = ", ".join(available) or "<none>"
        super().__init__(
            f"Unsupported upscale method: {name!r}. Available: {listed}"
        )
        self.name = name
        self.available = available
