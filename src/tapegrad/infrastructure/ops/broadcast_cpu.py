"""
CPU reference implementation of sum-to-shape (NumPy backend).

`sum_to_shape` is the inverse of NumPy broadcasting: it reduces an array that
was produced by broadcasting a smaller operand back to that operand's shape.
It is what the backward pass of every broadcasting binary operation needs.
"""

from __future__ import annotations

import numpy as np

from ...domain._errors import ShapeMismatchError


def sum_to_shape_reduce_axes(
    src_shape: tuple[int, ...], tgt_shape: tuple[int, ...]
) -> tuple[tuple[int, ...], int]:
    """
    Compute the axes to reduce so that `src_shape` collapses to `tgt_shape`.

    Parameters
    ----------
    src_shape : tuple[int, ...]
        Shape after broadcasting.
    tgt_shape : tuple[int, ...]
        Shape before broadcasting.

    Returns
    -------
    tuple[tuple[int, ...], int]
        ``(reduce_axes, pad)`` where `pad` is the number of leading axes
        that broadcasting prepended.

    Raises
    ------
    ShapeMismatchError
        If `tgt_shape` could not have been broadcast to `src_shape`.
    """
    if len(tgt_shape) > len(src_shape):
        raise ShapeMismatchError(tgt_shape, src_shape, op="sum_to_shape")
    pad = len(src_shape) - len(tgt_shape)
    padded = (1,) * pad + tuple(tgt_shape)
    axes = []
    for i, (s, t) in enumerate(zip(src_shape, padded)):
        if t == s:
            continue
        if t != 1:
            raise ShapeMismatchError(tgt_shape, src_shape, op="sum_to_shape")
        axes.append(i)
    return tuple(range(pad)) + tuple(a for a in axes if a >= pad), pad


def sum_to_shape(x: np.ndarray, shape: tuple[int, ...]) -> np.ndarray:
    """
    Sum `x` over its broadcast axes so that the result has `shape`.

    Returns `x` itself when no reduction is needed.
    """
    x = np.asarray(x)
    shape = tuple(int(d) for d in shape)
    if x.shape == shape:
        return x
    axes, pad = sum_to_shape_reduce_axes(x.shape, shape)
    out = np.sum(x, axis=axes, keepdims=True)
    if pad:
        out = out.reshape(out.shape[pad:])
    return out.reshape(shape)


def broadcast_result_shape(a: tuple[int, ...], b: tuple[int, ...], op: str) -> tuple[int, ...]:
    """
    Return the broadcast shape of two operands.

    Raises
    ------
    ShapeMismatchError
        If the shapes do not broadcast.
    """
    try:
        return tuple(np.broadcast_shapes(a, b))
    except ValueError:
        raise ShapeMismatchError(a, b, op=op) from None
