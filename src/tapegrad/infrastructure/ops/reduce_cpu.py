"""
CPU reference implementations for sum reductions (NumPy backend).

Forward kernels reduce by summation; backward kernels are broadcast-adds:
every input element that contributed to a reduced output position receives
that position's gradient, added into the input's accumulator. No
normalization happens here; a mean is a sum followed by a scale.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def sum_last_dim_forward(x: np.ndarray) -> np.ndarray:
    """
    Sum over the last axis.

    A rank-0 input has no axis left to reduce and is returned unchanged
    (as a copy).
    """
    x = np.asarray(x)
    if x.ndim == 0:
        return x.copy()
    return np.sum(x, axis=-1).astype(x.dtype, copy=False)


def sum_all_forward(x: np.ndarray) -> np.ndarray:
    """Sum every element into a rank-0 array."""
    x = np.asarray(x)
    return np.asarray(np.sum(x), dtype=x.dtype)


def broadcast_add_backward(
    grad_x: np.ndarray,
    grad_out: np.ndarray,
    axes: Sequence[int],
    scale: float = 1.0,
) -> None:
    """
    Accumulate ``scale * broadcast(grad_out)`` into `grad_x` in place.

    Parameters
    ----------
    grad_x : np.ndarray
        Gradient buffer of the reduction input (mutated).
    grad_out : np.ndarray
        Gradient buffer of the reduction output; its shape is the input shape
        with `axes` removed.
    axes : Sequence[int]
        Axes (of the input) eliminated by the forward reduction. Empty for
        the rank-0 identity case.
    scale : float, optional
        Uniform factor, e.g. ``1 / n`` for a mean.
    """
    g = np.asarray(grad_out)
    if grad_x.ndim:
        for axis in sorted(a % grad_x.ndim for a in axes):
            g = np.expand_dims(g, axis)
    if scale != 1.0:
        g = g * scale
    grad_x += np.broadcast_to(g, grad_x.shape).astype(grad_x.dtype, copy=False)
