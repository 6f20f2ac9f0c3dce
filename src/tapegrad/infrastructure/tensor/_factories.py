"""
Tensor factories.

The rank-specific factories mirror the fixed-rank tensor types (rank 0 to 4)
of the engine: they reject data of any other rank and, when `shape` is
given, any other shape.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ...domain._errors import ShapeMismatchError
from ._tensor import Tensor


def _ranked(rank: int, data: Any, shape: Optional[tuple[int, ...]], dtype: Any) -> Tensor:
    t = Tensor(data, dtype=dtype)
    if t.ndim != rank:
        raise ShapeMismatchError(f"rank {rank}", t.shape, op=f"tensor{rank}d")
    if shape is not None and t.shape != tuple(shape):
        raise ShapeMismatchError(tuple(shape), t.shape, op=f"tensor{rank}d")
    return t


def tensor0d(data: Any, *, dtype: Any = None) -> Tensor:
    """Rank-0 (scalar) tensor."""
    return _ranked(0, data, (), dtype)


def tensor1d(data: Any, shape: Optional[tuple[int]] = None, *, dtype: Any = None) -> Tensor:
    return _ranked(1, data, shape, dtype)


def tensor2d(data: Any, shape: Optional[tuple[int, int]] = None, *, dtype: Any = None) -> Tensor:
    return _ranked(2, data, shape, dtype)


def tensor3d(
    data: Any, shape: Optional[tuple[int, int, int]] = None, *, dtype: Any = None
) -> Tensor:
    return _ranked(3, data, shape, dtype)


def tensor4d(
    data: Any, shape: Optional[tuple[int, int, int, int]] = None, *, dtype: Any = None
) -> Tensor:
    return _ranked(4, data, shape, dtype)


def zeros(shape: tuple[int, ...], *, dtype: Any = None) -> Tensor:
    """Tensor of zeros with the given shape."""
    return Tensor(np.zeros(shape), dtype=dtype)


def ones(shape: tuple[int, ...], *, dtype: Any = None) -> Tensor:
    """Tensor of ones with the given shape."""
    return Tensor(np.ones(shape), dtype=dtype)
