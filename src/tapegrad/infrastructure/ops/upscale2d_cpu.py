"""
CPU reference implementations for 2D upscaling (NumPy backend).

These kernels operate on the two trailing (spatial) axes of an input of
layout ``(C, H, W)`` or ``(N, C, H, W)``; all leading axes are treated as an
opaque batch. They are the numeric backend of the `NearestNeighbor` and
`Bilinear` upscale methods.

Sampling conventions
--------------------
- Nearest neighbor: output row ``y`` reads input row
  ``min(floor(y * H / OH), H - 1)`` (same for columns).
- Bilinear: corner-aligned sampling, ``src = y * (H - 1) / (OH - 1)``
  (``src = 0`` when ``OH == 1``), blended from the two surrounding rows and
  columns.

Both backward kernels are weighted scatters of the output gradient onto the
input positions that were read; for nearest neighbor every weight is 1, so
each input position receives the sum of the gradients of the output
positions mapped to it.
"""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


def _nearest_index(out_size: int, in_size: int) -> np.ndarray:
    return np.minimum((np.arange(out_size) * in_size) // out_size, in_size - 1)


def _bilinear_coords(out_size: int, in_size: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    if out_size == 1 or in_size == 1:
        src = np.zeros(out_size, dtype=np.float64)
    else:
        src = np.arange(out_size, dtype=np.float64) * ((in_size - 1) / (out_size - 1))
    i0 = np.minimum(np.floor(src).astype(np.int64), in_size - 1)
    i1 = np.minimum(i0 + 1, in_size - 1)
    return i0, i1, src - i0


def _scatter(
    grad_x: np.ndarray,
    grad_out: np.ndarray,
    terms: Iterable[Tuple[np.ndarray, np.ndarray, np.ndarray]],
) -> None:
    """
    Accumulate ``weight * grad_out`` at ``(rows, cols)`` of `grad_x` for
    every ``(rows, cols, weight)`` term. `rows`/`cols`/`weight` are
    ``(OH, OW)`` arrays.
    """
    ih, iw = grad_x.shape[-2:]
    oh, ow = grad_out.shape[-2:]
    g = np.asarray(grad_out, dtype=np.float64).reshape(-1, oh * ow)
    delta = np.zeros((g.shape[0], ih * iw), dtype=np.float64)
    for rows, cols, weight in terms:
        flat = (rows * iw + cols).ravel()
        np.add.at(delta, (slice(None), flat), g * weight.ravel())
    grad_x += delta.reshape(grad_x.shape).astype(grad_x.dtype, copy=False)


def nearest_upscale2d_forward(x: np.ndarray, oh: int, ow: int) -> np.ndarray:
    """
    Nearest-neighbor upscale of the trailing two axes to ``(oh, ow)``.

    Returns
    -------
    np.ndarray
        New array of shape ``x.shape[:-2] + (oh, ow)``.
    """
    ih, iw = x.shape[-2:]
    rows = _nearest_index(oh, ih)
    cols = _nearest_index(ow, iw)
    return np.ascontiguousarray(x[..., rows[:, None], cols[None, :]])


def nearest_upscale2d_backward(grad_x: np.ndarray, grad_out: np.ndarray) -> None:
    """Scatter-add `grad_out` into `grad_x` (in place)."""
    ih, iw = grad_x.shape[-2:]
    oh, ow = grad_out.shape[-2:]
    rows = np.broadcast_to(_nearest_index(oh, ih)[:, None], (oh, ow))
    cols = np.broadcast_to(_nearest_index(ow, iw)[None, :], (oh, ow))
    _scatter(grad_x, grad_out, [(rows, cols, np.ones((oh, ow)))])


def _bilinear_terms(ih: int, iw: int, oh: int, ow: int):
    h0, h1, fh = _bilinear_coords(oh, ih)
    w0, w1, fw = _bilinear_coords(ow, iw)
    fh = fh[:, None]
    fw = fw[None, :]
    shape = (oh, ow)
    r0 = np.broadcast_to(h0[:, None], shape)
    r1 = np.broadcast_to(h1[:, None], shape)
    c0 = np.broadcast_to(w0[None, :], shape)
    c1 = np.broadcast_to(w1[None, :], shape)
    return [
        (r0, c0, (1.0 - fh) * (1.0 - fw)),
        (r0, c1, (1.0 - fh) * fw),
        (r1, c0, fh * (1.0 - fw)),
        (r1, c1, fh * fw),
    ]


def bilinear_upscale2d_forward(x: np.ndarray, oh: int, ow: int) -> np.ndarray:
    """
    Bilinear (corner-aligned) upscale of the trailing two axes to
    ``(oh, ow)``.
    """
    ih, iw = x.shape[-2:]
    out = np.zeros(x.shape[:-2] + (oh, ow), dtype=np.float64)
    for rows, cols, weight in _bilinear_terms(ih, iw, oh, ow):
        out += x[..., rows, cols] * weight
    return out.astype(x.dtype, copy=False)


def bilinear_upscale2d_backward(grad_x: np.ndarray, grad_out: np.ndarray) -> None:
    """Weighted scatter of `grad_out` into `grad_x` (in place)."""
    ih, iw = grad_x.shape[-2:]
    oh, ow = grad_out.shape[-2:]
    _scatter(grad_x, grad_out, _bilinear_terms(ih, iw, oh, ow))
