"""
NumPy implementation of Tensor.upscale2d / Tensor.upscale2d_by via
control-path dispatch.

The forward value comes from the kernel of the selected upscale method. When
the input is traced, a scatter-gather record keeps the method so the backward
pass can scatter the result gradient through the same kernel.
"""

from __future__ import annotations

from numbers import Integral

from .....domain._errors import ShapeMismatchError
from .....domain._tensor import ITensor
from ..._backward_ops import BackwardKind, BackwardOp
from ..._tape_transfer import move_tape_and_add_backward_op
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager

from ._base import TensorMixinSpatial as TMS


def _positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def _check_image(t, op: str) -> None:
    if t.ndim not in (3, 4):
        raise ShapeMismatchError("(C, H, W) or (N, C, H, W)", t.shape, op=op)
    if 0 in t.shape[-2:]:
        raise ShapeMismatchError("non-empty spatial axes", t.shape, op=op)


def _upscale(t, oh: int, ow: int, method, op: str):
    # Deferred: the upscale package imports the Tensor module.
    from ....upscale._upscale_methods import resolve_upscale_method

    kernel = resolve_upscale_method(method)
    Tensor = type(t)
    out = kernel.forward(t.data, oh, ow)
    result = Tensor._wrap(out.astype(t.dtype, copy=False), dtype=t.dtype)
    return move_tape_and_add_backward_op(
        t,
        result,
        lambda x, r: BackwardOp(BackwardKind.SCATTER_GATHER, op, x, r, kernel=kernel),
    )


@tensor_control_path_manager(TMS, TMS.upscale2d, NUMPY_BACKEND)
def tensor_upscale2d_numpy(self: ITensor, oh, ow=None, method=None) -> "ITensor":
    """NumPy control path resampling the two trailing axes to ``(oh, ow)``."""
    _check_image(self, "upscale2d")
    oh = _positive_int(oh, "oh")
    ow = oh if ow is None else _positive_int(ow, "ow")
    return _upscale(self, oh, ow, method, "upscale2d")


@tensor_control_path_manager(TMS, TMS.upscale2d_by, NUMPY_BACKEND)
def tensor_upscale2d_by_numpy(self: ITensor, fh, fw=None, method=None) -> "ITensor":
    """NumPy control path resampling the two trailing axes to ``(H * fh, W * fw)``."""
    _check_image(self, "upscale2d_by")
    fh = _positive_int(fh, "fh")
    fw = fh if fw is None else _positive_int(fw, "fw")
    h, w = self.shape[-2:]
    return _upscale(self, h * fh, w * fw, method, "upscale2d_by")
