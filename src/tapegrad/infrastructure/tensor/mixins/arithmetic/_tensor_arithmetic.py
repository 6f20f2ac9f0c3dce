"""
NumPy implementations of the Tensor arithmetic operators via control-path
dispatch.
"""

from typing import Any

import numpy as np

from .....domain._tensor import ITensor
from ..._tensor_builder import NUMPY_BACKEND, tensor_control_path_manager

from ._base import TensorMixinArithmetic as TMA
from ._elementwise import binary_elementwise


@tensor_control_path_manager(TMA, TMA.__add__, NUMPY_BACKEND)
def tensor_add_numpy(self: ITensor, other: Any) -> "ITensor":
    """NumPy control path for ``self + other``; both local derivatives are 1."""
    return binary_elementwise(self, other, "add", np.add, None, None)


@tensor_control_path_manager(TMA, TMA.__sub__, NUMPY_BACKEND)
def tensor_sub_numpy(self: ITensor, other: Any) -> "ITensor":
    """NumPy control path for ``self - other``."""
    return binary_elementwise(
        self, other, "sub", np.subtract, None, lambda a, b: -1.0
    )


@tensor_control_path_manager(TMA, TMA.__mul__, NUMPY_BACKEND)
def tensor_mul_numpy(self: ITensor, other: Any) -> "ITensor":
    """
    NumPy control path for ``self * other``.

    Each operand gets the other operand as its local derivative.
    """
    return binary_elementwise(
        self, other, "mul", np.multiply, lambda a, b: b, lambda a, b: a
    )


def _d_div_lhs(a, b):
    return 1.0 / np.asarray(b)


def _d_div_rhs(a, b):
    b = np.asarray(b)
    return -np.asarray(a) / (b * b)


@tensor_control_path_manager(TMA, TMA.__truediv__, NUMPY_BACKEND)
def tensor_truediv_numpy(self: ITensor, other: Any) -> "ITensor":
    """
    NumPy control path for ``self / other``.

    Division follows NumPy semantics for zero denominators (``inf`` /
    ``nan``); no error is raised.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return binary_elementwise(
            self, other, "div", np.true_divide, _d_div_lhs, _d_div_rhs
        )


@tensor_control_path_manager(TMA, TMA.__rtruediv__, NUMPY_BACKEND)
def tensor_rtruediv_numpy(self: ITensor, other: Any) -> "ITensor":
    """NumPy control path for ``other / self`` with a scalar `other`."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return binary_elementwise(
            self,
            other,
            "div",
            np.true_divide,
            _d_div_lhs,
            _d_div_rhs,
            reflected=True,
        )
