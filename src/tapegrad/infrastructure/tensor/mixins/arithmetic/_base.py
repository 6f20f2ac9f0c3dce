"""
Arithmetic mixin defining binary Tensor operations.

Operands may be tensors or Python/NumPy real scalars. Tensor operands must
share the element type and broadcast against each other under NumPy rules;
the backward records sum the gradient back to each operand's own shape.

When both operands carry a live tape, the tapes are merged onto the result.
"""

from abc import ABC
from typing import Any


class TensorMixinArithmetic(ABC):
    """
    Abstract mixin defining elementwise binary arithmetic.

    Raises
    ------
    DTypeMismatchError
        If two tensor operands have different element types.
    ShapeMismatchError
        If two tensor operands do not broadcast.
    TypeError
        If the other operand is neither a tensor nor a real scalar.
    """

    def __add__(self, other: Any) -> "TensorMixinArithmetic":
        """Elementwise ``self + other``. ``da = db = 1``."""

    def __sub__(self, other: Any) -> "TensorMixinArithmetic":
        """Elementwise ``self - other``. ``da = 1, db = -1``."""

    def __mul__(self, other: Any) -> "TensorMixinArithmetic":
        """Elementwise ``self * other``. ``da = b, db = a``."""

    def __truediv__(self, other: Any) -> "TensorMixinArithmetic":
        """Elementwise ``self / other``. ``da = 1 / b, db = -a / b**2``."""

    def __rtruediv__(self, other: Any) -> "TensorMixinArithmetic":
        """Elementwise ``other / self`` for a scalar `other`."""

    def __radd__(self, other: Any) -> "TensorMixinArithmetic":
        return self.__add__(other)

    def __rmul__(self, other: Any) -> "TensorMixinArithmetic":
        return self.__mul__(other)

    def __rsub__(self, other: Any) -> "TensorMixinArithmetic":
        return self.__neg__().__add__(other)  # type: ignore[attr-defined]
