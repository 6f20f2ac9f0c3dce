"""
Unary mixin defining elementwise Tensor operations.
"""

from abc import ABC


class TensorMixinUnary(ABC):
    """
    Abstract mixin defining elementwise unary operations.

    Every operation here preserves the shape of its input, and its backward
    record multiplies the result gradient by the local derivative.
    """

    def exp(self) -> "TensorMixinUnary":
        """
        Elementwise exponential.

        Notes
        -----
        Backward rule:
            ``dx += dy * exp(x)`` (the forward output is reused)
        """

    def log(self) -> "TensorMixinUnary":
        """
        Elementwise natural logarithm.

        Notes
        -----
        Backward rule:
            ``dx += dy / x``
        """

    def __neg__(self) -> "TensorMixinUnary":
        """
        Elementwise negation.

        Notes
        -----
        Backward rule:
            ``dx += -dy``
        """
