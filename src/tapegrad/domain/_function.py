"""
Kernel interface definitions.

Every differentiable operation is backed by a kernel that works on raw
buffers of declared shapes. The kernel owns no tape state: the tensor-level
operation computes the forward value through `forward`, and when the input
is traced it records a backward operation that later calls `backward`.
"""

from abc import ABC, abstractmethod
from typing import Any


class Kernel(ABC):
    """
    Abstract base class for raw-buffer forward/backward kernels.

    Notes
    -----
    - `forward` must not mutate its inputs.
    - `backward` accumulates (``+=``) into `grad_x`; it never overwrites,
      since the same input may receive contributions from several results.
    """

    @abstractmethod
    def forward(self, x: Any, *args: Any, **kwargs: Any) -> Any:
        """
        Compute the forward value from the input buffer.

        Parameters
        ----------
        x : array-like
            Input buffer.

        Returns
        -------
        array-like
            Newly allocated output buffer.
        """
        ...

    @abstractmethod
    def backward(self, grad_x: Any, grad_out: Any, *args: Any, **kwargs: Any) -> None:
        """
        Accumulate the input gradient from the output gradient.

        Parameters
        ----------
        grad_x : array-like
            Mutable gradient buffer of the input, updated in place.
        grad_out : array-like
            Gradient buffer of the output (read-only).
        """
        ...
