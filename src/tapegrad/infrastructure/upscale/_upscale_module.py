"""
Upscale modules for tapegrad.

This module defines stateless `Module` wrappers around `Tensor.upscale2d`
and `Tensor.upscale2d_by`:

- `Upscale2D`   : resample to a fixed ``(OH, OW)``; ``OW`` defaults to ``OH``
- `Upscale2DBy` : resample by integer factors ``(FH, FW)``; ``FW`` defaults
                  to ``FH``

Shape semantics
---------------
Input:
    (C, H, W) or (N, C, H, W)

Output:
    (C, OH, OW) / (N, C, OH, OW) for `Upscale2D`
    (C, H*FH, W*FW) / (N, C, H*FH, W*FW) for `Upscale2DBy`

Design notes
------------
- Both modules are zero-sized and non-mutable: they own no parameters and no
  training step touches them.
- The input's tape, if any, moves to the output exactly as for any other
  differentiable operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import Any, Optional

from ...domain.model._stateless_mixin import NonMutableModuleMixin, ZeroSizedModuleMixin
from .._module import Module
from ..tensor._tensor import Tensor
from ._upscale_methods import NearestNeighbor, UpscaleMethod, resolve_upscale_method


def _check_positive(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class Upscale2D(NonMutableModuleMixin, ZeroSizedModuleMixin, Module):
    """
    Upscale to a fixed spatial size.

    Parameters
    ----------
    oh : int
        Output height.
    ow : int, optional
        Output width. Defaults to `oh`.
    method : UpscaleMethod or str, optional
        Interpolation method. Defaults to `NearestNeighbor`.
    """

    oh: int
    ow: Optional[int] = None
    method: UpscaleMethod = field(default_factory=NearestNeighbor)

    def __post_init__(self) -> None:
        _check_positive(self.oh, "oh")
        if self.ow is None:
            object.__setattr__(self, "ow", self.oh)
        _check_positive(self.ow, "ow")
        object.__setattr__(self, "method", resolve_upscale_method(self.method))

    def forward(self, x: Tensor) -> Tensor:
        """
        Apply the upscale.

        Parameters
        ----------
        x : Tensor
            Input of shape (C, H, W) or (N, C, H, W).

        Returns
        -------
        Tensor
            Output of shape (..., oh, ow).
        """
        return x.upscale2d(self.oh, self.ow, self.method)

    def output_shape(self, input_shape: tuple[int, ...]) -> tuple[int, ...]:
        """Shape produced for an input of `input_shape`."""
        return (*input_shape[:-2], self.oh, self.ow)


@dataclass(frozen=True)
class Upscale2DBy(NonMutableModuleMixin, ZeroSizedModuleMixin, Module):
    """
    Upscale by integer factors.

    Parameters
    ----------
    fh : int
        Height factor.
    fw : int, optional
        Width factor. Defaults to `fh`.
    method : UpscaleMethod or str, optional
        Interpolation method. Defaults to `NearestNeighbor`.
    """

    fh: int
    fw: Optional[int] = None
    method: UpscaleMethod = field(default_factory=NearestNeighbor)

    def __post_init__(self) -> None:
        _check_positive(self.fh, "fh")
        if self.fw is None:
            object.__setattr__(self, "fw", self.fh)
        _check_positive(self.fw, "fw")
        object.__setattr__(self, "method", resolve_upscale_method(self.method))

    def forward(self, x: Tensor) -> Tensor:
        return x.upscale2d_by(self.fh, self.fw, self.method)

    def output_shape(self, input_shape: tuple[int, ...]) -> tuple[int, ...]:
        """Shape produced for an input of `input_shape`."""
        *lead, h, w = input_shape
        return (*lead, h * self.fh, w * self.fw)

