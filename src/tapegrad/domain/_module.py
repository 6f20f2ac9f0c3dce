"""
Module (layer) interface definitions.

This module defines the domain-level interface for modules using structural
subtyping via `typing.Protocol`. A module takes a tensor, produces a tensor
(possibly of a different shape), and propagates the input's tape holder to
the output exactly like any other differentiable operation.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable

from ._tensor import ITensor


@runtime_checkable
class IModule(Protocol):
    """
    Domain-level module interface.

    Notes
    -----
    - Modules holding no parameters (reshaping, pooling, upscaling) return
      an empty iterable from `parameters` and need no training-state
      plumbing at all.
    """

    def forward(self, x: ITensor) -> ITensor:
        """
        Execute the forward computation of the module.

        Parameters
        ----------
        x : ITensor
            Input tensor. If it carries a live tape, the tape is moved to the
            returned tensor.

        Returns
        -------
        ITensor
            Output tensor produced by the module.
        """
        ...

    def parameters(self) -> Iterable[Any]:
        """Return the trainable parameters of the module."""
        ...
