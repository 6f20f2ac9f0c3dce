"""
Infrastructure module base class.

This module provides a concrete `Module` satisfying the domain-level
`IModule` protocol. Subclasses implement `forward`; calling the module
delegates to it.
"""

from __future__ import annotations

from typing import Any, Iterator

from ..domain._module import IModule


class Module(IModule):
    """
    Infrastructure base class for modules.

    Notes
    -----
    - `__call__` delegates to `forward`, matching common deep learning
      framework conventions.
    - The default `parameters` yields nothing; modules with trainable state
      override it.
    """

    def forward(self, x: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.forward is not implemented")

    def parameters(self) -> Iterator[Any]:
        return iter(())

    def __call__(self, x: Any) -> Any:
        return self.forward(x)
