"""
Upscale method tags.

An upscale method is a zero-size tag selecting the interpolation kernel used
by `Tensor.upscale2d`. Tags are registered by name, and their `forward` /
`backward` kernels are dispatched through a control-path manager keyed on
the tag's ``name``.

Usage example
-------------
Registering a method and its kernels:

    @UpscaleMethod.register_method("nearest")
    class NearestNeighbor(UpscaleMethod): ...

    @upscale_control_path_manager(UpscaleMethod, UpscaleMethod.forward, "nearest")
    def _nearest_forward(self, x, oh, ow): ...

Resolving a method:

    resolve_upscale_method("bilinear")  # -> Bilinear()
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Type, TypeVar

import numpy as np

from ...domain._errors import UnknownUpscaleMethodError
from ...domain._function import Kernel
from ...domain.utils._control_path import create_path_builder
from ..ops.upscale2d_cpu import (
    bilinear_upscale2d_backward,
    bilinear_upscale2d_forward,
    nearest_upscale2d_backward,
    nearest_upscale2d_forward,
)

M = TypeVar("M", bound=Type["UpscaleMethod"])

# Control-path manager that dispatches kernels based on `self.name`
upscale_control_path_manager = create_path_builder("name")


class UpscaleMethod(Kernel):
    """
    Base class of interpolation method tags.

    Notes
    -----
    - Instances carry no state; two instances of the same method compare
      equal.
    - `forward` and `backward` are dispatched by ``name`` to the registered
      kernels.
    """

    name: ClassVar[str] = ""
    METHODS: ClassVar[Dict[str, Type["UpscaleMethod"]]] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    @classmethod
    def register_method(cls, name: str, *, overwrite: bool = False) -> Callable[[M], M]:
        """
        Decorator registering a method tag class under `name`.

        Parameters
        ----------
        name : str
            Registry key, also used as the dispatch state.
        overwrite : bool, optional
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Upscale method name must be a non-empty string")

        def decorator(method_cls: M) -> M:
            if not overwrite and name in cls.METHODS:
                raise ValueError(f"Upscale method already registered: {name!r}")
            method_cls.name = name
            cls.METHODS[name] = method_cls
            return method_cls

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered method names (sorted)."""
        return tuple(sorted(cls.METHODS))

    def forward(self, x: np.ndarray, oh: int, ow: int) -> np.ndarray:
        """
        Resample the trailing two axes of `x` to ``(oh, ow)``.

        Returns
        -------
        np.ndarray
            New buffer of shape ``x.shape[:-2] + (oh, ow)``.
        """
        raise NotImplementedError

    def backward(self, grad_x: np.ndarray, grad_out: np.ndarray) -> None:
        """
        Scatter `grad_out` back onto `grad_x` (accumulating, in place).
        """
        raise NotImplementedError


@UpscaleMethod.register_method("nearest")
class NearestNeighbor(UpscaleMethod):
    """Nearest-neighbor interpolation."""


@UpscaleMethod.register_method("bilinear")
class Bilinear(UpscaleMethod):
    """Bilinear interpolation with corner-aligned sampling."""


@upscale_control_path_manager(UpscaleMethod, UpscaleMethod.forward, "nearest")
def _nearest_forward(self, x, oh, ow):
    return nearest_upscale2d_forward(x, oh, ow)


@upscale_control_path_manager(UpscaleMethod, UpscaleMethod.backward, "nearest")
def _nearest_backward(self, grad_x, grad_out):
    nearest_upscale2d_backward(grad_x, grad_out)


@upscale_control_path_manager(UpscaleMethod, UpscaleMethod.forward, "bilinear")
def _bilinear_forward(self, x, oh, ow):
    return bilinear_upscale2d_forward(x, oh, ow)


@upscale_control_path_manager(UpscaleMethod, UpscaleMethod.backward, "bilinear")
def _bilinear_backward(self, grad_x, grad_out):
    bilinear_upscale2d_backward(grad_x, grad_out)


def resolve_upscale_method(method: Any) -> UpscaleMethod:
    """
    Normalize a method argument to an `UpscaleMethod` instance.

    Parameters
    ----------
    method : UpscaleMethod, type, str or None
        A tag instance, a tag class, a registered name, or None for nearest
        neighbor.

    Raises
    ------
    UnknownUpscaleMethodError
        If `method` is a name that is not registered.
    TypeError
        For any other kind of value.
    """
    if method is None:
        return NearestNeighbor()
    if isinstance(method, UpscaleMethod):
        return method
    if isinstance(method, type) and issubclass(method, UpscaleMethod):
        return method()
    if isinstance(method, str):
        try:
            return UpscaleMethod.METHODS[method]()
        except KeyError:
            raise UnknownUpscaleMethodError(method, UpscaleMethod.available()) from None
    raise TypeError(f"Expected an UpscaleMethod or a method name, got {type(method)!r}")
