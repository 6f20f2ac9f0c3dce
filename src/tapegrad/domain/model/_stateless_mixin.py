"""
Parameterless module mixins.

This module defines marker mixins for modules that own no trainable state:

- `ZeroSizedModuleMixin`  : the module carries no tensors at all
- `NonMutableModuleMixin` : no training step ever mutates the module

Both categories are recognized by the module layer without requiring any
training-state plumbing. Non-mutable modules still expose their
constructor hyperparameters through `get_config` / `from_config` so they can
participate in configuration export like every other module.
"""

from dataclasses import fields, is_dataclass
from typing import Any, Dict, Iterator

from typing_extensions import Self


class ZeroSizedModuleMixin:
    """
    Mixin for modules that hold no tensors.

    `parameters` always yields nothing.
    """

    def parameters(self) -> Iterator[Any]:
        return iter(())


class NonMutableModuleMixin:
    """
    Mixin providing configuration hooks for modules never mutated by
    training.

    For dataclass-based modules the configuration is the dataclass fields;
    values exposing a `name` attribute (e.g. interpolation method tags) are
    exported by name and must be resolved back by the concrete class in
    `from_config`.
    """

    def get_config(self) -> Dict[str, Any]:
        """
        Return a JSON-serializable configuration dictionary.

        Returns
        -------
        Dict[str, Any]
            Constructor keyword arguments of this module.
        """
        if not is_dataclass(self):
            return {}
        cfg: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            cfg[f.name] = getattr(value, "name", value)
        return cfg

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> Self:
        """
        Reconstruct the module from a configuration dictionary.

        Parameters
        ----------
        cfg : Dict[str, Any]
            Dictionary produced by `get_config`.
        """
        return cls(**cfg)
