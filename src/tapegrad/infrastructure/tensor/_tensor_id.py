"""
Tensor identity.

A `TensorId` is minted once per tensor allocation and is the key into every
gradient store. It is copied, never mutated, when a tensor is traced or
cloned, so every view of the same logical value shares one id.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass

_COUNTER = itertools.count(1)


@dataclass(frozen=True, order=True)
class TensorId:
    """
    Opaque, immutable, hashable tensor identifier.

    Attributes
    ----------
    value : int
        Process-unique integer. Only meaningful for equality and ordering.
    """

    value: int

    @classmethod
    def mint(cls) -> "TensorId":
        """Return a new, never previously issued identifier."""
        return cls(next(_COUNTER))

    def __repr__(self) -> str:
        return f"TensorId({self.value})"
