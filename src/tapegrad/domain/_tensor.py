"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures what the tape/gradient machinery
and the module layer need from a tensor: a stable identity, a shape and
element type, a dense buffer, and the tape holder deciding whether
operations on it are recorded.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ._tape import ITapeHolder


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    Notes
    -----
    - `id` is minted once per allocation and copied (never changed) when a
      tensor is traced or cloned. Two tensors sharing an id denote the same
      logical value even when their tape holders differ.
    - The gradient store is keyed by `id`, not by Python object identity.
    """

    @property
    def id(self) -> Any:
        """Return the unique identifier of the underlying allocation."""
        ...

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the tensor shape."""
        ...

    @property
    def dtype(self) -> Any:
        """Return the element type."""
        ...

    @property
    def data(self) -> Any:
        """Return a read-only view of the dense buffer."""
        ...

    @property
    def tape(self) -> ITapeHolder:
        """Return the tape holder currently attached to this tensor."""
        ...

    def to_numpy(self) -> Any:
        """Return a copy of the buffer as a backend-native array."""
        ...
