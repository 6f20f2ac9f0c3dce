"""
Gradient storage.

`Gradients` maps a `TensorId` to a dense gradient buffer with exactly the
shape and dtype of the tensor that id was minted for. Buffers are allocated
lazily, zero-filled, on first access. The store is created by one call to
`Tensor.backward`, mutated only while that call replays its tape, and frozen
before it is handed back to the caller.

Accumulation is always additive: a tensor used by several operations
receives the sum of the contributions of every path.
"""

from __future__ import annotations

from typing import Dict, Iterator, NamedTuple, Optional, Union

import numpy as np

from ...domain._errors import GradientShapeError, GradientsFrozenError
from ._tensor_id import TensorId


class TensorRef(NamedTuple):
    """
    Identity plus layout of a tensor, as captured by a backward operation.

    Attributes
    ----------
    id : TensorId
        Identity of the tensor.
    shape : tuple[int, ...]
        Shape of the tensor (and of its gradient buffer).
    dtype : np.dtype
        Element type of the tensor (and of its gradient buffer).
    """

    id: TensorId
    shape: tuple[int, ...]
    dtype: np.dtype


def _readonly(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.flags.writeable = False
    return view


class Gradients:
    """
    Mapping from `TensorId` to accumulated gradient buffer.

    Notes
    -----
    - Buffers returned by `get_or_zero` and the first element of
      `mut_and_ref` are writable NumPy arrays; everything else is a
      read-only view.
    - After `freeze` every mutating accessor raises `GradientsFrozenError`.
    """

    def __init__(self) -> None:
        self._buffers: Dict[TensorId, np.ndarray] = {}
        self._frozen = False

    def __repr__(self) -> str:
        ids = ", ".join(repr(i) for i in self._buffers)
        return f"Gradients([{ids}], frozen={self._frozen})"

    def __contains__(self, tensor_id: object) -> bool:
        return tensor_id in self._buffers

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self) -> Iterator[TensorId]:
        return iter(self._buffers)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Gradients":
        """Make the store read-only. Returns self."""
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GradientsFrozenError(
                "Gradients are read-only once the backward pass has finished."
            )

    def get_or_zero(
        self,
        tensor_id: TensorId,
        shape: tuple[int, ...],
        dtype: Union[np.dtype, type] = np.float32,
    ) -> np.ndarray:
        """
        Return the mutable buffer for `tensor_id`, allocating it if absent.

        Parameters
        ----------
        tensor_id : TensorId
            Key of the buffer.
        shape : tuple[int, ...]
            Shape of the originating tensor.
        dtype : np.dtype, optional
            Element type used for a fresh allocation.

        Returns
        -------
        np.ndarray
            Writable gradient buffer of exactly `shape`.

        Raises
        ------
        GradientShapeError
            If a buffer exists for `tensor_id` with a different shape.
        GradientsFrozenError
            If the store has been frozen.
        """
        self._check_mutable()
        shape = tuple(int(d) for d in shape)
        buf = self._buffers.get(tensor_id)
        if buf is None:
            buf = np.zeros(shape, dtype=dtype)
            self._buffers[tensor_id] = buf
        elif buf.shape != shape:
            raise GradientShapeError(buf.shape, shape, op=f"gradient of {tensor_id!r}")
        return buf

    def mut_and_ref(self, a: TensorRef, b: TensorRef) -> tuple[np.ndarray, np.ndarray]:
        """
        Return mutable access to `a`'s buffer and read-only access to `b`'s.

        Both buffers are allocated (zero-filled) if absent. When `a` and `b`
        share an id, the read-only side is a snapshot copy, so
        ``mut += ref`` is a correct in-place add instead of an aliased one.

        Parameters
        ----------
        a : TensorRef
            Tensor whose gradient is written.
        b : TensorRef
            Tensor whose gradient is read.

        Returns
        -------
        tuple[np.ndarray, np.ndarray]
            ``(mutable_a, readonly_b)``.
        """
        grad_b = self.get_or_zero(b.id, b.shape, b.dtype)
        grad_a = self.get_or_zero(a.id, a.shape, a.dtype)
        if a.id == b.id:
            return grad_a, _readonly(grad_b.copy())
        return grad_a, _readonly(grad_b)

    def accumulate(self, ref: TensorRef, delta: np.ndarray) -> None:
        """
        Add `delta` into the buffer of `ref`.

        Raises
        ------
        GradientShapeError
            If `delta` does not have the shape of `ref`.
        """
        buf = self.get_or_zero(ref.id, ref.shape, ref.dtype)
        if np.shape(delta) != buf.shape:
            raise GradientShapeError(buf.shape, np.shape(delta), op="accumulate")
        buf += delta

    def get(self, tensor_id: TensorId) -> Optional[np.ndarray]:
        """
        Return a read-only view of the buffer for `tensor_id`, or None if the
        id never took part in a recorded operation.
        """
        buf = self._buffers.get(tensor_id)
        return None if buf is None else _readonly(buf)

    def ref_gradient(self, tensor) -> np.ndarray:
        """
        Return the gradient of `tensor` after the backward pass.

        Parameters
        ----------
        tensor : ITensor
            Any tensor sharing the id of the value of interest (the original
            untraced tensor works).

        Returns
        -------
        np.ndarray
            Read-only gradient buffer. If the tensor never participated in the
            traced computation, a zero array of its shape is returned.
        """
        buf = self._buffers.get(tensor.id)
        if buf is None:
            return _readonly(np.zeros(tensor.shape, dtype=tensor.dtype))
        if buf.shape != tuple(tensor.shape):
            raise GradientShapeError(buf.shape, tensor.shape, op="ref_gradient")
        return _readonly(buf)
