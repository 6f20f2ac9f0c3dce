"""
Concrete Tensor implementation (NumPy backend).

A `Tensor` exclusively owns a dense, immutable NumPy buffer of rank 0..4, a
`TensorId`, and a tape holder (`NoTape` or `WithTape`) deciding whether
operations applied to it are recorded for differentiation.

Design notes
------------
- Buffers are marked read-only at construction. No operation mutates a
  buffer in place, so `traced()` can hand the same buffer to the traced
  tensor without copying.
- Tape holders move between tensors: every differentiable operation takes
  the holder of its operand(s) and installs it on its result, leaving the
  operand with `NoTape`. At any instant at most one tensor owns the live tape
  of a computation chain.
- `Tensor` is generic over its holder type, so ``Tensor[NoTape]`` and
  ``Tensor[WithTape]`` are distinct to a static type checker.
- Operations are declared on the mixins and dispatched on `backend` to the
  implementations registered in ``mixins/*``.
"""

from __future__ import annotations

import warnings
from typing import Any, Generic, Optional

import numpy as np

from ...domain._errors import (
    DTypeMismatchError,
    RankError,
    ShapeMismatchError,
    TapeOwnershipError,
)
from ...domain._tensor import ITensor
from .._config import get_settings
from ._gradients import Gradients, TensorRef
from ._tape_holders import H, NoTape, TapeHolder, WithTape
from ._tensor_builder import NUMPY_BACKEND
from ._tensor_id import TensorId

from .mixins.arithmetic import TensorMixinArithmetic
from .mixins.reduction import TensorMixinReduction
from .mixins.spatial import TensorMixinSpatial
from .mixins.unary import TensorMixinUnary

MAX_RANK = 4


class Tensor(
    TensorMixinReduction,
    TensorMixinUnary,
    TensorMixinArithmetic,
    TensorMixinSpatial,
    ITensor,
    Generic[H],
):
    """
    Fixed-shape numeric tensor with an attached tape holder.

    Parameters
    ----------
    data : array-like
        Initial values; copied into a new buffer.
    tape : NoTape or WithTape, optional
        Tape holder. Defaults to `NoTape`.
    tensor_id : TensorId, optional
        Identity to reuse. A fresh id is minted when omitted.
    dtype : np.dtype, optional
        Floating element type. Defaults to `Settings.default_dtype`.

    Raises
    ------
    RankError
        If `data` has rank greater than 4.
    DTypeMismatchError
        If `dtype` is not a floating type.
    """

    backend = NUMPY_BACKEND

    # Make NumPy defer to our reflected operators (e.g. ``np.float32(2) * t``).
    __array_ufunc__ = None

    def __init__(
        self,
        data: Any,
        *,
        tape: Optional[TapeHolder] = None,
        tensor_id: Optional[TensorId] = None,
        dtype: Any = None,
    ) -> None:
        if isinstance(data, Tensor):
            data = data.data
        dtype = np.dtype(dtype) if dtype is not None else get_settings().default_dtype
        if not np.issubdtype(dtype, np.floating):
            raise DTypeMismatchError("a floating dtype", dtype, op="Tensor")
        self._init(np.array(data, dtype=dtype), tape, tensor_id)

    def _init(
        self,
        buf: np.ndarray,
        tape: Optional[TapeHolder],
        tensor_id: Optional[TensorId],
    ) -> None:
        if buf.ndim > MAX_RANK:
            raise RankError(buf.ndim, op="Tensor")
        buf.flags.writeable = False
        self._data = buf
        self._id = tensor_id if tensor_id is not None else TensorId.mint()
        self._tape: TapeHolder = tape if tape is not None else NoTape()

    @classmethod
    def _wrap(
        cls,
        buf: np.ndarray,
        *,
        dtype: Any,
        tape: Optional[TapeHolder] = None,
        tensor_id: Optional[TensorId] = None,
    ) -> "Tensor":
        """
        Build a tensor around `buf` without copying it (unless a dtype cast
        or a contiguous layout is required). The caller gives up `buf`.
        """
        out = cls.__new__(cls)
        # asarray keeps rank 0; ascontiguousarray would promote it to (1,)
        buf = np.asarray(buf, dtype=dtype, order="C")
        if buf.flags.writeable and not buf.flags.owndata and buf.base is not None:
            buf = buf.copy()
        out._init(buf, tape, tensor_id)
        return out

    def __repr__(self) -> str:
        return (
            f"Tensor(shape={self.shape}, dtype={self.dtype}, id={self._id.value}, "
            f"tape={self._tape!r})"
        )

    # ---------------------------------------------------------------------
    # Core identity / layout
    # ---------------------------------------------------------------------
    @property
    def id(self) -> TensorId:
        return self._id

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the buffer."""
        return self._data

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._data.shape)

    @property
    def ndim(self) -> int:
        return self._data.ndim

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def tape(self) -> TapeHolder:
        return self._tape

    @property
    def is_traced(self) -> bool:
        """True if this tensor currently owns a live tape."""
        return self._tape.is_recording

    def numel(self) -> int:
        return int(self._data.size)

    def item(self) -> float:
        """
        Return the value of a single-element tensor as a Python float.

        Raises
        ------
        ShapeMismatchError
            If the tensor holds more than one element.
        """
        if self._data.size != 1:
            raise ShapeMismatchError("a single element", self.shape, op="item")
        return float(self._data.reshape(()))

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the buffer."""
        return self._data.copy()

    def ref(self) -> TensorRef:
        """Return the identity and layout captured by backward records."""
        return TensorRef(self._id, self.shape, self.dtype)

    # ---------------------------------------------------------------------
    # Tape ownership
    # ---------------------------------------------------------------------
    def _require_untraced(self, op: str) -> None:
        if self._tape.is_recording:
            raise TapeOwnershipError(
                f"{op}() called on a tensor that already owns a live tape; "
                "the recorded operations would be lost."
            )

    def trace(self) -> "Tensor[WithTape]":
        """
        Return a copy of `self` with a fresh, empty tape.

        The copy shares the id of `self`, so gradients computed through it
        can be looked up with `self`. `self` is left untouched.

        See `traced` for a version that takes over the buffer of `self`.

        Raises
        ------
        TapeOwnershipError
            If `self` already owns a live tape.
        """
        self._require_untraced("trace")
        return type(self)._wrap(
            self._data.copy(), dtype=self.dtype, tape=WithTape(), tensor_id=self._id
        )

    def traced(self) -> "Tensor[WithTape]":
        """
        Consume `self` and return it with a fresh, empty tape.

        The returned tensor reuses the buffer and the id of `self`.

        Raises
        ------
        TapeOwnershipError
            If `self` already owns a live tape.
        """
        self._require_untraced("traced")
        out = type(self).__new__(type(self))
        out._init(self._data, WithTape(), self._id)
        return out

    def clone(self) -> "Tensor[NoTape]":
        """
        Return an untraced copy sharing the id of `self`.

        The clone holds `NoTape`, so operations applied to it alone are not
        recorded. Its contribution is recorded only when it is a direct
        operand of a binary operation with a traced tensor, as in
        ``a * a.clone()``; that gradient then accumulates under the shared
        id together with the gradient of the traced branch.
        """
        return type(self)._wrap(
            self._data.copy(), dtype=self.dtype, tape=NoTape(), tensor_id=self._id
        )

    def take_tape(self) -> TapeHolder:
        """
        Move the tape holder out of `self`, leaving `NoTape` behind.
        """
        holder, self._tape = self._tape, NoTape()
        return holder

    def put_tape(self, holder: TapeHolder) -> "Tensor":
        """
        Install `holder` on `self` and return `self`.

        Raises
        ------
        TapeOwnershipError
            If `self` already owns a different live tape.
        """
        if self._tape.is_recording and self._tape is not holder:
            raise TapeOwnershipError("put_tape() would drop a live tape.")
        self._tape = holder
        return self

    # ---------------------------------------------------------------------
    # Backward
    # ---------------------------------------------------------------------
    def backward(self, grad_out: Any = None) -> Gradients:
        """
        Replay the tape owned by `self` and return the gradients.

        Parameters
        ----------
        grad_out : array-like, optional
            Seed gradient of `self`. If omitted, `self` must be a scalar
            (shape ``()``) and the seed is 1.

        Returns
        -------
        Gradients
            Frozen store keyed by the id of every tensor that took part in
            the recorded computation. Look gradients up with
            `Gradients.ref_gradient`.

        Raises
        ------
        ShapeMismatchError
            If `grad_out` is omitted for a non-scalar tensor, or does not
            match the shape of `self`.

        Notes
        -----
        The tape is moved out of `self` and consumed; calling `backward`
        a second time has nothing to replay.
        """
        if grad_out is None:
            if self.shape != ():
                raise ShapeMismatchError((), self.shape, op="backward without grad_out")
            seed = np.ones((), dtype=self.dtype)
        else:
            seed = np.asarray(grad_out, dtype=self.dtype)
            if seed.shape != self.shape:
                raise ShapeMismatchError(self.shape, seed.shape, op="backward grad_out")

        holder = self.take_tape()
        grads = Gradients()
        grads.get_or_zero(self._id, self.shape, self.dtype)[...] = seed

        if isinstance(holder, WithTape):
            holder.tape.execute(grads)
        else:
            warnings.warn(
                "backward() called on a tensor without a tape; no operation was "
                "recorded, so only the seed gradient is available. Use trace() or "
                "traced() on the inputs.",
                RuntimeWarning,
                stacklevel=2,
            )
        return grads.freeze()
