"""
Ordered record of backward operations.

`GradientTape` accumulates backward operations during the forward pass and
executes them during the backward pass in strict reverse registration order,
so that the gradient of an operation's result is complete before the
operation propagates it to its operands.

Every entry is stamped with a process-wide sequence number taken at
registration time. Forward execution order is a valid topological order of
the computation, so when two tapes meet in a binary operation they are merged
by sequence number and the reverse of the merged tape is still a valid
reverse topological order.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from operator import itemgetter
from typing import Iterator, List, Tuple

from ...domain._tape import BackwardFn
from ._gradients import Gradients

logger = logging.getLogger(__name__)

_SEQUENCE = itertools.count()

Entry = Tuple[int, BackwardFn]


class GradientTape:
    """
    Append-only (during forward), drain-once (during backward) list of
    backward operations.

    Notes
    -----
    - No validation of an operation is performed when it is added; every
      operation is responsible for its own correctness.
    - A tape is moved between tensors, never copied. See `WithTape`.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: List[Entry] = []

    def __repr__(self) -> str:
        return f"GradientTape(num_operations={len(self._entries)})"

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BackwardFn]:
        """Iterate over the recorded operations in registration order."""
        return (op for _, op in self._entries)

    def add_operation(self, operation: BackwardFn) -> None:
        """
        Append `operation` to the tape.

        Parameters
        ----------
        operation : BackwardFn
            One-shot callable ``operation(grads)``.
        """
        self._entries.append((next(_SEQUENCE), operation))

    def merge(self, other: "GradientTape") -> None:
        """
        Move every entry of `other` into this tape, keeping global
        registration order. `other` is left empty.
        """
        if other is self or not other._entries:
            return
        logger.debug(
            "merging tapes (%d + %d operations)", len(self._entries), len(other._entries)
        )
        self._entries = list(
            heapq.merge(self._entries, other._entries, key=itemgetter(0))
        )
        other._entries = []

    def execute(self, grads: Gradients) -> Gradients:
        """
        Run every recorded operation, last-registered first.

        The tape is consumed: operations are popped as they run and the tape
        is empty afterwards.

        Parameters
        ----------
        grads : Gradients
            Store already holding the seed gradient of the final result.

        Returns
        -------
        Gradients
            The same store, populated.
        """
        logger.debug("replaying %d backward operations", len(self._entries))
        while self._entries:
            _, operation = self._entries.pop()
            operation(grads)
        logger.debug("backward replay finished, %d gradient buffers", len(grads))
        return grads
