"""Pending queue of sequences awaiting execution."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .action_sequence import Sequence


class Worklist:
    """Batch of sequences for the current generation.

    Sequences are handed out last-in first-out; every element is returned
    exactly once. An exhausted worklist answers ``take()`` with ``None``.
    """

    def __init__(self, sequences: Optional[Iterable[Sequence]] = None):
        self._pending: list[Sequence] = list(sequences) if sequences is not None else []

    def has_more(self) -> bool:
        return len(self._pending) > 0

    def take(self) -> Optional[Sequence]:
        """Remove and return one pending sequence, or None when empty."""
        if not self._pending:
            return None
        return self._pending.pop()

    def replace(self, sequences: Iterable[Sequence]) -> None:
        """Discard anything pending and load a new batch."""
        self._pending = list(sequences)

    def __len__(self) -> int:
        return len(self._pending)
