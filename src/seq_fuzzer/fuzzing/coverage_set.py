"""Fixed-width branch coverage bit vectors.

Coverage sets are backed by numpy boolean arrays, one element per
instrumented branch point of the target. They are produced once per
execution and never mutated afterwards: the backing array is flagged
read-only on construction.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np


class CoverageSet:
    """Immutable bit vector over branch identifiers ``0 .. width-1``."""

    __slots__ = ("_bits", "_key")

    def __init__(self, bits: np.ndarray):
        """Wrap a boolean array.

        Args:
            bits: One-dimensional array; non-zero elements mark covered branches
        """
        arr = np.array(bits, dtype=np.bool_, copy=True).reshape(-1)
        arr.flags.writeable = False
        self._bits = arr
        self._key = (arr.size, arr.tobytes())

    @classmethod
    def empty(cls, width: int) -> CoverageSet:
        """Coverage set of the given width with no branch set."""
        if width < 0:
            raise ValueError("width must be >= 0")
        return cls(np.zeros(width, dtype=np.bool_))

    @classmethod
    def from_indices(cls, width: int, indices: Iterable[int]) -> CoverageSet:
        """Build a coverage set with the given branch indices set."""
        bits = np.zeros(width, dtype=np.bool_)
        for i in indices:
            if not 0 <= i < width:
                raise ValueError(f"Branch index {i} outside coverage width {width}")
            bits[i] = True
        return cls(bits)

    @property
    def width(self) -> int:
        return int(self._bits.size)

    @property
    def bits(self) -> np.ndarray:
        """Read-only view of the underlying boolean array."""
        return self._bits

    def count(self) -> int:
        """Number of branches set."""
        return int(np.count_nonzero(self._bits))

    def indices(self) -> list[int]:
        return [int(i) for i in np.flatnonzero(self._bits)]

    def is_subset_of(self, other: CoverageSet) -> bool:
        """Return True if every branch set here is also set in ``other``.

        Sets of different widths are never subsets of one another.
        """
        if self.width != other.width:
            return False
        return not np.any(self._bits & ~other._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoverageSet):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"CoverageSet(width={self.width}, set={self.indices()})"
