"""Exhaustive enumeration of fixed-length action combinations.

Seeds the first generation: every sequence of a given length over the
alphabet, in lexicographic order over action indices (the last position
varies fastest).
"""

from __future__ import annotations

from collections.abc import Iterator

from .action_sequence import ActionAlphabet, Sequence


def enumerate_combinations(alphabet_size: int, length: int) -> Iterator[tuple[int, ...]]:
    """Yield every index tuple of ``length`` over ``range(alphabet_size)``.

    Args:
        alphabet_size: Number of symbols, including any no-op member
        length: Length of each combination (0 yields one empty tuple)

    Yields:
        ``alphabet_size ** length`` distinct index tuples
    """
    if alphabet_size <= 0:
        raise ValueError("alphabet_size must be > 0")
    if length < 0:
        raise ValueError("length must be >= 0")

    indexes = [0] * length
    while True:
        yield tuple(indexes)

        # Odometer step: bump the rightmost position that can still grow
        i = length - 1
        while i >= 0:
            if indexes[i] < alphabet_size - 1:
                indexes[i] += 1
                break
            indexes[i] = 0
            i -= 1

        if i < 0:
            return


def enumerate_sequences(alphabet: ActionAlphabet, length: int) -> list[Sequence]:
    """Return all sequences of ``length`` over ``alphabet``."""
    return [
        Sequence(tuple(alphabet.action_at(i) for i in combination))
        for combination in enumerate_combinations(alphabet.size, length)
    ]
