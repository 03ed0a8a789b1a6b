"""Uniform down-sampling of oversized worklists."""

from __future__ import annotations

import random
from collections.abc import Sequence as SequenceABC
from typing import Optional, TypeVar

T = TypeVar("T")


class Sampler:
    """Reduces a candidate list to a cap by uniform sampling without replacement.

    The random source is private to the sampler, so two samplers created
    with the same seed make the same choices.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def sample(self, candidates: SequenceABC[T], cap: Optional[int]) -> list[T]:
        """Return ``candidates`` unchanged if within ``cap``, else a random subset of ``cap``."""
        if cap is not None and cap < 0:
            raise ValueError("cap must be >= 0")
        if cap is None or len(candidates) <= cap:
            return list(candidates)
        return self._rng.sample(list(candidates), cap)
