"""Expansion of surviving seeds into the next generation's candidates."""

from __future__ import annotations

from collections.abc import Iterable

from .action_sequence import ActionAlphabet, Sequence
from .generation_state import GenerationState


class SequenceExpander:
    """Extends every seed with every action of the alphabet."""

    def __init__(self, alphabet: ActionAlphabet):
        self.alphabet = alphabet

    def expand(self, sequences: Iterable[Sequence], state: GenerationState) -> list[Sequence]:
        """Append each action to each seed and advance the target length.

        Args:
            sequences: Surviving seeds of the finished generation
            state: Generation state whose target length is advanced by one

        Returns:
            ``len(sequences) * alphabet.size`` new sequences, grouped by seed
        """
        state.advance_length()
        return [seq.append(action) for seq in sequences for action in self.alphabet]
