from __future__ import annotations

import pytest

from seq_fuzzer.fuzzing.action_sequence import ActionAlphabet, Sequence
from seq_fuzzer.fuzzing.coverage_set import CoverageSet
from seq_fuzzer.fuzzing.feedback_recorder import Record

WIDTH = 8


def cov(*indices: int, width: int = WIDTH) -> CoverageSet:
    """Helper to create a coverage set from branch indices."""
    return CoverageSet.from_indices(width, indices)


def rec(actions: str, edges: tuple[int, ...], state: bytes, width: int = WIDTH) -> Record:
    """Helper to create a record from a string of single-letter actions."""
    return Record(Sequence(tuple(actions)), cov(*edges, width=width), state)


@pytest.fixture
def ab_alphabet() -> ActionAlphabet:
    """Two-action alphabet {A, B} without no-op."""
    return ActionAlphabet(["A", "B"])


@pytest.fixture
def abc_noop_alphabet() -> ActionAlphabet:
    """Three actions plus the no-op member."""
    return ActionAlphabet(["A", "B", "C"], include_noop=True)
