"""Tests for the SequenceExpander and the Sampler."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from seq_fuzzer.fuzzing.action_sequence import NO_OP, ActionAlphabet, Sequence
from seq_fuzzer.fuzzing.generation_state import GenerationState
from seq_fuzzer.fuzzing.sampler import Sampler
from seq_fuzzer.fuzzing.sequence_expander import SequenceExpander


class TestSequenceExpander:
    def test_appends_every_action(self, ab_alphabet: ActionAlphabet) -> None:
        state = GenerationState(target_length=1)
        expanded = SequenceExpander(ab_alphabet).expand([Sequence.of("A")], state)

        assert expanded == [Sequence.of("A", "A"), Sequence.of("A", "B")]
        assert state.target_length == 2

    def test_noop_is_appended_too(self, abc_noop_alphabet: ActionAlphabet) -> None:
        state = GenerationState(target_length=1)
        expanded = SequenceExpander(abc_noop_alphabet).expand([Sequence.of("A")], state)

        assert Sequence.of("A", NO_OP) in expanded

    def test_empty_input(self, ab_alphabet: ActionAlphabet) -> None:
        state = GenerationState(target_length=3)
        assert SequenceExpander(ab_alphabet).expand([], state) == []
        assert state.target_length == 4

    def test_seeds_are_not_mutated(self, ab_alphabet: ActionAlphabet) -> None:
        seed = Sequence.of("B")
        SequenceExpander(ab_alphabet).expand([seed], GenerationState(target_length=1))
        assert seed == Sequence.of("B")

    @given(st.integers(min_value=0, max_value=10), st.integers(min_value=1, max_value=6))
    def test_size_law(self, seeds: int, alphabet_size: int) -> None:
        alphabet = ActionAlphabet(range(alphabet_size))
        sequences = [Sequence.of(i) for i in range(seeds)]

        expanded = SequenceExpander(alphabet).expand(sequences, GenerationState(target_length=1))

        assert len(expanded) == seeds * alphabet_size
        assert all(len(s) == 2 for s in expanded)


class TestSampler:
    def test_under_cap_unchanged(self) -> None:
        items = [1, 2, 3]
        assert Sampler(seed=1).sample(items, 3) == items

    def test_no_cap(self) -> None:
        assert Sampler().sample([3, 1, 2], None) == [3, 1, 2]

    def test_over_cap_is_subset_without_replacement(self) -> None:
        items = list(range(100))
        sampled = Sampler(seed=7).sample(items, 10)

        assert len(sampled) == 10
        assert len(set(sampled)) == 10
        assert set(sampled) <= set(items)

    def test_same_seed_same_choice(self) -> None:
        items = list(range(50))
        assert Sampler(seed=3).sample(items, 5) == Sampler(seed=3).sample(items, 5)

    def test_negative_cap(self) -> None:
        with pytest.raises(ValueError):
            Sampler().sample([1], -1)

    @given(
        st.lists(st.integers(), unique=True, max_size=40),
        st.integers(min_value=0, max_value=50),
        st.integers(),
    )
    def test_bound(self, items: list[int], cap: int, seed: int) -> None:
        sampled = Sampler(seed=seed).sample(items, cap)

        assert len(sampled) == min(len(items), cap)
        assert set(sampled) <= set(items)
        if len(items) <= cap:
            assert set(sampled) == set(items)
