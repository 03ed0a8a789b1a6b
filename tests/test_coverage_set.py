"""Tests for CoverageSet."""

from __future__ import annotations

import numpy as np
import pytest

from seq_fuzzer.fuzzing.coverage_set import CoverageSet

from conftest import cov


class TestConstruction:
    def test_from_indices(self) -> None:
        c = CoverageSet.from_indices(8, [0, 3])
        assert c.width == 8
        assert c.indices() == [0, 3]
        assert c.count() == 2

    def test_index_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="outside coverage width"):
            CoverageSet.from_indices(4, [4])

    def test_empty(self) -> None:
        c = CoverageSet.empty(5)
        assert c.width == 5
        assert c.count() == 0

    def test_source_array_is_copied(self) -> None:
        bits = np.zeros(4, dtype=np.bool_)
        c = CoverageSet(bits)
        bits[0] = True
        assert c.count() == 0

    def test_bits_are_read_only(self) -> None:
        c = cov(1)
        with pytest.raises(ValueError):
            c.bits[0] = True


class TestComparison:
    def test_subset(self) -> None:
        assert cov(0).is_subset_of(cov(0, 1))
        assert not cov(0, 1).is_subset_of(cov(0))

    def test_equal_sets_are_subsets_of_each_other(self) -> None:
        assert cov(2, 3).is_subset_of(cov(2, 3))

    def test_empty_is_subset_of_everything(self) -> None:
        assert cov().is_subset_of(cov(5))

    def test_different_width_is_never_subset(self) -> None:
        narrow = cov(0, width=4)
        wide = cov(0, 1, width=8)
        assert not narrow.is_subset_of(wide)
        assert narrow != CoverageSet.from_indices(8, [0])

    def test_equality_and_hash(self) -> None:
        assert cov(1, 2) == cov(2, 1)
        assert hash(cov(1, 2)) == hash(cov(2, 1))
        assert cov(1) != cov(2)
