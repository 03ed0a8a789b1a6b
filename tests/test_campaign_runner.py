"""Tests for the campaign driver."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from seq_fuzzer.campaign import CampaignConfig, CampaignRunner
from seq_fuzzer.fuzzing.action_sequence import Sequence
from seq_fuzzer.input_generator.sequence_input_generator import (
    SequenceInputGenerator,
    SequenceInputGeneratorConfig,
)
from seq_fuzzer.sut.control_pad_machine import Button, ControlPadMachine, control_pad_alphabet
from seq_fuzzer.sut.execution_result import ExecutionResult


def make_runner(config: CampaignConfig, **generator_kwargs) -> CampaignRunner:
    generator_kwargs.setdefault("max_survivors", 5)
    generator_kwargs.setdefault("seed", 1)
    generator = SequenceInputGenerator(
        control_pad_alphabet(),
        SequenceInputGeneratorConfig(**generator_kwargs),
    )
    return CampaignRunner(generator, ControlPadMachine(), config)


class FlakyMachine(ControlPadMachine):
    """Fails on every sequence that starts by pressing UP."""

    def run(self, sequence: Sequence) -> ExecutionResult:
        if len(sequence) > 0 and sequence[0] == Button.UP:
            raise TimeoutError("target hung")
        return super().run(sequence)


class TestStopConditions:
    def test_max_generations(self) -> None:
        result = make_runner(CampaignConfig(max_generations=4)).run()

        assert result.stop_reason == "max_generations"
        assert result.generations_completed == 4
        assert [s.generation for s in result.snapshots] == [1, 2, 3, 4]
        assert [s.target_length for s in result.snapshots] == [2, 3, 4, 5]

    def test_exhausted(self) -> None:
        result = make_runner(CampaignConfig(), max_survivors=0).run()

        assert result.stop_reason == "exhausted"
        assert result.executions == 25
        assert result.generations_completed == 1

    def test_max_executions(self) -> None:
        result = make_runner(CampaignConfig(max_executions=10)).run()

        assert result.stop_reason == "max_executions"
        assert result.executions == 10

    def test_zero_duration(self) -> None:
        result = make_runner(CampaignConfig(duration_seconds=0)).run()

        assert result.stop_reason == "duration"
        assert result.executions == 0


class TestCampaignProgress:
    def test_coverage_never_decreases(self) -> None:
        result = make_runner(CampaignConfig(max_generations=6)).run()

        edges = [s.unique_edges for s in result.snapshots]
        assert edges == sorted(edges)
        assert result.unique_edges == edges[-1]
        assert 0 < result.unique_edges <= result.total_edges

    def test_deterministic_for_seed(self) -> None:
        first = make_runner(CampaignConfig(max_generations=5)).run()
        second = make_runner(CampaignConfig(max_generations=5)).run()

        assert first.executions == second.executions
        assert first.unique_states == second.unique_states
        assert [s.unique_edges for s in first.snapshots] == [
            s.unique_edges for s in second.snapshots
        ]

    def test_failed_executions_are_substituted(self) -> None:
        generator = SequenceInputGenerator(
            control_pad_alphabet(), SequenceInputGeneratorConfig(max_survivors=5, seed=1)
        )
        runner = CampaignRunner(generator, FlakyMachine(), CampaignConfig(max_generations=1))
        result = runner.run()

        # Five of the 25 initial sequences start with UP
        assert result.substituted_records == 5
        assert result.generations_completed == 1

    def test_stats_file(self, tmp_path: Path) -> None:
        stats_file = tmp_path / "out" / "stats.json"
        result = make_runner(CampaignConfig(max_generations=2, stats_file=stats_file)).run()

        data = json.loads(stats_file.read_text())
        assert data["executions"] == result.executions
        assert data["stop_reason"] == "max_generations"
        assert len(data["snapshots"]) == 2


class TestCampaignConfig:
    @pytest.mark.parametrize(
        "kwargs",
        [{"max_generations": -1}, {"max_executions": -5}, {"duration_seconds": -1.0}, {"log_interval": 0}],
    )
    def test_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            CampaignConfig(**kwargs)

    def test_stats_file_coerced_to_path(self) -> None:
        assert CampaignConfig(stats_file="x.json").stats_file == Path("x.json")
