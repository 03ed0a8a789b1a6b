"""Campaign driver: feeds generated sequences to a target and records feedback.

The runner owns the only blocking point of the search loop (the executor
call) and decides when to stop: when the generator runs out of sequences,
or when a generation, execution or wall-clock budget is exhausted.
"""

from __future__ import annotations

import json
import time
from typing import Optional

import numpy as np
from loguru import logger

from seq_fuzzer.campaign.campaign_config import CampaignConfig, CampaignResult, GenerationSnapshot
from seq_fuzzer.input_generator.sequence_input_generator import SequenceInputGenerator
from seq_fuzzer.sut.base_sut import Executor
from seq_fuzzer.sut.execution_result import ExecutionResult


class CampaignRunner:
    """Runs one generator against one executor until a stop condition holds."""

    def __init__(
        self,
        generator: SequenceInputGenerator,
        executor: Executor,
        config: Optional[CampaignConfig] = None,
    ):
        """Initialize the runner.

        Args:
            generator: Source of sequences and sink of feedback
            executor: Target that runs sequences
            config: Stopping policy and reporting options
        """
        self.generator = generator
        self.executor = executor
        self.config = config or CampaignConfig()

        self._seen_bitmap = np.zeros(executor.coverage_width, dtype=np.bool_)
        self._seen_states: set[bytes] = set()
        self.result = CampaignResult(
            target=executor.name,
            total_edges=executor.coverage_width,
        )

    def _stop_reason(self, start_time: float) -> Optional[str]:
        cfg = self.config
        if not self.generator.has_more():
            return "exhausted"
        if cfg.max_generations is not None and self.result.generations_completed >= cfg.max_generations:
            return "max_generations"
        if cfg.max_executions is not None and self.result.executions >= cfg.max_executions:
            return "max_executions"
        if cfg.duration_seconds is not None and time.time() - start_time >= cfg.duration_seconds:
            return "duration"
        return None

    def _execute(self, sequence) -> ExecutionResult:
        try:
            return self.executor.run(sequence)
        except Exception as e:
            # Keep generation accounting consistent: one record per dispatched sequence
            logger.warning(f"Execution of {sequence} failed, recording empty result: {e}")
            self.result.substituted_records += 1
            return ExecutionResult.substitute(self.executor.coverage_width)

    def _merge_coverage(self, result: ExecutionResult) -> int:
        """OR the run's coverage into the campaign bitmap, returning new edges."""
        bits = result.coverage.bits
        if bits.size != self._seen_bitmap.size:
            logger.warning(
                f"Bitmap size mismatch: {bits.size} vs {self._seen_bitmap.size}"
            )
            return 0
        new_edges = int(np.count_nonzero(bits & ~self._seen_bitmap))
        self._seen_bitmap |= bits
        return new_edges

    def run(self) -> CampaignResult:
        """Drive the search loop until a stop condition holds.

        Returns:
            Campaign results, also written to the configured stats file
        """
        start_time = time.time()
        logger.info(f"Starting campaign against {self.executor.name}")

        while True:
            reason = self._stop_reason(start_time)
            if reason is not None:
                self.result.stop_reason = reason
                break

            sequence = self.generator.generate()
            if sequence is None:
                self.result.stop_reason = "exhausted"
                break

            outcome = self._execute(sequence)
            self.result.executions += 1
            new_edges = self._merge_coverage(outcome)
            self._seen_states.add(outcome.state)
            if new_edges:
                logger.info(
                    f"[COV] {sequence} found {new_edges} new edges, "
                    f"total={int(np.count_nonzero(self._seen_bitmap))}/{self._seen_bitmap.size}"
                )

            generation_before = self.generator.generation
            self.generator.record(sequence, outcome.coverage, outcome.state)
            if self.generator.generation != generation_before:
                self._snapshot(start_time)

            if self.result.executions % self.config.log_interval == 0:
                stats = self.generator.get_statistics()
                logger.info(
                    f"Progress: executions={self.result.executions}, "
                    f"generation={stats['generation']}, pending={stats['pending']}, "
                    f"edges={int(np.count_nonzero(self._seen_bitmap))}"
                )

        self.result.unique_edges = int(np.count_nonzero(self._seen_bitmap))
        self.result.unique_states = len(self._seen_states)
        self.result.duration_seconds = time.time() - start_time

        logger.info(
            f"Campaign stopped ({self.result.stop_reason}): executions={self.result.executions}, "
            f"generations={self.result.generations_completed}, "
            f"edges={self.result.unique_edges}/{self.result.total_edges}, "
            f"states={self.result.unique_states}"
        )

        if self.config.stats_file is not None:
            self.save_stats()
        return self.result

    def _snapshot(self, start_time: float) -> None:
        summary = self.generator.state.history[-1]
        self.result.generations_completed += 1
        snapshot = GenerationSnapshot(
            generation=summary.generation,
            target_length=summary.target_length,
            batch_size=summary.batch_size,
            survivors=summary.survivors,
            next_batch_size=summary.next_batch_size,
            executions=self.result.executions,
            unique_edges=int(np.count_nonzero(self._seen_bitmap)),
            total_edges=int(self._seen_bitmap.size),
            elapsed_seconds=time.time() - start_time,
        )
        self.result.add_snapshot(snapshot)
        logger.debug(
            f"Snapshot: generation {snapshot.generation}, "
            f"{snapshot.unique_edges}/{snapshot.total_edges} edges "
            f"({snapshot.coverage_percent:.2f}%)"
        )

    def save_stats(self) -> None:
        """Write the campaign results as JSON to the configured stats file."""
        path = self.config.stats_file
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.result.to_dict(), f, indent=2)
        logger.info(f"Wrote campaign statistics to {path}")
