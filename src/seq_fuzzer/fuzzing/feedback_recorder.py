"""Per-generation accumulation of execution feedback.

Every executed sequence produces one record holding its coverage set and
final state snapshot. The recorder collects them until the number of
records matches the size of the batch dispatched for the generation.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from .action_sequence import Sequence
from .coverage_set import CoverageSet


class RecordMismatchError(Exception):
    """Feedback delivered that does not match what was dispatched."""


@dataclass(frozen=True, slots=True)
class Record:
    """Feedback for one execution: (sequence, coverage, state)."""
    sequence: Sequence
    coverage: CoverageSet
    state: bytes


class FeedbackRecorder:
    """Collects the records of one generation."""

    def __init__(self, expected_count: int = 0):
        """Initialize the recorder.

        Args:
            expected_count: Number of records that completes the generation
        """
        if expected_count < 0:
            raise ValueError("expected_count must be >= 0")
        self.expected_count = expected_count
        self._records: list[Record] = []

    def add(self, record: Record) -> None:
        """Append a record.

        Raises:
            RecordMismatchError: If the generation already holds every
                expected record
        """
        if len(self._records) >= self.expected_count:
            raise RecordMismatchError(
                f"Generation expects {self.expected_count} records, "
                f"got an extra one for {record.sequence}"
            )
        self._records.append(record)
        logger.debug(
            f"Recorded {record.sequence}: edges={record.coverage.count()}, "
            f"progress={len(self._records)}/{self.expected_count}"
        )

    def is_complete(self) -> bool:
        return self.expected_count > 0 and len(self._records) == self.expected_count

    def drain(self) -> list[Record]:
        """Return the collected records and clear the recorder."""
        records = self._records
        self._records = []
        return records

    def reset(self, expected_count: int) -> None:
        """Clear the recorder and expect a new batch size."""
        if expected_count < 0:
            raise ValueError("expected_count must be >= 0")
        self._records = []
        self.expected_count = expected_count

    def __len__(self) -> int:
        return len(self._records)
