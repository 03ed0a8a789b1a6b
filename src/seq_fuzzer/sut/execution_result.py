from __future__ import annotations

from dataclasses import dataclass

from seq_fuzzer.fuzzing.coverage_set import CoverageSet


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    coverage: CoverageSet
    state: bytes

    @classmethod
    def substitute(cls, coverage_width: int) -> ExecutionResult:
        """Placeholder result for a run that did not complete."""
        return cls(coverage=CoverageSet.empty(coverage_width), state=b"")
