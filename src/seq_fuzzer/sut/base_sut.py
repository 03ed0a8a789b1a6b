from __future__ import annotations

from typing import Protocol

from seq_fuzzer.fuzzing.action_sequence import Sequence
from seq_fuzzer.sut.execution_result import ExecutionResult


class Executor(Protocol):
    name: str
    coverage_width: int

    def run(self, sequence: Sequence) -> ExecutionResult:
        ...
