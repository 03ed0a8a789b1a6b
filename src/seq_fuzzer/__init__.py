"""Feedback-directed generator of action sequences for deterministic targets."""

from seq_fuzzer.fuzzing.action_sequence import NO_OP, ActionAlphabet, Sequence
from seq_fuzzer.fuzzing.combination_enumerator import enumerate_combinations, enumerate_sequences
from seq_fuzzer.fuzzing.corpus_reducer import CorpusReducer, ReductionReport, SelectionPolicy
from seq_fuzzer.fuzzing.coverage_set import CoverageSet
from seq_fuzzer.fuzzing.feedback_recorder import FeedbackRecorder, Record, RecordMismatchError
from seq_fuzzer.fuzzing.generation_state import GenerationPhase, GenerationState, GenerationSummary
from seq_fuzzer.fuzzing.sampler import Sampler
from seq_fuzzer.fuzzing.sequence_expander import SequenceExpander
from seq_fuzzer.fuzzing.worklist import Worklist
from seq_fuzzer.input_generator.sequence_input_generator import (
    SequenceInputGenerator,
    SequenceInputGeneratorConfig,
)
from seq_fuzzer.sut.execution_result import ExecutionResult

__all__ = [
    # Data types
    "NO_OP",
    "ActionAlphabet",
    "Sequence",
    "CoverageSet",
    "Record",
    "ExecutionResult",
    # Search loop
    "enumerate_combinations",
    "enumerate_sequences",
    "Worklist",
    "FeedbackRecorder",
    "RecordMismatchError",
    "CorpusReducer",
    "ReductionReport",
    "SelectionPolicy",
    "SequenceExpander",
    "Sampler",
    "GenerationPhase",
    "GenerationState",
    "GenerationSummary",
    # Generator
    "SequenceInputGenerator",
    "SequenceInputGeneratorConfig",
]
