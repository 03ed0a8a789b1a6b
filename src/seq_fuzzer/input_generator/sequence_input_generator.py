from __future__ import annotations

from collections import Counter
from typing import Optional

from loguru import logger

from seq_fuzzer.fuzzing.action_sequence import ActionAlphabet, Sequence
from seq_fuzzer.fuzzing.combination_enumerator import enumerate_sequences
from seq_fuzzer.fuzzing.corpus_reducer import CorpusReducer, SelectionPolicy
from seq_fuzzer.fuzzing.coverage_set import CoverageSet
from seq_fuzzer.fuzzing.feedback_recorder import FeedbackRecorder, Record, RecordMismatchError
from seq_fuzzer.fuzzing.generation_state import GenerationPhase, GenerationState, GenerationSummary
from seq_fuzzer.fuzzing.sampler import Sampler
from seq_fuzzer.fuzzing.sequence_expander import SequenceExpander
from seq_fuzzer.fuzzing.worklist import Worklist
from seq_fuzzer.input_generator.base_input_generator import BaseInputGenerator, BaseInputGeneratorConfig


class SequenceInputGenerator(BaseInputGenerator[Sequence]):
    """Generates action sequences guided by coverage and state feedback.

    Generation 1 holds every sequence of ``initial_length`` over the alphabet.
    Once every sequence of a generation has been recorded, the records are
    reduced to sequences whose coverage is not subsumed by another record and
    whose final states are pairwise distinct, each survivor is extended by every action, and the result is
    sampled down to the worklist cap to form the next generation.
    """

    def __init__(self, alphabet: ActionAlphabet, config: Optional[SequenceInputGeneratorConfig] = None) -> None:
        """
        Initialize the generator and enumerate the first generation.

        :param alphabet: The actions sequences are built from.
        :param config: An instance of SequenceInputGeneratorConfig.
        """
        self._config: SequenceInputGeneratorConfig = config or SequenceInputGeneratorConfig()
        self.alphabet = alphabet

        self._reducer = CorpusReducer(
            max_survivors=self._config.max_survivors,
            selection_policy=self._config.selection_policy,
        )
        self._expander = SequenceExpander(alphabet)
        self._sampler = Sampler(self._config.seed)

        initial = enumerate_sequences(alphabet, self._config.initial_length)
        self._worklist = Worklist(initial)
        self._recorder = FeedbackRecorder(len(initial))
        self._outstanding: Counter[Sequence] = Counter()
        self._state = GenerationState(
            target_length=self._config.initial_length,
            batch_size=len(initial),
        )

        logger.info(
            f"Generation 1: {len(initial)} sequences of length {self._config.initial_length} "
            f"over {alphabet.size} actions"
        )

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def generation(self) -> int:
        return self._state.generation

    @property
    def target_length(self) -> int:
        return self._state.target_length

    def has_more(self) -> bool:
        return self._worklist.has_more()

    def generate(self) -> Optional[Sequence]:
        """
        Take the next pending sequence of the current generation.

        :return: A sequence, or None when the worklist is exhausted.
        """
        sequence = self._worklist.take()
        if sequence is None:
            return None
        self._outstanding[sequence] += 1
        self._state.dispatched += 1
        return sequence

    def record(self, input_value: Sequence, coverage: CoverageSet, state: bytes) -> None:
        """
        Record the feedback for a dispatched sequence.

        Completing the generation triggers reduction, expansion and sampling,
        which replace the worklist with the next batch.

        :param input_value: A sequence previously returned by generate().
        :param coverage: Coverage observed when running the sequence.
        :param state: Final state snapshot of the target.
        :raises RecordMismatchError: If the sequence is not awaiting feedback
            in the current generation.
        """
        if self._outstanding[input_value] <= 0:
            raise RecordMismatchError(
                f"Sequence {input_value} was not dispatched in generation "
                f"{self._state.generation} or was already recorded"
            )

        self._recorder.add(Record(input_value, coverage, bytes(state)))
        self._outstanding[input_value] -= 1
        if self._outstanding[input_value] == 0:
            del self._outstanding[input_value]
        self._state.recorded += 1

        if self._recorder.is_complete():
            self._next_generation()

    def _next_generation(self) -> None:
        state = self._state
        records = self._recorder.drain()

        state.phase = GenerationPhase.REDUCING
        survivors = self._reducer.reduce(records)
        report = self._reducer.last_report

        state.phase = GenerationPhase.EXPANDING
        finished_length = state.target_length
        candidates = self._expander.expand(survivors, state)

        state.phase = GenerationPhase.SAMPLING
        batch = self._sampler.sample(candidates, self._config.worklist_cap)

        state.history.append(
            GenerationSummary(
                generation=state.generation,
                target_length=finished_length,
                batch_size=state.batch_size,
                after_subsumption=report.after_subsumption,
                after_dedup=report.after_dedup,
                survivors=len(survivors),
                candidates=len(candidates),
                next_batch_size=len(batch),
            )
        )
        logger.info(
            f"[GEN] Generation {state.generation} done: records={len(records)}, "
            f"subsumption={report.after_subsumption}, dedup={report.after_dedup}, "
            f"survivors={len(survivors)}, candidates={len(candidates)}, next_batch={len(batch)}"
        )

        self._worklist.replace(batch)
        self._recorder.reset(len(batch))
        state.begin_generation(len(batch))

        if not batch:
            logger.info("[GEN] No surviving sequences, search exhausted")

    def get_statistics(self) -> dict:
        """Get generator statistics.

        Returns:
            Dictionary of statistics
        """
        return {
            "generation": self._state.generation,
            "target_length": self._state.target_length,
            "phase": self._state.phase.value,
            "batch_size": self._state.batch_size,
            "pending": len(self._worklist),
            "outstanding": sum(self._outstanding.values()),
            "recorded_in_generation": len(self._recorder),
            "dispatched": self._state.dispatched,
            "recorded": self._state.recorded,
        }


class SequenceInputGeneratorConfig(BaseInputGeneratorConfig):
    """Configuration for the SequenceInputGenerator."""

    def __init__(
        self,
        *,
        initial_length: int = 2,
        worklist_cap: Optional[int] = 300,
        max_survivors: Optional[int] = None,
        selection_policy: SelectionPolicy | str = SelectionPolicy.FIRST,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the configuration for the feedback-driven sequence generator.

        :param initial_length: Length of every sequence in the first generation.
        :param worklist_cap: Maximum size of a generation; larger batches are sampled down (None for no cap).
        :param max_survivors: Maximum number of seeds kept after reduction (None for no cap).
        :param selection_policy: Which seeds the survivor cap keeps ("first" or "most_coverage").
        :param seed: Optional seed for reproducible sampling via random.Random(seed).
        """
        if initial_length < 0:
            raise ValueError("initial_length must be >= 0")
        if worklist_cap is not None and worklist_cap < 0:
            raise ValueError("worklist_cap must be >= 0")
        if max_survivors is not None and max_survivors < 0:
            raise ValueError("max_survivors must be >= 0")

        self.initial_length = initial_length
        self.worklist_cap = worklist_cap
        self.max_survivors = max_survivors
        self.selection_policy = SelectionPolicy(selection_policy)
        self.seed = seed
