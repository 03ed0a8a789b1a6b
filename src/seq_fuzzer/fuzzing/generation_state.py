"""Generation bookkeeping for one search run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GenerationPhase(str, Enum):
    """Step of the generation loop the generator is currently in."""
    COLLECTING = "collecting"
    REDUCING = "reducing"
    EXPANDING = "expanding"
    SAMPLING = "sampling"


@dataclass(frozen=True)
class GenerationSummary:
    """Outcome of one completed generation."""
    generation: int
    target_length: int
    batch_size: int
    after_subsumption: int
    after_dedup: int
    survivors: int
    candidates: int
    next_batch_size: int


@dataclass
class GenerationState:
    """Counters owned by a single generator instance."""

    target_length: int
    batch_size: int = 0
    generation: int = 1
    phase: GenerationPhase = GenerationPhase.COLLECTING
    dispatched: int = 0  # Sequences handed out over the whole run
    recorded: int = 0  # Records received over the whole run
    history: list[GenerationSummary] = field(default_factory=list)

    def advance_length(self) -> None:
        self.target_length += 1

    def begin_generation(self, batch_size: int) -> None:
        """Close the current generation and start collecting the next batch."""
        self.generation += 1
        self.batch_size = batch_size
        self.phase = GenerationPhase.COLLECTING
