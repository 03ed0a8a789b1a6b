"""Configuration and result dataclasses for fuzzing campaigns."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class CampaignConfig:
    """Stopping policy and reporting options for a single campaign."""

    max_generations: Optional[int] = None
    max_executions: Optional[int] = None
    duration_seconds: Optional[float] = None
    stats_file: Optional[Path] = None
    log_interval: int = 100  # Log progress every N executions

    def __post_init__(self):
        for name in ("max_generations", "max_executions", "duration_seconds"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.log_interval <= 0:
            raise ValueError("log_interval must be > 0")
        if self.stats_file is not None:
            self.stats_file = Path(self.stats_file)


@dataclass
class GenerationSnapshot:
    """Campaign progress captured when a generation completes."""

    generation: int
    target_length: int
    batch_size: int
    survivors: int
    next_batch_size: int
    executions: int
    unique_edges: int
    total_edges: int
    elapsed_seconds: float
    coverage_percent: float = 0.0

    def __post_init__(self):
        if self.total_edges > 0 and self.coverage_percent == 0.0:
            self.coverage_percent = (self.unique_edges / self.total_edges) * 100


@dataclass
class CampaignResult:
    """Results from a completed campaign."""

    target: str
    stop_reason: str = ""
    executions: int = 0
    generations_completed: int = 0
    substituted_records: int = 0
    unique_edges: int = 0
    total_edges: int = 0
    unique_states: int = 0
    duration_seconds: float = 0.0
    snapshots: List[GenerationSnapshot] = field(default_factory=list)

    def add_snapshot(self, snapshot: GenerationSnapshot) -> None:
        self.snapshots.append(snapshot)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
