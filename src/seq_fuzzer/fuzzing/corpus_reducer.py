"""Corpus reduction: coverage subsumption and state deduplication.

At the end of every generation the reducer selects the records worth
expanding further:

1. Coverage subsumption drops every record whose coverage is a strict
   subset of another record's coverage.
2. State deduplication keeps at most one record per final state snapshot
   and at most one record per coverage value. It keeps as many records as
   those two constraints allow, so the number of survivors does not depend
   on the order the records arrived in; among equally good choices the
   earlier record wins.
3. An optional cap keeps at most ``max_survivors`` records, chosen by a
   configurable selection policy.

Both filters only look at values, never at object identity, and both are
total over empty input.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from .action_sequence import Sequence
from .coverage_set import CoverageSet
from .feedback_recorder import Record


class SelectionPolicy(str, Enum):
    """How the survivor cap picks which records to keep."""
    FIRST = "first"
    MOST_COVERAGE = "most_coverage"


@dataclass(frozen=True, slots=True)
class ReductionReport:
    """Record counts after each reduction stage."""
    records: int
    after_subsumption: int
    after_dedup: int
    survivors: int


def subsumed_by(lhs: CoverageSet, rhs: CoverageSet) -> bool:
    """Check whether coverage ``lhs`` is completely subsumed by ``rhs``."""
    return lhs.is_subset_of(rhs)


def remove_subsumed(records: SequenceABC[Record]) -> list[Record]:
    """Drop records whose coverage is a strict subset of another record's coverage.

    Records sharing an identical maximal coverage are all kept, in input
    order; ``deduplicate_states`` picks one of them.
    """
    distinct = list(dict.fromkeys(record.coverage for record in records))

    maximal: set[CoverageSet] = set()
    for i, candidate in enumerate(distinct):
        subsumed = False
        for j, other in enumerate(distinct):
            if i == j:
                continue
            # Coverages are pairwise distinct here, so subset means strict subset
            if subsumed_by(candidate, other):
                subsumed = True
                break
        if not subsumed:
            maximal.add(candidate)
    return [record for record in records if record.coverage in maximal]


def deduplicate_states(records: SequenceABC[Record]) -> list[Record]:
    """Keep at most one record per state snapshot and per coverage value.

    Pairs coverage values with states as a maximum bipartite matching,
    growing it one augmenting path at a time. Coverage values are tried in
    order of first appearance and each value's records in input order.

    Returns:
        The chosen records, in input order
    """
    by_coverage: dict[CoverageSet, list[int]] = {}
    for i, record in enumerate(records):
        by_coverage.setdefault(record.coverage, []).append(i)

    state_owner: dict[bytes, CoverageSet] = {}
    chosen: dict[CoverageSet, int] = {}

    def augment(start: CoverageSet) -> bool:
        # state -> (coverage value that reached it, record index used)
        reached: dict[bytes, tuple[CoverageSet, int]] = {}
        queue = deque([start])
        while queue:
            coverage = queue.popleft()
            for i in by_coverage[coverage]:
                state = bytes(records[i].state)
                if state in reached:
                    continue
                reached[state] = (coverage, i)
                owner = state_owner.get(state)
                if owner is not None:
                    queue.append(owner)
                    continue

                # Free state: flip the path back to start
                while True:
                    holder, index = reached[state]
                    previous = chosen.get(holder)
                    state_owner[state] = holder
                    chosen[holder] = index
                    if holder == start:
                        return True
                    state = bytes(records[previous].state)
        return False

    for coverage in by_coverage:
        augment(coverage)
    return [records[i] for i in sorted(chosen.values())]


def cap_survivors(
    records: SequenceABC[Record],
    max_survivors: Optional[int],
    policy: SelectionPolicy = SelectionPolicy.FIRST,
) -> list[Record]:
    """Keep at most ``max_survivors`` records according to ``policy``."""
    if max_survivors is None or len(records) <= max_survivors:
        return list(records)

    if policy is SelectionPolicy.MOST_COVERAGE:
        order = sorted(
            range(len(records)),
            key=lambda i: records[i].coverage.count(),
            reverse=True,
        )
        chosen = sorted(order[:max_survivors])
        return [records[i] for i in chosen]
    return list(records[:max_survivors])


class CorpusReducer:
    """Reduces a generation's records to the seeds for the next one."""

    def __init__(
        self,
        max_survivors: Optional[int] = None,
        selection_policy: SelectionPolicy = SelectionPolicy.FIRST,
    ):
        """Initialize the reducer.

        Args:
            max_survivors: Maximum number of seeds kept (None for no cap)
            selection_policy: Which seeds the cap keeps
        """
        if max_survivors is not None and max_survivors < 0:
            raise ValueError("max_survivors must be >= 0")
        self.max_survivors = max_survivors
        self.selection_policy = SelectionPolicy(selection_policy)
        self.last_report: Optional[ReductionReport] = None

    def reduce(self, records: SequenceABC[Record]) -> list[Sequence]:
        """Return the sequences of the records that survive reduction."""
        maximal = remove_subsumed(records)
        unique = deduplicate_states(maximal)
        survivors = cap_survivors(unique, self.max_survivors, self.selection_policy)

        self.last_report = ReductionReport(
            records=len(records),
            after_subsumption=len(maximal),
            after_dedup=len(unique),
            survivors=len(survivors),
        )
        logger.debug(
            f"Reduced {len(records)} records: subsumption={len(maximal)}, "
            f"dedup={len(unique)}, survivors={len(survivors)}"
        )
        return [record.sequence for record in survivors]
