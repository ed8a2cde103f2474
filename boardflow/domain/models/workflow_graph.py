"""Normalized workflow graph.

A WorkflowGraph is derived fresh on every load from the workflow
definition: an ordered, de-duplicated status sequence plus the set of
directed transitions between those statuses. Everything that checks a
board against a workflow consumes this structure.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from boardflow.domain.models.status import Status


@dataclass(frozen=True, eq=True, order=True)
class Transition:
    """Directed edge between two statuses.

    Attributes:
        from_status_id: Status a work item leaves.
        to_status_id: Status a work item enters.
    """

    from_status_id: str
    to_status_id: str


@dataclass(frozen=True)
class WorkflowGraph:
    """Statuses and legal transitions of one workflow.

    Use WorkflowGraph.build() to construct from raw sequences; it
    removes duplicates. The direct constructor expects already unique
    statuses.

    Attributes:
        statuses: Unique statuses in first-seen (layout) order.
        transitions: Unique directed transitions.
    """

    statuses: tuple[Status, ...] = ()
    transitions: frozenset[Transition] = frozenset()
    _by_id: dict[str, Status] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        by_id: dict[str, Status] = {}
        for status in self.statuses:
            if status.id in by_id:
                raise ValueError(f"Duplicate status {status.id} in workflow graph")
            by_id[status.id] = status
        object.__setattr__(self, "_by_id", by_id)

    @classmethod
    def build(
        cls,
        statuses: Iterable[Status],
        transitions: Iterable[Transition],
    ) -> WorkflowGraph:
        """Build a graph, dropping duplicate statuses and transitions.

        Statuses keep their first-seen order. Transitions are
        de-duplicated by (from_status_id, to_status_id).
        """
        seen: dict[str, Status] = {}
        for status in statuses:
            seen.setdefault(status.id, status)
        return cls(statuses=tuple(seen.values()), transitions=frozenset(transitions))

    @classmethod
    def empty(cls) -> WorkflowGraph:
        """Return a graph with no statuses and no transitions."""
        return cls()

    @property
    def status_ids(self) -> frozenset[str]:
        """Return the ids of all statuses in the graph."""
        return frozenset(self._by_id)

    @property
    def transition_count(self) -> int:
        """Return the number of unique transitions."""
        return len(self.transitions)

    @property
    def has_transitions(self) -> bool:
        """Return True if the graph has at least one transition."""
        return bool(self.transitions)

    def status(self, status_id: str) -> Status | None:
        """Return the status with the given id, if present."""
        return self._by_id.get(status_id)

    def has_edge(self, from_status_id: str, to_status_id: str) -> bool:
        """Return True if there is a direct transition between the two."""
        return Transition(from_status_id, to_status_id) in self.transitions

    def targets_of(self, status_id: str) -> list[Status]:
        """Return statuses directly reachable from status_id, in graph order."""
        targets = {t.to_status_id for t in self.transitions if t.from_status_id == status_id}
        return [s for s in self.statuses if s.id in targets]

    def sources_of(self, status_id: str) -> list[Status]:
        """Return statuses with a direct transition into status_id, in graph order."""
        sources = {t.from_status_id for t in self.transitions if t.to_status_id == status_id}
        return [s for s in self.statuses if s.id in sources]

    def transition_status_ids(self) -> frozenset[str]:
        """Return every status id that appears at either end of a transition."""
        ids: set[str] = set()
        for transition in self.transitions:
            ids.add(transition.from_status_id)
            ids.add(transition.to_status_id)
        return frozenset(ids)
