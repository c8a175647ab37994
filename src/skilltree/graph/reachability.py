"""Connectivity queries over a skill graph and a player's learned set.

The learned set is kept connected to the base skill at all times. Under
that invariant:

  - learning only needs a local check: a skill can attach to the learned
    component iff one of its neighbors is already learned;
  - dismissing needs one breadth-first walk from the base over
    learned − {target}; every learned neighbor of the target must be
    visited, otherwise it would be cut off.

Only reachability matters, so traversal order is irrelevant.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Collection

from skilltree.graph.skill_graph import SkillGraph
from skilltree.models.errors import (
    AlreadyLearned,
    InsufficientPoints,
    NotAdjacent,
    NotLearned,
    ProgressionError,
    UnknownSkill,
    WouldDisconnectGraph,
)
from skilltree.models.learned_set import LearnedSet


def reachable_from_base(
    graph: SkillGraph,
    learned: Collection[str],
    exclude: str | None = None,
) -> set[str]:
    """Return learned skill ids connected to the base through learned skills.

    *exclude* is treated as not learned (cannot be visited or traversed).
    The base skill is always in the result unless it is excluded.
    """
    base = graph.base_skill_id
    if base == exclude:
        return set()
    visited: set[str] = {base}
    queue: deque[str] = deque([base])
    while queue:
        current = queue.popleft()
        for nid in graph.neighbors_of(current):
            if nid == exclude or nid in visited or nid not in learned:
                continue
            visited.add(nid)
            queue.append(nid)
    return visited


def is_connected(graph: SkillGraph, learned: Collection[str]) -> bool:
    """True if the base is learned and every learned skill reaches it."""
    if graph.base_skill_id not in learned:
        return False
    return reachable_from_base(graph, learned) >= set(learned)


class ReachabilityChecker:
    """Stateless learn/dismiss decisions for one (graph, learned set) pair.

    Cheap to construct; the engine creates one per query so it always sees
    the current LearnedSet.
    """

    __slots__ = ("graph", "learned")

    def __init__(self, graph: SkillGraph, learned: LearnedSet) -> None:
        self.graph = graph
        self.learned = learned

    # --- Learn ---------------------------------------------------------------

    def learn_blocker(self, skill_id: str) -> ProgressionError | None:
        """Return the error that would reject learning *skill_id*, or None."""
        skill = self.graph.get(skill_id)
        if skill is None:
            return UnknownSkill(skill_id)
        if self.learned.has(skill_id):
            return AlreadyLearned(skill_id)
        if skill.learn_cost > self.learned.available_points:
            return InsufficientPoints(
                skill.learn_cost, self.learned.available_points, skill_id
            )
        if not any(self.learned.has(nid) for nid in skill.neighbors):
            return NotAdjacent(skill_id)
        return None

    def can_learn(self, skill_id: str) -> bool:
        return self.learn_blocker(skill_id) is None

    # --- Dismiss -------------------------------------------------------------

    def stranded_by(self, skill_id: str) -> frozenset[str]:
        """Learned skills that would lose their path to the base without *skill_id*.

        Only the direct learned neighbors are reported; anything further out
        hangs off one of them.
        """
        neighbors = {
            nid
            for nid in self.graph.neighbors_of(skill_id)
            if nid != self.graph.base_skill_id and self.learned.has(nid)
        }
        if not neighbors:
            return frozenset()
        reached = reachable_from_base(self.graph, self.learned.learned, exclude=skill_id)
        return frozenset(neighbors - reached)

    def unlearn_blocker(self, skill_id: str) -> ProgressionError | None:
        """Return the error that would reject dismissing *skill_id*, or None."""
        if skill_id not in self.graph:
            return UnknownSkill(skill_id)
        if skill_id == self.graph.base_skill_id:
            return NotLearned(skill_id, is_base=True)
        if not self.learned.has(skill_id):
            return NotLearned(skill_id)
        stranded = self.stranded_by(skill_id)
        if stranded:
            return WouldDisconnectGraph(skill_id, stranded)
        return None

    def can_unlearn(self, skill_id: str) -> bool:
        return self.unlearn_blocker(skill_id) is None

    # --- Bulk queries --------------------------------------------------------

    def learnable_skills(self) -> list[str]:
        return [sid for sid in self.graph.skill_ids() if self.can_learn(sid)]

    def dismissable_skills(self) -> list[str]:
        return [sid for sid in self.graph.skill_ids() if self.can_unlearn(sid)]

    def frontier(self) -> list[str]:
        """Unlearned skills adjacent to the learned component, ignoring cost."""
        return [
            sid
            for sid in self.graph.skill_ids()
            if not self.learned.has(sid)
            and any(self.learned.has(nid) for nid in self.graph.neighbors_of(sid))
        ]

    def is_connected(self) -> bool:
        return is_connected(self.graph, self.learned.learned)
