"""Immutable skill graph.

Nodes are skills; edges are undirected adjacency links ("connected
skills"). The graph is validated once at construction and never mutated,
so a single instance can back any number of player sessions.

Validation rules:
  - the base skill exists and skill ids are unique
  - every neighbor id names a known skill, and no skill links to itself
  - adjacency is symmetric (A lists B iff B lists A)
  - non-base skills cost at least one point; the base skill costs >= 0
  - every skill is reachable from the base skill
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from types import MappingProxyType

from skilltree.models.errors import SkillGraphError, UnknownSkill
from skilltree.models.skill import Skill


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _index_skills(skills: Iterable[Skill]) -> dict[str, Skill]:
    """Map skill id → Skill, rejecting duplicates. Preserves input order."""
    by_id: dict[str, Skill] = {}
    for skill in skills:
        if skill.skill_id in by_id:
            raise SkillGraphError(f"Duplicate skill id {skill.skill_id!r}")
        by_id[skill.skill_id] = skill
    return by_id


def _check_costs(by_id: dict[str, Skill], base_skill_id: str) -> None:
    for sid, skill in by_id.items():
        if sid == base_skill_id:
            if skill.learn_cost < 0:
                raise SkillGraphError(
                    f"Base skill {sid!r} has negative cost {skill.learn_cost}"
                )
        elif skill.learn_cost < 1:
            raise SkillGraphError(
                f"Skill {sid!r} must cost at least 1 point, got {skill.learn_cost}"
            )


def _check_adjacency(by_id: dict[str, Skill]) -> None:
    for sid, skill in by_id.items():
        for nid in skill.neighbors:
            if nid == sid:
                raise SkillGraphError(f"Skill {sid!r} is connected to itself")
            other = by_id.get(nid)
            if other is None:
                raise SkillGraphError(
                    f"Skill {sid!r} is connected to unknown skill {nid!r}"
                )
            if sid not in other.neighbors:
                raise SkillGraphError(
                    f"Asymmetric link: {sid!r} lists {nid!r} but not the reverse"
                )


def _unreachable_from(by_id: dict[str, Skill], start: str) -> list[str]:
    """Return skill ids not reachable from *start*, in authoring order."""
    visited: set[str] = {start}
    queue: deque[str] = deque([start])
    while queue:
        current = queue.popleft()
        for nid in by_id[current].neighbors:
            if nid not in visited:
                visited.add(nid)
                queue.append(nid)
    return [sid for sid in by_id if sid not in visited]


# ---------------------------------------------------------------------------
# SkillGraph
# ---------------------------------------------------------------------------


class SkillGraph:
    """Validated, read-only skill set with a designated base skill."""

    __slots__ = ("_skills", "_base_skill_id")

    def __init__(self, skills: dict[str, Skill], base_skill_id: str) -> None:
        self._skills = MappingProxyType(dict(skills))
        self._base_skill_id = base_skill_id

    # --- Construction --------------------------------------------------------

    @classmethod
    def build(cls, skills: Iterable[Skill], base_skill_id: str) -> SkillGraph:
        """Validate *skills* and build a graph rooted at *base_skill_id*."""
        by_id = _index_skills(skills)
        if base_skill_id not in by_id:
            raise SkillGraphError(f"Base skill {base_skill_id!r} is not in the skill set")
        _check_costs(by_id, base_skill_id)
        _check_adjacency(by_id)
        unreachable = _unreachable_from(by_id, base_skill_id)
        if unreachable:
            raise SkillGraphError(
                "Skills not reachable from base skill "
                f"{base_skill_id!r}: {', '.join(unreachable)}"
            )
        return cls(by_id, base_skill_id)

    # --- Queries -------------------------------------------------------------

    @property
    def base_skill_id(self) -> str:
        return self._base_skill_id

    @property
    def skills(self) -> MappingProxyType:
        return self._skills

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    def __len__(self) -> int:
        return len(self._skills)

    def skill(self, skill_id: str) -> Skill:
        """Return the Skill for *skill_id*; raises UnknownSkill if absent."""
        skill = self._skills.get(skill_id)
        if skill is None:
            raise UnknownSkill(skill_id)
        return skill

    def get(self, skill_id: str) -> Skill | None:
        return self._skills.get(skill_id)

    def base_skill(self) -> Skill:
        return self._skills[self._base_skill_id]

    def neighbors_of(self, skill_id: str) -> frozenset[str]:
        return self.skill(skill_id).neighbors

    def skill_ids(self) -> list[str]:
        """All skill ids in authoring order (base skill wherever it was listed)."""
        return list(self._skills)

    def cost_of(self, skill_ids: Iterable[str]) -> int:
        """Sum of learn costs for *skill_ids*."""
        return sum(self.skill(sid).learn_cost for sid in skill_ids)

    def total_cost(self) -> int:
        """Points needed to learn every non-base skill."""
        return sum(
            skill.learn_cost
            for sid, skill in self._skills.items()
            if sid != self._base_skill_id
        )

    def edge_count(self) -> int:
        return sum(len(skill.neighbors) for skill in self._skills.values()) // 2
