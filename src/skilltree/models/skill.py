"""Skill data model."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Skill:
    """A single node of a skill set.

    Skills are compared by value; the core only ever looks at ``skill_id``,
    ``learn_cost`` and ``neighbors``.
    """
    skill_id: str
    learn_cost: int = 1
    neighbors: frozenset[str] = field(default_factory=frozenset)
    name: str = ""               # display name, falls back to skill_id
    icon: str | None = None      # opaque asset reference

    @property
    def display_name(self) -> str:
        return self.name or self.skill_id
