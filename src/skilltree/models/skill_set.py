"""Authored skill set definitions.

A SkillSetDefinition is the parsed, not yet validated form of a skill set:
a name, the base skill id, and the skills in authoring order. build_graph()
validates it into an immutable SkillGraph.

SkillSetDefinition.defaults() provides a small built-in set so the engine,
scripts and UI work without any data file.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from skilltree.graph.skill_graph import SkillGraph
from skilltree.models.skill import Skill


# Built-in sample: a ring around the base with two branches.
#
#            focus(2) ── insight(3)
#           /                     \
#   core(0) ── stamina(1)          mastery(4)
#           \                     /
#            strength(2) ── fury(3)
#
# lore(2) hangs off insight.
_DEFAULT_LINKS: dict[str, tuple[int, str, tuple[str, ...]]] = {
    "core": (0, "Core", ("focus", "stamina", "strength")),
    "stamina": (1, "Stamina", ("core",)),
    "focus": (2, "Focus", ("core", "insight")),
    "insight": (3, "Insight", ("focus", "mastery", "lore")),
    "lore": (2, "Lore", ("insight",)),
    "strength": (2, "Strength", ("core", "fury")),
    "fury": (3, "Fury", ("strength", "mastery")),
    "mastery": (4, "Mastery", ("insight", "fury")),
}


@dataclass(slots=True)
class SkillSetDefinition:
    """A named skill set as read from authoring data."""

    name: str
    base_skill_id: str
    skills: list[Skill] = field(default_factory=list)

    def build_graph(self) -> SkillGraph:
        """Validate the definition and return its SkillGraph."""
        return SkillGraph.build(self.skills, self.base_skill_id)

    @classmethod
    def defaults(cls) -> SkillSetDefinition:
        """Return the built-in sample skill set."""
        skills = [
            Skill(
                skill_id=sid,
                learn_cost=cost,
                neighbors=frozenset(links),
                name=name,
            )
            for sid, (cost, name, links) in _DEFAULT_LINKS.items()
        ]
        return cls(name="Sample", base_skill_id="core", skills=skills)
