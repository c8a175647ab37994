"""Error types raised by the skill tree core.

Construction problems (a malformed or disconnected skill set) raise
SkillGraphError and are meant to abort startup. Rejected player commands
raise a ProgressionError subclass; the ``kind`` attribute is a stable string
a presentation layer can switch on without importing the classes.
"""

from __future__ import annotations


class SkillTreeError(Exception):
    """Base class for every error raised by the package."""


class SkillGraphError(SkillTreeError, ValueError):
    """The authored skill set cannot form a valid skill graph."""


class InvariantViolation(SkillTreeError):
    """An illegal LearnedSet mutation was attempted.

    Never caused by player input; indicates a bug in the caller.
    """


class ProgressionError(SkillTreeError):
    """A player command was rejected. State is left unchanged."""

    kind = "progression_error"

    def __init__(self, message: str, skill_id: str | None = None) -> None:
        super().__init__(message)
        self.skill_id = skill_id


class UnknownSkill(ProgressionError, KeyError):
    kind = "unknown_skill"

    def __init__(self, skill_id: str) -> None:
        super().__init__(f"Unknown skill {skill_id!r}", skill_id)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class NoSelection(ProgressionError):
    kind = "no_selection"

    def __init__(self) -> None:
        super().__init__("No skill selected")


class InsufficientPoints(ProgressionError):
    kind = "insufficient_points"

    def __init__(self, required: int, available: int, skill_id: str | None = None) -> None:
        super().__init__(
            f"Need {required} point(s), have {available}",
            skill_id,
        )
        self.required = required
        self.available = available


class NotAdjacent(ProgressionError):
    kind = "not_adjacent"

    def __init__(self, skill_id: str) -> None:
        super().__init__(
            f"Skill {skill_id!r} is not connected to any learned skill",
            skill_id,
        )


class AlreadyLearned(ProgressionError):
    kind = "already_learned"

    def __init__(self, skill_id: str) -> None:
        super().__init__(f"Skill {skill_id!r} is already learned", skill_id)


class NotLearned(ProgressionError):
    kind = "not_learned"

    def __init__(self, skill_id: str, is_base: bool = False) -> None:
        if is_base:
            message = f"Base skill {skill_id!r} cannot be dismissed"
        else:
            message = f"Skill {skill_id!r} is not learned"
        super().__init__(message, skill_id)
        self.is_base = is_base


class WouldDisconnectGraph(ProgressionError):
    kind = "would_disconnect_graph"

    def __init__(self, skill_id: str, stranded: frozenset[str]) -> None:
        names = ", ".join(sorted(stranded))
        super().__init__(
            f"Dismissing {skill_id!r} would strand: {names}",
            skill_id,
        )
        self.stranded = stranded
