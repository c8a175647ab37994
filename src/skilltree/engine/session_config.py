"""Configuration knobs for a progression session.

Defaults match the classic skill tree: the player starts with no points,
earns one point per grant, and the base skill starts selected.
"""

from dataclasses import dataclass


@dataclass(slots=True)
class SessionConfig:
    """Tuneable parameters that aren't part of the skill set itself."""

    starting_points: int = 0
    points_per_grant: int = 1
    select_base_on_start: bool = True

    def __post_init__(self) -> None:
        if self.starting_points < 0:
            raise ValueError(f"starting_points must be >= 0, got {self.starting_points}")
        if self.points_per_grant < 1:
            raise ValueError(f"points_per_grant must be >= 1, got {self.points_per_grant}")
