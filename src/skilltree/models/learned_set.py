"""Per-player learned skills and point ledger.

LearnedSet is a plain state container. It guards only the one rule it can
check on its own (the base skill never leaves the set); connectivity and
affordability of a learn/dismiss are decided by the progression engine
before it touches this object.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from skilltree.models.errors import InsufficientPoints, InvariantViolation


@dataclass(slots=True)
class LearnedSet:
    """Skills a player has learned plus their unspent points."""

    base_skill_id: str
    available_points: int = 0
    learned: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.available_points < 0:
            raise ValueError(
                f"available_points must be >= 0, got {self.available_points}"
            )
        self.learned = set(self.learned)
        self.learned.add(self.base_skill_id)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self.learned

    def __len__(self) -> int:
        return len(self.learned)

    def has(self, skill_id: str) -> bool:
        return skill_id in self.learned

    # --- Mutation ----------------------------------------------------------

    def add(self, skill_id: str) -> None:
        self.learned.add(skill_id)

    def remove(self, skill_id: str) -> None:
        if skill_id == self.base_skill_id:
            raise InvariantViolation(
                f"Base skill {skill_id!r} cannot be removed from the learned set"
            )
        self.learned.discard(skill_id)

    def grant_points(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot grant a negative amount ({amount})")
        self.available_points += amount

    def spend_points(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount ({amount})")
        if amount > self.available_points:
            raise InsufficientPoints(amount, self.available_points)
        self.available_points -= amount

    # --- Queries -----------------------------------------------------------

    def non_base(self) -> set[str]:
        """Learned skills other than the base skill."""
        return self.learned - {self.base_skill_id}

    def copy(self) -> LearnedSet:
        return LearnedSet(
            base_skill_id=self.base_skill_id,
            available_points=self.available_points,
            learned=set(self.learned),
        )
