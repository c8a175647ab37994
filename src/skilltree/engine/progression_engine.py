"""Progression engine: learn, dismiss and point commands for one player.

Orchestrates SkillGraph, LearnedSet and ReachabilityChecker. Every command
either applies completely or raises a ProgressionError subclass before
touching any state, so a rejected command leaves the learned set, point
balance and selection exactly as they were.

The engine owns its LearnedSet; callers read it through snapshot() or the
``learned`` property, both of which return copies.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import NoReturn

from skilltree.engine.session_config import SessionConfig
from skilltree.graph.reachability import ReachabilityChecker, is_connected
from skilltree.graph.skill_graph import SkillGraph
from skilltree.models.errors import NoSelection, ProgressionError, UnknownSkill
from skilltree.models.learned_set import LearnedSet
from skilltree.models.skill import Skill


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ProgressionSnapshot:
    """Full state for initial rendering and re-sync."""

    available_points: int
    learned: frozenset[str]
    selected_skill_id: str | None = None


@dataclass(frozen=True, slots=True)
class ProgressionChange:
    """What a successful command changed.

    ``points_delta`` is positive for grants and refunds, negative for
    spending. ``available_points`` is the balance after the command.
    """

    command: str       # "grant" | "learn" | "dismiss" | "dismiss_all"
    available_points: int
    points_delta: int = 0
    learned: tuple[str, ...] = ()
    unlearned: tuple[str, ...] = ()

    @property
    def refund(self) -> int:
        if self.command in ("dismiss", "dismiss_all"):
            return self.points_delta
        return 0


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class ProgressionEngine:
    """Applies player commands against a shared, immutable SkillGraph."""

    __slots__ = ("_graph", "_config", "_learned", "_selected")

    def __init__(
        self,
        graph: SkillGraph,
        config: SessionConfig | None = None,
    ) -> None:
        self._graph = graph
        self._config = config or SessionConfig()
        self._learned = LearnedSet(
            base_skill_id=graph.base_skill_id,
            available_points=self._config.starting_points,
        )
        self._selected: str | None = None
        if self._config.select_base_on_start:
            self._selected = graph.base_skill_id

    # --- Factories ---------------------------------------------------------

    @classmethod
    def new_session(
        cls,
        graph: SkillGraph,
        config: SessionConfig | None = None,
    ) -> ProgressionEngine:
        """Start a session holding only the base skill."""
        return cls(graph, config)

    @classmethod
    def from_state(
        cls,
        graph: SkillGraph,
        learned: LearnedSet,
        config: SessionConfig | None = None,
        selected_skill_id: str | None = None,
    ) -> ProgressionEngine:
        """Resume a session from an externally kept LearnedSet.

        The state is validated against *graph*: it must use the graph's base
        skill, name only known skills, and be connected.
        """
        if learned.base_skill_id != graph.base_skill_id:
            raise ValueError(
                f"Learned set is rooted at {learned.base_skill_id!r}, "
                f"graph base is {graph.base_skill_id!r}"
            )
        unknown = sorted(sid for sid in learned.learned if sid not in graph)
        if unknown:
            raise ValueError(f"Learned set has unknown skills: {', '.join(unknown)}")
        if not is_connected(graph, learned.learned):
            raise ValueError("Learned set is not connected to the base skill")
        if selected_skill_id is not None and selected_skill_id not in graph:
            raise UnknownSkill(selected_skill_id)

        engine = cls(graph, config)
        engine._learned = learned.copy()
        engine._selected = selected_skill_id
        return engine

    def copy(self) -> ProgressionEngine:
        """Independent copy for speculative exploration. Shares the graph."""
        clone = ProgressionEngine.__new__(ProgressionEngine)
        clone._graph = self._graph
        clone._config = self._config
        clone._learned = self._learned.copy()
        clone._selected = self._selected
        return clone

    # --- State properties ----------------------------------------------------

    @property
    def graph(self) -> SkillGraph:
        return self._graph

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def learned(self) -> LearnedSet:
        """Copy of the current learned set."""
        return self._learned.copy()

    @property
    def available_points(self) -> int:
        return self._learned.available_points

    @property
    def selected_skill_id(self) -> str | None:
        return self._selected

    def snapshot(self) -> ProgressionSnapshot:
        return ProgressionSnapshot(
            available_points=self._learned.available_points,
            learned=frozenset(self._learned.learned),
            selected_skill_id=self._selected,
        )

    def checker(self) -> ReachabilityChecker:
        return ReachabilityChecker(self._graph, self._learned)

    def is_learned(self, skill_id: str) -> bool:
        return self._learned.has(skill_id)

    def points_spent(self) -> int:
        """Points currently tied up in learned non-base skills."""
        return self._graph.cost_of(self._learned.non_base())

    # --- Points --------------------------------------------------------------

    def grant_point(self) -> ProgressionChange:
        """Give the player one grant's worth of points. Always succeeds."""
        return self.grant_points(self._config.points_per_grant)

    def grant_points(self, amount: int) -> ProgressionChange:
        if amount < 0:
            raise ValueError(f"Cannot grant a negative amount ({amount})")
        self._learned.grant_points(amount)
        logger.debug("Granted %d point(s), balance %d", amount, self._learned.available_points)
        return ProgressionChange(
            command="grant",
            available_points=self._learned.available_points,
            points_delta=amount,
        )

    # --- Selection -----------------------------------------------------------

    def select_skill(self, skill_id: str) -> Skill:
        """Focus *skill_id* for the next learn/dismiss command."""
        skill = self._graph.skill(skill_id)
        self._selected = skill_id
        return skill

    def clear_selection(self) -> None:
        self._selected = None

    def selected_skill(self) -> Skill | None:
        if self._selected is None:
            return None
        return self._graph.get(self._selected)

    def _require_selection(self) -> str:
        if self._selected is None:
            raise NoSelection()
        if self._selected not in self._graph:
            raise UnknownSkill(self._selected)
        return self._selected

    def can_learn_selected(self) -> bool:
        if self._selected is None:
            return False
        return self.checker().can_learn(self._selected)

    def can_dismiss_selected(self) -> bool:
        if self._selected is None:
            return False
        return self.checker().can_unlearn(self._selected)

    # --- Learn / dismiss -------------------------------------------------------

    def learn_selected(self) -> ProgressionChange:
        return self.learn_skill(self._require_selection())

    def dismiss_selected(self) -> ProgressionChange:
        return self.dismiss_skill(self._require_selection())

    def learn_skill(self, skill_id: str) -> ProgressionChange:
        """Spend points on *skill_id* and add it to the learned set."""
        blocker = self.checker().learn_blocker(skill_id)
        if blocker is not None:
            self._reject("learn", blocker)
        cost = self._graph.skill(skill_id).learn_cost
        self._learned.spend_points(cost)
        self._learned.add(skill_id)
        logger.debug(
            "Learned %s for %d point(s), balance %d",
            skill_id, cost, self._learned.available_points,
        )
        return ProgressionChange(
            command="learn",
            available_points=self._learned.available_points,
            points_delta=-cost,
            learned=(skill_id,),
        )

    def dismiss_skill(self, skill_id: str) -> ProgressionChange:
        """Refund *skill_id* and remove it from the learned set."""
        blocker = self.checker().unlearn_blocker(skill_id)
        if blocker is not None:
            self._reject("dismiss", blocker)
        cost = self._graph.skill(skill_id).learn_cost
        self._learned.remove(skill_id)
        self._learned.grant_points(cost)
        logger.debug(
            "Dismissed %s, refunded %d point(s), balance %d",
            skill_id, cost, self._learned.available_points,
        )
        return ProgressionChange(
            command="dismiss",
            available_points=self._learned.available_points,
            points_delta=cost,
            unlearned=(skill_id,),
        )

    def dismiss_all(self) -> ProgressionChange:
        """Refund and remove every learned skill except the base skill."""
        removed = sorted(self._learned.non_base())
        refund = self._graph.cost_of(removed)
        for skill_id in removed:
            self._learned.remove(skill_id)
        self._learned.grant_points(refund)
        if removed:
            logger.debug(
                "Dismissed %d skill(s), refunded %d point(s)", len(removed), refund
            )
        return ProgressionChange(
            command="dismiss_all",
            available_points=self._learned.available_points,
            points_delta=refund,
            unlearned=tuple(removed),
        )

    # --- Internal helpers --------------------------------------------------

    @staticmethod
    def _reject(command: str, error: ProgressionError) -> NoReturn:
        logger.debug("Rejected %s: %s", command, error)
        raise error
