"""Controller for the skill tree page.

Maps button presses onto ProgressionEngine commands and turns rejections
into messages, so views never catch engine exceptions themselves.
"""

from dataclasses import dataclass
from typing import Any, Callable

from skilltree.engine.progression_engine import ProgressionChange, ProgressionEngine
from skilltree.models.errors import ProgressionError
from skilltree.ui.state import UiState


@dataclass(slots=True)
class SkillRow:
    """One skill as the view renders it."""

    skill_id: str
    name: str
    cost: int
    icon: str | None
    learned: bool
    selected: bool
    learnable: bool
    dismissable: bool
    is_base: bool


@dataclass(slots=True)
class ButtonStates:
    learn: bool
    dismiss: bool
    dismiss_all: bool


@dataclass(slots=True)
class SkillTreeController:
    """Owns skill-tree actions."""

    engine: ProgressionEngine
    state: UiState
    last_change: ProgressionChange | None = None

    def _run(self, command: Callable[[], Any]) -> tuple[bool, str | None]:
        try:
            result = command()
        except ProgressionError as exc:
            self.state.last_message = str(exc)
            return False, str(exc)
        if isinstance(result, ProgressionChange):
            self.last_change = result
        self.state.last_message = None
        return True, None

    # --- Actions -------------------------------------------------------------

    def earn_point(self) -> tuple[bool, str | None]:
        return self._run(self.engine.grant_point)

    def select(self, skill_id: str) -> tuple[bool, str | None]:
        return self._run(lambda: self.engine.select_skill(skill_id))

    def learn(self) -> tuple[bool, str | None]:
        return self._run(self.engine.learn_selected)

    def dismiss(self) -> tuple[bool, str | None]:
        return self._run(self.engine.dismiss_selected)

    def dismiss_all(self) -> tuple[bool, str | None]:
        return self._run(self.engine.dismiss_all)

    # --- View data -----------------------------------------------------------

    def button_states(self) -> ButtonStates:
        return ButtonStates(
            learn=self.engine.can_learn_selected(),
            dismiss=self.engine.can_dismiss_selected(),
            dismiss_all=len(self.engine.learned) > 1,
        )

    def available_points_label(self) -> str:
        return f"Available points: {self.engine.available_points}"

    def selected_cost_label(self) -> str:
        skill = self.engine.selected_skill()
        if skill is None:
            return "No skill selected"
        return f"Selected skill cost: {skill.learn_cost}"

    def selected_status_label(self) -> str:
        """Why the selected skill can or cannot be learned/dismissed."""
        skill_id = self.engine.selected_skill_id
        if skill_id is None:
            return ""
        checker = self.engine.checker()
        if self.engine.is_learned(skill_id):
            blocker = checker.unlearn_blocker(skill_id)
            return str(blocker) if blocker else "Learned"
        blocker = checker.learn_blocker(skill_id)
        return str(blocker) if blocker else "Can be learned"

    def skill_rows(self) -> list[SkillRow]:
        graph = self.engine.graph
        checker = self.engine.checker()
        selected = self.engine.selected_skill_id
        rows: list[SkillRow] = []
        for skill_id in graph.skill_ids():
            skill = graph.skill(skill_id)
            rows.append(SkillRow(
                skill_id=skill_id,
                name=skill.display_name,
                cost=skill.learn_cost,
                icon=skill.icon,
                learned=self.engine.is_learned(skill_id),
                selected=skill_id == selected,
                learnable=checker.can_learn(skill_id),
                dismissable=checker.can_unlearn(skill_id),
                is_base=skill_id == graph.base_skill_id,
            ))
        return rows
