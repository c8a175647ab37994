"""Export skill tree state as a JSON-serialisable snapshot.

Used for re-syncing an external renderer and by scripts that dump a
session. There is no import path: this is a view of the state, not a save
format.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from skilltree.ui.bootstrap import bootstrap_default_session
from skilltree.ui.controllers.skill_tree_controller import SkillTreeController


def _progression_payload(controller: SkillTreeController) -> dict[str, Any]:
    engine = controller.engine
    snapshot = engine.snapshot()
    return {
        "available_points": int(snapshot.available_points),
        "points_spent": int(engine.points_spent()),
        "learned": sorted(snapshot.learned),
        "selected_skill_id": snapshot.selected_skill_id,
        "buttons": asdict(controller.button_states()),
        "labels": {
            "available_points": controller.available_points_label(),
            "selected_cost": controller.selected_cost_label(),
            "selected_status": controller.selected_status_label(),
        },
    }


def _skills_payload(controller: SkillTreeController) -> list[dict[str, Any]]:
    graph = controller.engine.graph
    rows: list[dict[str, Any]] = []
    for row in controller.skill_rows():
        payload = asdict(row)
        payload["connected"] = sorted(graph.neighbors_of(row.skill_id))
        rows.append(payload)
    return rows


def build_state_payload(controller: SkillTreeController) -> dict[str, Any]:
    """Build a snapshot from a live controller."""
    state = controller.state
    graph = controller.engine.graph
    source = state.skill_set_source
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "skill_set": {
            "name": state.skill_set_name,
            "base": graph.base_skill_id,
            "skill_count": len(graph),
            "edge_count": graph.edge_count(),
            "total_cost": graph.total_cost(),
            "source_mode": source.mode,
            "source_path": str(source.path) if source.path else None,
        },
        "progression": _progression_payload(controller),
        "skills": _skills_payload(controller),
        "message": state.last_message,
    }


def build_default_state_payload() -> dict[str, Any]:
    """Snapshot of a fresh session on the default skill set."""
    session, state = bootstrap_default_session()
    controller = SkillTreeController(engine=session.engine, state=state)
    return build_state_payload(controller)
