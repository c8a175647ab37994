"""Bootstrap helpers for loading a skill set into UI runtime state."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from skilltree.engine.progression_engine import ProgressionEngine
from skilltree.engine.session_config import SessionConfig
from skilltree.graph.skill_graph import SkillGraph
from skilltree.models.skill_set import SkillSetDefinition
from skilltree.parser.skill_set_parser import load_skill_set
from skilltree.ui.state import SkillSetSourceState, UiState


logger = logging.getLogger(__name__)

SKILL_SET_ENV = "SKILLTREE_SKILL_SET"


@dataclass(slots=True)
class SkillTreeSession:
    """Loaded skill set plus the player's progression engine."""

    definition: SkillSetDefinition
    graph: SkillGraph
    engine: ProgressionEngine


def _default_skill_set_candidates() -> list[tuple[str, Path]]:
    """Return (mode, path) candidates in lookup order."""
    candidates: list[tuple[str, Path]] = []
    env_path = os.environ.get(SKILL_SET_ENV)
    if env_path:
        candidates.append(("environment", Path(env_path).expanduser()))
    repo_root = Path(__file__).resolve().parents[3]
    candidates.append(("repo-data", repo_root / "data/skill_set.json"))
    return candidates


def resolve_skill_set_path(explicit: Path | None = None) -> tuple[str, Path | None]:
    """Pick the skill set file to load.

    An explicit path must exist. Otherwise the first existing default
    candidate wins; (``"built-in"``, None) means no file was found.
    """
    if explicit is not None:
        explicit = Path(explicit).expanduser()
        if not explicit.is_file():
            raise FileNotFoundError(f"Skill set file not found: {explicit}")
        return "explicit", explicit
    for mode, path in _default_skill_set_candidates():
        if path.is_file():
            return mode, path
        logger.debug("Skill set candidate %s (%s) not found", path, mode)
    return "built-in", None


def load_session(
    skill_set_path: Path | None = None,
    config: SessionConfig | None = None,
) -> tuple[SkillTreeSession, UiState]:
    """Load a skill set, validate it into a graph and start a session."""
    mode, path = resolve_skill_set_path(skill_set_path)
    if path is None:
        definition = SkillSetDefinition.defaults()
        logger.info("Using built-in skill set %r", definition.name)
    else:
        definition = load_skill_set(path)
        logger.info("Loaded skill set %r from %s (%s)", definition.name, path, mode)

    graph = definition.build_graph()
    engine = ProgressionEngine.new_session(graph, config)

    state = UiState(
        skill_set_name=definition.name,
        banner_title=f"Skill Tree: {definition.name}",
        skill_set_source=SkillSetSourceState(mode=mode, path=path),
    )
    return SkillTreeSession(definition=definition, graph=graph, engine=engine), state


def bootstrap_default_session() -> tuple[SkillTreeSession, UiState]:
    """Load whatever skill set the environment points at."""
    return load_session()
