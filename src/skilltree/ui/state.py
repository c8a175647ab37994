"""Shared UI state and lightweight app metadata."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class SkillSetSourceState:
    """Tracks where the skill set was loaded from."""

    mode: str = "built-in"   # "built-in" | "explicit" | "environment" | "repo-data"
    path: Path | None = None


@dataclass(slots=True)
class UiState:
    """Top-level app state used by controllers and views."""

    skill_set_name: str = "Sample"
    banner_title: str = "Skill Tree"
    last_message: str | None = None
    skill_set_source: SkillSetSourceState = field(default_factory=SkillSetSourceState)
