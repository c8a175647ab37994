"""Progression engine interfaces."""

from skilltree.engine.progression_engine import (
    ProgressionChange,
    ProgressionEngine,
    ProgressionSnapshot,
)
from skilltree.engine.session_config import SessionConfig

__all__ = [
    "ProgressionChange",
    "ProgressionEngine",
    "ProgressionSnapshot",
    "SessionConfig",
]
