import json

import pytest

from skilltree.engine.session_config import SessionConfig
from skilltree.models.errors import SkillGraphError
from skilltree.ui import bootstrap
from skilltree.ui.bootstrap import SKILL_SET_ENV, load_session, resolve_skill_set_path


def _write_chain(path):
    path.write_text(json.dumps({
        "name": "Chain",
        "base": "R",
        "skills": [
            {"id": "R", "cost": 0, "connected": ["A"]},
            {"id": "A", "cost": 2, "connected": ["R"]},
        ],
    }), encoding="utf-8")
    return path


def test_explicit_path_wins(tmp_path, monkeypatch):
    monkeypatch.delenv(SKILL_SET_ENV, raising=False)
    path = _write_chain(tmp_path / "chain.json")
    session, state = load_session(path, SessionConfig(starting_points=2))
    assert state.skill_set_source.mode == "explicit"
    assert state.skill_set_source.path == path
    assert state.skill_set_name == "Chain"
    assert session.engine.available_points == 2
    assert session.graph.base_skill_id == "R"


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        resolve_skill_set_path(tmp_path / "missing.json")


def test_environment_variable(tmp_path, monkeypatch):
    path = _write_chain(tmp_path / "env.json")
    monkeypatch.setenv(SKILL_SET_ENV, str(path))
    mode, resolved = resolve_skill_set_path()
    assert mode == "environment"
    assert resolved == path


def test_repo_data_used_when_env_unset(monkeypatch):
    monkeypatch.delenv(SKILL_SET_ENV, raising=False)
    session, state = load_session()
    assert state.skill_set_source.mode == "repo-data"
    assert session.graph.base_skill_id == "survival"


def test_built_in_fallback(tmp_path, monkeypatch):
    monkeypatch.delenv(SKILL_SET_ENV, raising=False)
    monkeypatch.setattr(
        bootstrap,
        "_default_skill_set_candidates",
        lambda: [("repo-data", tmp_path / "absent.json")],
    )
    session, state = load_session()
    assert state.skill_set_source.mode == "built-in"
    assert state.skill_set_source.path is None
    assert session.graph.base_skill_id == "core"


def test_invalid_skill_set_is_fatal(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({
        "base": "R",
        "skills": [{"id": "R", "cost": 0}, {"id": "X", "cost": 1}],
    }), encoding="utf-8")
    with pytest.raises(SkillGraphError, match="not reachable"):
        load_session(path)
