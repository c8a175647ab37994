import json

import pytest

from scripts.dump_skill_tree import _parse_commands, _run_commands, main
from skilltree.engine.progression_engine import ProgressionEngine
from skilltree.engine.session_config import SessionConfig
from skilltree.models.skill_set import SkillSetDefinition
from skilltree.ui.controllers.skill_tree_controller import SkillTreeController
from skilltree.ui.state import UiState


def test_parse_commands():
    assert _parse_commands("grant, select:focus,learn,,dismiss_all") == [
        ("grant", None),
        ("select", "focus"),
        ("learn", None),
        ("dismiss_all", None),
    ]


@pytest.mark.parametrize("text", ["fly", "select:", "select"])
def test_parse_commands_rejects_bad_tokens(text):
    with pytest.raises(ValueError):
        _parse_commands(text)


def test_run_commands_logs_rejections():
    graph = SkillSetDefinition.defaults().build_graph()
    engine = ProgressionEngine.new_session(graph, SessionConfig(starting_points=1))
    controller = SkillTreeController(engine=engine, state=UiState())

    lines = _run_commands(
        controller,
        _parse_commands("select:stamina,learn,select:focus,learn,grant,grant,learn"),
    )

    assert len(lines) == 7
    assert "ok" in lines[1]
    assert "rejected" in lines[3]
    assert lines[6].rstrip().endswith("points=0")
    assert engine.snapshot().learned == frozenset({"core", "stamina", "focus"})


def test_main_json_output(capsys, tmp_path):
    # Write the built-in set so the test does not depend on cwd.
    out = tmp_path / "defaults.json"
    assert main(["--write-defaults", str(out)]) == 0
    assert json.loads(out.read_text(encoding="utf-8"))["base"] == "core"

    capsys.readouterr()
    assert main([
        "--skill-set", str(out),
        "--points", "1",
        "--commands", "select:stamina,learn",
        "--json",
    ]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["progression"]["learned"] == ["core", "stamina"]
    assert payload["progression"]["available_points"] == 0


def test_main_reports_missing_file(capsys, tmp_path):
    assert main(["--skill-set", str(tmp_path / "missing.json")]) == 1
    assert "Error:" in capsys.readouterr().out


def test_main_reports_non_utf8_file(capsys, tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"base": "R", "skills": [{"id": "\xff"}]}')
    assert main(["--skill-set", str(path)]) == 1
    assert "not UTF-8" in capsys.readouterr().out
