import json

import pytest

from skilltree.models.errors import SkillGraphError
from skilltree.models.skill_set import SkillSetDefinition
from skilltree.parser.skill_set_parser import (
    dump_skill_set,
    load_skill_set,
    parse_skill_set,
)


def _doc(**overrides):
    doc = {
        "name": "Chain",
        "base": "R",
        "skills": [
            {"id": "R", "name": "Root", "cost": 0, "connected": ["A"]},
            {"id": "A", "name": "Alpha", "cost": 2, "icon": "a.png", "connected": ["R", "B"]},
            {"id": "B", "cost": 3, "connected": ["A"]},
        ],
    }
    doc.update(overrides)
    return doc


def test_parse_skill_set_fields():
    definition = parse_skill_set(_doc())
    assert definition.name == "Chain"
    assert definition.base_skill_id == "R"
    assert [s.skill_id for s in definition.skills] == ["R", "A", "B"]
    alpha = definition.skills[1]
    assert alpha.name == "Alpha"
    assert alpha.icon == "a.png"
    assert alpha.learn_cost == 2
    assert alpha.neighbors == frozenset({"R", "B"})
    assert definition.skills[2].name == ""


def test_parse_defaults_cost_and_links():
    definition = parse_skill_set({"base": "R", "skills": [{"id": "R"}]})
    assert definition.name == "R"
    assert definition.skills[0].learn_cost == 1
    assert definition.skills[0].neighbors == frozenset()


def test_parsed_definition_builds_graph():
    graph = parse_skill_set(_doc()).build_graph()
    assert graph.neighbors_of("A") == frozenset({"R", "B"})


def test_one_sided_links_rejected_without_symmetric_flag():
    doc = _doc(skills=[
        {"id": "R", "cost": 0, "connected": ["A"]},
        {"id": "A", "cost": 1},
    ])
    definition = parse_skill_set(doc)
    with pytest.raises(SkillGraphError, match="Asymmetric"):
        definition.build_graph()


def test_symmetric_links_mirrors_edges():
    doc = _doc(
        symmetric_links=True,
        skills=[
            {"id": "R", "cost": 0, "connected": ["A"]},
            {"id": "A", "cost": 1, "connected": ["B"]},
            {"id": "B", "cost": 1},
        ],
    )
    graph = parse_skill_set(doc).build_graph()
    assert graph.neighbors_of("A") == frozenset({"R", "B"})
    assert graph.neighbors_of("B") == frozenset({"A"})


def test_symmetric_argument_overrides_document():
    doc = _doc(skills=[
        {"id": "R", "cost": 0, "connected": ["A"]},
        {"id": "A", "cost": 1},
    ])
    graph = parse_skill_set(doc, symmetric_links=True).build_graph()
    assert graph.neighbors_of("A") == frozenset({"R"})


@pytest.mark.parametrize(
    "doc, message",
    [
        ([], "JSON object"),
        ({"skills": []}, "missing 'base'"),
        ({"base": "R"}, "missing 'skills'"),
        ({"base": "R", "skills": "R"}, "'skills' must be list"),
        ({"base": "R", "skills": [5]}, "expected an object"),
        ({"base": "R", "skills": [{"name": "x"}]}, "missing 'id'"),
        ({"base": "R", "skills": [{"id": "R", "cost": "2"}]}, "'cost' must be int"),
        ({"base": "R", "skills": [{"id": "R", "cost": True}]}, "'cost' must be int"),
        ({"base": "R", "skills": [{"id": "R", "connected": [1]}]}, "must be strings"),
        ({"base": "R", "symmetric_links": "false", "skills": []}, "'symmetric_links' must be bool"),
    ],
)
def test_malformed_documents(doc, message):
    with pytest.raises(SkillGraphError, match=message):
        parse_skill_set(doc)


def test_load_skill_set(tmp_path):
    path = tmp_path / "chain.json"
    path.write_text(json.dumps(_doc()), encoding="utf-8")
    definition = load_skill_set(path)
    assert definition.base_skill_id == "R"
    assert len(definition.skills) == 3


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SkillGraphError, match="invalid JSON"):
        load_skill_set(path)


def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"base": "R", "skills": [{"id": "\xff"}]}')
    with pytest.raises(SkillGraphError, match="not UTF-8"):
        load_skill_set(path)


def test_string_symmetric_flag_does_not_mirror_links():
    doc = _doc(
        symmetric_links="false",
        skills=[
            {"id": "R", "cost": 0, "connected": ["A"]},
            {"id": "A", "cost": 1},
        ],
    )
    with pytest.raises(SkillGraphError, match="symmetric_links"):
        parse_skill_set(doc).build_graph()


def test_dump_then_parse_keeps_default_graph():
    original = SkillSetDefinition.defaults()
    reparsed = parse_skill_set(dump_skill_set(original))
    assert reparsed.base_skill_id == original.base_skill_id
    assert reparsed.skills == original.skills


def test_repo_skill_set_file_is_valid():
    from pathlib import Path

    path = Path(__file__).resolve().parents[1] / "data" / "skill_set.json"
    graph = load_skill_set(path).build_graph()
    assert graph.base_skill_id == "survival"
    assert len(graph) == 10
