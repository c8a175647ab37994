"""Parse skill set definitions from JSON.

Document shape:

    {
      "name": "Warrior",
      "base": "core",
      "symmetric_links": false,
      "skills": [
        {"id": "core", "name": "Core", "cost": 0, "connected": ["focus"]},
        {"id": "focus", "name": "Focus", "cost": 2, "icon": "focus.png",
         "connected": ["core"]}
      ]
    }

``cost`` defaults to 1 and ``connected`` to an empty list. With
``symmetric_links`` set, each link only has to be listed on one side and is
mirrored before validation; otherwise one-sided links are rejected when the
graph is built.

Structural problems (wrong types, missing keys) raise SkillGraphError so
callers handle every bad-data case through one exception type.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from skilltree.models.errors import SkillGraphError
from skilltree.models.skill import Skill
from skilltree.models.skill_set import SkillSetDefinition


def _require(entry: dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in entry:
        raise SkillGraphError(f"{where}: missing {key!r}")
    value = entry[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SkillGraphError(
            f"{where}: {key!r} must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _parse_skill_entry(entry: Any, index: int) -> tuple[str, int, str, str | None, list[str]]:
    where = f"skills[{index}]"
    if not isinstance(entry, dict):
        raise SkillGraphError(f"{where}: expected an object")
    skill_id = _require(entry, "id", str, where)
    where = f"skill {skill_id!r}"
    cost = _require(entry, "cost", int, where) if "cost" in entry else 1
    name = _require(entry, "name", str, where) if "name" in entry else ""
    icon = _require(entry, "icon", str, where) if "icon" in entry else None
    connected = _require(entry, "connected", list, where) if "connected" in entry else []
    for nid in connected:
        if not isinstance(nid, str):
            raise SkillGraphError(f"{where}: connected ids must be strings, got {nid!r}")
    return skill_id, cost, name, icon, list(connected)


def parse_skill_set(data: dict[str, Any], symmetric_links: bool | None = None) -> SkillSetDefinition:
    """Build a SkillSetDefinition from a decoded JSON document.

    *symmetric_links* overrides the document's own flag when given.
    """
    if not isinstance(data, dict):
        raise SkillGraphError("Skill set document must be a JSON object")
    base = _require(data, "base", str, "skill set")
    name = _require(data, "name", str, "skill set") if "name" in data else base
    entries = _require(data, "skills", list, "skill set")
    if symmetric_links is None:
        symmetric_links = (
            _require(data, "symmetric_links", bool, "skill set")
            if "symmetric_links" in data
            else False
        )

    rows = [_parse_skill_entry(entry, i) for i, entry in enumerate(entries)]

    links: dict[str, set[str]] = {}
    for skill_id, _cost, _name, _icon, connected in rows:
        links.setdefault(skill_id, set()).update(connected)
    if symmetric_links:
        for skill_id, _cost, _name, _icon, connected in rows:
            for nid in connected:
                # Unknown ids are left for graph validation to report.
                if nid in links:
                    links[nid].add(skill_id)

    skills = [
        Skill(
            skill_id=skill_id,
            learn_cost=cost,
            neighbors=frozenset(links[skill_id]),
            name=skill_name,
            icon=icon,
        )
        for skill_id, cost, skill_name, icon, _connected in rows
    ]
    return SkillSetDefinition(name=name, base_skill_id=base, skills=skills)


def load_skill_set(path: Path, symmetric_links: bool | None = None) -> SkillSetDefinition:
    """Read and parse a skill set JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise SkillGraphError(f"{path}: not UTF-8 text ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise SkillGraphError(f"{path}: invalid JSON ({exc})") from exc
    return parse_skill_set(data, symmetric_links=symmetric_links)


def dump_skill_set(definition: SkillSetDefinition) -> dict[str, Any]:
    """Inverse of parse_skill_set; neighbor lists are sorted."""
    return {
        "name": definition.name,
        "base": definition.base_skill_id,
        "skills": [
            {
                "id": skill.skill_id,
                "name": skill.name,
                "cost": skill.learn_cost,
                **({"icon": skill.icon} if skill.icon is not None else {}),
                "connected": sorted(skill.neighbors),
            }
            for skill in definition.skills
        ],
    }
