"""Dump a skill set and optionally replay commands against a fresh session.

Prints a graph overview, then applies a comma-separated command list and
shows the resulting state.

Commands:
    grant              earn one point
    select:<id>        focus a skill
    learn              learn the selected skill
    dismiss            dismiss the selected skill
    dismiss_all        dismiss everything except the base skill

Usage:
    python -m scripts.dump_skill_tree
    python -m scripts.dump_skill_tree --skill-set data/skill_set.json --points 5 \\
        --commands select:tracking,learn,select:archery,learn
    python -m scripts.dump_skill_tree --json
    python -m scripts.dump_skill_tree --write-defaults sample.json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from skilltree.engine.session_config import SessionConfig
from skilltree.models.errors import SkillGraphError
from skilltree.models.skill_set import SkillSetDefinition
from skilltree.parser.skill_set_parser import dump_skill_set
from skilltree.ui.bootstrap import load_session
from skilltree.ui.controllers.skill_tree_controller import SkillTreeController
from skilltree.webui.export_state import build_state_payload


_NO_ARG_COMMANDS = ("grant", "learn", "dismiss", "dismiss_all")


def _parse_command(token: str) -> tuple[str, str | None]:
    token = token.strip()
    if token.startswith("select:"):
        skill_id = token.split(":", 1)[1].strip()
        if not skill_id:
            raise ValueError("select needs a skill id, e.g. select:archery")
        return "select", skill_id
    if token in _NO_ARG_COMMANDS:
        return token, None
    raise ValueError(f"Unknown command: {token!r}")


def _parse_commands(text: str) -> list[tuple[str, str | None]]:
    return [_parse_command(tok) for tok in text.split(",") if tok.strip()]


def _run_commands(
    controller: SkillTreeController,
    commands: list[tuple[str, str | None]],
) -> list[str]:
    """Apply *commands* in order; return one log line per command."""
    actions = {
        "grant": controller.earn_point,
        "learn": controller.learn,
        "dismiss": controller.dismiss,
        "dismiss_all": controller.dismiss_all,
    }
    lines: list[str] = []
    for name, arg in commands:
        if name == "select":
            ok, message = controller.select(arg or "")
            label = f"select:{arg}"
        else:
            ok, message = actions[name]()
            label = name
        status = "ok" if ok else f"rejected ({message})"
        lines.append(
            f"{label:<24} {status:<48} points={controller.engine.available_points}"
        )
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump a skill set and replay commands")
    parser.add_argument("--skill-set", type=Path, default=None,
                        help="Skill set JSON (default: $SKILLTREE_SKILL_SET, data/, built-in).")
    parser.add_argument("--points", type=int, default=0, help="Starting points.")
    parser.add_argument("--commands", type=str, default="",
                        help="Comma-separated command list to replay.")
    parser.add_argument("--json", action="store_true", help="Print the final state as JSON.")
    parser.add_argument("--write-defaults", type=Path, default=None,
                        help="Write the built-in skill set to PATH and exit.")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.write_defaults is not None:
        payload = dump_skill_set(SkillSetDefinition.defaults())
        args.write_defaults.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        print(f"Wrote {args.write_defaults}")
        return 0

    try:
        commands = _parse_commands(args.commands)
        session, state = load_session(args.skill_set, SessionConfig(starting_points=args.points))
    except (FileNotFoundError, SkillGraphError, ValueError) as exc:
        print(f"Error: {exc}")
        return 1

    controller = SkillTreeController(engine=session.engine, state=state)
    log = _run_commands(controller, commands)

    if args.json:
        print(json.dumps(build_state_payload(controller), indent=2))
        return 0

    graph = session.graph
    print(f"\n{'='*60}")
    print(f"  Skill set: {state.skill_set_name} ({state.skill_set_source.mode})")
    print(f"{'='*60}")
    print(f"  Skills:     {len(graph)}")
    print(f"  Links:      {graph.edge_count()}")
    print(f"  Base skill: {graph.base_skill_id}")
    print(f"  Total cost: {graph.total_cost()}")

    print(f"\n  {'ID':<16} {'Name':<20} {'Cost':>4}  Connected")
    print(f"  {'-'*16} {'-'*20} {'-'*4}  {'-'*24}")
    for sid in graph.skill_ids():
        skill = graph.skill(sid)
        links = ", ".join(sorted(skill.neighbors))
        print(f"  {sid:<16} {skill.display_name:<20} {skill.learn_cost:>4}  {links}")

    if log:
        print("\n  Commands:")
        for line in log:
            print(f"    {line}")

    snapshot = session.engine.snapshot()
    checker = session.engine.checker()
    print("\n  State:")
    print(f"    Available points: {snapshot.available_points}")
    print(f"    Learned:          {', '.join(sorted(snapshot.learned))}")
    print(f"    Learnable now:    {', '.join(checker.learnable_skills()) or '-'}")
    print(f"    Dismissable now:  {', '.join(checker.dismissable_skills()) or '-'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
