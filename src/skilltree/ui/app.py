"""GTK4 + Libadwaita application bootstrap."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

try:
    import gi
except ImportError as exc:  # pragma: no cover - import guard for missing system deps
    raise SystemExit(
        "PyGObject is required to run the UI. "
        "Install GTK4/Libadwaita bindings, then run `python -m skilltree.ui.app`."
    ) from exc

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, Gio, Gtk  # noqa: E402

from skilltree.engine.session_config import SessionConfig  # noqa: E402
from skilltree.models.errors import SkillGraphError  # noqa: E402
from skilltree.ui.bootstrap import SkillTreeSession, load_session  # noqa: E402
from skilltree.ui.state import UiState  # noqa: E402
from skilltree.ui.views.window import MainWindow  # noqa: E402


APP_ID = "io.github.skilltree.App"


class SkillTreeApp(Adw.Application):
    """Application object and activation lifecycle."""

    def __init__(self, session: SkillTreeSession, state: UiState) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.FLAGS_NONE)
        self._session = session
        self._state = state

    def do_activate(self) -> None:  # type: ignore[override]
        window = self.props.active_window or MainWindow(self, self._state, self._session)
        window.present()


def main(argv: list[str] | None = None) -> None:
    """Run the desktop app."""
    parser = argparse.ArgumentParser(description="Skill tree planner")
    parser.add_argument("--skill-set", type=Path, default=None,
                        help="Skill set JSON file (default: $SKILLTREE_SKILL_SET or data/)")
    parser.add_argument("--points", type=int, default=0, help="Starting points")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        session, state = load_session(args.skill_set, SessionConfig(starting_points=args.points))
    except (FileNotFoundError, SkillGraphError) as exc:
        raise SystemExit(f"Error: {exc}") from exc
    if not Gtk.init_check():
        raise SystemExit("Gtk display initialization failed. Run the UI inside a desktop session.")
    app = SkillTreeApp(session, state)
    try:
        app.run([])
    except KeyboardInterrupt:
        # Allow Ctrl+C to terminate cleanly without a traceback.
        return


if __name__ == "__main__":
    main()
