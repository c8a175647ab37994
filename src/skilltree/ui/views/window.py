"""Main application window."""

from gi.repository import Adw, Gtk

from skilltree.ui.bootstrap import SkillTreeSession
from skilltree.ui.controllers.skill_tree_controller import SkillTreeController
from skilltree.ui.state import UiState
from skilltree.ui.widgets.skill_button import SkillButton


class MainWindow(Adw.ApplicationWindow):
    """Skill grid, point/cost labels and the four action buttons."""

    def __init__(self, app: Adw.Application, state: UiState, session: SkillTreeSession) -> None:
        super().__init__(application=app, title=state.banner_title)
        self._state = state
        self._controller = SkillTreeController(engine=session.engine, state=state)
        self._skill_buttons: dict[str, SkillButton] = {}

        self.set_default_size(900, 600)

        toolbar_view = Adw.ToolbarView()
        self.set_content(toolbar_view)
        header = Adw.HeaderBar()
        toolbar_view.add_top_bar(header)

        root = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        root.set_margin_top(16)
        root.set_margin_bottom(16)
        root.set_margin_start(16)
        root.set_margin_end(16)
        toolbar_view.set_content(root)

        flow = Gtk.FlowBox()
        flow.set_selection_mode(Gtk.SelectionMode.NONE)
        flow.set_max_children_per_line(5)
        flow.set_vexpand(True)
        for row in self._controller.skill_rows():
            button = SkillButton(row)
            button.connect("clicked", self._on_skill_clicked)
            self._skill_buttons[row.skill_id] = button
            flow.insert(button, -1)
        root.append(flow)

        self._points_label = Gtk.Label(xalign=0)
        self._cost_label = Gtk.Label(xalign=0)
        self._status_label = Gtk.Label(xalign=0)
        self._status_label.add_css_class("dim-label")
        for label in (self._points_label, self._cost_label, self._status_label):
            root.append(label)

        actions = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        self._earn_button = Gtk.Button(label="Earn point")
        self._learn_button = Gtk.Button(label="Learn")
        self._dismiss_button = Gtk.Button(label="Dismiss")
        self._dismiss_all_button = Gtk.Button(label="Dismiss all")
        self._earn_button.connect("clicked", lambda _b: self._apply(self._controller.earn_point))
        self._learn_button.connect("clicked", lambda _b: self._apply(self._controller.learn))
        self._dismiss_button.connect("clicked", lambda _b: self._apply(self._controller.dismiss))
        self._dismiss_all_button.connect(
            "clicked", lambda _b: self._apply(self._controller.dismiss_all)
        )
        for button in (
            self._earn_button,
            self._learn_button,
            self._dismiss_button,
            self._dismiss_all_button,
        ):
            actions.append(button)
        root.append(actions)

        self._refresh()

    def _on_skill_clicked(self, button: SkillButton) -> None:
        self._apply(lambda: self._controller.select(button.skill_id))

    def _apply(self, action) -> None:
        ok, message = action()
        self._refresh()
        if not ok and message:
            self._status_label.set_label(message)

    def _refresh(self) -> None:
        for row in self._controller.skill_rows():
            self._skill_buttons[row.skill_id].update(row)
        self._points_label.set_label(self._controller.available_points_label())
        self._cost_label.set_label(self._controller.selected_cost_label())
        self._status_label.set_label(self._controller.selected_status_label())
        buttons = self._controller.button_states()
        self._learn_button.set_sensitive(buttons.learn)
        self._dismiss_button.set_sensitive(buttons.dismiss)
        self._dismiss_all_button.set_sensitive(buttons.dismiss_all)
