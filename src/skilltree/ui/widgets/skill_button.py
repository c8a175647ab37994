"""Clickable skill node widget."""

from gi.repository import Gtk

from skilltree.ui.controllers.skill_tree_controller import SkillRow


class SkillButton(Gtk.Button):
    """Shows one skill; CSS classes reflect learned/selected state."""

    def __init__(self, row: SkillRow) -> None:
        super().__init__()
        self.skill_id = row.skill_id
        box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
        self._name_label = Gtk.Label(label=row.name)
        self._cost_label = Gtk.Label()
        self._cost_label.add_css_class("dim-label")
        box.append(self._name_label)
        box.append(self._cost_label)
        self.set_child(box)
        self.update(row)

    def update(self, row: SkillRow) -> None:
        self._cost_label.set_label("Base" if row.is_base else f"Cost {row.cost}")
        for css_class, enabled in (
            ("success", row.learned),
            ("suggested-action", row.selected),
        ):
            if enabled:
                self.add_css_class(css_class)
            else:
                self.remove_css_class(css_class)
        self.set_tooltip_text(row.skill_id)
