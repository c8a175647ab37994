from skilltree.engine.progression_engine import ProgressionEngine
from skilltree.engine.session_config import SessionConfig
from skilltree.graph.skill_graph import SkillGraph
from skilltree.models.skill import Skill
from skilltree.ui.controllers.skill_tree_controller import SkillTreeController
from skilltree.ui.state import UiState


def _controller(points: int = 5) -> SkillTreeController:
    graph = SkillGraph.build(
        [
            Skill("R", 0, frozenset({"A"}), name="Root"),
            Skill("A", 2, frozenset({"R", "B"}), name="Alpha", icon="alpha.png"),
            Skill("B", 3, frozenset({"A"})),
        ],
        "R",
    )
    engine = ProgressionEngine.new_session(graph, SessionConfig(starting_points=points))
    return SkillTreeController(engine=engine, state=UiState())


def test_controller_learn_and_labels():
    controller = _controller()
    assert controller.select("A") == (True, None)
    assert controller.selected_cost_label() == "Selected skill cost: 2"
    assert controller.button_states().learn is True
    assert controller.button_states().dismiss is False

    assert controller.learn() == (True, None)
    assert controller.available_points_label() == "Available points: 3"
    assert controller.last_change is not None
    assert controller.last_change.learned == ("A",)
    buttons = controller.button_states()
    assert buttons.learn is False
    assert buttons.dismiss is True
    assert buttons.dismiss_all is True


def test_controller_reports_rejections():
    controller = _controller(points=5)
    controller.select("A")
    controller.learn()
    controller.select("B")
    controller.learn()
    controller.select("A")

    ok, message = controller.dismiss()
    assert ok is False
    assert message is not None
    assert "strand" in message
    assert controller.state.last_message == message
    assert controller.selected_status_label() == message


def test_controller_unknown_select_keeps_selection():
    controller = _controller()
    controller.select("A")
    ok, message = controller.select("nope")
    assert ok is False
    assert "nope" in message
    assert controller.engine.selected_skill_id == "A"


def test_controller_select_keeps_last_change():
    controller = _controller()
    controller.select("A")
    controller.learn()
    change = controller.last_change
    assert controller.select("B") == (True, None)
    assert controller.last_change is change


def test_controller_earn_point_and_dismiss_all():
    controller = _controller(points=0)
    for _ in range(5):
        assert controller.earn_point() == (True, None)
    assert controller.available_points_label() == "Available points: 5"
    controller.select("A")
    controller.learn()
    assert controller.dismiss_all() == (True, None)
    assert controller.available_points_label() == "Available points: 5"
    assert controller.button_states().dismiss_all is False


def test_controller_skill_rows():
    controller = _controller(points=2)
    controller.select("A")
    rows = {row.skill_id: row for row in controller.skill_rows()}
    assert [r.skill_id for r in controller.skill_rows()] == ["R", "A", "B"]
    assert rows["R"].is_base and rows["R"].learned
    assert rows["R"].name == "Root"
    assert rows["A"].selected and rows["A"].learnable
    assert rows["A"].icon == "alpha.png"
    assert rows["B"].name == "B"
    assert not rows["B"].learnable
    assert not rows["B"].dismissable


def test_controller_status_label_for_learnable_and_learned():
    controller = _controller(points=5)
    controller.select("A")
    assert controller.selected_status_label() == "Can be learned"
    controller.learn()
    assert controller.selected_status_label() == "Learned"
    controller.engine.clear_selection()
    assert controller.selected_status_label() == ""
    assert controller.selected_cost_label() == "No skill selected"
