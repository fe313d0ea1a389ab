from textual.binding import Binding

from searchlist.ranking import SearchPolicy
from searchlist.tui import ItemDelegate, ListState, SelectionChanged, SelectionTracker

from tests.helpers import key, make_items, typed


def _state(*titles: str, tracker: SelectionTracker | None = None) -> ListState:
    delegate = ItemDelegate(tracker=tracker, show_description=False, spacing=0)
    return ListState(make_items(*titles), delegate, SearchPolicy(), width=40, height=10)


def test_space_toggles_row_under_cursor() -> None:
    state = _state("a", "b", "c")
    tracker = state.delegate.tracker

    state.update(key("down"))
    effects = state.update(key("space"))

    assert tracker.selection == {1: True}
    assert len(effects) == 1
    assert isinstance(effects[0], SelectionChanged)
    assert effects[0].item.title == "b"
    assert effects[0].selected is True

    effects = state.update(key("space"))

    assert tracker.selection == {1: False}
    assert effects[0].selected is False
    assert tracker.selected_indices() == []


def test_toggle_on_empty_list_is_a_no_op() -> None:
    state = _state()

    assert state.update(key("space")) == []
    assert state.delegate.tracker.selection == {}


def test_selection_is_keyed_by_original_index_when_filtered() -> None:
    state = _state("Alpha Notes", "Beta Plan", "Gamma Alpha")
    tracker = state.delegate.tracker

    for event in [key("slash"), *typed("gamma"), key("enter"), key("space")]:
        state.update(event)

    assert state.index == 0
    assert tracker.selected_indices() == [2]
    assert tracker.is_selected(2)
    assert not tracker.is_selected(0)


def test_callback_result_is_returned_as_the_effect() -> None:
    calls: list[tuple[str, bool]] = []

    def record(item, selected):  # type: ignore[no-untyped-def]
        calls.append((item.title, selected))
        return None

    state = _state("a", "b", tracker=SelectionTracker(on_change=record))

    assert state.update(key("space")) == []
    assert calls == [("a", True)]


def test_custom_toggle_key() -> None:
    tracker = SelectionTracker(toggle_key=Binding("x", "toggle_selection", "Select"))
    state = _state("a", "b", tracker=tracker)

    state.update(key("space"))
    assert tracker.selection == {}

    state.update(key("x"))
    assert tracker.selected_indices() == [0]


def test_selection_survives_item_replacement() -> None:
    state = _state("a", "b", "c")
    state.update(key("end"))
    state.update(key("space"))

    state.set_items(make_items("a"))

    assert state.delegate.tracker.selection == {2: True}


def test_clear_forgets_everything() -> None:
    tracker = SelectionTracker()
    tracker.toggle(0, "a")
    tracker.toggle(3, "d")

    tracker.clear()

    assert tracker.selection == {}
