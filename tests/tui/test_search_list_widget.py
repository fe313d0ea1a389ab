import pytest
from textual.app import App, ComposeResult

from searchlist.tui import FilterState, SearchList, SelectionChanged
from searchlist.tui.app import PickerApp

from tests.helpers import NOTES, make_items


class _HostApp(App[None]):
    def __init__(self) -> None:
        super().__init__()
        self.released: list[str] = []
        self.bound: list[bool] = []
        self.changes: list[tuple[str, bool]] = []

    def compose(self) -> ComposeResult:
        yield SearchList(make_items(*NOTES), id="list")

    def on_mount(self) -> None:
        self.query_one(SearchList).focus()

    def on_search_list_key_released(self, event: SearchList.KeyReleased) -> None:
        self.released.append(event.key)
        self.bound.append(event.bound)

    def on_selection_changed(self, event: SelectionChanged) -> None:
        self.changes.append((event.item.title, event.selected))


@pytest.mark.anyio
async def test_unused_keys_are_released_to_the_host() -> None:
    app = _HostApp()
    async with app.run_test() as pilot:
        await pilot.press("up", "x")
        await pilot.pause()

        assert app.released == ["up", "x"]
        assert app.bound == [True, False]


@pytest.mark.anyio
async def test_filter_keys_stay_inside_the_list() -> None:
    app = _HostApp()
    async with app.run_test() as pilot:
        search_list = app.query_one(SearchList)
        await pilot.press("slash", "g", "a", "m", "enter")
        await pilot.pause()

        assert app.released == []
        assert search_list.controller.list.filter_state == FilterState.APPLIED
        assert search_list.highlighted.title == "Gamma Alpha"


@pytest.mark.anyio
async def test_toggle_posts_selection_changed() -> None:
    app = _HostApp()
    async with app.run_test() as pilot:
        await pilot.press("down", "space")
        await pilot.pause()

        assert app.changes == [("Beta Plan", True)]
        assert [item.title for item in app.query_one(SearchList).selected_items] == ["Beta Plan"]


@pytest.mark.anyio
async def test_resize_sizes_list_below_search_box() -> None:
    app = _HostApp()
    async with app.run_test(size=(60, 12)) as pilot:
        await pilot.pause()
        controller = app.query_one(SearchList).controller

        assert controller.search_input.width == 60
        assert controller.list.height == 11


@pytest.mark.anyio
async def test_picker_returns_selected_items() -> None:
    items = make_items(*NOTES)
    app = PickerApp(items)
    async with app.run_test() as pilot:
        await pilot.press("down", "space", "enter")

    assert app.return_value == [items[1]]


@pytest.mark.anyio
async def test_picker_returns_highlighted_item_without_selection() -> None:
    items = make_items(*NOTES)
    app = PickerApp(items)
    async with app.run_test() as pilot:
        await pilot.press("end", "enter")

    assert app.return_value == [items[2]]


@pytest.mark.anyio
async def test_picker_escape_cancels_filter_then_quits() -> None:
    app = PickerApp(make_items(*NOTES))
    async with app.run_test() as pilot:
        await pilot.press("slash", "b")
        await pilot.press("escape")
        await pilot.pause()

        assert app.is_running
        assert app.query_one(SearchList).controller.list.filter_state == FilterState.UNFILTERED

        await pilot.press("escape")

    assert app.return_value is None


@pytest.mark.anyio
async def test_full_help_lists_browsing_keys() -> None:
    app = _HostApp()
    async with app.run_test() as pilot:
        search_list = app.query_one(SearchList)
        await pilot.press("question_mark")
        await pilot.pause()

        assert search_list.controller.list.show_help
        help_line = search_list.render().renderables[-1].plain
        assert "/ Filter" in help_line
        assert "? More" in help_line


def test_empty_list_renders_placeholder() -> None:
    search_list = SearchList([])

    lines = [line.plain for line in search_list.render().renderables]

    assert lines[-1] == "  No items."
