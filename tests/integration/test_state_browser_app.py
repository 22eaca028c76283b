"""Pilot-driven tests for the state browser app."""

import pytest

from cwstate.cli.tui.app import StateBrowserApp
from cwstate.cli.tui.widgets.key_list import KeyList
from cwstate.cli.tui.widgets.value_pane import ValuePane
from cwstate.constants import NO_KEY_SELECTED
from cwstate.core.navigator import Focus
from cwstate.core.state_tree import StateTree

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


def _tree() -> StateTree:
    return StateTree.from_mapping({"x": {"a": "1", "b": "2"}, "y": "leaf"})


async def test_initial_panes_mirror_navigator():
    app = StateBrowserApp(_tree(), address="juno1contract")

    async with app.run_test() as pilot:
        await pilot.pause()
        primary = app.query_one("#primary-keys", KeyList)
        secondary = app.query_one("#secondary-keys", KeyList)
        value = app.query_one("#state-value", ValuePane)

        assert primary.key_names == ("x", "y")
        assert primary.selected == 0
        assert secondary.key_names == ("a", "b")
        assert secondary.selected == 0
        assert value.display_text == "1"
        assert app.sub_title == "juno1contract"


async def test_arrow_keys_walk_the_tree():
    app = StateBrowserApp(_tree())

    async with app.run_test() as pilot:
        await pilot.press("right", "down")
        assert app.navigator.focus is Focus.SECONDARY
        assert app.query_one("#secondary-keys", KeyList).selected == 1
        assert app.query_one("#state-value", ValuePane).value == "2"

        await pilot.press("left", "down")
        secondary = app.query_one("#secondary-keys", KeyList)
        assert app.query_one("#primary-keys", KeyList).selected == 1
        assert secondary.key_names == ()
        assert secondary.selected is None
        assert app.query_one("#state-value", ValuePane).value == "leaf"

        await pilot.press("right")
        assert app.navigator.focus is Focus.PRIMARY
        assert app.query_one("#primary-keys", KeyList).focus_pane is Focus.PRIMARY


async def test_empty_tree_shows_sentinel():
    app = StateBrowserApp(StateTree())

    async with app.run_test() as pilot:
        await pilot.press("down", "up", "right")
        assert app.query_one("#state-value", ValuePane).display_text == NO_KEY_SELECTED


async def test_highlight_marks_selected_row():
    app = StateBrowserApp(_tree())

    async with app.run_test() as pilot:
        await pilot.pause()
        text = app.query_one("#primary-keys", KeyList).render_lines_text(10)
        assert text.plain.splitlines() == [">> x", "   y"]


async def test_selection_stays_visible_in_short_list():
    app = StateBrowserApp(StateTree.from_mapping({f"key{i:02d}": str(i) for i in range(30)}))

    async with app.run_test() as pilot:
        await pilot.press(*["down"] * 12)
        primary = app.query_one("#primary-keys", KeyList)
        lines = primary.render_lines_text(5).plain.splitlines()
        assert len(lines) == 5
        assert lines[-1] == ">> key12"


async def test_q_quits():
    app = StateBrowserApp(_tree())

    async with app.run_test() as pilot:
        await pilot.press("q")

    assert app.return_code == 0


async def test_raw_chain_data_is_shown_verbatim():
    raw = "[b]https://lcd.example/[/b]"
    app = StateBrowserApp(StateTree.from_mapping({"uri": raw}))

    async with app.run_test() as pilot:
        await pilot.pause()
        value = app.query_one("#state-value", ValuePane)

        assert value.auto_links is False
        assert app.query_one("#primary-keys", KeyList).auto_links is False
        assert value.display_text == raw
