"""State browser application.

Layout (mirrors the classic cw-state screen):

    +--------------+--------------+
    |              |   Map Key    |
    |  State key   |    (80%)     |
    |              +--------------+
    |              | State Value  |
    +--------------+--------------+
"""

from __future__ import annotations

from loguru import logger
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical

from cwstate.cli.tui.widgets.key_list import KeyList
from cwstate.cli.tui.widgets.value_pane import ValuePane
from cwstate.core.navigator import DualPaneNavigator, Focus, NavCommand
from cwstate.core.state_tree import StateTree


class StateBrowserApp(App[None]):
    """Dual-pane browser over a loaded contract state tree."""

    TITLE = "cw-state"

    BINDINGS = [
        Binding("up", "navigate('move_previous')", "Up", show=False),
        Binding("down", "navigate('move_next')", "Down", show=False),
        Binding("left", "navigate('move_left')", "Keys", show=False),
        Binding("right", "navigate('move_right')", "Map", show=False),
        Binding("q", "quit", "Quit"),
    ]

    CSS = """
    #panes {
        height: 1fr;
    }
    #primary-keys {
        width: 1fr;
    }
    #right-column {
        width: 1fr;
    }
    #secondary-keys {
        height: 4fr;
    }
    #state-value {
        height: 1fr;
    }
    """

    def __init__(self, tree: StateTree, *, address: str | None = None, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.navigator = DualPaneNavigator(tree)
        self.address = address

    def compose(self) -> ComposeResult:
        with Horizontal(id="panes"):
            yield KeyList("State key", Focus.PRIMARY, id="primary-keys")
            with Vertical(id="right-column"):
                yield KeyList("Map Key", Focus.SECONDARY, id="secondary-keys")
                yield ValuePane(id="state-value")

    def on_mount(self) -> None:
        if self.address:
            self.sub_title = self.address
        logger.info("State browser started with {} top-level keys", len(self.navigator.primary_keys))
        self.sync_panes()

    def action_navigate(self, command: str) -> None:
        self.navigator.apply(NavCommand(command))
        self.sync_panes()

    def sync_panes(self) -> None:
        """Copy navigator state into the pane widgets."""
        nav = self.navigator
        primary = self.query_one("#primary-keys", KeyList)
        primary.key_names = nav.primary_keys
        primary.selected = nav.primary_selected
        primary.focus_pane = nav.focus

        secondary = self.query_one("#secondary-keys", KeyList)
        secondary.key_names = nav.secondary_keys
        secondary.selected = nav.secondary_selected
        secondary.focus_pane = nav.focus

        self.query_one("#state-value", ValuePane).value = nav.resolved_value()
