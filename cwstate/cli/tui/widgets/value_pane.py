"""Resolved value pane."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from cwstate.cli.tui.theme import VALUE_STYLE
from cwstate.constants import NO_KEY_SELECTED


class ValuePane(Widget):
    """Shows the value addressed by the current selection."""

    DEFAULT_CSS = """
    ValuePane {
        border: solid $secondary;
        border-title-align: left;
        background: black;
        color: white;
        content-align: center middle;
        text-align: center;
        width: 1fr;
    }
    """

    # Values are raw chain data.
    auto_links = False

    value: reactive[str | None] = reactive(None)

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.border_title = "State Value"

    @property
    def display_text(self) -> str:
        return NO_KEY_SELECTED if self.value is None else self.value

    def render(self) -> Text:
        return Text(self.display_text, style=VALUE_STYLE, justify="center")
