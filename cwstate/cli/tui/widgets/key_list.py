"""Selectable key list pane."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from cwstate.cli.tui.theme import ITEM_STYLE, highlight_style
from cwstate.constants import HIGHLIGHT_SYMBOL
from cwstate.core.navigator import Focus


class KeyList(Widget):
    """Bordered list of keys with a single highlighted row.

    The widget only mirrors navigator state; it never changes the selection
    itself. ``window_start`` keeps the highlighted row inside the visible
    window.
    """

    DEFAULT_CSS = """
    KeyList {
        border: solid $secondary;
        border-title-align: left;
        height: 1fr;
        width: 1fr;
    }
    """

    # Storage keys and values are raw chain data; never turn them into links.
    auto_links = False

    key_names: reactive[tuple[str, ...]] = reactive(tuple)
    selected: reactive[int | None] = reactive(None)
    focus_pane: reactive[Focus] = reactive(Focus.PRIMARY)

    def __init__(self, title: str, pane: Focus, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.pane = pane
        self.border_title = title
        self.window_start = 0

    def _visible_range(self, height: int) -> tuple[int, int]:
        """Adjust scroll so the selection is visible and return (start, end)."""
        height = max(1, height)
        max_offset = max(0, len(self.key_names) - height)
        if self.selected is not None:
            if self.selected < self.window_start:
                self.window_start = self.selected
            elif self.selected >= self.window_start + height:
                self.window_start = self.selected - height + 1
        self.window_start = max(0, min(self.window_start, max_offset))
        return self.window_start, min(len(self.key_names), self.window_start + height)

    def render_lines_text(self, height: int) -> Text:
        start, end = self._visible_range(height)
        result = Text(no_wrap=True, overflow="ellipsis")
        padding = " " * len(HIGHLIGHT_SYMBOL)
        for index in range(start, end):
            if index > start:
                result.append("\n")
            key = self.key_names[index]
            if index == self.selected:
                result.append(f"{HIGHLIGHT_SYMBOL}{key}", style=highlight_style(self.pane, self.focus_pane))
            else:
                result.append(f"{padding}{key}", style=ITEM_STYLE)
        return result

    def render(self) -> Text:
        return self.render_lines_text(self.content_size.height)

    def watch_key_names(self, _value: tuple[str, ...]) -> None:
        self.window_start = 0
        self.refresh()

    def watch_selected(self, _value: int | None) -> None:
        self.refresh()

    def watch_focus_pane(self, _value: Focus) -> None:
        self.refresh()
