"""Colors and styles for the state browser panes."""

from rich.style import Style

from cwstate.core.navigator import Focus

# Highlight background of the list that currently has focus
FOCUSED_HIGHLIGHT_BG = "bright_yellow"
# Highlight background of the list without focus
UNFOCUSED_HIGHLIGHT_BG = "yellow"

ITEM_STYLE = Style(color="grey70")
VALUE_STYLE = Style(italic=True)


def highlight_style(pane: Focus, focus: Focus) -> Style:
    """Selected-row style for a pane given the navigator focus."""
    bg = FOCUSED_HIGHLIGHT_BG if pane is focus else UNFOCUSED_HIGHLIGHT_BG
    return Style(bgcolor=bg, color="black", bold=True)
