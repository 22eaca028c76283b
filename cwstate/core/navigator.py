"""Dual-pane navigation over a contract state tree.

The primary pane lists the tree's top-level keys. The secondary pane lists the
child keys of the selected primary entry when that entry is a map. Moving in
the primary pane always rebuilds the secondary pane and resets its selection;
moving in the secondary pane never touches the primary pane.
"""

from __future__ import annotations

from enum import Enum

from loguru import logger

from cwstate.core.state_tree import StateTree, StateValue, ValueKind, render_value


class Focus(str, Enum):
    """Which pane receives move commands."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


class NavCommand(str, Enum):
    """Discrete navigation commands emitted by the presenter."""

    MOVE_NEXT = "move_next"
    MOVE_PREVIOUS = "move_previous"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"


def _next_index(selected: int | None, length: int) -> int | None:
    if length == 0:
        return None
    if selected is None:
        return 0
    return (selected + 1) % length


def _previous_index(selected: int | None, length: int) -> int | None:
    if length == 0:
        return None
    if selected is None:
        return 0
    return (selected - 1) % length


class DualPaneNavigator:
    """Cursor pair and focus over a read-only state tree."""

    def __init__(self, tree: StateTree) -> None:
        self._tree = tree
        self.primary_keys: tuple[str, ...] = tree.keys()
        self.primary_selected: int | None = 0 if self.primary_keys else None
        self.secondary_keys: tuple[str, ...] = ()
        self.secondary_selected: int | None = None
        self.focus = Focus.PRIMARY
        self._recompute_secondary()

    @property
    def tree(self) -> StateTree:
        return self._tree

    @property
    def selected_primary_key(self) -> str | None:
        if self.primary_selected is None:
            return None
        return self.primary_keys[self.primary_selected]

    @property
    def selected_secondary_key(self) -> str | None:
        if self.secondary_selected is None:
            return None
        return self.secondary_keys[self.secondary_selected]

    def _primary_value(self) -> StateValue | None:
        key = self.selected_primary_key
        if key is None:
            return None
        return self._tree.get(key)

    def _recompute_secondary(self) -> None:
        """Rebuild the secondary list from the current primary selection."""
        value = self._primary_value()
        if value is not None and value.kind is ValueKind.MAP:
            self.secondary_keys = value.keys()  # type: ignore[union-attr]
            self.secondary_selected = 0 if self.secondary_keys else None
        else:
            self.secondary_keys = ()
            self.secondary_selected = None

    def move_next(self) -> None:
        """Select the next entry of the focused pane, wrapping at the end."""
        if self.focus is Focus.PRIMARY:
            self.primary_selected = _next_index(self.primary_selected, len(self.primary_keys))
            self._recompute_secondary()
        else:
            self.secondary_selected = _next_index(self.secondary_selected, len(self.secondary_keys))

    def move_previous(self) -> None:
        """Select the previous entry of the focused pane, wrapping at the start."""
        if self.focus is Focus.PRIMARY:
            self.primary_selected = _previous_index(self.primary_selected, len(self.primary_keys))
            self._recompute_secondary()
        else:
            self.secondary_selected = _previous_index(self.secondary_selected, len(self.secondary_keys))

    def move_right(self) -> None:
        """Move focus into the secondary pane when it has entries."""
        if self.focus is Focus.PRIMARY and self.secondary_keys:
            self.focus = Focus.SECONDARY
        else:
            logger.debug("move_right ignored (focus={}, secondary={})", self.focus.value, len(self.secondary_keys))

    def move_left(self) -> None:
        """Move focus back to the primary pane."""
        if self.focus is Focus.SECONDARY:
            self.focus = Focus.PRIMARY

    def apply(self, command: NavCommand) -> None:
        """Dispatch a navigation command."""
        match command:
            case NavCommand.MOVE_NEXT:
                self.move_next()
            case NavCommand.MOVE_PREVIOUS:
                self.move_previous()
            case NavCommand.MOVE_LEFT:
                self.move_left()
            case NavCommand.MOVE_RIGHT:
                self.move_right()

    def resolved_value(self) -> str | None:
        """Return the value addressed by the current selection.

        Returns None when nothing is selected: an empty tree, or a map
        without entries.
        """
        value = self._primary_value()
        if value is None:
            return None
        match value.kind:
            case ValueKind.ITEM:
                return render_value(value)
            case ValueKind.MAP:
                key = self.selected_secondary_key
                if key is None:
                    return None
                return render_value(value.get(key))  # type: ignore[union-attr]
        raise AssertionError(f"unhandled value kind: {value.kind}")
