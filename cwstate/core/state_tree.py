"""Immutable contract state tree.

A loaded contract state is a mapping from top-level storage keys to values.
Each value is either a scalar item or a keyed map of further values.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TypeAlias


class ValueKind(str, Enum):
    """Variant tag for state values."""

    ITEM = "item"
    MAP = "map"


class KeyNotFoundError(KeyError):
    """Lookup of a key that is not present in a tree or map."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key


@dataclass(frozen=True)
class StateItem:
    """Terminal scalar value."""

    value: str
    kind: ValueKind = field(default=ValueKind.ITEM, init=False)


@dataclass(frozen=True)
class StateMap:
    """Ordered mapping from string keys to state values."""

    entries: Mapping[str, "StateValue"] = field(default_factory=dict)
    kind: ValueKind = field(default=ValueKind.MAP, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def keys(self) -> tuple[str, ...]:
        return tuple(self.entries)

    def get(self, key: str) -> "StateValue":
        try:
            return self.entries[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def __len__(self) -> int:
        return len(self.entries)


StateValue: TypeAlias = StateItem | StateMap


def render_value(value: StateValue) -> str:
    """Return display text for a value.

    Items render as their scalar. Maps render as compact JSON so nested
    storage is still readable in a single pane.
    """
    match value.kind:
        case ValueKind.ITEM:
            return value.value  # type: ignore[union-attr]
        case ValueKind.MAP:
            return json.dumps(_to_plain(value), separators=(",", ":"))
    raise AssertionError(f"unhandled value kind: {value.kind}")


def _to_plain(value: StateValue) -> object:
    if isinstance(value, StateItem):
        return value.value
    return {key: _to_plain(child) for key, child in value.entries.items()}


def to_state_value(raw: object) -> StateValue:
    """Convert a plain Python value into a state value."""
    if isinstance(raw, (StateItem, StateMap)):
        return raw
    if isinstance(raw, Mapping):
        return StateMap({str(key): to_state_value(child) for key, child in raw.items()})
    if isinstance(raw, str):
        return StateItem(raw)
    return StateItem(str(raw))


class StateTree:
    """Read-only top-level view of a contract's state."""

    def __init__(self, entries: Mapping[str, StateValue] | None = None) -> None:
        self._entries: Mapping[str, StateValue] = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "StateTree":
        """Build a tree from nested plain mappings.

        Strings become items, mappings become maps and any other scalar is
        rendered with ``str()``.
        """
        return cls({str(key): to_state_value(value) for key, value in data.items()})

    def keys(self) -> tuple[str, ...]:
        """Top-level keys in insertion order."""
        return tuple(self._entries)

    def get(self, key: str) -> StateValue:
        """Return the value for a top-level key.

        Raises:
            KeyNotFoundError: key is not part of the tree
        """
        try:
            return self._entries[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def items(self) -> Iterator[tuple[str, StateValue]]:
        return iter(self._entries.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"StateTree(keys={list(self._entries)!r})"
