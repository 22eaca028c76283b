"""Decode raw contract storage into a state tree.

Contract storage written by cw-storage-plus uses two key shapes:

- ``Item`` keys are the bare namespace bytes.
- ``Map`` keys are a 2-byte big-endian namespace length, the namespace, and
  the entry key. Composite entry keys repeat the length prefix for every
  segment but the last.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from cwstate.core.errors import StateDecodeError
from cwstate.core.state_tree import StateItem, StateMap, StateTree, StateValue

KEY_SEPARATOR = "/"


@dataclass(frozen=True)
class RawRecord:
    """One storage record as stored on chain."""

    key: bytes
    value: bytes


def _printable(data: bytes) -> str | None:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if not text or not text.isprintable():
        return None
    return text


def display_bytes(data: bytes) -> str:
    """Return UTF-8 text when printable, lowercase hex otherwise."""
    text = _printable(data)
    return text if text is not None else data.hex()


def _split_prefixed(data: bytes) -> tuple[bytes, bytes] | None:
    """Split one length-prefixed segment off ``data``.

    Returns None unless a non-empty segment and a non-empty remainder exist.
    """
    if len(data) < 3:
        return None
    length = int.from_bytes(data[:2], "big")
    if length == 0 or 2 + length >= len(data):
        return None
    return data[2 : 2 + length], data[2 + length :]


def split_map_key(key: bytes) -> tuple[str, bytes] | None:
    """Return (namespace, entry key) for a map key, or None for an item key."""
    parts = _split_prefixed(key)
    if parts is None:
        return None
    namespace, rest = parts
    name = _printable(namespace)
    if name is None:
        return None
    return name, rest


def display_entry_key(rest: bytes) -> str:
    """Render a map entry key, splitting composite segments.

    A key only counts as composite when every length-prefixed segment is
    printable text; binary keys (u64 ids, raw addresses) render as one hex
    string.
    """
    segments: list[str] = []
    remainder = rest
    while True:
        parts = _split_prefixed(remainder)
        if parts is None:
            break
        head, remainder = parts
        text = _printable(head)
        if text is None:
            return display_bytes(rest)
        segments.append(text)
    segments.append(display_bytes(remainder))
    return KEY_SEPARATOR.join(segments)


def decode_value(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value.hex()


def _claim_key(owners: dict[str, bytes], name: str, raw: bytes, scope: str) -> str:
    """Reserve a display name for a raw key.

    Two different raw keys can render alike (binary ``b"\\xff\\x01"`` and text
    ``b"ff01"``). The later one is shown as ``0x<hex>`` instead of replacing
    the earlier record.
    """
    owner = owners.get(name)
    if owner is None or owner == raw:
        owners[name] = raw
        return name
    alias = f"0x{raw.hex()}"
    logger.warning("Storage key {} in {} renders like another key; showing it as {}", name, scope, alias)
    owners[alias] = raw
    return alias


def build_state_tree(records: Iterable[RawRecord]) -> StateTree:
    """Group raw records into items and maps, keeping first-seen key order."""
    order: list[str] = []
    items: dict[str, str] = {}
    item_owners: dict[str, bytes] = {}
    maps: dict[str, dict[str, StateValue]] = {}
    map_owners: dict[str, dict[str, bytes]] = {}

    for record in records:
        split = split_map_key(record.key)
        if split is None:
            name = _claim_key(item_owners, display_bytes(record.key), record.key, "top level")
            if name not in items and name not in maps:
                order.append(name)
            items[name] = decode_value(record.value)
            continue
        namespace, rest = split
        if namespace not in items and namespace not in maps:
            order.append(namespace)
        entry = _claim_key(map_owners.setdefault(namespace, {}), display_entry_key(rest), rest, namespace)
        maps.setdefault(namespace, {})[entry] = StateItem(decode_value(record.value))

    entries: dict[str, StateValue] = {}
    for name in order:
        if name in maps:
            if name in items:
                logger.warning("Storage key {} is both an item and a map; keeping the map", name)
            entries[name] = StateMap(maps[name])
        else:
            entries[name] = StateItem(items[name])

    logger.debug("Decoded {} top-level keys ({} maps)", len(entries), len(maps))
    return StateTree(entries)


def decode_record(key_hex: str, value_b64: str) -> RawRecord:
    """Decode an LCD state model (hex key, base64 value).

    Raises:
        StateDecodeError: key is not hex or value is not base64
    """
    try:
        key = bytes.fromhex(key_hex)
    except ValueError as e:
        raise StateDecodeError(f"Invalid hex storage key: {key_hex!r}") from e
    try:
        value = base64.b64decode(value_b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise StateDecodeError(f"Invalid base64 value for key {key_hex!r}") from e
    return RawRecord(key=key, value=value)
