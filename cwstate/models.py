"""Typed models for LCD responses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StateModel:
    key: str  # hex-encoded storage key
    value: str  # base64-encoded storage value


@dataclass(frozen=True)
class PageResponse:
    next_key: str | None = None
    total: str | None = None


@dataclass(frozen=True)
class ContractStateResponse:
    models: list[StateModel] = field(default_factory=list)
    pagination: PageResponse | None = None
