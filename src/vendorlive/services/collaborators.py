"""Contracts for the external collaborators the engine depends on."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ..models.domain import Position


class KeyValueStore(Protocol):
    """Async durable store holding serialized collections under string keys."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...


class PositionProvider(Protocol):
    async def request_permission(self) -> bool:
        ...

    async def get_current_position(self) -> Position:
        ...

    async def reverse_geocode(self, position: Position) -> Optional[str]:
        ...


class NotificationDispatcher(Protocol):
    """Fire-and-forget local notification channel."""

    async def schedule_local(self, title: str, body: str, data: Mapping[str, Any]) -> None:
        ...
