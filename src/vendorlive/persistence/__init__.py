"""Durable store adapters."""

from __future__ import annotations

from ..config import settings
from ..services.collaborators import KeyValueStore
from .filesystem import FileKeyValueStore
from .memory import InMemoryKeyValueStore


def build_store(backend: str | None = None) -> KeyValueStore:
    match backend or settings.storage_backend:
        case "memory":
            return InMemoryKeyValueStore()
        case "file":
            return FileKeyValueStore()
        case "supabase":
            from .supabase_store import SupabaseKeyValueStore

            return SupabaseKeyValueStore()
        case other:
            raise ValueError(f"Unknown storage backend '{other}'.")


__all__ = ["FileKeyValueStore", "InMemoryKeyValueStore", "build_store"]
