"""Supabase table-backed key/value store.

Expects a table with a text primary key ``key`` and a text ``value`` column::

    create table engine_state (key text primary key, value text not null);
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any, Optional

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Shared client for the configured project, or None when credentials are missing."""
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured (missing URL or key)")
        return None
    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception:
        logger.exception("Failed to create Supabase client")
        return None


class SupabaseKeyValueStore:
    """Stores each serialized collection as one row. The client is synchronous, so calls run in a worker thread."""

    def __init__(self, client: Any | None = None, table: str | None = None) -> None:
        self.client = client or get_supabase_client()
        if self.client is None:
            raise ValueError("Supabase is not configured. Set VL_SUPABASE_URL and VL_SUPABASE_KEY.")
        self.table = table or settings.supabase_table

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    def _get(self, key: str) -> Optional[str]:
        response = self.client.table(self.table).select("value").eq("key", key).limit(1).execute()
        rows = response.data or []
        if not rows:
            return None
        return rows[0].get("value")

    def _set(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert({"key": key, "value": value}, on_conflict="key").execute()
