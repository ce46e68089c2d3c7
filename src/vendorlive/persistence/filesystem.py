"""File-based key/value store for engine collections."""

from __future__ import annotations

import asyncio
import os
import re
import uuid
from pathlib import Path
from typing import Optional

from ..config import settings

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class FileKeyValueStore:
    """Thin wrapper around the data root storing one JSON document per key."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.state_root = self.root / "state"
        self.state_root.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.state_root / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), value)

    @staticmethod
    def _read(path: Path) -> Optional[str]:
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return handle.read()

    @staticmethod
    def _write(path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Unique temp name per write so concurrent sets of one key never collide.
        tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_path, path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
