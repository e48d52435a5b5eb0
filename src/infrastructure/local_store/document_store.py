"""JSON file document store used when no database is configured.

The whole flock lives in one file holding a collection per aggregate,
each keyed by id. Every write replaces the file atomically, but there is
no transaction spanning several writes. File access runs in a worker
thread so the event loop is never blocked on disk.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from src.application.errors import StorageError

logger = logging.getLogger(__name__)

COLLECTIONS = ("sheep", "breeding_plans", "manejos")


class LocalDocumentStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.lock = asyncio.Lock()

    def _empty(self) -> dict[str, dict[str, Any]]:
        return {name: {} for name in COLLECTIONS}

    def read(self) -> dict[str, dict[str, Any]]:
        if not self.path.exists():
            return self._empty()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Cannot read local store %s: %s", self.path, exc)
            raise StorageError("Local store is unreadable") from exc
        for name in COLLECTIONS:
            data.setdefault(name, {})
        return data

    def write(self, data: dict[str, dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(data, indent=2, ensure_ascii=False))
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.error("Cannot write local store %s: %s", self.path, exc)
            raise StorageError("Local store is not writable") from exc

    async def documents(self, collection: str) -> list[dict[str, Any]]:
        data = await asyncio.to_thread(self.read)
        return list(data[collection].values())

    async def document(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        data = await asyncio.to_thread(self.read)
        return data[collection].get(doc_id)

    async def put(self, collection: str, doc_id: str, doc: dict[str, Any]) -> None:
        async with self.lock:
            data = await asyncio.to_thread(self.read)
            data[collection][doc_id] = doc
            await asyncio.to_thread(self.write, data)

    async def put_if_version(
        self, collection: str, doc_id: str, doc: dict[str, Any], expected_version: int | None
    ) -> bool:
        """Replace a document when its stored version still matches."""
        async with self.lock:
            data = await asyncio.to_thread(self.read)
            current = data[collection].get(doc_id)
            if current is None:
                return False
            if expected_version is not None and current.get("version") != expected_version:
                return False
            data[collection][doc_id] = doc
            await asyncio.to_thread(self.write, data)
            return True

    async def remove(self, collection: str, doc_id: str) -> bool:
        async with self.lock:
            data = await asyncio.to_thread(self.read)
            if data[collection].pop(doc_id, None) is None:
                return False
            await asyncio.to_thread(self.write, data)
            return True
