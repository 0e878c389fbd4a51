"""File-backed audit repository. Whole collection is one JSON array, rewritten atomically per append."""

import asyncio
import logging
import threading
from pathlib import Path
from typing import Any, List, Optional

from secure_inquiry.governance.audit_models import AuditEntry
from secure_inquiry.governance.exceptions import AuditPersistenceError
from secure_inquiry.infrastructure.storage.json_file import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class JsonFileAuditRepository:
    """
    Implements AuditRepository on a local JSON file.
    Append = read full collection, append in memory, atomic replace; one appender at a time.
    The thread lock is taken inside the worker thread: a cancelled append keeps running in
    its thread, and the next one must not start its read until that write has landed.
    A collection that cannot be parsed is reported, never overwritten.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()
        self._io_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load_raw(self) -> List[Any]:
        try:
            data = read_json(self._path)
        except (OSError, ValueError) as e:
            raise AuditPersistenceError(f"Cannot read audit log {self._path}: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise AuditPersistenceError(f"Audit log {self._path} is not a JSON array")
        return data

    def _read_sync(self) -> List[Any]:
        with self._io_lock:
            return self._load_raw()

    def _append_sync(self, record: dict) -> int:
        with self._io_lock:
            entries = self._load_raw()
            entries.append(record)
            try:
                write_json_atomic(self._path, entries)
            except OSError as e:
                raise AuditPersistenceError(f"Cannot write audit log {self._path}: {e}") from e
            return len(entries)

    async def append(self, entry: AuditEntry) -> None:
        async with self._lock:
            size = await asyncio.to_thread(self._append_sync, entry.to_dict())
        logger.debug("audit_log_written", extra={"path": str(self._path), "entries": size})

    async def list_entries(self) -> List[AuditEntry]:
        async with self._lock:
            raw = await asyncio.to_thread(self._read_sync)
        try:
            return [AuditEntry.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise AuditPersistenceError(f"Malformed entry in audit log {self._path}: {e}") from e

    async def get(self, entry_id: str) -> Optional[AuditEntry]:
        for entry in await self.list_entries():
            if entry.entry_id == entry_id:
                return entry
        return None

    async def health(self) -> dict:
        try:
            async with self._lock:
                raw = await asyncio.to_thread(self._read_sync)
        except AuditPersistenceError as e:
            return {"status": "error", "backend": "file", "error": e.message}
        return {"status": "ok", "backend": "file", "entries": len(raw)}
