"""File-backed circuit breaker state. One JSON object at a fixed path, replaced atomically."""

import asyncio
import itertools
import threading
from pathlib import Path
from typing import Any, Optional

from secure_inquiry.infrastructure.storage.json_file import read_json, write_json_atomic
from secure_inquiry.scalability.circuit_state_store import CircuitBreakerState
from secure_inquiry.scalability.exceptions import CircuitStatePersistenceError


class JsonFileCircuitStateStore:
    """
    Implements CircuitStateStore on a local JSON file.
    Saves are numbered on the event loop and written under a thread lock; a save whose
    caller was cancelled may still finish in its worker thread, but never over a newer one.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._io_lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._written = 0

    @property
    def path(self) -> Path:
        return self._path

    def _read_sync(self) -> Any:
        with self._io_lock:
            return read_json(self._path)

    def _save_sync(self, sequence: int, data: dict) -> None:
        with self._io_lock:
            if sequence < self._written:
                return
            write_json_atomic(self._path, data)
            self._written = sequence

    async def load(self) -> Optional[CircuitBreakerState]:
        try:
            data = await asyncio.to_thread(self._read_sync)
        except (OSError, ValueError) as e:
            raise CircuitStatePersistenceError(
                f"Cannot read circuit state from {self._path}: {e}"
            ) from e
        if data is None:
            return None
        try:
            return CircuitBreakerState.from_dict(data)
        except ValueError as e:
            raise CircuitStatePersistenceError(
                f"Corrupt circuit state in {self._path}: {e}"
            ) from e

    async def save(self, state: CircuitBreakerState) -> None:
        sequence = next(self._sequence)
        try:
            await asyncio.to_thread(self._save_sync, sequence, state.to_dict())
        except (OSError, TypeError) as e:
            raise CircuitStatePersistenceError(
                f"Cannot write circuit state to {self._path}: {e}"
            ) from e
