"""Persistence boundary: string-keyed JSON documents.

Responsibilities
----------------
- `KeyValueStore` is the opaque byte store the ledger persists through:
  async `get(key) -> str | None` and `set(key, str)`, no transactions across
  keys, no partial reads.
- `SqliteKeyValueStore` keeps documents in the `kv_store` table;
  `MemoryKeyValueStore` backs tests and ephemeral runs.
- `JsonStore` adds JSON (de)serialization, key namespacing and a per-key
  `asyncio.Lock` so every read-mutate-write on one key runs to completion
  before the next one starts (no lost updates from interleaved writers).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar

from wander_ledger.core.errors import StorageError

from .schema import BASIC_UTC_NOW

logger = logging.getLogger("wander_ledger.store")

T = TypeVar("T")


class KeyValueStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the raw document stored under key, or None."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Replace the document stored under key."""
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return sorted(self._data)


class SqliteKeyValueStore(KeyValueStore):
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    async def get(self, key: str) -> Optional[str]:
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
                row = cur.fetchone()
                return row["value"] if row else None
        except sqlite3.Error as e:
            raise StorageError(f"failed to read '{key}': {e}", key=key) from e

    async def set(self, key: str, value: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    f"""
                    INSERT INTO kv_store (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = ({BASIC_UTC_NOW})
                    """,
                    (key, value),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"failed to write '{key}': {e}", key=key) from e


class JsonStore:
    """JSON documents over a `KeyValueStore`, serialized per key."""

    def __init__(self, backend: KeyValueStore, namespace: str = "wander"):
        self.backend = backend
        self.namespace = namespace
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}/{key}" if self.namespace else key

    async def read(self, key: str, default: Any = None) -> Any:
        full_key = self._full_key(key)
        raw = await self.backend.get(full_key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageError(f"corrupt document under '{full_key}'", key=full_key) from e

    async def write(self, key: str, value: Any) -> None:
        await self.backend.set(
            self._full_key(key), json.dumps(value, separators=(",", ":"), default=str)
        )

    async def update(
        self, key: str, mutate: Callable[[Any], T], default: Any = None
    ) -> T:
        """Read the document, let `mutate` change it in place, write it back.

        `mutate` receives the decoded document (or `default` when the key is
        empty) and returns the caller's result. The write is skipped when
        `mutate` raises; the stored document is then untouched.
        """
        async with self._locks[key]:
            data = await self.read(key, default)
            result = mutate(data)
            await self.write(key, data)
            logger.debug("document updated", extra={"storage_key": self._full_key(key)})
            return result

    async def replace(self, key: str, value: Any) -> None:
        async with self._locks[key]:
            await self.write(key, value)
