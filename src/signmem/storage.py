"""Persistence. Un blob JSON por clave; el motor no sabe qué hay debajo."""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import threading
import time
from pathlib import Path
from typing import Protocol, runtime_checkable

from signmem.models import MemoryRecord

logger = logging.getLogger(__name__)

MEMORY_KEY = "@wordMemory"


class SignmemError(Exception):
    """Base error for signmem."""


class StorageError(SignmemError):
    """The key-value backend failed to read or write."""


@runtime_checkable
class KeyValueStore(Protocol):
    """Async key-value collaborator. Values are opaque strings."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class InMemoryKV:
    """Dict backend. Para tests y sesiones sin disco."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def close(self) -> None:
        pass


class SQLiteKV:
    """SQLite backend. Zero config. Un archivo = todo el estado del alumno."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        try:
            self.conn = sqlite3.connect(str(self.path), check_same_thread=False)
            self.conn.execute("PRAGMA journal_mode=WAL")
            self._init_schema()
        except sqlite3.Error as exc:
            raise StorageError(f"cannot open {self.path}: {exc}") from exc

    def _init_schema(self) -> None:
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at REAL NOT NULL
            );
        """)
        self.conn.commit()

    # ── sync core ──────────────────────────────────────────────────────

    def _get(self, key: str) -> str | None:
        with self._lock:
            try:
                row = self.conn.execute(
                    "SELECT value FROM kv WHERE key = ?", (key,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"read {key!r} failed: {exc}") from exc
        if row is None:
            return None
        return row[0]

    def _set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                self.conn.execute(
                    """INSERT OR REPLACE INTO kv (key, value, updated_at)
                       VALUES (?, ?, ?)""",
                    (key, value, time.time()),
                )
                self.conn.commit()
            except sqlite3.Error as exc:
                raise StorageError(f"write {key!r} failed: {exc}") from exc

    # ── async API ──────────────────────────────────────────────────────

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    def keys(self) -> list[str]:
        with self._lock:
            rows = self.conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        return [r[0] for r in rows]

    def close(self) -> None:
        with self._lock:
            self.conn.close()


# ── Score mapping ──────────────────────────────────────────────────────


def decode_records(raw: str | None) -> dict[str, MemoryRecord]:
    """Parse the persisted score mapping. Bad entries are dropped, not fatal."""
    if not raw:
        return {}
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"score mapping must be an object, got {type(data).__name__}")

    records: dict[str, MemoryRecord] = {}
    for item_id, entry in data.items():
        if not isinstance(entry, dict) or not str(item_id).strip():
            logger.warning("Skipping malformed memory entry %r", item_id)
            continue
        score = entry.get("score", 0)
        last_seen = entry.get("lastSeen", 0)
        if not all(type(v) is int for v in (score, last_seen)):
            logger.warning("Skipping memory entry %r with bad fields: %r",
                           item_id, entry)
            continue
        records[item_id] = MemoryRecord(item_id, max(0, score), last_seen)
    return records


def encode_records(records: dict[str, MemoryRecord]) -> str:
    return json.dumps({k: r.to_json() for k, r in records.items()})


class ScoreStore:
    """Whole-mapping adapter over a KeyValueStore.

    Every load reads the full mapping and every save writes it back in
    full. Failures are logged and degrade to "no data".
    """

    def __init__(self, kv: KeyValueStore | None, key: str = MEMORY_KEY) -> None:
        self.kv = kv
        self.key = key

    @property
    def available(self) -> bool:
        return self.kv is not None

    async def read(self) -> dict[str, MemoryRecord]:
        """Strict load for read-modify-write. Raises StorageError."""
        if self.kv is None:
            raise StorageError("no key-value store provisioned")
        try:
            raw = await self.kv.get(self.key)
            return decode_records(raw)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(f"cannot load {self.key!r}: {exc}") from exc

    async def write(self, records: dict[str, MemoryRecord]) -> None:
        if self.kv is None:
            raise StorageError("no key-value store provisioned")
        try:
            await self.kv.set(self.key, encode_records(records))
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(f"cannot save {self.key!r}: {exc}") from exc

    async def load(self) -> dict[str, MemoryRecord]:
        """Lenient load: empty mapping when storage is missing or broken."""
        if self.kv is None:
            logger.warning("No key-value store provisioned; using empty memory.")
            return {}
        try:
            return await self.read()
        except StorageError:
            logger.exception("Failed to load memory scores")
            return {}
