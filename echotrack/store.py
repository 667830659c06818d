from __future__ import annotations
import json
import logging
import sqlite3
from typing import Any, List, MutableMapping, Optional, Protocol

log = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Synchronous list-per-key store. Last write wins, no transactions."""

    def load(self, key: str) -> List[Any]: ...
    def save(self, key: str, items: List[Any]) -> None: ...


def _decode(key: str, raw: Optional[str]) -> List[Any]:
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        log.warning("Corrupt data under %r, falling back to empty list", key, exc_info=True)
        return []
    if not isinstance(value, list):
        log.warning("Expected a list under %r, got %s; falling back to empty list", key, type(value).__name__)
        return []
    return value


class MemoryStore:
    """Mapping-backed store holding JSON text, like browser local storage."""

    def __init__(self, data: Optional[MutableMapping[str, str]] = None):
        self.data: MutableMapping[str, str] = {} if data is None else data

    def load(self, key: str) -> List[Any]:
        return _decode(key, self.data.get(key))

    def save(self, key: str, items: List[Any]) -> None:
        self.data[key] = json.dumps(items)


class SqliteStore:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def load(self, key: str) -> List[Any]:
        row = self.conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return _decode(key, row["value"] if row else None)

    def save(self, key: str, items: List[Any]) -> None:
        self.conn.execute(
            "INSERT INTO kv(key,value) VALUES(?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, json.dumps(items)),
        )
        self.conn.commit()
