from __future__ import annotations

from contextlib import asynccontextmanager

import aiosqlite
from aiosqlite import OperationalError

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS kv_store (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL,
  updated_at TEXT DEFAULT (datetime('now'))
);
"""


class SQLiteDatabase:
    def __init__(self, path: str):
        self.path = path

    async def init(self) -> None:
        async with aiosqlite.connect(self.path) as conn:
            conn.row_factory = aiosqlite.Row
            await conn.executescript(SCHEMA_SQL)
            await self._ensure_kv_columns(conn)
            await conn.commit()

    async def _ensure_kv_columns(self, conn: aiosqlite.Connection) -> None:
        # files created before updated_at existed
        try:
            await conn.execute("ALTER TABLE kv_store ADD COLUMN updated_at TEXT")
        except OperationalError as exc:
            if "duplicate column name" not in str(exc).lower():
                raise

    @asynccontextmanager
    async def connect(self):
        conn = await aiosqlite.connect(self.path)
        conn.row_factory = aiosqlite.Row
        try:
            yield conn
        finally:
            await conn.close()
