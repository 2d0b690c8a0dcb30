from __future__ import annotations

import logging
from typing import Any, Iterable

from ...domain.errors import StorageReadFailure
from ...domain.repositories import KeyValueStore
from ..metrics import metrics
from ..serialization import dump_value, load_value
from .database import SQLiteDatabase

logger = logging.getLogger(__name__)


def _key_of(_self, key, *args, **kwargs) -> str:
    return key


class SQLiteKeyValueStore(KeyValueStore):
    def __init__(self, db: SQLiteDatabase):
        self._db = db

    @metrics.wrap_async("store:get", source="store", key_fn=_key_of)
    async def get(self, key: str, fallback: Any = None) -> Any:
        async with self._db.connect() as conn:
            cur = await conn.execute("SELECT value FROM kv_store WHERE key=?", (key,))
            row = await cur.fetchone()
        if not row:
            return fallback
        try:
            return load_value(key, row["value"])
        except StorageReadFailure as exc:
            logger.warning("Falling back to default: %s", exc)
            return fallback

    @metrics.wrap_async("store:set", source="store", key_fn=_key_of)
    async def set(self, key: str, value: Any) -> None:
        payload = dump_value(value)
        async with self._db.connect() as conn:
            await conn.execute(
                """
                INSERT INTO kv_store(key, value, updated_at)
                VALUES(?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                  value=excluded.value,
                  updated_at=excluded.updated_at
                """,
                (key, payload),
            )
            await conn.commit()

    @metrics.wrap_async("store:delete", source="store", key_fn=_key_of)
    async def delete(self, key: str) -> None:
        async with self._db.connect() as conn:
            await conn.execute("DELETE FROM kv_store WHERE key=?", (key,))
            await conn.commit()

    @metrics.wrap_async("store:delete_many", source="store")
    async def delete_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        async with self._db.connect() as conn:
            await conn.executemany("DELETE FROM kv_store WHERE key=?", [(key,) for key in keys])
            await conn.commit()

    @metrics.wrap_async("store:contains", source="store", key_fn=_key_of)
    async def contains(self, key: str) -> bool:
        async with self._db.connect() as conn:
            cur = await conn.execute("SELECT 1 FROM kv_store WHERE key=?", (key,))
            row = await cur.fetchone()
        return row is not None
