from __future__ import annotations

import logging
from typing import Any, Iterable

from ..domain.errors import StorageReadFailure
from ..domain.repositories import KeyValueStore
from .serialization import dump_value, load_value

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local store keeping serialized text, so values go through the same
    JSON round-trip as the SQLite backend.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self.raw: dict[str, str] = dict(initial or {})

    async def get(self, key: str, fallback: Any = None) -> Any:
        if key not in self.raw:
            return fallback
        try:
            return load_value(key, self.raw[key])
        except StorageReadFailure as exc:
            logger.warning("Falling back to default: %s", exc)
            return fallback

    async def set(self, key: str, value: Any) -> None:
        self.raw[key] = dump_value(value)

    async def delete(self, key: str) -> None:
        self.raw.pop(key, None)

    async def delete_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.raw.pop(key, None)

    async def contains(self, key: str) -> bool:
        return key in self.raw
