from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from ...domain.errors import SchemaError
from ...domain.events import ChangeBus
from ...domain.repositories import KeyValueStore
from ..mappers import unwrap, wrap

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreCollection(Generic[T]):
    """
    Ordered collection persisted as a single JSON list under one store key.

    Every mutation is one read-modify-write of the whole list. Records that do
    not match the schema are dropped on read and disappear on the next write.
    Mutations that log activity use ``_write`` and publish only once the
    activity entry is stored.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        *,
        parse: Callable[..., T],
        dump: Callable[[T], dict],
        bus: Optional[ChangeBus] = None,
    ):
        self._store = store
        self._key = key
        self._parse = parse
        self._dump = dump
        self._bus = bus

    @property
    def key(self) -> str:
        return self._key

    async def _load(self) -> list[T]:
        raw: Any = await self._store.get(self._key, None)
        if raw is None:
            return []
        try:
            _, data = unwrap(raw)
        except SchemaError as exc:
            logger.warning("Ignoring %s: %s", self._key, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a list, got %s", self._key, type(data).__name__)
            return []
        items: list[T] = []
        for index, row in enumerate(data):
            try:
                items.append(self._parse(row, index=index))
            except SchemaError as exc:
                logger.warning("Rejected record #%d in %s: %s", index, self._key, exc)
        return items

    async def _write(self, items: list[T]) -> None:
        await self._store.set(self._key, wrap([self._dump(item) for item in items]))

    async def _save(self, items: list[T]) -> None:
        await self._write(items)
        await self._notify()

    async def _notify(self) -> None:
        if self._bus is not None:
            await self._bus.publish(self._key)

    async def list(self) -> list[T]:
        return await self._load()
