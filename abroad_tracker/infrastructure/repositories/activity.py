from __future__ import annotations

from typing import Optional

from ...domain.events import ChangeBus
from ...domain.models import ActivityEntry
from ...domain.repositories import ActivityRepository, Clock, KeyValueStore
from ..clock import SystemClock
from ..keys import StoreKeys
from ..mappers import activity_from_dict, activity_to_dict
from .base import StoreCollection

ACTIVITY_LIMIT = 12


class StoreActivityRepository(StoreCollection[ActivityEntry], ActivityRepository):
    """Newest-first activity feed, truncated to ``limit`` entries on every append."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Optional[Clock] = None,
        limit: int = ACTIVITY_LIMIT,
        bus: Optional[ChangeBus] = None,
    ):
        super().__init__(
            store,
            StoreKeys.ACTIVITY,
            parse=activity_from_dict,
            dump=activity_to_dict,
            bus=bus,
        )
        if limit < 1:
            raise ValueError("activity limit must be positive")
        self._clock = clock or SystemClock()
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    async def append(self, text: str) -> ActivityEntry:
        entry = ActivityEntry(text=text, at=self._clock.now())
        items = await self._load()
        items.insert(0, entry)
        await self._save(items[: self._limit])
        return entry
