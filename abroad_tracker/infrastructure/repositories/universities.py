from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from ...domain.events import ChangeBus
from ...domain.models import UniversityRecord, UniversityType
from ...domain.repositories import ActivityRepository, KeyValueStore, UniversitiesRepository
from ..keys import StoreKeys
from ..mappers import university_from_dict, university_to_dict
from .base import StoreCollection

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class StoreUniversitiesRepository(StoreCollection[UniversityRecord], UniversitiesRepository):
    def __init__(
        self,
        store: KeyValueStore,
        activity: ActivityRepository,
        *,
        bus: Optional[ChangeBus] = None,
        id_factory: Callable[[], str] = _new_id,
    ):
        super().__init__(
            store,
            StoreKeys.UNIVERSITIES,
            parse=university_from_dict,
            dump=university_to_dict,
            bus=bus,
        )
        self._activity = activity
        self._id_factory = id_factory

    async def get(self, university_id: str) -> Optional[UniversityRecord]:
        items = await self._load()
        return next((uni for uni in items if uni.id == university_id), None)

    async def add(
        self,
        *,
        name: str,
        city: str,
        field: str,
        type: UniversityType | str = UniversityType.PUBLIC,
    ) -> UniversityRecord:
        record = UniversityRecord(
            id=self._id_factory(),
            name=name,
            city=city,
            field=field,
            type=UniversityType(type),
        )
        items = await self._load()
        items.insert(0, record)
        await self._write(items)
        await self._activity.append(f"Saved university: {record.name}")
        await self._notify()
        return record

    async def remove(self, university_id: str) -> Optional[UniversityRecord]:
        items = await self._load()
        for index, uni in enumerate(items):
            if uni.id == university_id:
                return await self._remove_index(items, index)
        logger.debug("Skip removal of unknown university %s", university_id)
        return None

    async def remove_at(self, index: int) -> Optional[UniversityRecord]:
        items = await self._load()
        if index < 0 or index >= len(items):
            logger.debug("Skip removal at stale index %s (size=%d)", index, len(items))
            return None
        return await self._remove_index(items, index)

    async def _remove_index(self, items: list[UniversityRecord], index: int) -> UniversityRecord:
        removed = items.pop(index)
        await self._write(items)
        await self._activity.append(f"Removed university: {removed.name}")
        await self._notify()
        return removed
