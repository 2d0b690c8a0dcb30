from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Callable, Optional

from ..domain.errors import SchemaError
from ..domain.events import ChangeBus
from ..domain.models import DocumentItem, UniversityRecord, UniversityType
from ..domain.repositories import ActivityRepository, Clock, KeyValueStore
from .clock import SystemClock
from .keys import StoreKeys
from .mappers import (
    SCHEMA_VERSION,
    activity_from_dict,
    activity_to_dict,
    document_from_dict,
    document_to_dict,
    dorm_favorite_from_dict,
    dorm_favorite_to_dict,
    format_timestamp,
    profile_from_dict,
    profile_to_dict,
    university_from_dict,
    university_to_dict,
    unwrap,
    wrap,
)

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENTS: tuple[str, ...] = (
    "Passport (valid)",
    "Transcript of Records",
    "Motivation Letter",
    "Language Certificate",
    "Health Insurance Proof",
    "Financial Proof (Blocked Account)",
)

DEFAULT_UNIVERSITIES: tuple[UniversityRecord, ...] = (
    UniversityRecord(
        id="uni-tum",
        name="Technical University of Munich",
        city="Munich",
        field="Engineering",
        type=UniversityType.PUBLIC,
    ),
    UniversityRecord(
        id="uni-fub",
        name="Free University of Berlin",
        city="Berlin",
        field="Research",
        type=UniversityType.PUBLIC,
    ),
)

# (text, hours ago)
DEFAULT_ACTIVITY: tuple[tuple[str, int], ...] = (
    ("Bookmarked a university", 1),
    ("Updated checklist", 2),
)

_COLLECTION_CODECS: dict[str, tuple[Callable[..., Any], Callable[[Any], dict]]] = {
    StoreKeys.UNIVERSITIES: (university_from_dict, university_to_dict),
    StoreKeys.DORM_FAVORITES: (dorm_favorite_from_dict, dorm_favorite_to_dict),
    StoreKeys.DOCUMENTS: (document_from_dict, document_to_dict),
    StoreKeys.ACTIVITY: (activity_from_dict, activity_to_dict),
}


class StoreSeeder:
    """
    First-run defaults, schema upgrades and the full demo reset.
    Seeding only touches absent keys, so running it repeatedly is harmless.
    """

    def __init__(
        self,
        store: KeyValueStore,
        activity: ActivityRepository,
        *,
        clock: Optional[Clock] = None,
        bus: Optional[ChangeBus] = None,
    ):
        self._store = store
        self._activity = activity
        self._clock = clock or SystemClock()
        self._bus = bus

    def _default_payloads(self) -> dict[str, Any]:
        now = self._clock.now()
        return {
            StoreKeys.UNIVERSITIES: wrap([university_to_dict(uni) for uni in DEFAULT_UNIVERSITIES]),
            StoreKeys.DORM_FAVORITES: wrap([]),
            StoreKeys.DOCUMENTS: wrap([document_to_dict(DocumentItem(text=text)) for text in DEFAULT_DOCUMENTS]),
            StoreKeys.ACTIVITY: wrap(
                [
                    {"text": text, "at": format_timestamp(now - timedelta(hours=hours))}
                    for text, hours in DEFAULT_ACTIVITY
                ]
            ),
        }

    async def seed_defaults(self) -> list[str]:
        seeded: list[str] = []
        for key, payload in self._default_payloads().items():
            if await self._store.contains(key):
                continue
            await self._store.set(key, payload)
            seeded.append(key)
        if seeded:
            logger.info("Seeded defaults for %s", ", ".join(seeded))
        return seeded

    async def migrate(self) -> list[str]:
        migrated: list[str] = []
        for key in StoreKeys.ALL:
            raw = await self._store.get(key, None)
            if raw is None:
                continue
            try:
                version, data = unwrap(raw)
            except SchemaError as exc:
                logger.warning("Cannot migrate %s: %s", key, exc)
                continue
            if version >= SCHEMA_VERSION:
                continue
            if key == StoreKeys.USER:
                try:
                    payload = profile_to_dict(profile_from_dict(data))
                except SchemaError as exc:
                    logger.warning("Dropping unreadable profile: %s", exc)
                    await self._store.delete(key)
                    migrated.append(key)
                    continue
            else:
                payload = self._migrate_collection(key, data)
            await self._store.set(key, wrap(payload))
            migrated.append(key)
        if migrated:
            logger.info("Migrated %s to schema %d", ", ".join(migrated), SCHEMA_VERSION)
        return migrated

    def _migrate_collection(self, key: str, data: Any) -> list[dict]:
        parse, dump = _COLLECTION_CODECS[key]
        if not isinstance(data, list):
            logger.warning("Replacing %s: expected a list, got %s", key, type(data).__name__)
            return []
        rows: list[dict] = []
        for index, row in enumerate(data):
            try:
                rows.append(dump(parse(row, index=index)))
            except SchemaError as exc:
                logger.warning("Dropping record #%d in %s: %s", index, key, exc)
        return rows

    async def initialize(self) -> None:
        await self.migrate()
        await self.seed_defaults()

    async def reset_all(self) -> None:
        await self._store.delete_many(StoreKeys.RESETTABLE)
        await self.seed_defaults()
        await self._activity.append("Reset demo data")
        if self._bus is not None:
            for key in StoreKeys.RESETTABLE:
                if key != StoreKeys.ACTIVITY:
                    await self._bus.publish(key)
