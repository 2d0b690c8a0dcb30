from __future__ import annotations

import logging
from typing import Optional

from ...domain.errors import SchemaError
from ...domain.events import ChangeBus
from ...domain.models import DEFAULT_PROFILE, UserProfile
from ...domain.repositories import ActivityRepository, KeyValueStore, ProfileRepository
from ..keys import StoreKeys
from ..mappers import profile_from_dict, profile_to_dict, unwrap, wrap

logger = logging.getLogger(__name__)


class StoreProfileRepository(ProfileRepository):
    def __init__(self, store: KeyValueStore, activity: ActivityRepository, *, bus: Optional[ChangeBus] = None):
        self._store = store
        self._activity = activity
        self._bus = bus

    async def get(self) -> UserProfile:
        raw = await self._store.get(StoreKeys.USER, None)
        if raw is None:
            return DEFAULT_PROFILE
        try:
            _, data = unwrap(raw)
            return profile_from_dict(data)
        except SchemaError as exc:
            logger.warning("Ignoring stored profile: %s", exc)
            return DEFAULT_PROFILE

    async def set(self, profile: UserProfile) -> None:
        await self._store.set(StoreKeys.USER, wrap(profile_to_dict(profile)))
        await self._activity.append(f"Signed in as {profile.email}")
        if self._bus is not None:
            await self._bus.publish(StoreKeys.USER)
