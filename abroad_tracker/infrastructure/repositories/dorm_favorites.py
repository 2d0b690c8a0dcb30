from __future__ import annotations

from typing import Optional

from ...domain.events import ChangeBus
from ...domain.models import DormFavorite
from ...domain.repositories import ActivityRepository, DormFavoritesRepository, KeyValueStore
from ..keys import StoreKeys
from ..mappers import dorm_favorite_from_dict, dorm_favorite_to_dict
from .base import StoreCollection


class StoreDormFavoritesRepository(StoreCollection[DormFavorite], DormFavoritesRepository):
    """Favorites keyed by catalog id; a given id is stored at most once."""

    def __init__(self, store: KeyValueStore, activity: ActivityRepository, *, bus: Optional[ChangeBus] = None):
        super().__init__(
            store,
            StoreKeys.DORM_FAVORITES,
            parse=dorm_favorite_from_dict,
            dump=dorm_favorite_to_dict,
            bus=bus,
        )
        self._activity = activity

    async def contains(self, dorm_id: str) -> bool:
        return any(fav.id == dorm_id for fav in await self._load())

    async def toggle(self, entry: DormFavorite) -> bool:
        """Returns True when the entry is a favorite after the call."""
        favorites = await self._load()
        exists = any(fav.id == entry.id for fav in favorites)
        if exists:
            updated = [fav for fav in favorites if fav.id != entry.id]
        else:
            updated = [entry, *favorites]
        await self._write(updated)
        action = "Removed dorm favorite" if exists else "Saved dorm favorite"
        await self._activity.append(f"{action}: {entry.name}")
        await self._notify()
        return not exists

    async def remove(self, dorm_id: str) -> Optional[DormFavorite]:
        favorites = await self._load()
        removed = next((fav for fav in favorites if fav.id == dorm_id), None)
        if removed is None:
            return None
        await self._write([fav for fav in favorites if fav.id != dorm_id])
        await self._activity.append(f"Removed dorm favorite: {removed.name}")
        await self._notify()
        return removed
