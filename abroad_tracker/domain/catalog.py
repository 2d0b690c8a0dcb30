from __future__ import annotations

from typing import Iterable, Optional

from .models import CatalogEntry
from .repositories import DormFavoritesRepository

DEFAULT_SEARCH_CITY = "Berlin"
DEFAULT_MAX_PRICE = 550

DEFAULT_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(id="b1", name="Student Housing Mitte", city="Berlin", price=390),
    CatalogEntry(id="b2", name="Campus Residence", city="Berlin", price=450),
    CatalogEntry(id="b3", name="Cozy Dorm Near U-Bahn", city="Berlin", price=520),
    CatalogEntry(id="m1", name="Munich Studentheim A", city="Munich", price=560),
    CatalogEntry(id="m2", name="Munich Studentheim B", city="Munich", price=690),
    CatalogEntry(id="h1", name="Hamburg Hafen Dorm", city="Hamburg", price=480),
)


class CatalogService:
    """
    Read-only dormitory listings. The table is fixed for the lifetime of the
    service and never written back to the store.
    """

    def __init__(self, favorites: DormFavoritesRepository, entries: Iterable[CatalogEntry] = DEFAULT_CATALOG):
        self._favorites = favorites
        self._entries = tuple(entries)

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def cities(self) -> list[str]:
        return sorted({entry.city for entry in self._entries})

    def get(self, dorm_id: str) -> Optional[CatalogEntry]:
        return next((entry for entry in self._entries if entry.id == dorm_id), None)

    def search(self, city: str = DEFAULT_SEARCH_CITY, max_price: int = DEFAULT_MAX_PRICE) -> list[CatalogEntry]:
        return [entry for entry in self._entries if entry.city == city and entry.price <= max_price]

    async def is_favorite(self, dorm_id: str) -> bool:
        return await self._favorites.contains(dorm_id)
