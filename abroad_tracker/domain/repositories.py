from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional, Protocol, Sequence

from .models import (
    ActivityEntry,
    DocumentItem,
    DormFavorite,
    UniversityRecord,
    UniversityType,
    UserProfile,
)


class KeyValueStore(Protocol):
    async def get(self, key: str, fallback: Any = None) -> Any: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def delete_many(self, keys: Iterable[str]) -> None: ...

    async def contains(self, key: str) -> bool: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class ActivityRepository(Protocol):
    async def list(self) -> Sequence[ActivityEntry]: ...

    async def append(self, text: str) -> ActivityEntry: ...


class UniversitiesRepository(Protocol):
    async def list(self) -> Sequence[UniversityRecord]: ...

    async def get(self, university_id: str) -> Optional[UniversityRecord]: ...

    async def add(
        self,
        *,
        name: str,
        city: str,
        field: str,
        type: UniversityType | str = UniversityType.PUBLIC,
    ) -> UniversityRecord: ...

    async def remove(self, university_id: str) -> Optional[UniversityRecord]: ...

    async def remove_at(self, index: int) -> Optional[UniversityRecord]: ...


class DormFavoritesRepository(Protocol):
    async def list(self) -> Sequence[DormFavorite]: ...

    async def contains(self, dorm_id: str) -> bool: ...

    async def toggle(self, entry: DormFavorite) -> bool: ...

    async def remove(self, dorm_id: str) -> Optional[DormFavorite]: ...


class DocumentsRepository(Protocol):
    async def list(self) -> Sequence[DocumentItem]: ...

    async def set_done(self, index: int, done: bool) -> Optional[DocumentItem]: ...

    async def mark_all(self, done: bool) -> None: ...


class ProfileRepository(Protocol):
    async def get(self) -> UserProfile: ...

    async def set(self, profile: UserProfile) -> None: ...
