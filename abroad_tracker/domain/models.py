from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class UniversityType(str, Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"


@dataclass(frozen=True)
class UserProfile:
    name: str
    email: str
    country: str


DEFAULT_PROFILE = UserProfile(name="John Doe", email="john.doe@example.com", country="Turkey")


@dataclass(frozen=True)
class UniversityRecord:
    id: str
    name: str
    city: str
    field: str
    type: UniversityType = UniversityType.PUBLIC

    def search_blob(self) -> str:
        return f"{self.name}{self.city}{self.field}{self.type.value}".lower()


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str
    city: str
    price: int


@dataclass(frozen=True)
class DormFavorite:
    id: str
    name: str
    city: str
    price: int

    @classmethod
    def from_catalog(cls, entry: CatalogEntry) -> "DormFavorite":
        return cls(id=entry.id, name=entry.name, city=entry.city, price=entry.price)


@dataclass(frozen=True)
class DocumentItem:
    text: str
    done: bool = False

    def with_done(self, done: bool) -> "DocumentItem":
        return replace(self, done=done)


@dataclass(frozen=True)
class ActivityEntry:
    text: str
    at: datetime
