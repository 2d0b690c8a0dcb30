from __future__ import annotations

from dataclasses import dataclass, field

from ...domain import (
    CatalogEntry,
    CatalogService,
    DocumentProgress,
    ExportDigest,
    KpiSummary,
    document_progress,
    export_digest,
    filter_universities,
    kpi_summary,
)
from ...domain.models import ActivityEntry, DocumentItem, DormFavorite, UniversityRecord, UserProfile
from ...domain.repositories import (
    ActivityRepository,
    DocumentsRepository,
    DormFavoritesRepository,
    ProfileRepository,
    UniversitiesRepository,
)


@dataclass(frozen=True)
class DormResult:
    entry: CatalogEntry
    is_favorite: bool


@dataclass(frozen=True)
class DormSearch:
    city: str
    max_price: int
    results: list[DormResult]
    cities: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentsOverview:
    documents: list[DocumentItem]
    progress: DocumentProgress


class DashboardQueryService:
    """
    Reads current repository state and hands it to the view functions.
    Nothing is cached between calls.
    """

    def __init__(
        self,
        *,
        universities: UniversitiesRepository,
        dorm_favorites: DormFavoritesRepository,
        documents: DocumentsRepository,
        activity: ActivityRepository,
        profile: ProfileRepository,
        catalog: CatalogService,
    ):
        self._universities = universities
        self._dorm_favorites = dorm_favorites
        self._documents = documents
        self._activity = activity
        self._profile = profile
        self._catalog = catalog

    async def kpis(self) -> KpiSummary:
        return kpi_summary(
            await self._universities.list(),
            await self._dorm_favorites.list(),
            await self._documents.list(),
        )

    async def universities(self, query: str | None = None) -> list[UniversityRecord]:
        return filter_universities(await self._universities.list(), query)

    async def dorm_favorites(self) -> list[DormFavorite]:
        return list(await self._dorm_favorites.list())

    async def dorm_search(self, city: str, max_price: int) -> DormSearch:
        favorite_ids = {fav.id for fav in await self._dorm_favorites.list()}
        results = [
            DormResult(entry=entry, is_favorite=entry.id in favorite_ids)
            for entry in self._catalog.search(city, max_price)
        ]
        return DormSearch(city=city, max_price=max_price, results=results, cities=self._catalog.cities())

    async def documents(self) -> DocumentsOverview:
        documents = list(await self._documents.list())
        return DocumentsOverview(documents=documents, progress=document_progress(documents))

    async def activity(self) -> list[ActivityEntry]:
        return list(await self._activity.list())

    async def profile(self) -> UserProfile:
        return await self._profile.get()

    async def export_digest(self) -> ExportDigest:
        return export_digest(
            await self._profile.get(),
            await self._universities.list(),
            await self._dorm_favorites.list(),
            await self._documents.list(),
        )
