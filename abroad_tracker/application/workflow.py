from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain import CatalogService, DormFavorite, UniversityType, UserProfile, ValidationFailure
from ..domain.models import DEFAULT_PROFILE
from ..domain.repositories import (
    DocumentsRepository,
    DormFavoritesRepository,
    ProfileRepository,
    UniversitiesRepository,
)
from ..infrastructure.seeding import StoreSeeder
from .pages import Page
from .presenters import TextPresenter
from .queries import DashboardQueryService

logger = logging.getLogger(__name__)


def _required(value: str | None, field: str, message: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailure(message, field=field)
    return cleaned


@dataclass
class TrackerWorkflow:
    """
    Command and page handlers for the front end.

    Input is validated here, before any repository call; unknown ids and
    stale indexes fall through to the repositories as no-ops.
    """

    universities: UniversitiesRepository
    dorm_favorites: DormFavoritesRepository
    documents: DocumentsRepository
    profile: ProfileRepository
    catalog: CatalogService
    seeder: StoreSeeder
    queries: DashboardQueryService
    presenter: TextPresenter

    async def sign_in(self, email: str | None, password: str | None, *, confirm: str | None = None) -> Page:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationFailure("Please enter email and password.", field="email" if not email else "password")
        if confirm is not None and confirm != password:
            raise ValidationFailure("Passwords do not match.", field="confirm")
        await self.profile.set(UserProfile(name=DEFAULT_PROFILE.name, email=email, country=DEFAULT_PROFILE.country))
        logger.info("Signed in as %s", email)
        return await self.summary_page()

    async def summary_page(self) -> Page:
        return self.presenter.summary_page(
            await self.queries.profile(),
            await self.queries.kpis(),
            await self.queries.activity(),
        )

    async def universities_page(self, query: str | None = None) -> Page:
        return self.presenter.universities_page(await self.queries.universities(query), query)

    async def add_university(
        self,
        name: str | None,
        city: str | None,
        field: str | None,
        type: str | None = None,
    ) -> Page:
        message = "Please fill name, city, and field."
        name = _required(name, "name", message)
        city = _required(city, "city", message)
        field = _required(field, "field", message)
        try:
            uni_type = UniversityType(type or UniversityType.PUBLIC.value)
        except ValueError:
            raise ValidationFailure(f"Unknown university type: {type}", field="type") from None
        record = await self.universities.add(name=name, city=city, field=field, type=uni_type)
        page = await self.universities_page()
        return self.presenter.notice(f"Saved {record.name} as {record.id}", page)

    async def remove_university(self, university_id: str) -> Page:
        removed = await self.universities.remove(university_id)
        page = await self.universities_page()
        if removed is None:
            return self.presenter.notice(f"No university with id {university_id}", page)
        return self.presenter.notice(f"Removed {removed.name}", page)

    async def dorm_search_page(self, city: str, max_price: int) -> Page:
        return self.presenter.dorm_search_page(await self.queries.dorm_search(city, max_price))

    async def dorm_favorites_page(self) -> Page:
        return self.presenter.dorm_favorites_page(await self.queries.dorm_favorites())

    async def toggle_dorm_favorite(self, dorm_id: str) -> Page:
        entry = self.catalog.get(dorm_id)
        if entry is None:
            return self.presenter.notice(f"No dorm with id {dorm_id}", await self.dorm_favorites_page())
        saved = await self.dorm_favorites.toggle(DormFavorite.from_catalog(entry))
        page = await self.dorm_favorites_page()
        verb = "Saved" if saved else "Removed"
        return self.presenter.notice(f"{verb} favorite: {entry.name}", page)

    async def remove_dorm_favorite(self, dorm_id: str) -> Page:
        removed = await self.dorm_favorites.remove(dorm_id)
        page = await self.dorm_favorites_page()
        if removed is None:
            return self.presenter.notice(f"{dorm_id} is not a favorite", page)
        return self.presenter.notice(f"Removed favorite: {removed.name}", page)

    async def documents_page(self) -> Page:
        return self.presenter.documents_page(await self.queries.documents())

    async def set_document_done(self, index: int, done: bool) -> Page:
        updated = await self.documents.set_done(index, done)
        page = await self.documents_page()
        if updated is None:
            return self.presenter.notice(f"No document at position {index}", page)
        return page

    async def mark_all_documents(self, done: bool) -> Page:
        await self.documents.mark_all(done)
        return await self.documents_page()

    async def activity_page(self) -> Page:
        return self.presenter.activity_page(await self.queries.activity())

    async def export_page(self) -> Page:
        return self.presenter.export_page(await self.queries.export_digest())

    async def reset_all(self) -> Page:
        await self.seeder.reset_all()
        logger.info("Demo data reset")
        return await self.summary_page()
