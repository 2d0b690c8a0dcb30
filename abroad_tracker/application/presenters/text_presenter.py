from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ...domain import ExportDigest, KpiSummary
from ...domain.models import ActivityEntry, DormFavorite, UniversityRecord, UserProfile
from ..pages import Page
from ..queries import DocumentsOverview, DormSearch

EMPTY_PREVIEW = "—"
SEPARATOR = " • "


def format_time(value: datetime) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def join_preview(labels: Iterable[str]) -> str:
    return SEPARATOR.join(labels) or EMPTY_PREVIEW


class TextPresenter:
    def __init__(self, templates_dir: Path | None = None):
        base_dir = templates_dir or (Path(__file__).resolve().parent / "templates")
        # plain-text output for a terminal, nothing to escape
        self._env = Environment(
            loader=FileSystemLoader(str(base_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters["fmt_time"] = format_time

    def _render(self, template: str, **context) -> str:
        return self._env.get_template(template).render(**context).rstrip()

    def summary_page(self, profile: UserProfile, kpis: KpiSummary, activity: Sequence[ActivityEntry]) -> Page:
        text = self._render("summary.j2", profile=profile, kpis=kpis, activity=activity)
        return Page(text, title="Dashboard")

    def universities_page(self, universities: Sequence[UniversityRecord], query: str | None = None) -> Page:
        text = self._render("universities.j2", universities=universities, query=(query or "").strip())
        return Page(text, title="Universities")

    def dorm_search_page(self, search: DormSearch) -> Page:
        return Page(self._render("dorm_results.j2", search=search), title="Dorms")

    def dorm_favorites_page(self, favorites: Sequence[DormFavorite]) -> Page:
        return Page(self._render("dorm_favorites.j2", favorites=favorites), title="Dorm favorites")

    def documents_page(self, overview: DocumentsOverview) -> Page:
        return Page(self._render("documents.j2", overview=overview), title="Documents")

    def activity_page(self, activity: Sequence[ActivityEntry]) -> Page:
        return Page(self._render("activity.j2", activity=activity), title="Activity")

    def export_page(self, digest: ExportDigest) -> Page:
        text = self._render(
            "export.j2",
            digest=digest,
            profile=digest.profile,
            universities_line=join_preview(f"{uni.name} ({uni.city})" for uni in digest.universities),
            dorms_line=join_preview(f"{fav.name} (€{fav.price})" for fav in digest.dorm_favorites),
            documents_line=join_preview(doc.text for doc in digest.completed_documents),
        )
        return Page(text, title="Export")

    def notice(self, message: str, page: Page) -> Page:
        return Page(page.text, title=page.title, notices=[*page.notices, message])
