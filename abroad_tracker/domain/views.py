from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .models import DocumentItem, DormFavorite, UniversityRecord, UserProfile

EXPORT_UNIVERSITY_PREVIEW = 6
EXPORT_DORM_PREVIEW = 6
EXPORT_DOCUMENT_PREVIEW = 8


@dataclass(frozen=True)
class KpiSummary:
    university_count: int
    dorm_favorite_count: int
    documents_done: int
    documents_total: int

    @property
    def documents_label(self) -> str:
        return f"{self.documents_done}/{self.documents_total}"


@dataclass(frozen=True)
class DocumentProgress:
    done: int
    total: int
    percent: int

    @property
    def not_done(self) -> int:
        return self.total - self.done


@dataclass(frozen=True)
class ExportDigest:
    profile: UserProfile
    university_count: int
    dorm_favorite_count: int
    documents_done: int
    documents_total: int
    universities: tuple[UniversityRecord, ...]
    dorm_favorites: tuple[DormFavorite, ...]
    completed_documents: tuple[DocumentItem, ...]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def kpi_summary(
    universities: Sequence[UniversityRecord],
    dorm_favorites: Sequence[DormFavorite],
    documents: Sequence[DocumentItem],
) -> KpiSummary:
    return KpiSummary(
        university_count=len(universities),
        dorm_favorite_count=len(dorm_favorites),
        documents_done=sum(1 for doc in documents if doc.done),
        documents_total=len(documents),
    )


def filter_universities(universities: Sequence[UniversityRecord], query: str | None) -> list[UniversityRecord]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(universities)
    return [uni for uni in universities if needle in uni.search_blob()]


def document_progress(documents: Sequence[DocumentItem]) -> DocumentProgress:
    total = len(documents)
    done = sum(1 for doc in documents if doc.done)
    percent = _round_half_up(done / total * 100) if total else 0
    return DocumentProgress(done=done, total=total, percent=percent)


def export_digest(
    profile: UserProfile,
    universities: Sequence[UniversityRecord],
    dorm_favorites: Sequence[DormFavorite],
    documents: Sequence[DocumentItem],
) -> ExportDigest:
    """
    Read-only digest for the printable summary.
    Previews are cut for display only; counts always cover the whole collections.
    """
    completed = [doc for doc in documents if doc.done]
    return ExportDigest(
        profile=profile,
        university_count=len(universities),
        dorm_favorite_count=len(dorm_favorites),
        documents_done=len(completed),
        documents_total=len(documents),
        universities=tuple(universities[:EXPORT_UNIVERSITY_PREVIEW]),
        dorm_favorites=tuple(dorm_favorites[:EXPORT_DORM_PREVIEW]),
        completed_documents=tuple(completed[:EXPORT_DOCUMENT_PREVIEW]),
    )
