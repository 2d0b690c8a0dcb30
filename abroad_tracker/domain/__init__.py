from .models import (
    ActivityEntry,
    CatalogEntry,
    DEFAULT_PROFILE,
    DocumentItem,
    DormFavorite,
    UniversityRecord,
    UniversityType,
    UserProfile,
)
from .errors import SchemaError, StorageReadFailure, TrackerError, ValidationFailure
from .events import ChangeBus
from .repositories import (
    ActivityRepository,
    Clock,
    DocumentsRepository,
    DormFavoritesRepository,
    KeyValueStore,
    ProfileRepository,
    UniversitiesRepository,
)
from .catalog import CatalogService, DEFAULT_CATALOG
from .views import (
    DocumentProgress,
    ExportDigest,
    KpiSummary,
    document_progress,
    export_digest,
    filter_universities,
    kpi_summary,
)

__all__ = [
    "ActivityEntry",
    "CatalogEntry",
    "DEFAULT_PROFILE",
    "DocumentItem",
    "DormFavorite",
    "UniversityRecord",
    "UniversityType",
    "UserProfile",
    "TrackerError",
    "StorageReadFailure",
    "SchemaError",
    "ValidationFailure",
    "ChangeBus",
    "KeyValueStore",
    "Clock",
    "ActivityRepository",
    "UniversitiesRepository",
    "DormFavoritesRepository",
    "DocumentsRepository",
    "ProfileRepository",
    "CatalogService",
    "DEFAULT_CATALOG",
    "KpiSummary",
    "DocumentProgress",
    "ExportDigest",
    "kpi_summary",
    "filter_universities",
    "document_progress",
    "export_digest",
]
