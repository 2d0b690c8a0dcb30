from .activity import ACTIVITY_LIMIT, StoreActivityRepository
from .documents import StoreDocumentsRepository
from .dorm_favorites import StoreDormFavoritesRepository
from .profile import StoreProfileRepository
from .universities import StoreUniversitiesRepository

__all__ = [
    "ACTIVITY_LIMIT",
    "StoreActivityRepository",
    "StoreDocumentsRepository",
    "StoreDormFavoritesRepository",
    "StoreProfileRepository",
    "StoreUniversitiesRepository",
]
