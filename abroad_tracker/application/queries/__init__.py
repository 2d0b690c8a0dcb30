from .dashboard import DashboardQueryService, DocumentsOverview, DormResult, DormSearch

__all__ = [
    "DashboardQueryService",
    "DocumentsOverview",
    "DormResult",
    "DormSearch",
]
