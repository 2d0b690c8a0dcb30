from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from ..domain.events import ChangeBus
from ..infrastructure.keys import StoreKeys
from .queries import DashboardQueryService

logger = logging.getLogger(__name__)

ViewRenderer = Callable[[Any], Awaitable[None]]

VIEW_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "kpis": (StoreKeys.UNIVERSITIES, StoreKeys.DORM_FAVORITES, StoreKeys.DOCUMENTS),
    "universities": (StoreKeys.UNIVERSITIES,),
    "dorm_favorites": (StoreKeys.DORM_FAVORITES,),
    "documents": (StoreKeys.DOCUMENTS,),
    "activity": (StoreKeys.ACTIVITY,),
    "export": (StoreKeys.USER, StoreKeys.UNIVERSITIES, StoreKeys.DORM_FAVORITES, StoreKeys.DOCUMENTS),
}


class ViewSynchronizer:
    """
    Re-renders only the views that depend on a changed collection.
    Each view is recomputed from the store when its renderer is called.
    """

    def __init__(self, bus: ChangeBus, queries: DashboardQueryService):
        self._bus = bus
        self._queries = queries
        self._renderers: dict[str, list[ViewRenderer]] = {}
        self._unsubscribe: dict[str, Callable[[], None]] = {}
        self._loaders: dict[str, Callable[[], Awaitable[Any]]] = {
            "kpis": queries.kpis,
            "universities": queries.universities,
            "dorm_favorites": queries.dorm_favorites,
            "documents": queries.documents,
            "activity": queries.activity,
            "export": queries.export_digest,
        }

    def register(self, view: str, renderer: ViewRenderer) -> None:
        if view not in VIEW_DEPENDENCIES:
            raise KeyError(f"unknown view: {view}")
        self._renderers.setdefault(view, []).append(renderer)
        if view in self._unsubscribe:
            return

        async def on_change(key: str, view: str = view) -> None:
            logger.debug("Refreshing %s after change in %s", view, key)
            await self.refresh(view)

        self._unsubscribe[view] = self._bus.subscribe(VIEW_DEPENDENCIES[view], on_change)

    def close(self) -> None:
        for unsubscribe in self._unsubscribe.values():
            unsubscribe()
        self._unsubscribe.clear()
        self._renderers.clear()

    async def refresh(self, view: str) -> None:
        renderers = self._renderers.get(view)
        if not renderers:
            return
        value = await self._loaders[view]()
        for renderer in renderers:
            await renderer(value)

    async def refresh_all(self) -> None:
        for view in list(self._renderers):
            await self.refresh(view)
