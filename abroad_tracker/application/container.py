from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..domain import CatalogService, ChangeBus, DEFAULT_CATALOG, KeyValueStore
from ..domain.repositories import Clock
from ..infrastructure import StoreSeeder, load_catalog_from_yaml
from ..infrastructure.clock import SystemClock
from ..infrastructure.repositories import (
    ACTIVITY_LIMIT,
    StoreActivityRepository,
    StoreDocumentsRepository,
    StoreDormFavoritesRepository,
    StoreProfileRepository,
    StoreUniversitiesRepository,
)
from ..infrastructure.sqlite import SQLiteDatabase, SQLiteKeyValueStore
from .presenters import TextPresenter
from .queries import DashboardQueryService
from .sync import ViewSynchronizer
from .workflow import TrackerWorkflow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    db_path: str = "abroad_tracker.db"
    catalog_path: str | None = None
    activity_limit: int = ACTIVITY_LIMIT
    metrics_log_path: str | None = None


class AppContainer:
    def __init__(
        self,
        *,
        config: AppConfig,
        store: KeyValueStore,
        bus: ChangeBus,
        activity: StoreActivityRepository,
        universities: StoreUniversitiesRepository,
        dorm_favorites: StoreDormFavoritesRepository,
        documents: StoreDocumentsRepository,
        profile: StoreProfileRepository,
        catalog: CatalogService,
        seeder: StoreSeeder,
        queries: DashboardQueryService,
        views: ViewSynchronizer,
        workflow: TrackerWorkflow,
        database: Optional[SQLiteDatabase] = None,
    ):
        self.config = config
        self.store = store
        self.bus = bus
        self.activity = activity
        self.universities = universities
        self.dorm_favorites = dorm_favorites
        self.documents = documents
        self.profile = profile
        self.catalog = catalog
        self.seeder = seeder
        self.queries = queries
        self.views = views
        self.workflow = workflow

        self._database = database

    async def init_resources(self) -> None:
        if self._database is not None:
            await self._database.init()
        await self.seeder.initialize()

    async def close(self) -> None:
        self.views.close()


def create_container(
    config: AppConfig,
    *,
    store: KeyValueStore | None = None,
    clock: Clock | None = None,
) -> AppContainer:
    database = None
    if store is None:
        database = SQLiteDatabase(config.db_path)
        store = SQLiteKeyValueStore(database)
    clock = clock or SystemClock()
    bus = ChangeBus()

    activity = StoreActivityRepository(store, clock=clock, limit=config.activity_limit, bus=bus)
    universities = StoreUniversitiesRepository(store, activity, bus=bus)
    dorm_favorites = StoreDormFavoritesRepository(store, activity, bus=bus)
    documents = StoreDocumentsRepository(store, activity, bus=bus)
    profile = StoreProfileRepository(store, activity, bus=bus)

    if config.catalog_path:
        entries = load_catalog_from_yaml(config.catalog_path)
        logger.info("Loaded %d dorm listings from %s", len(entries), config.catalog_path)
    else:
        entries = list(DEFAULT_CATALOG)
    catalog = CatalogService(dorm_favorites, entries)

    seeder = StoreSeeder(store, activity, clock=clock, bus=bus)
    queries = DashboardQueryService(
        universities=universities,
        dorm_favorites=dorm_favorites,
        documents=documents,
        activity=activity,
        profile=profile,
        catalog=catalog,
    )
    views = ViewSynchronizer(bus, queries)
    workflow = TrackerWorkflow(
        universities=universities,
        dorm_favorites=dorm_favorites,
        documents=documents,
        profile=profile,
        catalog=catalog,
        seeder=seeder,
        queries=queries,
        presenter=TextPresenter(),
    )

    return AppContainer(
        config=config,
        store=store,
        bus=bus,
        activity=activity,
        universities=universities,
        dorm_favorites=dorm_favorites,
        documents=documents,
        profile=profile,
        catalog=catalog,
        seeder=seeder,
        queries=queries,
        views=views,
        workflow=workflow,
        database=database,
    )
