from __future__ import annotations

from contextlib import asynccontextmanager

from ..domain import KeyValueStore
from ..domain.repositories import Clock
from .container import AppConfig, create_container


@asynccontextmanager
async def bootstrap_app(config: AppConfig, *, store: KeyValueStore | None = None, clock: Clock | None = None):
    """Builds the container, migrates and seeds the store, and closes the views on exit."""
    container = create_container(config, store=store, clock=clock)
    await container.init_resources()
    try:
        yield container
    finally:
        await container.close()
