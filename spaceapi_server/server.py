from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional, Sequence

from fastapi import FastAPI

from .api import routes as routes_module
from .api.routes import router as api_router
from .domain.errors import ConfigurationError
from .domain.interfaces import KeyValueStore
from .domain.models import StatusDocument
from .domain.modifiers import StatusModifier
from .domain.registry import SensorRegistry, SensorSpec
from .sensors.base import SensorTemplate
from .services.assembler import StatusAssembler
from .services.updater import SensorUpdater
from .storage.redis_store import RedisKeyValueStore
from .storage.sqlite_store import SQLiteKeyValueStore

logger = logging.getLogger(__name__)


class SpaceApiServerBuilder:
    """Collects the static document, sensors, modifiers and store settings.

    ``build()`` freezes the sensor list into a ``SensorRegistry`` and returns
    a FastAPI app serving ``GET /`` and ``PUT /sensors/{sensor}/``.
    """

    def __init__(self, status: StatusDocument, title: str = "SpaceAPI Server") -> None:
        self._status = status
        self._title = title
        self._sqlite_path: Optional[str] = None
        self._redis_url: Optional[str] = None
        self._pool_size = 4
        self._pool_timeout = 5.0
        self._sensors: List[SensorSpec] = []
        self._modifiers: List[StatusModifier] = []

    def sqlite_path(self, path: str) -> "SpaceApiServerBuilder":
        self._sqlite_path = path
        return self

    def redis_url(self, url: str) -> "SpaceApiServerBuilder":
        self._redis_url = url
        return self

    def pool(self, size: int, timeout: float) -> "SpaceApiServerBuilder":
        self._pool_size = size
        self._pool_timeout = timeout
        return self

    def add_sensor(self, template: SensorTemplate, data_key: str) -> "SpaceApiServerBuilder":
        self._sensors.append(SensorSpec(template=template, data_key=data_key))
        return self

    def add_status_modifier(self, modifier: StatusModifier) -> "SpaceApiServerBuilder":
        self._modifiers.append(modifier)
        return self

    def build(self) -> FastAPI:
        if self._sqlite_path and self._redis_url:
            raise ConfigurationError("Configure either sqlite_path() or redis_url(), not both")
        if not self._sqlite_path and not self._redis_url:
            raise ConfigurationError("No store configured (call sqlite_path() or redis_url())")
        if self._status.sensors is not None:
            raise ConfigurationError("Static status document must not contain sensors")

        registry = SensorRegistry(self._sensors)
        store: KeyValueStore
        if self._redis_url:
            store = RedisKeyValueStore(
                self._redis_url, pool_size=self._pool_size, pool_timeout=self._pool_timeout
            )
        else:
            store = SQLiteKeyValueStore(
                self._sqlite_path, pool_size=self._pool_size, pool_timeout=self._pool_timeout
            )
        return create_app(self._status, registry, tuple(self._modifiers), store, title=self._title)


def create_app(
    status: StatusDocument,
    registry: SensorRegistry,
    modifiers: Sequence[StatusModifier],
    store: KeyValueStore,
    title: str = "SpaceAPI Server",
) -> FastAPI:
    assembler = StatusAssembler(status, registry, modifiers, store)
    updater = SensorUpdater(registry, store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.open()
        logger.info(
            "Serving %s with %d sensor(s) and %d modifier(s): %s",
            status.space, len(registry), len(modifiers), ", ".join(registry.keys()) or "-",
        )
        try:
            yield
        finally:
            await store.close()
            logger.info("Shutdown complete")

    app = FastAPI(title=title, lifespan=lifespan)
    app.state.store = store
    app.state.registry = registry

    app.dependency_overrides[routes_module.get_assembler] = lambda: assembler
    app.dependency_overrides[routes_module.get_updater] = lambda: updater

    app.include_router(api_router)
    return app
