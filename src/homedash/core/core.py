from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from homedash.config import Config
from homedash.core.memory import MemoryDatabase

Database = AsyncDatabase[dict[str, Any]] | MemoryDatabase


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: Database) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that initializes services in dependency order."""

    from homedash.core.modules.access.service import AccessService  # noqa: PLC0415
    from homedash.core.modules.record.service import RecordService  # noqa: PLC0415
    from homedash.core.modules.session.service import SessionService  # noqa: PLC0415
    from homedash.core.modules.user.service import UserService  # noqa: PLC0415
    from homedash.core.modules.weather.service import WeatherService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService
    record: RecordService
    weather: WeatherService

    def __init__(self, database: Database) -> None:
        self._services: list[Service] = []
        self._database = database

        # (attribute_name, module_path, class_name); user and session come first
        service_configs = [
            ("user", "homedash.core.modules.user.service", "UserService"),
            ("session", "homedash.core.modules.session.service", "SessionService"),
            ("access", "homedash.core.modules.access.service", "AccessService"),
            ("record", "homedash.core.modules.record.service", "RecordService"),
            ("weather", "homedash.core.modules.weather.service", "WeatherService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: Database
    services: Services

    def __init__(self, config: Config) -> None:
        """Initialize core with config, a database backend, and all services."""
        self.config = config
        self.mongo_client = None
        if config.uses_memory_store:
            self.database = MemoryDatabase()
        else:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
            self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:] or "homedash")
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection on shutdown."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
