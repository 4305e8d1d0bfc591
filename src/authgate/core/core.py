from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from authgate.config import Config


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
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
    """Service registry that discovers and initializes services."""

    from authgate.core.modules.auth.service import AuthService  # noqa: PLC0415
    from authgate.core.modules.mail.service import MailService  # noqa: PLC0415
    from authgate.core.modules.refresh_token.service import RefreshTokenService  # noqa: PLC0415
    from authgate.core.modules.role.service import RoleService  # noqa: PLC0415
    from authgate.core.modules.session.service import SessionService  # noqa: PLC0415
    from authgate.core.modules.task.service import TaskService  # noqa: PLC0415
    from authgate.core.modules.token.service import TokenService  # noqa: PLC0415
    from authgate.core.modules.user.service import UserService  # noqa: PLC0415
    from authgate.core.modules.verification.service import VerificationService  # noqa: PLC0415
    from authgate.core.modules.workspace.service import WorkspaceService  # noqa: PLC0415

    role: RoleService
    user: UserService
    token: TokenService
    verification: VerificationService
    session: SessionService
    refresh_token: RefreshTokenService
    task: TaskService
    mail: MailService
    workspace: WorkspaceService
    auth: AuthService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services using the service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for startup - roles are seeded before users reference them
        service_configs = [
            ("role", "authgate.core.modules.role.service", "RoleService"),
            ("user", "authgate.core.modules.user.service", "UserService"),
            ("token", "authgate.core.modules.token.service", "TokenService"),
            ("verification", "authgate.core.modules.verification.service", "VerificationService"),
            ("session", "authgate.core.modules.session.service", "SessionService"),
            ("refresh_token", "authgate.core.modules.refresh_token.service", "RefreshTokenService"),
            ("task", "authgate.core.modules.task.service", "TaskService"),
            ("mail", "authgate.core.modules.mail.service", "MailService"),
            ("workspace", "authgate.core.modules.workspace.service", "WorkspaceService"),
            ("auth", "authgate.core.modules.auth.service", "AuthService"),
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
        """Start all services in registration order."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services in reverse registration order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        """Initialize core with config and MongoDB, unless a database handle is supplied."""
        self.config = config
        if database is None:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        else:
            self.mongo_client = None
        self.database = database
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
