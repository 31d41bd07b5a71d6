from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

from cadbridge.config import Config
from cadbridge.core.modules.cookie.validator import CookieValidator
from cadbridge.utils import now_ms

if TYPE_CHECKING:
    from cadbridge.core.modules.identity.service import IdentityService
    from cadbridge.core.modules.session.service import SessionService


class Service:
    """Base class for services sharing the core application context."""

    def __init__(self) -> None:
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
    """Service registry that automatically discovers and initializes services."""

    identity: IdentityService
    session: SessionService

    def __init__(self) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - identity must come before session
        service_configs = [
            ("identity", "cadbridge.core.modules.identity.service", "IdentityService"),
            ("session", "cadbridge.core.modules.session.service", "SessionService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class()
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
    """Container providing config, the cookie validator, and all service instances."""

    config: Config
    cookie_validator: CookieValidator
    services: Services

    def __init__(self, config: Config, clock: Callable[[], int] = now_ms) -> None:
        """Initialize core with config and auto-register services.

        Raises ConfigurationError if the cookie settings are unusable.
        """
        self.config = config
        self.cookie_validator = CookieValidator(config.cookie_settings(), clock=clock)
        self.services = Services()
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.services.start_all()
        try:
            yield
        finally:
            await self.services.stop_all()
