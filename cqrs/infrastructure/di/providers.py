"""Service registration for the DI container."""
from __future__ import annotations

from cqrs.infrastructure.di.container import Container, Scope
from cqrs.core.config import settings
from cqrs.infrastructure.cache import CacheManager
from cqrs.infrastructure.database import DatabaseConnection
from cqrs.infrastructure.event_bus import EventBus, InMemoryEventBus


def configure_container(container: Container) -> None:
    """Configure the collaborators the dispatcher resolves."""

    container.register(EventBus, lambda c: InMemoryEventBus(), Scope.SINGLETON)
    container.register(CacheManager, lambda c: CacheManager(), Scope.SINGLETON)

    # Transactional commands need a connection; it is only known when configured
    if settings.DATABASE_URL:
        container.register(
            DatabaseConnection,
            lambda c: DatabaseConnection(settings.DATABASE_URL),
            Scope.SINGLETON,
        )


def get_configured_container() -> Container:
    """Return a configured container instance."""
    container = Container.get_instance()
    if not container.is_registered(EventBus):
        configure_container(container)
    return container
