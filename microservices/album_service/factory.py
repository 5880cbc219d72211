"""
Album Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules (repository).

Usage:
    from .factory import create_album_service
    service = create_album_service(settings, event_bus)
"""
from typing import Optional

from core.config import ServiceSettings, get_settings

from .album_service import AlbumService
from .client_config import ClientConfigBuilder
from .protocols import AlbumRepositoryProtocol


def create_album_repository(settings: Optional[ServiceSettings] = None):
    """
    Create the PostgreSQL album repository (not yet connected).

    Args:
        settings: Optional ServiceSettings instance

    Returns:
        AlbumRepository: Repository owning its own connection pool
    """
    # Import real repository here (not at module level)
    from .album_repository import AlbumRepository

    settings = settings or get_settings()
    return AlbumRepository(config=settings.infrastructure)


def create_album_service(
    settings: Optional[ServiceSettings] = None,
    event_bus=None,
    repository: Optional[AlbumRepositoryProtocol] = None,
) -> AlbumService:
    """
    Create AlbumService with real dependencies.

    Use this in production, NOT in tests.

    Args:
        settings: Optional ServiceSettings instance
        event_bus: Optional event bus for publishing events
        repository: Existing repository to reuse (created from settings if omitted)

    Returns:
        AlbumService: Configured service instance with real repository
    """
    settings = settings or get_settings()
    if repository is None:
        repository = create_album_repository(settings)

    config_builder = ClientConfigBuilder(
        repository,
        service_name=settings.service.service_name,
        version=settings.version,
        public=settings.service.public_mode,
    )

    return AlbumService(
        repository=repository,
        event_bus=event_bus,
        config_builder=config_builder,
    )
