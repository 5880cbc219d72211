"""
Album Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Awaitable, Callable, List, Optional, Protocol, Union, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Album
from .search import AlbumQuery


# Custom exceptions - defined here to avoid importing repository
class AlbumServiceError(Exception):
    """Base exception for album service errors"""
    pass


class AlbumValidationError(AlbumServiceError):
    """Album validation error"""
    pass


class AlbumUnauthorizedError(AlbumServiceError):
    """Caller did not pass the authorization gate"""
    pass


class AlbumNotFoundError(AlbumServiceError):
    """Album not found error"""
    pass


class AlbumConflictError(AlbumServiceError):
    """Album name already taken"""
    pass


@runtime_checkable
class AlbumRepositoryProtocol(Protocol):
    """
    Interface for Album Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    The repository sets created_at/updated_at; callers never do.
    """

    async def find_by_id(self, album_id: str) -> Optional[Album]:
        """Get album by id, None if it does not resolve"""
        ...

    async def find(self, query: AlbumQuery) -> List[Album]:
        """Albums matching the query filter, ordered and paged"""
        ...

    async def count(self, query: AlbumQuery) -> int:
        """Number of albums matching the query filter (page ignored)"""
        ...

    async def create(self, album: Album) -> Album:
        """Insert a new album; raises AlbumConflictError on duplicate name"""
        ...

    async def save(self, album: Album) -> Album:
        """
        Persist name and favorite of an existing album.

        Raises AlbumNotFoundError if the id does not exist and
        AlbumConflictError on duplicate name.
        """
        ...

    async def check_connection(self) -> bool:
        """Check database connection"""
        ...


EventHandler = Callable[[Any], Union[Awaitable[None], None]]


@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    async def publish_event(self, event: Any) -> None:
        """Publish an event"""
        ...


@runtime_checkable
class AuthorizationGateProtocol(Protocol):
    """Interface for the authorization gate"""

    def authorize(
        self,
        session_token: Optional[str] = None,
        internal_service: Optional[str] = None,
        internal_service_secret: Optional[str] = None,
    ) -> Optional[Any]:
        """Return a verified caller, or None when rejected"""
        ...
