"""
Album Service Business Logic

Album management business logic layer for the microservice.
Handles validation, authorization, business rules, and event publishing.

Uses dependency injection for testability:
- Repository is injected, not created at import time
- Event bus (notifier) is injected and owned by the application
- Mutating operations take the VerifiedCaller resolved by the authorization gate
"""

from typing import Optional
import logging
import uuid

from pydantic import ValidationError

from core.auth_dependencies import VerifiedCaller
from core.http_errors import validation_message

# Import protocols (no I/O dependencies) - NOT the concrete repository!
from .protocols import (
    AlbumRepositoryProtocol,
    EventBusProtocol,
    AlbumNotFoundError,
    AlbumValidationError,
    AlbumUnauthorizedError,
    AlbumConflictError,
    AlbumServiceError,
)
from .models import Album, AlbumParams, AlbumSearchForm, AlbumSearchResult
from .search import build_album_query
from .client_config import ClientConfigBuilder
from .events.publishers import AlbumEventPublishers

logger = logging.getLogger(__name__)


# ==================== Album Service ====================

class AlbumService:
    """
    Album management business logic service

    Handles all album-related business operations while delegating
    data access to the repository layer.

    No locking around load-then-save: concurrent mutations of the same
    album race in the store and the last save wins.
    """

    def __init__(
        self,
        repository: AlbumRepositoryProtocol,
        event_bus: Optional[EventBusProtocol] = None,
        config_builder: Optional[ClientConfigBuilder] = None,
    ):
        """
        Initialize service with injected dependencies.

        Args:
            repository: Repository (inject a fake for testing)
            event_bus: Event bus for publishing events
            config_builder: Client config snapshot builder (defaults to one over repository)
        """
        self.repo = repository
        self.event_bus = event_bus
        self.publishers = AlbumEventPublishers(event_bus)
        self.config_builder = config_builder or ClientConfigBuilder(repository)

    # ==================== Queries ====================

    @staticmethod
    def parse_search_form(raw: dict) -> AlbumSearchForm:
        """
        Bind raw query parameters to a search form

        Raises:
            AlbumValidationError: Malformed parameters
        """
        try:
            return AlbumSearchForm.model_validate(raw)
        except ValidationError as e:
            raise AlbumValidationError(validation_message(e))

    @staticmethod
    def parse_album_params(raw: bytes) -> AlbumParams:
        """
        Bind a raw JSON request body to AlbumParams

        Raises:
            AlbumValidationError: Malformed JSON or invalid album name
        """
        try:
            return AlbumParams.model_validate_json(raw)
        except ValidationError as e:
            raise AlbumValidationError(validation_message(e))

    async def list_albums(self, form: AlbumSearchForm) -> AlbumSearchResult:
        """
        Search albums

        Args:
            form: Validated search form

        Returns:
            AlbumSearchResult: Albums plus the count/offset actually applied
        """
        query = build_album_query(form)
        albums = await self.repo.find(query)

        return AlbumSearchResult(albums=albums, count=query.limit, offset=query.offset)

    # ==================== Mutations ====================

    async def create_album(self, params: AlbumParams, caller: Optional[VerifiedCaller]) -> Album:
        """
        Create a new album

        Args:
            params: Album name
            caller: Capability from the authorization gate

        Returns:
            Album: Created album

        Raises:
            AlbumUnauthorizedError: Caller not authorized
            AlbumConflictError: Name already taken
        """
        self._require_caller(caller)

        album = Album(id=str(uuid.uuid4()), name=params.album_name, favorite=False)

        try:
            created = await self.repo.create(album)
        except AlbumConflictError:
            logger.error(f"Failed to create album: name \"{album.name}\" already exists")
            raise AlbumConflictError(f"\"{album.name}\" already exists")

        await self.publishers.publish_success(f"Album {created.name} created")

        logger.info(f"Album created: {created.id} by {caller.subject}")
        return created

    async def rename_album(
        self,
        album_id: str,
        params: AlbumParams,
        caller: Optional[VerifiedCaller],
    ) -> Album:
        """
        Rename an existing album

        Args:
            album_id: Album ID
            params: New album name
            caller: Capability from the authorization gate

        Returns:
            Album: Updated album

        Raises:
            AlbumUnauthorizedError: Caller not authorized
            AlbumNotFoundError: Album not found
            AlbumConflictError: Name already taken by another album
        """
        self._require_caller(caller)

        album = await self._get_album(album_id)
        renamed = album.model_copy(update={"name": params.album_name})

        try:
            saved = await self.repo.save(renamed)
        except AlbumConflictError:
            logger.error(f"Failed to rename album {album_id}: name \"{renamed.name}\" already exists")
            raise AlbumConflictError(f"\"{renamed.name}\" already exists")

        await self._publish_config_updated()
        await self.publishers.publish_success(f"Album {saved.name} updated")

        logger.info(f"Album renamed: {album_id} by {caller.subject}")
        return saved

    async def like_album(self, album_id: str, caller: Optional[VerifiedCaller]) -> None:
        """Mark album as favorite (idempotent)"""
        await self._set_favorite(album_id, True, caller)

    async def dislike_album(self, album_id: str, caller: Optional[VerifiedCaller]) -> None:
        """Clear album favorite flag (idempotent)"""
        await self._set_favorite(album_id, False, caller)

    async def _set_favorite(
        self,
        album_id: str,
        favorite: bool,
        caller: Optional[VerifiedCaller],
    ) -> None:
        self._require_caller(caller)

        album = await self._get_album(album_id)
        await self.repo.save(album.model_copy(update={"favorite": favorite}))

        await self._publish_config_updated()

        logger.info(f"Album {album_id} favorite={favorite} by {caller.subject}")

    # ==================== Helpers ====================

    @staticmethod
    def _require_caller(caller: Optional[VerifiedCaller]) -> None:
        if not isinstance(caller, VerifiedCaller):
            raise AlbumUnauthorizedError("Unauthorized")

    async def _get_album(self, album_id: str) -> Album:
        album = await self.repo.find_by_id(album_id)
        if not album:
            raise AlbumNotFoundError(f"Album not found: {album_id}")
        return album

    async def _publish_config_updated(self) -> None:
        if not self.event_bus:
            return
        try:
            config = await self.config_builder.build()
        except Exception as e:
            logger.error(f"Failed to build client config: {e}")
            return
        await self.publishers.publish_config_updated(config)

    # ==================== Utility Methods ====================

    async def check_connection(self) -> bool:
        """Check database connection"""
        try:
            return await self.repo.check_connection()
        except Exception as e:
            logger.error(f"Connection check failed: {e}")
            return False


__all__ = [
    "AlbumService",
    "AlbumNotFoundError",
    "AlbumValidationError",
    "AlbumUnauthorizedError",
    "AlbumConflictError",
    "AlbumServiceError",
]
