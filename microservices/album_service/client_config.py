"""
Client Configuration Snapshot

Builds the client-visible configuration broadcast with config.updated.
Open client sessions replace their local state with this snapshot.
"""

import logging

from .models import AlbumSummary, ClientConfig, ClientCounts
from .protocols import AlbumRepositoryProtocol
from .search import AlbumQuery, favorites_query

logger = logging.getLogger(__name__)


class ClientConfigBuilder:
    """Reads the current album state through the repository"""

    def __init__(
        self,
        repository: AlbumRepositoryProtocol,
        service_name: str = "album_service",
        version: str = "1.0.0",
        public: bool = False,
    ):
        self.repo = repository
        self.service_name = service_name
        self.version = version
        self.public = public

    async def build(self) -> ClientConfig:
        """Snapshot of counts and favorite albums, read after the last commit"""
        favorites = await self.repo.find(favorites_query())
        total = await self.repo.count(AlbumQuery())
        favorite_total = await self.repo.count(AlbumQuery(favorite=True))

        return ClientConfig(
            name=self.service_name,
            version=self.version,
            public=self.public,
            count=ClientCounts(albums=total, favorites=favorite_total),
            albums=[AlbumSummary(id=album.id, name=album.name) for album in favorites],
        )
