"""
Album Service Client

Client library for other microservices to interact with album service via HTTP
"""

import httpx
import logging
from typing import Optional, List, Dict, Any, Tuple

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8219"


class AlbumServiceClient:
    """Album Service HTTP client"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Album Service client

        Args:
            base_url: Album service base URL, defaults to http://localhost:8219
            session_token: Sent as X-Session-Token on every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. ASGITransport in tests)
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip('/')

        headers = {"X-Session-Token": session_token} if session_token else {}
        self.client = httpx.AsyncClient(timeout=timeout, headers=headers, transport=transport)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =============================================================================
    # Album Search
    # =============================================================================

    async def list_albums(
        self,
        q: Optional[str] = None,
        name: Optional[str] = None,
        favorites: Optional[bool] = None,
        count: Optional[int] = None,
        offset: Optional[int] = None,
        order: Optional[str] = None,
    ) -> Optional[Tuple[List[Dict[str, Any]], Dict[str, int]]]:
        """
        Search albums

        Args:
            q: Free-text filter on album name
            name: Exact album name
            favorites: Only favorite albums
            count: Page size
            offset: Result offset
            order: favorites | name | newest | oldest

        Returns:
            (albums, page) where page holds the count/offset the service applied

        Example:
            >>> albums, page = await client.list_albums(favorites=True, count=20)
            >>> for album in albums:
            ...     print(album['name'])
        """
        try:
            params: Dict[str, Any] = {}
            if q:
                params["q"] = q
            if name:
                params["name"] = name
            if favorites is not None:
                params["favorites"] = "true" if favorites else "false"
            if count is not None:
                params["count"] = count
            if offset is not None:
                params["offset"] = offset
            if order:
                params["order"] = order

            response = await self.client.get(
                f"{self.base_url}/api/v1/albums",
                params=params
            )
            response.raise_for_status()

            page = {
                "count": int(response.headers.get("X-Result-Count", 0)),
                "offset": int(response.headers.get("X-Result-Offset", 0)),
            }
            return response.json(), page

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to list albums: {e.response.status_code} - {e.response.text}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error listing albums: {e}")
            return None

    # =============================================================================
    # Album Management
    # =============================================================================

    async def create_album(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Create a new album

        Args:
            name: Album name

        Returns:
            Created album

        Example:
            >>> async with AlbumServiceClient(session_token="...") as client:
            ...     album = await client.create_album("Summer Vacation 2025")
        """
        try:
            response = await self.client.post(
                f"{self.base_url}/api/v1/albums",
                json={"AlbumName": name}
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to create album: {e.response.status_code} - {e.response.text}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error creating album: {e}")
            return None

    async def rename_album(self, album_id: str, name: str) -> Optional[Dict[str, Any]]:
        """
        Rename an album

        Args:
            album_id: Album ID
            name: New album name

        Returns:
            Updated album
        """
        try:
            response = await self.client.put(
                f"{self.base_url}/api/v1/albums/{album_id}",
                json={"AlbumName": name}
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to rename album: {e.response.status_code} - {e.response.text}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error renaming album: {e}")
            return None

    # =============================================================================
    # Favorites
    # =============================================================================

    async def like_album(self, album_id: str) -> bool:
        """
        Mark album as favorite

        Returns:
            True if successful
        """
        try:
            response = await self.client.post(
                f"{self.base_url}/api/v1/albums/{album_id}/like"
            )
            response.raise_for_status()
            return True

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to like album: {e.response.status_code} - {e.response.text}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error liking album: {e}")
            return False

    async def dislike_album(self, album_id: str) -> bool:
        """
        Clear album favorite flag

        Returns:
            True if successful
        """
        try:
            response = await self.client.delete(
                f"{self.base_url}/api/v1/albums/{album_id}/like"
            )
            response.raise_for_status()
            return True

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to dislike album: {e.response.status_code} - {e.response.text}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error disliking album: {e}")
            return False

    # =============================================================================
    # Health Check
    # =============================================================================

    async def health_check(self) -> Optional[Dict[str, Any]]:
        """
        Check service health

        Returns:
            Health status

        Example:
            >>> health = await client.health_check()
            >>> if health['status'] == 'healthy':
            ...     print("Service is healthy")
        """
        try:
            response = await self.client.get(f"{self.base_url}/health")
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Health check failed: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error during health check: {e}")
            return None


# =============================================================================
# Convenience Functions
# =============================================================================

async def create_album_client(
    base_url: Optional[str] = None,
    session_token: Optional[str] = None,
) -> AlbumServiceClient:
    """
    Create an album service client

    Args:
        base_url: Album service base URL
        session_token: Session token for mutating calls

    Returns:
        AlbumServiceClient

    Example:
        >>> client = await create_album_client(session_token="...")
        >>> album = await client.create_album("My Album")
        >>> await client.close()
    """
    return AlbumServiceClient(base_url=base_url, session_token=session_token)
