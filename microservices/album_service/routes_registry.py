"""
Album Service Routes Registry
Defines all API routes and service metadata reported by the status endpoint
"""
from typing import List, Dict, Any

# All service routes
SERVICE_ROUTES = [
    {
        "path": "/",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service status"
    },
    {
        "path": "/health",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service health check"
    },
    # Album Management
    {
        "path": "/api/v1/albums",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Search albums"
    },
    {
        "path": "/api/v1/albums",
        "methods": ["POST"],
        "auth_required": True,
        "description": "Create album"
    },
    {
        "path": "/api/v1/albums/{album_id}",
        "methods": ["PUT"],
        "auth_required": True,
        "description": "Rename album"
    },
    # Favorites
    {
        "path": "/api/v1/albums/{album_id}/like",
        "methods": ["POST", "DELETE"],
        "auth_required": True,
        "description": "Like/dislike album"
    },
]


def get_route_summary() -> Dict[str, Any]:
    """
    Compact route metadata for status reporting
    """
    album_routes = [r for r in SERVICE_ROUTES if r["path"].startswith("/api/v1/albums")]
    methods: List[str] = sorted({m for r in SERVICE_ROUTES for m in r["methods"]})
    return {
        "route_count": len(SERVICE_ROUTES),
        "base_path": "/api/v1/albums",
        "albums": len(album_routes),
        "methods": ",".join(methods),
        "public_count": sum(1 for r in SERVICE_ROUTES if not r["auth_required"]),
        "protected_count": sum(1 for r in SERVICE_ROUTES if r["auth_required"]),
    }


# Service metadata
SERVICE_METADATA = {
    "service_name": "album_service",
    "version": "1.0.0",
    "tags": ["v1", "album-management", "favorites", "client-sync"],
    "capabilities": [
        "album_search",
        "album_management",
        "album_favorites",
        "client_config_sync"
    ]
}
