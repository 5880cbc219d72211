"""
Album Service Models

Independent models for album management microservice.
Handles albums, search forms, and the client-visible configuration snapshot.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from enum import Enum


# ==================== Enumerations ====================

class AlbumOrder(str, Enum):
    """Album list ordering"""
    FAVORITES = "favorites"
    NAME = "name"
    NEWEST = "newest"
    OLDEST = "oldest"


# ==================== Core Models ====================

class Album(BaseModel):
    """Album model"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    favorite: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v):
        # asyncpg returns uuid.UUID for UUID columns
        return str(v) if v is not None else v


# ==================== Request Models ====================

class AlbumParams(BaseModel):
    """Album create / rename request body"""
    model_config = ConfigDict(populate_by_name=True)

    album_name: str = Field(
        ...,
        alias="AlbumName",
        description="Album name",
        min_length=1,
        max_length=255,
    )

    @field_validator('album_name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Album name is required")
        return v


class AlbumSearchForm(BaseModel):
    """Album list query parameters"""
    model_config = ConfigDict(extra="ignore")

    q: Optional[str] = Field(None, description="Free-text filter on album name", max_length=255)
    name: Optional[str] = Field(None, description="Exact album name", max_length=255)
    favorites: Optional[bool] = Field(None, description="Only favorite albums")
    count: int = Field(0, description="Page size (clamped by the query builder)")
    offset: int = Field(0, ge=0, description="Result offset")
    order: AlbumOrder = Field(AlbumOrder.FAVORITES, description="Sort order")


# ==================== Response Models ====================

class AlbumSearchResult(BaseModel):
    """Page of albums plus the pagination actually applied"""
    albums: List[Album]
    count: int
    offset: int


class AlbumSummary(BaseModel):
    """Album summary (for client navigation)"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class ClientCounts(BaseModel):
    """Album counters shown by clients"""
    albums: int = 0
    favorites: int = 0


class ClientConfig(BaseModel):
    """Client-visible configuration snapshot, broadcast with config.updated"""
    name: str = "album_service"
    version: str = "1.0.0"
    public: bool = False
    count: ClientCounts = Field(default_factory=ClientCounts)
    albums: List[AlbumSummary] = Field(default_factory=list)


# ==================== Service Status Models ====================

class AlbumServiceStatus(BaseModel):
    """Album service status response"""
    service: str = "album_service"
    status: str = "operational"
    port: int = 8219
    version: str = "1.0.0"
    database_connected: bool
    route_count: int = 0
    timestamp: datetime


# ==================== Export Models ====================

__all__ = [
    # Enums
    'AlbumOrder',
    # Core Models
    'Album',
    # Request Models
    'AlbumParams', 'AlbumSearchForm',
    # Response Models
    'AlbumSearchResult', 'AlbumSummary', 'ClientCounts', 'ClientConfig',
    # Service Models
    'AlbumServiceStatus',
]
