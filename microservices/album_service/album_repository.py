"""
Album Repository - Data access layer for album service
Handles database operations for albums

Uses PostgresClientWrapper (asyncpg pool) for PostgreSQL access
"""

import logging
import uuid
from typing import List, Optional, Tuple, Any
from datetime import datetime, timezone

import asyncpg

from core.config import InfraConfig
from core.postgres_client import PostgresClientWrapper
from .models import Album
from .protocols import AlbumConflictError, AlbumNotFoundError
from .search import AlbumQuery, SORTABLE_FIELDS

logger = logging.getLogger(__name__)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class AlbumRepository:
    """Album repository - data access layer for album operations"""

    def __init__(
        self,
        db: Optional[PostgresClientWrapper] = None,
        config: Optional[InfraConfig] = None,
    ):
        """
        Initialize album repository

        Args:
            db: Database client (created from config if omitted)
            config: Infrastructure config used when db is omitted
        """
        self.db = db or PostgresClientWrapper("album_service", config)
        # Table names (album schema)
        self.schema = "album"
        self.albums_table = "albums"

    @property
    def table(self) -> str:
        return f"{self.schema}.{self.albums_table}"

    # ==================== Lifecycle ====================

    async def connect(self):
        """Open the connection pool"""
        await self.db.connect()

    async def close(self):
        """Release the connection pool"""
        await self.db.close()

    async def ensure_schema(self):
        """Create schema, table and indexes if missing"""
        await self.db.execute(f"CREATE SCHEMA IF NOT EXISTS {self.schema}")
        await self.db.execute(f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                id UUID PRIMARY KEY,
                name TEXT NOT NULL,
                favorite BOOLEAN NOT NULL DEFAULT FALSE,
                created_at TIMESTAMPTZ NOT NULL,
                updated_at TIMESTAMPTZ NOT NULL,
                CONSTRAINT albums_name_key UNIQUE (name)
            )
        """)
        await self.db.execute(
            f"CREATE INDEX IF NOT EXISTS albums_created_at_idx ON {self.table} (created_at)"
        )
        logger.info(f"Album schema ready: {self.table}")

    # ==================== Query Building ====================

    @staticmethod
    def _build_where(query: AlbumQuery) -> Tuple[str, List[Any]]:
        conditions = []
        params: List[Any] = []

        if query.text:
            params.append(f"%{_escape_like(query.text)}%")
            conditions.append(f"name ILIKE ${len(params)} ESCAPE '\\'")

        if query.name is not None:
            params.append(query.name)
            conditions.append(f"name = ${len(params)}")

        if query.favorite is not None:
            params.append(query.favorite)
            conditions.append(f"favorite = ${len(params)}")

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        return where_clause, params

    @staticmethod
    def _build_order(query: AlbumQuery) -> str:
        parts = []
        for field, descending in query.order_by:
            if field not in SORTABLE_FIELDS:
                raise ValueError(f"Unsupported sort field: {field}")
            parts.append(f"{field} {'DESC' if descending else 'ASC'}")
        return f"ORDER BY {', '.join(parts)}" if parts else ""

    # ==================== Album Operations ====================

    async def find_by_id(self, album_id: str) -> Optional[Album]:
        """Get album by id"""
        parsed = _parse_uuid(album_id)
        if parsed is None:
            return None

        try:
            result = await self.db.query_row(
                f"SELECT * FROM {self.table} WHERE id = $1", [parsed]
            )
            return Album.model_validate(result) if result else None

        except Exception as e:
            logger.error(f"Error getting album by ID {album_id}: {e}")
            raise

    async def find(self, query: AlbumQuery) -> List[Album]:
        """Albums matching the query, ordered and paged"""
        where_clause, params = self._build_where(query)
        sql = f"SELECT * FROM {self.table} {where_clause} {self._build_order(query)}"

        if query.limit is not None:
            params.append(query.limit)
            sql += f" LIMIT ${len(params)}"
        params.append(query.offset)
        sql += f" OFFSET ${len(params)}"

        try:
            results = await self.db.query(sql, params)
            return [Album.model_validate(row) for row in results]

        except Exception as e:
            logger.error(f"Error searching albums: {e}")
            raise

    async def count(self, query: AlbumQuery) -> int:
        """Number of albums matching the query filter"""
        where_clause, params = self._build_where(query)
        try:
            value = await self.db.query_value(
                f"SELECT COUNT(*) FROM {self.table} {where_clause}", params
            )
            return int(value or 0)

        except Exception as e:
            logger.error(f"Error counting albums: {e}")
            raise

    async def create(self, album: Album) -> Album:
        """Create a new album"""
        now = datetime.now(timezone.utc)
        try:
            result = await self.db.query_row(
                f"""
                INSERT INTO {self.table} (id, name, favorite, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING *
                """,
                [uuid.UUID(album.id), album.name, album.favorite, now, now],
            )
            return Album.model_validate(result)

        except asyncpg.exceptions.UniqueViolationError as e:
            raise AlbumConflictError(f"Album name already exists: {album.name}") from e
        except Exception as e:
            logger.error(f"Error creating album: {e}")
            raise

    async def save(self, album: Album) -> Album:
        """Persist name and favorite of an existing album"""
        parsed = _parse_uuid(album.id)
        if parsed is None:
            raise AlbumNotFoundError(f"Album not found: {album.id}")

        try:
            result = await self.db.query_row(
                f"""
                UPDATE {self.table}
                SET name = $2, favorite = $3, updated_at = $4
                WHERE id = $1
                RETURNING *
                """,
                [parsed, album.name, album.favorite, datetime.now(timezone.utc)],
            )

        except asyncpg.exceptions.UniqueViolationError as e:
            raise AlbumConflictError(f"Album name already exists: {album.name}") from e
        except Exception as e:
            logger.error(f"Error saving album {album.id}: {e}")
            raise

        if not result:
            raise AlbumNotFoundError(f"Album not found: {album.id}")
        return Album.model_validate(result)

    # ==================== Utility Methods ====================

    async def check_connection(self) -> bool:
        """Check database connection"""
        return await self.db.health_check()
