"""
PostgreSQL Client Wrapper for Microservices

PostgreSQL client wrapper around an asyncpg connection pool.
Provides configuration from InfraConfig and a consistent database access pattern.

Usage:
    from core.postgres_client import PostgresClientWrapper

    db = PostgresClientWrapper("album_service", infra_config)
    await db.connect()

    rows = await db.query("SELECT * FROM album.albums WHERE favorite = $1", [True])

    await db.close()
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

from core.config import InfraConfig

logger = logging.getLogger(__name__)


class PostgresClientWrapper:
    """
    PostgreSQL client wrapper with an explicit pool lifetime.

    The pool is created by connect() and released by close(); every
    query method requires a connected client.
    """

    def __init__(
        self,
        service_name: str,
        config: Optional[InfraConfig] = None,
    ):
        """
        Initialize PostgreSQL client wrapper.

        Args:
            service_name: Name of the service using this client
            config: Infrastructure config (defaults to environment)
        """
        config = config or InfraConfig.from_env()

        self.service_name = service_name
        self.host = config.postgres_host
        self.port = config.postgres_port
        self.database = config.postgres_db
        self.username = config.postgres_user
        self.password = config.postgres_password
        self.min_size = config.postgres_pool_min
        self.max_size = config.postgres_pool_max

        self._pool: Optional[asyncpg.Pool] = None

        logger.info(f"PostgreSQL client initialized for {service_name}: {self.host}:{self.port}/{self.database}")

    @property
    def pool(self) -> asyncpg.Pool:
        """Get underlying pool"""
        if self._pool is None:
            raise RuntimeError(f"PostgreSQL client for {self.service_name} is not connected")
        return self._pool

    async def connect(self):
        """Create the connection pool"""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
            min_size=self.min_size,
            max_size=self.max_size,
        )
        logger.info(f"PostgreSQL pool opened for {self.service_name}")

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def health_check(self) -> bool:
        """Check database health"""
        try:
            return await self.pool.fetchval("SELECT 1") == 1
        except Exception as e:
            logger.error(f"PostgreSQL health check failed: {e}")
            return False

    async def query(self, sql: str, params: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
        """Execute query and return results"""
        rows = await self.pool.fetch(sql, *(params or []))
        return [dict(row) for row in rows]

    async def query_row(self, sql: str, params: Optional[List[Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute query and return single row"""
        row = await self.pool.fetchrow(sql, *(params or []))
        return dict(row) if row is not None else None

    async def query_value(self, sql: str, params: Optional[List[Any]] = None) -> Any:
        """Execute query and return the first column of the first row"""
        return await self.pool.fetchval(sql, *(params or []))

    async def execute(self, sql: str, params: Optional[List[Any]] = None) -> str:
        """Execute SQL statement, returns the command status (e.g. 'UPDATE 1')"""
        return await self.pool.execute(sql, *(params or []))

    async def close(self):
        """Close the pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info(f"PostgreSQL pool closed for {self.service_name}")


__all__ = ["PostgresClientWrapper"]
