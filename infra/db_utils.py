"""Process-wide database pool for library callers outside the DI container."""

from typing import Any, Mapping, Optional, Union

from sqlalchemy.sql.elements import TextClause

from core.settings import SETTINGS
from infra.resources import DatabaseResource, QueryResult


class DatabaseManager:
    """Holds the single pool shared by everything in this process."""

    _instance: Optional[DatabaseResource] = None

    @classmethod
    async def get_resource(cls) -> DatabaseResource:
        """Get initialized database resource (singleton pattern)."""
        if cls._instance is None:
            db = SETTINGS.DATABASE
            resource = DatabaseResource(
                database_url=db.DATABASE_URL,
                pool_size=db.DB_POOL_SIZE,
                pool_timeout=db.DB_POOL_TIMEOUT,
                pool_recycle=db.DB_POOL_RECYCLE,
            )
            await resource.init()
            cls._instance = resource
        return cls._instance

    @classmethod
    async def reset(cls) -> None:
        """Close the shared pool; the next get_resource() builds a new one."""
        if cls._instance is not None:
            await cls._instance.shutdown()
            cls._instance = None


async def get_pool() -> DatabaseResource:
    return await DatabaseManager.get_resource()


async def close_pool() -> None:
    """Close the shared pool. Call on process shutdown."""
    await DatabaseManager.reset()


async def execute_query(
    sql: Union[str, TextClause], params: Optional[Mapping[str, Any]] = None
) -> QueryResult:
    db = await get_pool()
    return await db.execute_query(sql, params)
