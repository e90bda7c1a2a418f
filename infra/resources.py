"""Infrastructure resources: the pooled conversation database.

This module is part of the infra layer and must not import from application features.
"""
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlalchemy.sql.elements import TextClause

from core.exceptions import DatabaseError

logger = structlog.get_logger("infra.resources")


class WriteResult(BaseModel):
    """Outcome of a statement that returns no rows (INSERT, DDL, ...)."""

    last_insert_id: Optional[int] = Field(default=None, description="Generated primary key")
    affected_rows: int = Field(default=0, description="Rows changed by the statement")


QueryResult = Union[List[Dict[str, Any]], WriteResult]


class DatabaseResource:
    """Database resource for dependency injection.

    Owns one async engine whose queue pool is the connection pool shared by
    every repository that receives this resource.
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        pool_timeout: Optional[float] = None,
        pool_recycle: int = 3600,
        echo: bool = False,
    ):
        self.database_url = database_url
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    async def init(self):
        """Create the connection pool if it does not exist yet."""
        if self.engine is not None:
            return self
        self.engine = create_async_engine(
            self.database_url,
            echo=self.echo,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=self.pool_size,
            # Hard cap at pool_size; extra callers queue instead of overflowing
            max_overflow=0,
            pool_timeout=self.pool_timeout,
            pool_pre_ping=True,
            pool_recycle=self.pool_recycle,
        )
        logger.info(
            "conversation_db.pool.created",
            driver=self.engine.url.drivername,
            pool_size=self.pool_size,
        )
        return self

    def get_pool(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self.engine

    def pool_stats(self) -> Dict[str, int]:
        """Snapshot of connection usage in the pool."""
        pool = self.get_pool().pool
        return {
            "size": pool.size(),
            "checked_in": pool.checkedin(),
            "checked_out": pool.checkedout(),
            "overflow": pool.overflow(),
        }

    async def execute_query(
        self,
        sql: Union[str, TextClause],
        params: Optional[Mapping[str, Any]] = None,
    ) -> QueryResult:
        """Run one parameterized statement on a pooled connection.

        The statement runs in its own transaction, committed on success. The
        connection goes back to the pool whether the statement succeeds or not.

        Returns:
            Row dicts for statements that return rows, a WriteResult otherwise.

        Raises:
            DatabaseError: the driver or the database rejected the statement.
        """
        statement = text(sql) if isinstance(sql, str) else sql
        engine = self.get_pool()
        try:
            async with engine.begin() as conn:
                result = await conn.execute(statement, dict(params or {}))
                if result.returns_rows:
                    return [dict(r) for r in result.mappings().all()]
                return WriteResult(
                    last_insert_id=result.lastrowid or None,
                    affected_rows=max(result.rowcount, 0),
                )
        except SQLAlchemyError as e:
            logger.error("conversation_db.query.failed", error=str(e))
            raise DatabaseError(
                f"Conversation DB query failed: {e}",
                details={"statement": str(statement)},
            ) from e

    async def shutdown(self):
        """Shutdown database connection."""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            logger.info("conversation_db.pool.closed")
