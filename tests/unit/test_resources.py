"""
Unit tests for the pooled DatabaseResource: lifecycle and the query executor.
"""
import asyncio

import pytest
from sqlalchemy.exc import IntegrityError
from structlog.testing import capture_logs

from core.exceptions import DatabaseError
from infra.resources import DatabaseResource, WriteResult


class TestPoolLifecycle:
    """Creating, reusing and closing the pool."""

    @pytest.mark.asyncio
    async def test_get_pool_before_init_raises(self, database_url):
        db = DatabaseResource(database_url=database_url)

        assert db.is_initialized is False
        with pytest.raises(RuntimeError):
            db.get_pool()

    @pytest.mark.asyncio
    async def test_init_is_idempotent(self, database_url):
        db = DatabaseResource(database_url=database_url)
        await db.init()
        engine = db.get_pool()

        await db.init()

        assert db.get_pool() is engine
        await db.shutdown()

    @pytest.mark.asyncio
    async def test_pool_is_capped_at_configured_size(self, database):
        stats = database.pool_stats()

        assert stats["size"] == 10
        assert stats["checked_out"] == 0
        assert database.get_pool().pool._max_overflow == 0

    @pytest.mark.asyncio
    async def test_shutdown_then_init_builds_fresh_engine(self, database_url):
        db = DatabaseResource(database_url=database_url)
        await db.init()
        first = db.get_pool()

        await db.shutdown()
        assert db.is_initialized is False

        await db.init()
        assert db.get_pool() is not first
        await db.shutdown()

    @pytest.mark.asyncio
    async def test_shutdown_without_init_is_noop(self, database_url):
        db = DatabaseResource(database_url=database_url)
        await db.shutdown()
        assert db.is_initialized is False

    @pytest.mark.asyncio
    async def test_lifecycle_is_logged(self, database_url):
        db = DatabaseResource(database_url=database_url)

        with capture_logs() as logs:
            await db.init()
            await db.shutdown()

        events = [entry["event"] for entry in logs]
        assert events == ["conversation_db.pool.created", "conversation_db.pool.closed"]
        assert logs[0]["pool_size"] == 10


class TestExecuteQuery:
    """Running statements through the pool."""

    @pytest.mark.asyncio
    async def test_select_returns_row_dicts(self, database, insert_message_at):
        await insert_message_at(7, "hello", "2026-01-01T10:00:00.000")

        rows = await database.execute_query(
            "SELECT message, conversation_id FROM conversation_messages WHERE conversation_id = :cid",
            {"cid": 7},
        )

        assert rows == [{"message": "hello", "conversation_id": 7}]

    @pytest.mark.asyncio
    async def test_select_without_matches_returns_empty_list(self, database):
        rows = await database.execute_query("SELECT * FROM conversation_messages")
        assert rows == []

    @pytest.mark.asyncio
    async def test_insert_returns_generated_id(self, database):
        result = await database.execute_query(
            "INSERT INTO conversation_messages (conversation_id, user_id, message) "
            "VALUES (:cid, :uid, :msg)",
            {"cid": 1, "uid": 2, "msg": "first"},
        )

        assert isinstance(result, WriteResult)
        assert result.last_insert_id == 1
        assert result.affected_rows == 1

    @pytest.mark.asyncio
    async def test_write_is_committed(self, database):
        await database.execute_query(
            "INSERT INTO conversation_messages (conversation_id, user_id, message) "
            "VALUES (1, 2, 'kept')"
        )

        rows = await database.execute_query("SELECT message FROM conversation_messages")
        assert rows == [{"message": "kept"}]

    @pytest.mark.asyncio
    async def test_failure_raises_database_error_and_releases_connection(self, database):
        before = database.pool_stats()["checked_out"]

        with pytest.raises(DatabaseError) as exc_info:
            await database.execute_query(
                "INSERT INTO conversation_messages (conversation_id, user_id, message) "
                "VALUES (:cid, :uid, NULL)",
                {"cid": 1, "uid": 2},
            )

        assert exc_info.value.error_code == "DATABASE_ERROR"
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        assert database.pool_stats()["checked_out"] == before == 0

    @pytest.mark.asyncio
    async def test_malformed_sql_is_logged(self, database):
        with capture_logs() as logs:
            with pytest.raises(DatabaseError):
                await database.execute_query("SELEC nothing")

        assert logs[-1]["event"] == "conversation_db.query.failed"
        assert logs[-1]["log_level"] == "error"
        assert database.pool_stats()["checked_out"] == 0

    @pytest.mark.asyncio
    async def test_saturated_pool_queues_callers(self, database_url):
        db = DatabaseResource(database_url=database_url, pool_size=2)
        await db.init()

        results = await asyncio.gather(
            *(db.execute_query("SELECT :n AS n", {"n": n}) for n in range(8))
        )

        assert [r[0]["n"] for r in results] == list(range(8))
        stats = db.pool_stats()
        assert stats["checked_out"] == 0
        assert stats["checked_in"] <= 2
        await db.shutdown()
