"""
Shared fixtures: a file-backed SQLite database with the conversation_messages
table, served through the same DatabaseResource the application uses.
"""
from typing import Any, Dict, Optional

import pytest
import pytest_asyncio

from api.features.conversation_messages.repository import ConversationMessageRepository
from infra.resources import DatabaseResource
from tests.fixtures.schema import CREATE_TABLE_SQL, INSERT_AT_SQL


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'conversations.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    """Initialized pool with an empty conversation_messages table."""
    db = DatabaseResource(database_url=database_url)
    await db.init()
    await db.execute_query(CREATE_TABLE_SQL)
    yield db
    await db.shutdown()


@pytest.fixture
def repository(database) -> ConversationMessageRepository:
    return ConversationMessageRepository(database)


@pytest.fixture
def insert_message_at(database):
    """Insert a row with an explicit created_at so ordering is deterministic."""

    async def _insert(
        conversation_id: int,
        message: str,
        created_at: str,
        *,
        user_id: int = 42,
        message_type: str = "user",
    ) -> Optional[int]:
        params: Dict[str, Any] = {
            "conversation_id": conversation_id,
            "user_id": user_id,
            "message": message,
            "message_type": message_type,
            "created_at": created_at,
        }
        result = await database.execute_query(INSERT_AT_SQL, params)
        return result.last_insert_id

    return _insert
