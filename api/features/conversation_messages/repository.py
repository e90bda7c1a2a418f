"""Repository for conversation message persistence.

Raw SQL through the pooled DatabaseResource; one statement per call.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy import text

from api.features.conversation_messages.models import (
    MESSAGE_COLUMNS,
    ZULU_SENDER_AI,
    ConversationMessageCreate,
    Identifier,
    MessageType,
)
from infra.resources import DatabaseResource, WriteResult

_COLUMN_LIST = ", ".join(MESSAGE_COLUMNS)
_VALUE_LIST = ", ".join(":" + c for c in MESSAGE_COLUMNS)

INSERT_MESSAGE_SQL = text(
    f"""
    INSERT INTO conversation_messages
    ({_COLUMN_LIST})
    VALUES ({_VALUE_LIST})
    """
)

SELECT_MESSAGES_SQL = text(
    """
    SELECT * FROM conversation_messages
    WHERE conversation_id = :conversation_id
    ORDER BY created_at ASC
    LIMIT :limit OFFSET :offset
    """
)

SELECT_LATEST_MESSAGES_SQL = text(
    """
    SELECT * FROM conversation_messages
    WHERE conversation_id = :conversation_id
    ORDER BY created_at DESC
    LIMIT :limit
    """
)


class ConversationMessageRepository:
    """Reads and writes rows of the conversation_messages table."""

    def __init__(self, db: DatabaseResource):
        self.db = db

    async def insert_conversation_message(
        self, data: Union[ConversationMessageCreate, Mapping[str, Any]]
    ) -> WriteResult:
        """Insert one message, filling absent optional fields with defaults.

        Raises:
            pydantic.ValidationError: a required field is missing or malformed.
            DatabaseError: the database rejected the insert.
        """
        if not isinstance(data, ConversationMessageCreate):
            data = ConversationMessageCreate.model_validate(data)
        return await self.db.execute_query(INSERT_MESSAGE_SQL, data.to_params())

    async def insert_user_message(
        self,
        *,
        conversation_id: Identifier,
        user_id: Identifier,
        message: str,
        username: Optional[str] = "",
        media: Optional[str] = None,
        chat_preference: Optional[str] = "ai",
    ) -> WriteResult:
        return await self.insert_conversation_message(
            ConversationMessageCreate(
                conversation_id=conversation_id,
                user_id=user_id,
                username=username,
                message=message,
                media=media,
                message_type=MessageType.USER,
                chat_preference=chat_preference,
                zulu_sender_type=None,
            )
        )

    async def insert_assistant_message(
        self,
        *,
        conversation_id: Identifier,
        user_id: Identifier,
        message: str,
        username: Optional[str] = "",
        chat_preference: Optional[str] = "ai",
        recommendation_json: Optional[Any] = None,
    ) -> WriteResult:
        """Insert a message authored by the Zulu assistant (never carries media)."""
        return await self.insert_conversation_message(
            ConversationMessageCreate(
                conversation_id=conversation_id,
                user_id=user_id,
                username=username,
                message=message,
                media=None,
                message_type=MessageType.ZULU,
                chat_preference=chat_preference,
                zulu_sender_type=ZULU_SENDER_AI,
                recommendation_json=recommendation_json,
            )
        )

    async def get_conversation_messages(
        self,
        conversation_id: Identifier,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Messages of a conversation, oldest first."""
        return await self.db.execute_query(
            SELECT_MESSAGES_SQL,
            {"conversation_id": conversation_id, "limit": limit, "offset": offset},
        )

    async def get_latest_messages(
        self,
        conversation_id: Identifier,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """Most recent messages of a conversation, newest first."""
        return await self.db.execute_query(
            SELECT_LATEST_MESSAGES_SQL,
            {"conversation_id": conversation_id, "limit": limit},
        )
