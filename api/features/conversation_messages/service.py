"""Conversation message functions bound to the process-wide pool.

For scripts and workers that do not run inside the DI container. The pool is
created on first use and released with close_pool() on shutdown.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from api.features.conversation_messages.models import ConversationMessageCreate, Identifier
from api.features.conversation_messages.repository import ConversationMessageRepository
from infra.db_utils import close_pool, execute_query, get_pool
from infra.resources import WriteResult

__all__ = [
    "execute_query",
    "insert_conversation_message",
    "insert_user_message",
    "insert_assistant_message",
    "get_conversation_messages",
    "get_latest_messages",
    "close_pool",
]


async def _repository() -> ConversationMessageRepository:
    return ConversationMessageRepository(await get_pool())


async def insert_conversation_message(
    data: Union[ConversationMessageCreate, Mapping[str, Any]],
) -> WriteResult:
    repo = await _repository()
    return await repo.insert_conversation_message(data)


async def insert_user_message(
    *,
    conversation_id: Identifier,
    user_id: Identifier,
    message: str,
    username: Optional[str] = "",
    media: Optional[str] = None,
    chat_preference: Optional[str] = "ai",
) -> WriteResult:
    repo = await _repository()
    return await repo.insert_user_message(
        conversation_id=conversation_id,
        user_id=user_id,
        message=message,
        username=username,
        media=media,
        chat_preference=chat_preference,
    )


async def insert_assistant_message(
    *,
    conversation_id: Identifier,
    user_id: Identifier,
    message: str,
    username: Optional[str] = "",
    chat_preference: Optional[str] = "ai",
    recommendation_json: Optional[Any] = None,
) -> WriteResult:
    repo = await _repository()
    return await repo.insert_assistant_message(
        conversation_id=conversation_id,
        user_id=user_id,
        message=message,
        username=username,
        chat_preference=chat_preference,
        recommendation_json=recommendation_json,
    )


async def get_conversation_messages(
    conversation_id: Identifier, limit: int = 50, offset: int = 0
) -> List[Dict[str, Any]]:
    repo = await _repository()
    return await repo.get_conversation_messages(conversation_id, limit=limit, offset=offset)


async def get_latest_messages(
    conversation_id: Identifier, limit: int = 10
) -> List[Dict[str, Any]]:
    repo = await _repository()
    return await repo.get_latest_messages(conversation_id, limit=limit)
