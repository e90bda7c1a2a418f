"""Controller for the Conversation Messages feature."""
from typing import Union

from api.features.conversation_messages.dtos import (
    AssistantMessageRequest,
    ConversationMessageDTO,
    MessageCreatedDTO,
    MessagesResponse,
    UserMessageRequest,
)
from api.features.conversation_messages.repository import ConversationMessageRepository


class ConversationMessageController:
    """Maps HTTP requests onto the message repository."""

    def __init__(self, repository: ConversationMessageRepository) -> None:
        self.repository = repository

    async def get_messages(
        self, *, conversation_id: Union[int, str], limit: int, offset: int
    ) -> MessagesResponse:
        rows = await self.repository.get_conversation_messages(
            conversation_id, limit=limit, offset=offset
        )
        return self._to_response(rows)

    async def get_latest_messages(
        self, *, conversation_id: Union[int, str], limit: int
    ) -> MessagesResponse:
        rows = await self.repository.get_latest_messages(conversation_id, limit=limit)
        return self._to_response(rows)

    async def append_user_message(
        self, *, conversation_id: Union[int, str], request: UserMessageRequest
    ) -> MessageCreatedDTO:
        result = await self.repository.insert_user_message(
            conversation_id=conversation_id,
            user_id=request.user_id,
            message=request.message,
            username=request.username,
            media=request.media,
            chat_preference=request.chat_preference,
        )
        return MessageCreatedDTO(id=result.last_insert_id, affected_rows=result.affected_rows)

    async def append_assistant_message(
        self, *, conversation_id: Union[int, str], request: AssistantMessageRequest
    ) -> MessageCreatedDTO:
        result = await self.repository.insert_assistant_message(
            conversation_id=conversation_id,
            user_id=request.user_id,
            message=request.message,
            username=request.username,
            chat_preference=request.chat_preference,
            recommendation_json=request.recommendation_json,
        )
        return MessageCreatedDTO(id=result.last_insert_id, affected_rows=result.affected_rows)

    @staticmethod
    def _to_response(rows) -> MessagesResponse:
        items = [ConversationMessageDTO.model_validate(r) for r in rows]
        return MessagesResponse(items=items, total=len(items))
