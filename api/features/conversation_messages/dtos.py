"""DTOs for the Conversation Messages feature."""
from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import ConfigDict, Field

from api.shared.dtos import BaseDTO


class UserMessageRequest(BaseDTO):
    """Store a message sent by the user."""

    user_id: Union[int, str] = Field(description="User identifier")
    message: str = Field(description="Message body")
    username: Optional[str] = Field(default="", description="Display name")
    media: Optional[str] = Field(default=None, description="Attached media reference")
    chat_preference: Optional[str] = Field(default="ai", description="Reply routing hint")


class AssistantMessageRequest(BaseDTO):
    """Store a reply produced by the assistant."""

    user_id: Union[int, str] = Field(description="User identifier")
    message: str = Field(description="Message body")
    username: Optional[str] = Field(default="", description="Display name")
    chat_preference: Optional[str] = Field(default="ai", description="Reply routing hint")
    recommendation_json: Optional[Any] = Field(
        default=None, description="Recommendation payload, raw JSON text or structure"
    )


class MessageCreatedDTO(BaseDTO):
    """Identifier of a stored message."""

    id: Optional[int] = Field(default=None, description="Generated message identifier")
    affected_rows: int = Field(description="Rows inserted")


class ConversationMessageDTO(BaseDTO):
    """Conversation message row.

    Other services write to the same table, so stored values are passed through
    without re-validating them against the insert record.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: Optional[Union[int, str]] = Field(default=None, description="Message identifier")
    conversation_id: Union[int, str]
    user_id: Union[int, str]
    username: Optional[str] = None
    message: str
    media: Optional[str] = None
    message_type: str
    chat_preference: Optional[str] = None
    component_type: Optional[str] = None
    component_id: Optional[Union[int, str]] = None
    zulu_sender_type: Optional[str] = None
    zulu_agent_id: Optional[Union[int, str]] = None
    zulu_agent_name: Optional[str] = None
    is_read: Optional[int] = 0
    recommendation_json: Optional[str] = None
    created_at: Optional[datetime] = None


class MessagesResponse(BaseDTO):
    """Messages list response."""

    items: List[ConversationMessageDTO] = Field(description="Messages in requested order")
    total: int = Field(description="Total messages returned")
