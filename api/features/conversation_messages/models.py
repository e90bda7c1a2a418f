"""Models for the Conversation Messages feature."""
import json
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Identifier = Union[int, str]

# Insert order of the conversation_messages columns; created_at is server-assigned
MESSAGE_COLUMNS: Tuple[str, ...] = (
    "conversation_id",
    "user_id",
    "username",
    "message",
    "media",
    "message_type",
    "chat_preference",
    "component_type",
    "component_id",
    "zulu_sender_type",
    "zulu_agent_id",
    "zulu_agent_name",
    "is_read",
    "recommendation_json",
)

ZULU_SENDER_AI = "ai"


class MessageType(str, Enum):
    """Who authored a message."""

    USER = "user"
    ZULU = "zulu"


class ConversationMessageCreate(BaseModel):
    """A conversation message ready to be inserted.

    Absent optional fields take their defaults. A field passed explicitly as
    None stays None.
    """

    model_config = ConfigDict(extra="ignore")

    conversation_id: Identifier = Field(description="Conversation the message belongs to")
    user_id: Identifier = Field(description="Human participant of the conversation")
    username: Optional[str] = Field(default="", description="Display name of the user")
    message: str = Field(description="Message body")
    media: Optional[str] = Field(default=None, description="Attached media reference")
    message_type: MessageType = Field(default=MessageType.USER, description="user or zulu")
    chat_preference: Optional[str] = Field(default="ai", description="Reply routing hint")
    component_type: Optional[str] = Field(default=None, description="Embedded UI component type")
    component_id: Optional[Identifier] = Field(default=None, description="Embedded UI component id")
    zulu_sender_type: Optional[str] = Field(default=None, description="Assistant sub-type, e.g. ai")
    zulu_agent_id: Optional[Identifier] = Field(default=None, description="Assistant agent id")
    zulu_agent_name: Optional[str] = Field(default=None, description="Assistant agent name")
    is_read: int = Field(default=0, ge=0, le=1, description="Read flag stored as 0/1")
    recommendation_json: Optional[str] = Field(
        default=None, description="Serialized recommendation payload"
    )

    @field_validator("is_read", mode="before")
    @classmethod
    def _bool_to_int(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return int(v)
        return v

    @field_validator("recommendation_json", mode="before")
    @classmethod
    def _serialize_recommendation(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return json.dumps(v, ensure_ascii=False)

    def to_params(self) -> Dict[str, Any]:
        """Insert parameters keyed by column name, in column order."""
        params = {column: getattr(self, column) for column in MESSAGE_COLUMNS}
        params["message_type"] = self.message_type.value
        return params
