"""Errors raised by the conversation message store.

Every error carries a stable `error_code` that the HTTP layer returns to clients.
"""
from typing import Any, Dict, Optional


class ConversationStoreException(Exception):
    """Base class; `details` holds extra context such as the failed statement."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class DatabaseError(ConversationStoreException):
    """A statement on conversation_messages failed; the driver error is the __cause__."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DATABASE_ERROR", details)
