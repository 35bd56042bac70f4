"""Pydantic models for backend requests/responses and the chat timeline.

Provides type safety and validation at the gateway boundary.

Models:
    - Message: Displayable timeline message
    - HistoryEntry / SessionHistory: Stored question/answer history
    - AskRequest / AskResponse: Question answering payloads
    - UploadResponse / UploadOptions / DocumentFile: Session creation
"""

from docmind.models.schemas import (
    AskRequest,
    AskResponse,
    DocumentFile,
    HistoryEntry,
    Message,
    Role,
    SessionHistory,
    UploadOptions,
    UploadResponse,
)

__all__ = [
    "AskRequest",
    "AskResponse",
    "DocumentFile",
    "HistoryEntry",
    "Message",
    "Role",
    "SessionHistory",
    "UploadOptions",
    "UploadResponse",
]
