from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Speaker of a timeline message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single displayable message in a session timeline.

    Attributes:
        role: Who said it (user or assistant).
        content: The message text.
        timestamp: Display ordering aid, non-decreasing within a timeline.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    timestamp: float


class HistoryEntry(BaseModel):
    """One stored question/answer pair of a session."""

    question: str
    answer: str


class SessionHistory(BaseModel):
    """Stored conversation of a session, oldest entry first."""

    session_id: str
    history: list[HistoryEntry] = Field(default_factory=list)


class AskRequest(BaseModel):
    """Request payload for the question answering endpoint.

    Attributes:
        session_id: Session whose document grounds the answer.
        question: The user's question.
        k: Number of context chunks to retrieve.
    """

    session_id: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    k: int = Field(5, ge=1)

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: str) -> str:
        """Strip whitespace from question before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class AskResponse(BaseModel):
    """Answer returned by the backend, with the retrieved context if sent."""

    answer: str
    context: list[str] | None = None


class UploadResponse(BaseModel):
    """Response after a document upload created a session.

    Attributes:
        session_id: Identifier of the new session.
        filename: Name of the uploaded file.
        message: Backend status message.
    """

    session_id: str = Field(..., min_length=1)
    filename: str
    message: str = ""


class UploadOptions(BaseModel):
    """Chunking parameters forwarded with an upload."""

    chunk_size: int = Field(400, gt=0)
    chunk_overlap: int = Field(50, gt=0)


class DocumentFile(BaseModel):
    """A local file about to be uploaded.

    Content is forwarded as-is; the backend decides which types it accepts.
    """

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
