"""Session and message state for document-grounded chat.

Responsibilities:
    - Keeping the list of sessions in sync with the backend
    - Rebuilding a session's timeline from its stored history
    - Tracking the active session (idle / loading / ready)
    - Creating a session from an upload and activating it
    - Asking questions with optimistic, append-only timeline updates

Holds all client state; the UI only renders it.
"""

from docmind.session.controller import ActiveSessionController, ControllerState
from docmind.session.query import FALLBACK_ANSWER, QueryExecutor
from docmind.session.registry import SessionRegistry
from docmind.session.timeline import build_timeline
from docmind.session.upload import UploadOrchestrator
from docmind.session.workspace import Workspace

__all__ = [
    "FALLBACK_ANSWER",
    "ActiveSessionController",
    "ControllerState",
    "QueryExecutor",
    "SessionRegistry",
    "UploadOrchestrator",
    "Workspace",
    "build_timeline",
]
