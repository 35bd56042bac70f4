"""DocuMind - chat with your documents through a remote RAG service.

Client-side orchestrator for document-grounded Q&A sessions. A document is
uploaded, the backend opens a session against it, and questions are answered
from that document alone. Several sessions can coexist and be switched.

Components:
    - gateway: HTTP client for the retrieval/QA backend
    - session: session registry, active session state machine, upload and query flows
    - models: Request/response and message schemas
    - ui: NiceGUI chat interface
"""

__version__ = "0.1.0"
