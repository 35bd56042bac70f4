"""Async HTTP client for the RAG backend.

Wraps httpx with:
- One shared connection pool per process
- JSON accept headers on every request
- Conversion of transport, status and payload failures into the
  gateway error taxonomy (FetchError, UploadError, QueryError, DeleteError)

Nothing outside this module sees an httpx exception.
"""

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from docmind.gateway.config import GatewayConfig, get_gateway_config
from docmind.gateway.errors import (
    DeleteError,
    FetchError,
    GatewayError,
    QueryError,
    UploadError,
)
from docmind.models.schemas import (
    AskRequest,
    AskResponse,
    DocumentFile,
    SessionHistory,
    UploadOptions,
    UploadResponse,
)

logger = logging.getLogger(__name__)

_SESSION_LIST = TypeAdapter(list[str])


def _session_path(session_id: str) -> str:
    return f"/sessions/{quote(session_id, safe='')}"


class BackendGateway:
    """Client for the session lifecycle and QA endpoints of the backend."""

    def __init__(
        self,
        config: GatewayConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Optional gateway configuration.
                    Loads from environment if not provided.
            client: Optional preconfigured httpx client (tests inject one
                    bound to an ASGI transport).
        """
        self._config = config or get_gateway_config()
        self._client = client or httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
        )

    @property
    def config(self) -> GatewayConfig:
        return self._config

    async def _request(
        self,
        method: str,
        url: str,
        error_cls: type[GatewayError],
        action: str,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = {"accept": "application/json", **kwargs.pop("headers", {})}
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{action} failed: HTTP {e.response.status_code}")
            raise error_cls(f"{action} failed: HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning(f"{action} failed: {e!r}")
            raise error_cls(f"{action} failed: connection error") from e
        return response

    async def list_sessions(self) -> list[str]:
        """List the identifiers of all sessions known to the backend.

        Returns:
            Session ids in the order the backend reports them.

        Raises:
            FetchError: On transport failure, non-2xx status or a malformed body.
        """
        response = await self._request("GET", "/sessions", FetchError, "List sessions")
        try:
            return _SESSION_LIST.validate_json(response.content)
        except ValueError as e:
            logger.warning(f"List sessions returned a malformed body: {e}")
            raise FetchError("List sessions failed: malformed response") from e

    async def create_session(
        self,
        file: DocumentFile,
        options: UploadOptions | None = None,
    ) -> UploadResponse:
        """Upload a document and open a new session against it.

        Args:
            file: The document to upload (forwarded unmodified).
            options: Chunking parameters, defaults to 400/50.

        Returns:
            UploadResponse carrying the new session id.

        Raises:
            UploadError: On transport failure, non-2xx status or a malformed body.
        """
        options = options or UploadOptions()
        response = await self._request(
            "POST",
            "/upload",
            UploadError,
            f"Upload of {file.filename}",
            params=options.model_dump(),
            files={"file": (file.filename, file.content, file.content_type)},
        )
        try:
            return UploadResponse.model_validate_json(response.content)
        except ValueError as e:
            logger.warning(f"Upload of {file.filename} returned a malformed body: {e}")
            raise UploadError(f"Upload of {file.filename} failed: malformed response") from e

    async def ask(self, request: AskRequest) -> AskResponse:
        """Ask a question against a session's document.

        Raises:
            QueryError: On transport failure, non-2xx status or a malformed body.
        """
        response = await self._request(
            "POST",
            "/ask",
            QueryError,
            f"Question on session {request.session_id}",
            json=request.model_dump(),
            headers={"content-type": "application/json"},
        )
        try:
            return AskResponse.model_validate_json(response.content)
        except ValueError as e:
            logger.warning(f"Question on {request.session_id} returned a malformed body: {e}")
            raise QueryError("Question failed: malformed response") from e

    async def get_history(self, session_id: str) -> SessionHistory:
        """Fetch the stored question/answer history of a session.

        Raises:
            FetchError: On transport failure, non-2xx status or a malformed body.
        """
        response = await self._request(
            "GET",
            _session_path(session_id),
            FetchError,
            f"History of session {session_id}",
        )
        try:
            return SessionHistory.model_validate_json(response.content)
        except ValueError as e:
            logger.warning(f"History of {session_id} returned a malformed body: {e}")
            raise FetchError(f"History of session {session_id} failed: malformed response") from e

    async def delete_session(self, session_id: str) -> None:
        """Delete a session on the backend.

        Raises:
            DeleteError: On transport failure or non-2xx status.
        """
        await self._request(
            "DELETE",
            _session_path(session_id),
            DeleteError,
            f"Delete of session {session_id}",
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BackendGateway":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


# Module-level singleton instance
_gateway: BackendGateway | None = None


def get_gateway() -> BackendGateway:
    """Get or create the global backend gateway.

    All pages share one connection pool.

    Returns:
        The BackendGateway instance.
    """
    global _gateway
    if _gateway is None:
        _gateway = BackendGateway()
    return _gateway


async def close_gateway() -> None:
    """Close the global gateway's connections, if one was created."""
    global _gateway
    if _gateway is not None:
        await _gateway.aclose()
        _gateway = None
