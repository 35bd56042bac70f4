"""Create a session from a local document and make it active."""

import logging

from docmind.gateway.client import BackendGateway
from docmind.gateway.errors import FetchError, UploadError
from docmind.models.schemas import DocumentFile, UploadOptions
from docmind.session.controller import ActiveSessionController
from docmind.session.registry import SessionRegistry

logger = logging.getLogger(__name__)


class UploadOrchestrator:
    """Runs upload, registry refresh and activation strictly in sequence."""

    def __init__(
        self,
        gateway: BackendGateway,
        registry: SessionRegistry,
        controller: ActiveSessionController,
    ) -> None:
        self._gateway = gateway
        self._registry = registry
        self._controller = controller

    async def upload(
        self,
        file: DocumentFile,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
    ) -> str:
        """Upload a document, open a session on it and activate that session.

        Only the upload itself is fatal. A failed registry refresh falls back
        to appending the new id locally, and a failed history fetch leaves
        the new session active with an empty timeline.

        Args:
            file: The document to upload.
            chunk_size: Chunk size, configured default if omitted.
            chunk_overlap: Chunk overlap, configured default if omitted.

        Returns:
            The new session id.

        Raises:
            UploadError: If the file is empty or the backend rejected the upload.
                No local state changes in that case.
            pydantic.ValidationError: If a chunk parameter is not positive.
        """
        config = self._gateway.config
        options = UploadOptions(
            chunk_size=config.chunk_size if chunk_size is None else chunk_size,
            chunk_overlap=config.chunk_overlap if chunk_overlap is None else chunk_overlap,
        )
        if not file.content:
            raise UploadError(f"Upload of {file.filename} failed: file is empty")

        result = await self._gateway.create_session(file, options)
        session_id = result.session_id
        logger.info(f"Uploaded {result.filename} as session {session_id}")

        try:
            await self._registry.refresh()
        except FetchError:
            logger.warning(f"Registry refresh after upload failed, adding {session_id} locally")
        self._registry.append(session_id)

        try:
            await self._controller.select(session_id)
        except FetchError:
            logger.warning(f"New session {session_id} is active but its history could not be loaded")

        return session_id
