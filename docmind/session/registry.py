"""In-memory list of the sessions known to the backend."""

import logging
from collections.abc import Iterator

from docmind.gateway.client import BackendGateway
from docmind.gateway.errors import FetchError

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Ordered, duplicate-free list of session ids as of the last refresh.

    The list is held in a tuple and replaced in one assignment, so readers
    see either the old or the new list.
    """

    def __init__(self, gateway: BackendGateway) -> None:
        self._gateway = gateway
        self._session_ids: tuple[str, ...] = ()
        self._refresh_token = 0

    @property
    def session_ids(self) -> tuple[str, ...]:
        return self._session_ids

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._session_ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._session_ids)

    def __len__(self) -> int:
        return len(self._session_ids)

    async def refresh(self) -> tuple[str, ...]:
        """Replace the list with the backend's current one.

        If several refreshes overlap, the most recently issued one wins.

        Returns:
            The registry contents after the refresh.

        Raises:
            FetchError: If the backend list could not be fetched. The
                previous list is kept.
        """
        self._refresh_token += 1
        token = self._refresh_token
        try:
            fetched = await self._gateway.list_sessions()
        except FetchError:
            logger.warning("Session list refresh failed, keeping previous list")
            raise

        if token != self._refresh_token:
            logger.debug("Discarding superseded session list response")
            return self._session_ids

        # dict keeps first-seen order
        self._session_ids = tuple(dict.fromkeys(fetched))
        logger.info(f"Session list refreshed: {len(self._session_ids)} session(s)")
        return self._session_ids

    def remove(self, session_id: str) -> None:
        """Drop a session id locally, after a confirmed remote delete."""
        if session_id in self._session_ids:
            self._session_ids = tuple(s for s in self._session_ids if s != session_id)

    def append(self, session_id: str) -> None:
        """Add a session id locally ahead of the next full refresh."""
        if session_id not in self._session_ids:
            self._session_ids = (*self._session_ids, session_id)
