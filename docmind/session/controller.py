"""Active session state machine.

Owns which session is active and that session's timeline. States:

    IDLE     no active session
    LOADING  history fetch in flight for a newly selected session
    READY    timeline available and current

Every selection change bumps ``generation``. A history response is applied
only if the generation it was requested under is still current, so the
last ``select`` wins and a superseded response is dropped.
"""

import logging
import time
from collections.abc import Callable
from enum import Enum

from docmind.gateway.client import BackendGateway
from docmind.gateway.errors import FetchError
from docmind.models.schemas import Message, Role
from docmind.session.registry import SessionRegistry
from docmind.session.timeline import build_timeline

logger = logging.getLogger(__name__)


class ControllerState(str, Enum):
    """States of the active session controller."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class ActiveSessionController:
    """Mediates selection, deselection and deletion of the active session."""

    def __init__(self, gateway: BackendGateway, registry: SessionRegistry) -> None:
        self._gateway = gateway
        self._registry = registry
        self._state = ControllerState.IDLE
        self._active_id: str | None = None
        self._timeline: list[Message] = []
        self._generation = 0
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every state or timeline change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def active_session_id(self) -> str | None:
        return self._active_id

    @property
    def timeline(self) -> tuple[Message, ...]:
        return tuple(self._timeline)

    @property
    def generation(self) -> int:
        """Selection token, increased on every change of the active session."""
        return self._generation

    def _reset(self, state: ControllerState, session_id: str | None) -> None:
        self._generation += 1
        self._state = state
        self._active_id = session_id
        self._timeline = []
        self._notify()

    async def select(self, session_id: str) -> None:
        """Activate a session and load its history.

        The previous timeline is cleared before the fetch starts. If the
        fetch fails the session stays active with an empty timeline.

        Raises:
            FetchError: If this selection's history fetch failed. Failures of
                superseded selections are logged and dropped.
        """
        self._reset(ControllerState.LOADING, session_id)
        generation = self._generation

        try:
            history = await self._gateway.get_history(session_id)
        except FetchError:
            if generation != self._generation:
                logger.debug(f"Ignoring failed history fetch for superseded session {session_id}")
                return
            self._state = ControllerState.READY
            self._notify()
            raise

        if generation != self._generation:
            logger.debug(f"Discarding stale history for session {session_id}")
            return

        self._timeline = build_timeline(history.history)
        self._state = ControllerState.READY
        self._notify()
        logger.info(f"Activated session {session_id} ({len(history.history)} exchanges)")

    def deselect(self) -> None:
        """Close the active session view."""
        self._reset(ControllerState.IDLE, None)

    def delete_active(self, session_id: str) -> None:
        """Drop back to IDLE if the given session is the active one."""
        if session_id == self._active_id:
            self._reset(ControllerState.IDLE, None)

    async def delete(self, session_id: str) -> None:
        """Delete a session remotely, then forget it locally.

        Raises:
            DeleteError: If the backend delete failed. Nothing local changes.
        """
        await self._gateway.delete_session(session_id)
        self._registry.remove(session_id)
        self.delete_active(session_id)
        logger.info(f"Deleted session {session_id}")

    def append_message(self, role: Role, content: str) -> Message:
        """Append a message to the active timeline.

        The timestamp never goes below the last one already in the timeline.

        Raises:
            RuntimeError: If no session is active.
        """
        if self._active_id is None:
            raise RuntimeError("No active session to append a message to")

        timestamp = time.time()
        if self._timeline:
            timestamp = max(timestamp, self._timeline[-1].timestamp)
        message = Message(role=role, content=content, timestamp=timestamp)
        self._timeline.append(message)
        self._notify()
        return message
