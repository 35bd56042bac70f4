"""Single-flight question execution against the active session.

The timeline is append-only: the user's question is appended before the
request goes out, and exactly one assistant message follows it, either the
answer or a fixed apology. Nothing is rolled back.
"""

import logging

from docmind.gateway.client import BackendGateway
from docmind.gateway.errors import QueryError
from docmind.models.schemas import AskRequest, Message, Role
from docmind.session.controller import ActiveSessionController, ControllerState

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "Sorry, I encountered an error while processing your request."


class QueryExecutor:
    """Asks questions on behalf of the active session, one at a time per session."""

    def __init__(
        self,
        gateway: BackendGateway,
        controller: ActiveSessionController,
        k: int | None = None,
    ) -> None:
        self._gateway = gateway
        self._controller = controller
        self._k = gateway.config.top_k if k is None else k
        if self._k < 1:
            raise ValueError(f"k must be a positive integer, got {self._k}")
        self._in_flight: set[str] = set()

    def is_in_flight(self, session_id: str | None = None) -> bool:
        """Whether a question is pending for a session (default: the active one)."""
        session_id = session_id or self._controller.active_session_id
        return session_id is not None and session_id in self._in_flight

    def can_ask(self) -> bool:
        session_id = self._controller.active_session_id
        return (
            session_id is not None
            and self._controller.state is ControllerState.READY
            and session_id not in self._in_flight
        )

    async def ask(self, question: str) -> Message | None:
        """Ask a question on the active session.

        Blank questions, no active session, a session still loading or a
        question already pending are ignored without touching the timeline.

        Returns:
            The assistant message appended, or None if the call was ignored
            or the user switched sessions before the answer arrived.
        """
        question = question.strip()
        if not question or not self.can_ask():
            return None

        session_id = self._controller.active_session_id
        # Invalid requests raise here, before the timeline is touched
        request = AskRequest(session_id=session_id, question=question, k=self._k)
        generation = self._controller.generation
        self._in_flight.add(session_id)
        self._controller.append_message(Role.USER, question)

        try:
            response = await self._gateway.ask(request)
            content = response.answer
        except QueryError:
            logger.warning(f"Question on session {session_id} failed, answering with fallback")
            content = FALLBACK_ANSWER
        finally:
            self._in_flight.discard(session_id)

        if generation != self._controller.generation:
            logger.debug(f"Session {session_id} no longer active, answer not appended")
            return None

        return self._controller.append_message(Role.ASSISTANT, content)
