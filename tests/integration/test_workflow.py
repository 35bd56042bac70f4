"""Integration tests for the full session workflow.

upload -> activate -> ask -> switch -> delete, with real HTTP round trips
against the fake backend.
"""

import asyncio

import pytest
import pytest_check as check

from docmind.gateway.errors import DeleteError, FetchError
from docmind.models.schemas import DocumentFile, Role
from docmind.session import FALLBACK_ANSWER, ControllerState, Workspace
from tests.fake_backend import FakeBackendState


class TestUploadFlow:
    async def test_upload_activates_empty_new_session(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
        sample_document: DocumentFile,
    ) -> None:
        backend_state.add_session("existing", [("q", "a")])

        session_id = await workspace.uploader.upload(sample_document)

        check.is_in(session_id, workspace.registry)
        check.equal(workspace.registry.session_ids, ("existing", session_id))
        check.equal(workspace.controller.active_session_id, session_id)
        check.equal(workspace.controller.state, ControllerState.READY)
        check.equal(workspace.controller.timeline, ())

    async def test_upload_when_listing_is_down(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
        sample_document: DocumentFile,
    ) -> None:
        backend_state.fail("list", 503)

        session_id = await workspace.uploader.upload(sample_document)

        check.equal(workspace.registry.session_ids, (session_id,))
        check.equal(workspace.controller.active_session_id, session_id)


class TestConversation:
    async def test_questions_build_up_history(
        self,
        workspace: Workspace,
        sample_document: DocumentFile,
    ) -> None:
        session_id = await workspace.uploader.upload(sample_document)

        await workspace.queries.ask("What is the notice period?")
        await workspace.queries.ask("Who can terminate?")

        contents = [m.content for m in workspace.controller.timeline]
        check.equal(
            contents,
            [
                "What is the notice period?",
                "Answer to: What is the notice period?",
                "Who can terminate?",
                "Answer to: Who can terminate?",
            ],
        )

        # Reselecting rebuilds the same conversation from the backend
        workspace.controller.deselect()
        await workspace.controller.select(session_id)
        check.equal([m.content for m in workspace.controller.timeline], contents)

    async def test_failed_question_gets_one_fallback(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
        sample_document: DocumentFile,
    ) -> None:
        await workspace.uploader.upload(sample_document)
        backend_state.fail("ask", 500)

        await workspace.queries.ask("What is the termination clause?")

        timeline = workspace.controller.timeline
        check.equal(len(timeline), 2)
        check.equal((timeline[0].role, timeline[0].content), (Role.USER, "What is the termination clause?"))
        check.equal((timeline[1].role, timeline[1].content), (Role.ASSISTANT, FALLBACK_ANSWER))
        check.is_true(workspace.queries.can_ask())

    async def test_switching_sessions_discards_stale_history(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
    ) -> None:
        backend_state.add_session("a", [("question a", "answer a")])
        backend_state.add_session("b", [("question b", "answer b")])
        gate = backend_state.hold_history("a")

        select_a = asyncio.create_task(workspace.controller.select("a"))
        await asyncio.sleep(0.01)
        await workspace.controller.select("b")
        gate.set()
        await select_a

        check.equal(workspace.controller.active_session_id, "b")
        check.equal(workspace.controller.timeline[0].content, "question b")

    async def test_history_failure_shows_empty_session(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
    ) -> None:
        backend_state.add_session("a", [("q", "a")])
        backend_state.fail("history", 500)

        with pytest.raises(FetchError):
            await workspace.controller.select("a")

        check.equal(workspace.controller.state, ControllerState.READY)
        check.equal(workspace.controller.timeline, ())


class TestDeletion:
    async def test_delete_active_session(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
    ) -> None:
        backend_state.add_session("a", [("q", "a")])
        backend_state.add_session("b")
        await workspace.registry.refresh()
        await workspace.controller.select("a")

        await workspace.controller.delete("a")

        check.equal(workspace.controller.state, ControllerState.IDLE)
        check.equal(workspace.registry.session_ids, ("b",))
        check.equal(list(backend_state.histories), ["b"])

    async def test_delete_inactive_session(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
    ) -> None:
        backend_state.add_session("a", [("q", "a")])
        backend_state.add_session("b")
        await workspace.registry.refresh()
        await workspace.controller.select("a")

        await workspace.controller.delete("b")

        check.equal(workspace.controller.active_session_id, "a")
        check.equal(len(workspace.controller.timeline), 2)
        check.equal(workspace.registry.session_ids, ("a",))

    async def test_failed_delete_keeps_registry(
        self,
        workspace: Workspace,
        backend_state: FakeBackendState,
    ) -> None:
        backend_state.add_session("a")
        await workspace.registry.refresh()
        backend_state.fail("delete", 500)

        with pytest.raises(DeleteError):
            await workspace.controller.delete("a")

        assert workspace.registry.session_ids == ("a",)
