"""Unit tests for build_timeline."""

import pytest_check as check

from docmind.models.schemas import HistoryEntry, Role
from docmind.session.timeline import build_timeline


def _history(n: int) -> list[HistoryEntry]:
    return [HistoryEntry(question=f"q{i}", answer=f"a{i}") for i in range(n)]


class TestBuildTimeline:
    """Tests for turning stored history into messages."""

    def test_empty_history_yields_empty_timeline(self) -> None:
        assert build_timeline([]) == []

    def test_emits_two_messages_per_entry(self) -> None:
        """Each entry becomes a user message then an assistant message."""
        messages = build_timeline(_history(3))

        check.equal(len(messages), 6)
        check.equal([m.role for m in messages], [Role.USER, Role.ASSISTANT] * 3)
        check.equal(
            [m.content for m in messages],
            ["q0", "a0", "q1", "a1", "q2", "a2"],
        )

    def test_timestamps_strictly_increase_with_frozen_clock(self) -> None:
        """Ordering holds even when the clock never advances."""
        messages = build_timeline(_history(50), clock=lambda: 1_700_000_000.0)

        timestamps = [m.timestamp for m in messages]
        assert all(a < b for a, b in zip(timestamps, timestamps[1:]))

    def test_starts_at_clock_value(self) -> None:
        messages = build_timeline(_history(1), clock=lambda: 42.0)

        assert messages[0].timestamp == 42.0

    def test_same_history_gives_same_content_and_order(self) -> None:
        history = _history(4)

        first = build_timeline(history)
        second = build_timeline(history)

        assert [(m.role, m.content) for m in first] == [(m.role, m.content) for m in second]

    def test_does_not_modify_history(self) -> None:
        history = _history(2)
        snapshot = [entry.model_copy() for entry in history]

        build_timeline(history)

        assert history == snapshot
