"""Rebuild a displayable timeline from a session's stored history."""

import time
from collections.abc import Callable, Sequence

from docmind.models.schemas import HistoryEntry, Message, Role

# Spacing between consecutive timestamps. Well above float resolution at
# epoch-scale values, so ordering survives any clock granularity.
TIMESTAMP_STEP = 1e-3


def build_timeline(
    history: Sequence[HistoryEntry],
    clock: Callable[[], float] = time.time,
) -> list[Message]:
    """Turn question/answer pairs into an ordered message sequence.

    Each entry yields a user message followed by its assistant message.
    Timestamps start at ``clock()`` and strictly increase across the whole
    output; only their order is meaningful.

    Args:
        history: Stored entries, oldest first.
        clock: Source of the base timestamp.

    Returns:
        Messages in chronological order, ``2 * len(history)`` of them.
    """
    if not history:
        return []

    base = clock()
    messages: list[Message] = []
    for entry in history:
        messages.append(
            Message(
                role=Role.USER,
                content=entry.question,
                timestamp=base + len(messages) * TIMESTAMP_STEP,
            )
        )
        messages.append(
            Message(
                role=Role.ASSISTANT,
                content=entry.answer,
                timestamp=base + len(messages) * TIMESTAMP_STEP,
            )
        )
    return messages
