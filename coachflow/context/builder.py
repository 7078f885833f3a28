"""Chat context assembly.

This is the single place that decides which turns the model sees on each
request. The output never depends on wall-clock time or randomness.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..constants import (
    CONVERSATION_SUMMARY_PREFIX,
    DEFAULT_RECENT_TURNS_MAX,
    LAUNCH_CONTEXT_MARKER,
    LAUNCH_CONTEXT_PREFIX,
    MAX_PRESERVED_SYSTEM_TURNS,
)
from ..contracts import ChatTurn


def _normalize(history: Iterable[ChatTurn]) -> List[ChatTurn]:
    normalized: List[ChatTurn] = []
    for turn in history:
        content = turn.content.strip() if isinstance(turn.content, str) else ""
        if not content:
            continue
        normalized.append(ChatTurn(role=turn.role, content=content))
    return normalized


def has_launch_context(turns: Iterable[ChatTurn]) -> bool:
    """Return ``True`` when a system turn already carries the launch context."""
    return any(
        turn.role == "system" and LAUNCH_CONTEXT_MARKER in turn.content.lower()
        for turn in turns
    )


def build_chat_context(
    history: Iterable[ChatTurn],
    launch_context_summary: Optional[str] = None,
    conversation_summary: Optional[str] = None,
    workflow_step_instruction: Optional[str] = None,
    recent_turns_max: int = DEFAULT_RECENT_TURNS_MAX,
) -> List[ChatTurn]:
    """Build the ordered message list for one model request.

    Args:
        history: Flat transcript of user/assistant/system turns.
        launch_context_summary: Where/why the chat was opened. Injected unless a
            system turn in ``history`` already contains it.
        conversation_summary: Running memory of turns that fell out of the
            window. Background only.
        workflow_step_instruction: Guidance for the active workflow step, sent
            after the conversation so it is the last thing the model reads.
        recent_turns_max: Number of most recent non-system turns kept verbatim.

    Returns:
        Messages to send after any global system prompt: summary, launch
        context, standing system turns, the windowed conversation, then any
        step guidance.
    """
    max_recent = max(0, recent_turns_max)
    normalized = _normalize(history)

    system_turns = [t for t in normalized if t.role == "system"]
    non_system_turns = [t for t in normalized if t.role != "system"]
    recent_turns = non_system_turns[-max_recent:] if max_recent > 0 else []

    messages: List[ChatTurn] = []

    summary_text = (conversation_summary or "").strip()
    if summary_text:
        messages.append(
            ChatTurn(role="system", content=CONVERSATION_SUMMARY_PREFIX + summary_text)
        )

    launch_text = (launch_context_summary or "").strip()
    if launch_text and not has_launch_context(system_turns):
        messages.append(
            ChatTurn(role="system", content=LAUNCH_CONTEXT_PREFIX + launch_text)
        )

    messages.extend(system_turns[-MAX_PRESERVED_SYSTEM_TURNS:])
    messages.extend(recent_turns)

    instruction = (workflow_step_instruction or "").strip()
    if instruction:
        messages.append(ChatTurn(role="system", content=instruction))
    return messages
