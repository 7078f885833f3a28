"""Model client contract."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from pydantic import BaseModel

from ..contracts import ChatTurn


class ChatOptions(BaseModel):
    """Routing metadata sent alongside a chat request."""

    mode: Optional[str] = None
    workflow_definition_id: Optional[str] = None
    workflow_instance_id: Optional[str] = None
    workflow_step_id: Optional[str] = None
    system_prompt: Optional[str] = None


class ModelClient(Protocol):
    """Opaque, potentially slow and failing remote chat call.

    Implementations must not retry on the engine's behalf; callers decide.
    """

    async def send_chat(
        self, messages: Sequence[ChatTurn], options: Optional[ChatOptions] = None
    ) -> str:
        """Send ``messages`` and return the assistant reply text."""


def split_system_turns(messages: Sequence[ChatTurn]) -> tuple[List[str], List[ChatTurn]]:
    """Separate system instructions from the conversational turns, order kept."""
    system = [m.content for m in messages if m.role == "system"]
    conversation = [m for m in messages if m.role != "system"]
    return system, conversation
