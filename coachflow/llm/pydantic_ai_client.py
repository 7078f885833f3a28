"""Model client backed by a pydantic-ai ``Agent``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from pydantic_ai import Agent, RunContext
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    UserPromptPart,
)

from ..contracts import ChatTurn
from .base import ChatOptions, split_system_turns

logger = logging.getLogger(__name__)

CONTINUE_PROMPT = "Continue with the current step."


@dataclass
class CoachChatDeps:
    """Per-request instructions resolved when the agent runs."""

    instructions: List[str] = field(default_factory=list)


def _coach_instructions(ctx: RunContext[CoachChatDeps]) -> str:
    return "\n\n".join(ctx.deps.instructions)


def to_model_messages(turns: Sequence[ChatTurn]) -> List[ModelMessage]:
    """Convert user/assistant turns into pydantic-ai message history."""
    history: List[ModelMessage] = []
    for turn in turns:
        if turn.role == "user":
            history.append(ModelRequest(parts=[UserPromptPart(content=turn.content)]))
        elif turn.role == "assistant":
            history.append(ModelResponse(parts=[TextPart(content=turn.content)]))
    return history


class PydanticAIChatClient:
    """Send chat turns through a pydantic-ai agent.

    System turns become the run's instructions (in order, after the base
    system prompt). The trailing user turn is the prompt; earlier turns are
    replayed as message history.
    """

    def __init__(
        self,
        model: Any = "openai:gpt-4o-mini",
        system_prompt: Optional[str] = None,
        agent: Optional[Agent] = None,
    ) -> None:
        self._model = model
        self._system_prompt = system_prompt
        self._agent = agent

    @property
    def agent(self) -> Agent:
        if self._agent is None:
            agent = Agent(self._model, deps_type=CoachChatDeps, output_type=str)
            agent.instructions(_coach_instructions)
            self._agent = agent
        return self._agent

    async def send_chat(
        self, messages: Sequence[ChatTurn], options: Optional[ChatOptions] = None
    ) -> str:
        options = options or ChatOptions()
        system, conversation = split_system_turns(messages)

        instructions = [
            prompt
            for prompt in (self._system_prompt, options.system_prompt)
            if prompt
        ] + system

        if conversation and conversation[-1].role == "user":
            user_prompt = conversation[-1].content
            conversation = conversation[:-1]
        else:
            user_prompt = CONTINUE_PROMPT

        logger.debug(
            f"coach chat request mode={options.mode} step={options.workflow_step_id} "
            f"history={len(conversation)} instructions={len(instructions)}"
        )
        result = await self.agent.run(
            user_prompt,
            message_history=to_model_messages(conversation),
            deps=CoachChatDeps(instructions=instructions),
        )
        return result.output
