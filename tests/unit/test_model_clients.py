"""Tests for the model client implementations."""

import pytest
from pydantic_ai.messages import ModelRequest, ModelResponse, TextPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from coachflow.contracts import ChatTurn
from coachflow.llm import ChatOptions, ScriptedModelClient, get_model_client
from coachflow.llm.base import split_system_turns
from coachflow.llm.pydantic_ai_client import (
    CONTINUE_PROMPT,
    PydanticAIChatClient,
    to_model_messages,
)


def test_split_system_turns_keeps_order():
    messages = [
        ChatTurn(role="system", content="one"),
        ChatTurn(role="user", content="hi"),
        ChatTurn(role="system", content="two"),
    ]
    system, conversation = split_system_turns(messages)
    assert system == ["one", "two"]
    assert [t.content for t in conversation] == ["hi"]


def test_to_model_messages_maps_roles():
    history = to_model_messages(
        [ChatTurn(role="user", content="hi"), ChatTurn(role="assistant", content="hello")]
    )
    assert isinstance(history[0], ModelRequest)
    assert isinstance(history[1], ModelResponse)


@pytest.mark.asyncio
async def test_scripted_client_replays_queue_then_default():
    client = ScriptedModelClient(["first", ValueError("boom")], default_reply="fallback")
    assert await client.send_chat([ChatTurn(role="user", content="a")]) == "first"
    with pytest.raises(ValueError):
        await client.send_chat([])
    assert await client.send_chat([], ChatOptions(mode="arcCreation")) == "fallback"
    assert len(client.calls) == 3
    assert client.calls[2][1].mode == "arcCreation"


@pytest.mark.asyncio
async def test_scripted_client_without_reply_raises():
    client = ScriptedModelClient()
    with pytest.raises(RuntimeError):
        await client.send_chat([])


def test_get_model_client_rejects_unknown_backend():
    with pytest.raises(ValueError):
        get_model_client("carrier-pigeon")


@pytest.mark.asyncio
async def test_pydantic_ai_client_sends_history_prompt_and_instructions():
    seen = {}

    def respond(messages, info: AgentInfo) -> ModelResponse:
        seen["messages"] = messages
        return ModelResponse(parts=[TextPart(content="coach reply")])

    client = PydanticAIChatClient(model=FunctionModel(respond), system_prompt="Base prompt.")
    reply = await client.send_chat(
        [
            ChatTurn(role="system", content="Launch source: arcsList."),
            ChatTurn(role="user", content="hi"),
            ChatTurn(role="assistant", content="hello"),
            ChatTurn(role="user", content="help me name an arc"),
        ],
        ChatOptions(mode="arcCreation", system_prompt="Arc coach prompt."),
    )

    assert reply == "coach reply"
    messages = seen["messages"]
    assert len(messages) == 3
    last = messages[-1]
    assert isinstance(last, ModelRequest)
    prompts = [p.content for p in last.parts if isinstance(p, UserPromptPart)]
    assert prompts == ["help me name an arc"]
    assert last.instructions == "Base prompt.\n\nArc coach prompt.\n\nLaunch source: arcsList."


@pytest.mark.asyncio
async def test_pydantic_ai_client_continues_when_last_turn_is_assistant():
    seen = {}

    def respond(messages, info: AgentInfo) -> ModelResponse:
        seen["messages"] = messages
        return ModelResponse(parts=[TextPart(content="next")])

    client = PydanticAIChatClient(model=FunctionModel(respond))
    await client.send_chat([ChatTurn(role="assistant", content="Welcome!")])

    last = seen["messages"][-1]
    prompts = [p.content for p in last.parts if isinstance(p, UserPromptPart)]
    assert prompts == [CONTINUE_PROMPT]
