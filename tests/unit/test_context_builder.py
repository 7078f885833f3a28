"""Tests for chat context assembly."""

from coachflow.constants import CONVERSATION_SUMMARY_PREFIX, LAUNCH_CONTEXT_PREFIX
from coachflow.context import build_chat_context, has_launch_context
from coachflow.contracts import ChatTurn


def _turns(count: int):
    roles = ("user", "assistant")
    return [ChatTurn(role=roles[i % 2], content=f"turn {i}") for i in range(count)]


def test_build_chat_context_is_deterministic():
    history = _turns(20) + [ChatTurn(role="system", content="standing rule")]
    first = build_chat_context(
        history,
        launch_context_summary="Launch source: arcsList.",
        conversation_summary="talked about goals",
        workflow_step_instruction="Ask one question.",
    )
    second = build_chat_context(
        history,
        launch_context_summary="Launch source: arcsList.",
        conversation_summary="talked about goals",
        workflow_step_instruction="Ask one question.",
    )
    assert first == second


def test_build_chat_context_orders_sections():
    history = [
        ChatTurn(role="system", content="rule one"),
        ChatTurn(role="user", content="hi"),
        ChatTurn(role="assistant", content="hello"),
    ]
    messages = build_chat_context(
        history,
        launch_context_summary="Launch source: goalsList.",
        conversation_summary="earlier chat",
        workflow_step_instruction="Collect the goal title.",
    )
    contents = [m.content for m in messages]
    assert contents == [
        CONVERSATION_SUMMARY_PREFIX + "earlier chat",
        LAUNCH_CONTEXT_PREFIX + "Launch source: goalsList.",
        "rule one",
        "hi",
        "hello",
        "Collect the goal title.",
    ]
    assert messages[-1].role == "system"


def test_build_chat_context_windows_recent_turns():
    history = _turns(30)
    messages = build_chat_context(history, recent_turns_max=16)
    assert len(messages) == 16
    assert messages[0].content == "turn 14"
    assert messages[-1].content == "turn 29"


def test_build_chat_context_zero_window_keeps_system_turns_only():
    history = _turns(4) + [ChatTurn(role="system", content="rule")]
    messages = build_chat_context(history, recent_turns_max=0)
    assert [m.content for m in messages] == ["rule"]


def test_build_chat_context_keeps_last_two_system_turns():
    history = [ChatTurn(role="system", content=f"rule {i}") for i in range(4)]
    messages = build_chat_context(history)
    assert [m.content for m in messages] == ["rule 2", "rule 3"]


def test_build_chat_context_drops_empty_turns_and_strips():
    history = [
        ChatTurn(role="user", content="   "),
        ChatTurn(role="assistant", content="  spaced  "),
    ]
    messages = build_chat_context(history)
    assert [m.content for m in messages] == ["spaced"]


def test_launch_context_not_duplicated_when_already_in_history():
    history = [
        ChatTurn(role="system", content="Launch source: arcsList. Intent: create."),
        ChatTurn(role="user", content="hi"),
    ]
    assert has_launch_context(history)
    messages = build_chat_context(
        history, launch_context_summary="Launch source: arcsList. Intent: create."
    )
    launch_turns = [m for m in messages if "launch source:" in m.content.lower()]
    assert len(launch_turns) == 1
    assert not messages[0].content.startswith(LAUNCH_CONTEXT_PREFIX)


def test_blank_summary_and_instruction_are_omitted():
    messages = build_chat_context(
        [ChatTurn(role="user", content="hi")],
        conversation_summary="  ",
        workflow_step_instruction="",
    )
    assert [m.content for m in messages] == ["hi"]
