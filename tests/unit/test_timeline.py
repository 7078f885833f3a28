"""Tests for the timeline controller."""

import pytest

from coachflow.runtime import AssistantMessage, CardItem, TimelineController


def test_append_and_history_skip_cards_and_events():
    timeline = TimelineController()
    timeline.append_user_message("hi")
    timeline.append_card("QuestionCard", {"label": "Name"}, step_id="ask")
    timeline.append_assistant_message("hello")
    timeline.append_system_event("info", "note")

    history = timeline.history()
    assert [(t.role, t.content) for t in history] == [("user", "hi"), ("assistant", "hello")]
    assert isinstance(timeline.items[1], CardItem)
    assert timeline.items[1].props == {"label": "Name"}


def test_upsert_replaces_in_place():
    timeline = TimelineController()
    timeline.append_user_message("first")
    timeline.upsert_assistant_message("loading-1", "Thinking…")
    timeline.append_user_message("second")
    timeline.upsert_assistant_message("loading-1", "Done")

    assert len(timeline) == 3
    item = timeline.find("loading-1")
    assert isinstance(item, AssistantMessage)
    assert item.content == "Done"
    assert timeline.items[1].id == "loading-1"


def test_remove_and_listeners():
    timeline = TimelineController()
    seen = []
    remove_listener = timeline.add_listener(lambda items: seen.append(len(items)))
    message = timeline.append_assistant_message("bye")
    assert timeline.remove(message.id) is True
    assert timeline.remove(message.id) is False
    remove_listener()
    timeline.append_assistant_message("quiet")
    assert seen == [1, 0]


def test_failing_listener_does_not_break_append():
    timeline = TimelineController()

    def broken(items):
        raise RuntimeError("listener bug")

    timeline.add_listener(broken)
    timeline.append_user_message("still here")
    assert len(timeline) == 1


@pytest.mark.asyncio
async def test_stream_assistant_message_grows_one_item():
    timeline = TimelineController()

    async def chunks():
        for part in ("Hel", "lo", "!"):
            yield part

    message = await timeline.stream_assistant_message(chunks(), item_id="stream-1")
    assert message.content == "Hello!"
    assert len(timeline) == 1
    assert timeline.find("stream-1").content == "Hello!"
