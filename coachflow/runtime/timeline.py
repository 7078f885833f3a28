"""Shared message + card timeline for an agent workspace."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, AsyncIterable, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..contracts import ChatTurn

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


class TimelineItemBase(BaseModel):
    id: str
    created_at: str = Field(default_factory=_now_iso)


class AssistantMessage(TimelineItemBase):
    kind: Literal["assistantMessage"] = "assistantMessage"
    role: Literal["assistant"] = "assistant"
    content: str


class UserMessage(TimelineItemBase):
    kind: Literal["userMessage"] = "userMessage"
    role: Literal["user"] = "user"
    content: str


class CardItem(TimelineItemBase):
    """Card rendered by an opaque component; the engine never inspects ``props``."""

    kind: Literal["card"] = "card"
    step_id: Optional[str] = None
    component_id: Optional[str] = None
    props: Dict[str, Any] = Field(default_factory=dict)


class SystemEvent(TimelineItemBase):
    kind: Literal["systemEvent"] = "systemEvent"
    event: Literal["info", "error", "workflowTransition"]
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


AgentTimelineItem = Annotated[
    Union[AssistantMessage, UserMessage, CardItem, SystemEvent],
    Field(discriminator="kind"),
]

TimelineListener = Callable[[List[Any]], None]


class TimelineController:
    """Append-only record of what the user scrolls through.

    This controller is the only writer of the timeline. Presenters go through
    its append/stream operations rather than touching the list.
    """

    def __init__(self, items: Optional[List[AgentTimelineItem]] = None) -> None:
        self._items: List[AgentTimelineItem] = list(items or [])
        self._listeners: List[TimelineListener] = []

    @property
    def items(self) -> tuple:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add_listener(self, listener: TimelineListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _notify(self) -> None:
        snapshot = list(self._items)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                logger.warning(f"Timeline listener failed: {exc}")

    def _append(self, item: AgentTimelineItem) -> AgentTimelineItem:
        self._items.append(item)
        self._notify()
        return item

    def find(self, item_id: str) -> Optional[AgentTimelineItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def append_assistant_message(
        self, content: str, item_id: Optional[str] = None
    ) -> AssistantMessage:
        return self._append(
            AssistantMessage(id=item_id or _new_id("assistant"), content=content)
        )

    def append_user_message(self, content: str, item_id: Optional[str] = None) -> UserMessage:
        return self._append(UserMessage(id=item_id or _new_id("user"), content=content))

    def append_card(
        self,
        component_id: str,
        props: Optional[Dict[str, Any]] = None,
        step_id: Optional[str] = None,
        item_id: Optional[str] = None,
    ) -> CardItem:
        return self._append(
            CardItem(
                id=item_id or _new_id("card"),
                component_id=component_id,
                props=dict(props or {}),
                step_id=step_id,
            )
        )

    def append_system_event(
        self,
        event: Literal["info", "error", "workflowTransition"],
        message: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> SystemEvent:
        return self._append(
            SystemEvent(id=_new_id("event"), event=event, message=message, data=data)
        )

    def upsert_assistant_message(self, item_id: str, content: str) -> AssistantMessage:
        """Replace the content of assistant message ``item_id`` or append it."""
        for index, item in enumerate(self._items):
            if item.id == item_id and isinstance(item, AssistantMessage):
                updated = item.model_copy(update={"content": content})
                self._items[index] = updated
                self._notify()
                return updated
        return self.append_assistant_message(content, item_id=item_id)

    def remove(self, item_id: str) -> bool:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[index]
                self._notify()
                return True
        return False

    async def stream_assistant_message(
        self, chunks: AsyncIterable[str], item_id: Optional[str] = None
    ) -> AssistantMessage:
        """Grow a single assistant message as ``chunks`` arrive."""
        message_id = item_id or _new_id("assistant")
        content = ""
        message = self.upsert_assistant_message(message_id, content)
        async for chunk in chunks:
            content += chunk
            message = self.upsert_assistant_message(message_id, content)
        return message

    def history(self) -> List[ChatTurn]:
        """Reconstruct the model-facing transcript from text messages."""
        turns: List[ChatTurn] = []
        for item in self._items:
            if isinstance(item, (AssistantMessage, UserMessage)) and item.content.strip():
                turns.append(ChatTurn(role=item.role, content=item.content))
        return turns
