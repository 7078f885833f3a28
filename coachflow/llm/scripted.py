"""Deterministic model client for tests and offline runs."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..contracts import ChatTurn
from .base import ChatOptions

logger = logging.getLogger(__name__)

ScriptedReply = Union[str, BaseException]


class ScriptedModelClient:
    """Return queued replies in order; queued exceptions are raised instead.

    Every call is recorded in ``calls``. When the queue is empty the
    ``default_reply`` is returned, or ``RuntimeError`` raised if there is none.
    """

    def __init__(
        self,
        replies: Optional[Iterable[ScriptedReply]] = None,
        default_reply: Optional[str] = None,
    ) -> None:
        self._replies: deque[ScriptedReply] = deque(replies or [])
        self.default_reply = default_reply
        self.calls: List[Tuple[List[ChatTurn], ChatOptions]] = []

    def queue(self, *replies: ScriptedReply) -> None:
        self._replies.extend(replies)

    async def send_chat(
        self, messages: Sequence[ChatTurn], options: Optional[ChatOptions] = None
    ) -> str:
        self.calls.append((list(messages), options or ChatOptions()))
        if self._replies:
            reply = self._replies.popleft()
        elif self.default_reply is not None:
            reply = self.default_reply
        else:
            raise RuntimeError("ScriptedModelClient has no reply queued")

        if isinstance(reply, BaseException):
            raise reply
        return reply
