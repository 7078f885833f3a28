"""Analytics sink contract for workflow lifecycle events."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol, Tuple

logger = logging.getLogger(__name__)

WORKFLOW_STARTED = "workflow_started"
WORKFLOW_STEP_VIEWED = "workflow_step_viewed"
WORKFLOW_STEP_COMPLETED = "workflow_step_completed"
WORKFLOW_COMPLETED = "workflow_completed"
WORKFLOW_ABANDONED = "workflow_abandoned"


class AnalyticsSink(Protocol):
    """Fire-and-forget event sink."""

    def capture(self, event_name: str, props: Dict[str, Any]) -> None:
        """Record ``event_name`` with ``props``."""


class NullAnalytics:
    def capture(self, event_name: str, props: Dict[str, Any]) -> None:
        return None


class LoggingAnalytics:
    """Sink that writes every event to the coachflow log."""

    def capture(self, event_name: str, props: Dict[str, Any]) -> None:
        logger.info(f"[analytics] {event_name} {props}")


class RecordingAnalytics:
    """Sink that keeps events in memory, in capture order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def capture(self, event_name: str, props: Dict[str, Any]) -> None:
        self.events.append((event_name, dict(props)))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]


def safe_capture(sink: AnalyticsSink, event_name: str, props: Dict[str, Any]) -> None:
    """Send an event without letting sink failures reach the caller."""
    try:
        sink.capture(event_name, props)
    except Exception as exc:
        logger.warning(f"Analytics capture of {event_name} failed: {exc}")
