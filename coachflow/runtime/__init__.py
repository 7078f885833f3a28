"""Runtime state for workflow-driven conversations."""

from .analytics import (
    AnalyticsSink,
    LoggingAnalytics,
    NullAnalytics,
    RecordingAnalytics,
)
from .instance import (
    WorkflowStateMachine,
    apply_cancel,
    apply_complete_step,
    apply_finish,
    create_initial_instance,
)
from .orchestrator import AgentWorkspace, SessionRef, StepCompletedEvent, build_step_guidance
from .store import InMemoryInstanceStore
from .timeline import (
    AgentTimelineItem,
    AssistantMessage,
    CardItem,
    SystemEvent,
    TimelineController,
    UserMessage,
)

__all__ = [
    "AgentTimelineItem",
    "AgentWorkspace",
    "AnalyticsSink",
    "AssistantMessage",
    "CardItem",
    "InMemoryInstanceStore",
    "LoggingAnalytics",
    "NullAnalytics",
    "RecordingAnalytics",
    "SessionRef",
    "StepCompletedEvent",
    "SystemEvent",
    "TimelineController",
    "UserMessage",
    "WorkflowStateMachine",
    "apply_cancel",
    "apply_complete_step",
    "apply_finish",
    "build_step_guidance",
    "create_initial_instance",
]
