"""coachflow: Workflow-driven coaching conversations for AI agents."""

from .config import CoachflowConfig, load_config
from .context import build_chat_context, clamp_workspace_snapshot
from .contracts import (
    ChatTurn,
    LaunchContext,
    StepType,
    WorkflowDefinition,
    WorkflowInstance,
    WorkflowInstanceStatus,
    WorkflowStep,
)
from .llm import get_model_client
from .registry import WorkflowRegistry, default_registry
from .runtime import AgentWorkspace, TimelineController, WorkflowStateMachine

__version__ = "0.1.0"
__all__ = [
    "AgentWorkspace",
    "ChatTurn",
    "CoachflowConfig",
    "LaunchContext",
    "StepType",
    "TimelineController",
    "WorkflowDefinition",
    "WorkflowInstance",
    "WorkflowInstanceStatus",
    "WorkflowRegistry",
    "WorkflowStateMachine",
    "WorkflowStep",
    "build_chat_context",
    "clamp_workspace_snapshot",
    "default_registry",
    "get_model_client",
    "load_config",
]
