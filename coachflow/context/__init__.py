"""Context assembly for model requests."""

from .builder import build_chat_context, has_launch_context
from .launch import compose_launch_context_text, serialize_launch_context
from .snapshots import (
    build_activity_coach_launch_context,
    build_arc_coach_launch_context,
    clamp_workspace_snapshot,
    combine_snapshots,
)

__all__ = [
    "build_activity_coach_launch_context",
    "build_arc_coach_launch_context",
    "build_chat_context",
    "clamp_workspace_snapshot",
    "combine_snapshots",
    "compose_launch_context_text",
    "has_launch_context",
    "serialize_launch_context",
]
