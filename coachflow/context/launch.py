from __future__ import annotations

from typing import List, Optional

from ..constants import DEFAULT_SNAPSHOT_MAX_CHARS
from ..contracts import LaunchContext
from .snapshots import clamp_workspace_snapshot


def serialize_launch_context(context: LaunchContext) -> str:
    """Render ``context`` as the single-line summary handed to the model."""
    parts: List[str] = [f"Launch source: {context.source}."]

    if context.intent:
        parts.append(f"Intent: {context.intent}.")
    if context.entity_ref:
        parts.append(f"Focused entity: {context.entity_ref.type}#{context.entity_ref.id}.")
    if context.object_type and context.object_id:
        parts.append(f"Object: {context.object_type}#{context.object_id}.")
    if context.field_id:
        label = f" ({context.field_label})" if context.field_label else ""
        parts.append(f"Field: {context.field_id}{label}.")
    if context.current_text:
        parts.append("Current field text (truncated if needed by the host):")
        parts.append(context.current_text)

    return " ".join(parts)


def compose_launch_context_text(
    context: LaunchContext,
    workspace_snapshot: Optional[str] = None,
    snapshot_max_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS,
) -> str:
    """Serialize ``context`` and append the clamped workspace snapshot, if any."""
    base = serialize_launch_context(context)
    snapshot = clamp_workspace_snapshot(workspace_snapshot, max_chars=snapshot_max_chars)
    if not snapshot:
        return base
    return f"{base}\n\n{snapshot}"
