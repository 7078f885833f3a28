"""Workspace snapshot digests and the context budget clamp."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..constants import (
    DEFAULT_SNAPSHOT_MAX_CHARS,
    SNAPSHOT_ELLIPSIS,
    SNAPSHOT_TRUNCATION_NOTICE,
)
from ..contracts import Activity, Arc, Goal

logger = logging.getLogger(__name__)

GOAL_DESCRIPTION_LIMIT = 200
ACTIVITY_NOTES_LIMIT = 160


def clamp_workspace_snapshot(
    text: Optional[str], max_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS
) -> Optional[str]:
    """Clamp ``text`` to ``max_chars`` characters.

    Truncation always drops the tail, so callers must write the most important
    sections first. Returns ``None`` for empty or whitespace-only input.
    """
    if text is None or not text.strip():
        return None
    if len(text) <= max_chars:
        return text
    if max_chars < len(SNAPSHOT_ELLIPSIS):
        return ""

    suffix = SNAPSHOT_ELLIPSIS + SNAPSHOT_TRUNCATION_NOTICE
    budget = max_chars - len(suffix)
    if budget <= 0:
        logger.debug(f"Snapshot budget {max_chars} too small for notice; bare truncation")
        return text[: max(0, max_chars - len(SNAPSHOT_ELLIPSIS))] + SNAPSHOT_ELLIPSIS

    logger.debug(f"Workspace snapshot truncated from {len(text)} to {max_chars} chars")
    return text[:budget] + suffix


def _trim(text: Optional[str], limit: int) -> Optional[str]:
    if text and len(text) > limit:
        return f"{text[: limit - 3]}…"
    return text


def _activity_line(activity: Activity) -> str:
    base = f"- {activity.title} (status: {activity.status})"
    notes = _trim(activity.notes, ACTIVITY_NOTES_LIMIT)
    return f"{base} – {notes}" if notes else base


def build_arc_coach_launch_context(
    arcs: Sequence[Arc], goals: Sequence[Goal]
) -> Optional[str]:
    """Summarize existing Arcs and their Goals for Arc/Goal coaching."""
    if not arcs and not goals:
        return None

    lines: List[str] = [
        "Existing workspace snapshot: the user already has the following arcs and "
        "goals. Use this to keep new suggestions distinctive and complementary.",
        f"Total arcs: {len(arcs)}. Total goals: {len(goals)}.",
        "",
    ]

    for arc in arcs:
        arc_goals = [goal for goal in goals if goal.arc_id == arc.id]
        lines.append(f"Arc: {arc.name} (status: {arc.status}).")
        if arc.narrative:
            lines.append(f"Narrative: {arc.narrative}")
        if arc_goals:
            lines.append("Goals in this arc:")
            for goal in arc_goals:
                base = f"- {goal.title} (status: {goal.status})"
                description = _trim(goal.description, GOAL_DESCRIPTION_LIMIT)
                lines.append(f"{base} – {description}" if description else base)
        else:
            lines.append("No goals are currently attached to this arc.")
        lines.append("")

    return "\n".join(lines)


def build_activity_coach_launch_context(
    goals: Sequence[Goal], activities: Sequence[Activity]
) -> Optional[str]:
    """Summarize existing Goals and Activities for activity coaching."""
    if not goals and not activities:
        return None

    lines: List[str] = [
        "Existing workspace snapshot: the user already has the following goals and "
        "activities. Use this to keep proposed activities realistic, "
        "non-duplicative, and complementary.",
        f"Total goals: {len(goals)}. Total activities: {len(activities)}.",
        "",
    ]

    for goal in goals:
        goal_activities = [a for a in activities if a.goal_id == goal.id]
        lines.append(f"Goal: {goal.title} (status: {goal.status}).")
        description = _trim(goal.description, GOAL_DESCRIPTION_LIMIT)
        if description:
            lines.append(f"Description: {description}")
        if goal_activities:
            lines.append("Activities for this goal:")
            lines.extend(_activity_line(a) for a in goal_activities)
        else:
            lines.append("No activities are currently attached to this goal.")
        lines.append("")

    unassigned = [a for a in activities if not a.goal_id]
    if unassigned:
        lines.append("Unassigned activities (not linked to a specific goal yet):")
        lines.extend(_activity_line(a) for a in unassigned)
        lines.append("")

    return "\n".join(lines)


def combine_snapshots(
    parts: Iterable[Optional[str]], max_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS
) -> Optional[str]:
    """Join non-empty digests in order and clamp the result."""
    present = [part.strip() for part in parts if part and part.strip()]
    return clamp_workspace_snapshot("\n\n".join(present), max_chars=max_chars)
