"""Built-in coach workflow definitions."""

from __future__ import annotations

from .activity_creation import ACTIVITY_CREATION_WORKFLOW
from .activity_guidance import ACTIVITY_GUIDANCE_WORKFLOW
from .arc_creation import ARC_CREATION_WORKFLOW
from .first_time_onboarding import (
    FIRST_TIME_ONBOARDING_WORKFLOW,
    FIRST_TIME_ONBOARDING_WORKFLOW_ID,
)
from .goal_creation import GOAL_CREATION_WORKFLOW

BUILTIN_WORKFLOWS = (
    GOAL_CREATION_WORKFLOW,
    ARC_CREATION_WORKFLOW,
    ACTIVITY_CREATION_WORKFLOW,
    ACTIVITY_GUIDANCE_WORKFLOW,
    FIRST_TIME_ONBOARDING_WORKFLOW,
)

__all__ = [
    "ACTIVITY_CREATION_WORKFLOW",
    "ACTIVITY_GUIDANCE_WORKFLOW",
    "ARC_CREATION_WORKFLOW",
    "BUILTIN_WORKFLOWS",
    "FIRST_TIME_ONBOARDING_WORKFLOW",
    "FIRST_TIME_ONBOARDING_WORKFLOW_ID",
    "GOAL_CREATION_WORKFLOW",
]
