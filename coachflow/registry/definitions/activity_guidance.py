from __future__ import annotations

from ...contracts import StepType, WorkflowDefinition, WorkflowStep
from .prompts import ACTIVITY_GUIDANCE_SYSTEM_PROMPT

ACTIVITY_GUIDANCE_WORKFLOW = WorkflowDefinition(
    id="activityGuidance",
    label="Activity Guidance",
    version=1,
    chat_mode="activityGuidance",
    system_prompt=ACTIVITY_GUIDANCE_SYSTEM_PROMPT,
    auto_bootstrap_first_message=True,
    outcome_schema={"kind": "activity_guidance_outcome", "fields": {}},
    steps=[
        WorkflowStep(
            id="guide",
            type=StepType.AGENT_GENERATE,
            label="Offer guidance",
            prompt_template=(
                "Produce a 1-2 sentence opening that asks how you can help with the "
                "focused Activity, then offer 3-5 tailored ways to help."
            ),
            validation_hint=(
                "Ensure advice references the focused activity and stays actionable."
            ),
        ),
    ],
)
