from __future__ import annotations

from ...contracts import StepType, WorkflowDefinition, WorkflowStep
from .prompts import ACTIVITY_CREATION_SYSTEM_PROMPT

ACTIVITY_CREATION_WORKFLOW = WorkflowDefinition(
    id="activityCreation",
    label="Activity Coach",
    version=1,
    chat_mode="activityCreation",
    system_prompt=ACTIVITY_CREATION_SYSTEM_PROMPT,
    auto_bootstrap_first_message=True,
    renderable_components=["InstructionCard"],
    outcome_schema={
        "kind": "activity_creation_outcome",
        "fields": {
            "prompt": "string",
            "timeHorizon": "string",
            "energyLevel": "string?",
            "constraints": "string?",
            "adoptedActivityTitles": "string[]?",
        },
    },
    steps=[
        WorkflowStep(
            id="context_collect",
            type=StepType.COLLECT_FIELDS,
            label="Collect context",
            fields_collected=["prompt", "timeHorizon", "energyLevel", "constraints"],
            prompt_template=(
                "Briefly acknowledge the focused goal and restate that you will "
                "suggest a few concrete, near-term activities. Infer time horizon and "
                "energy from context instead of asking."
            ),
            validation_hint=(
                "Ensure there is a short free-text prompt and a rough time horizon."
            ),
            next_step_id="agent_generate_activities",
        ),
        WorkflowStep(
            id="agent_generate_activities",
            type=StepType.AGENT_GENERATE,
            label="Generate activity suggestions",
            prompt_template=(
                "Propose 3-5 concrete, bite-sized activities that fit the stated time "
                "horizon, each with a title, a time/energy label, one 'why this "
                "matters' line and a short checklist."
            ),
            validation_hint=(
                "Activities should be specific, doable in a single sitting and not "
                "restate existing activities verbatim."
            ),
            next_step_id="confirm_activities",
        ),
        WorkflowStep(
            id="confirm_activities",
            type=StepType.CONFIRM,
            label="Confirm or edit activities",
            fields_collected=["adoptedActivityTitles"],
            prompt_template=(
                "Help the user pick one to three activities to adopt right now."
            ),
            validation_hint=(
                "Capture the final activity titles the user confirms; leave the list "
                "empty if they adopt none."
            ),
            next_step_on_edit_id="agent_generate_activities",
        ),
    ],
)
