from __future__ import annotations

from ...contracts import AgentBehavior, StepType, WorkflowDefinition, WorkflowStep
from .prompts import ARC_CREATION_SYSTEM_PROMPT

ARC_CREATION_WORKFLOW = WorkflowDefinition(
    id="arcCreation",
    label="Arc Coach",
    version=1,
    chat_mode="arcCreation",
    system_prompt=ARC_CREATION_SYSTEM_PROMPT,
    renderable_components=["InstructionCard"],
    outcome_schema={
        "kind": "arc_creation_outcome",
        "fields": {
            "prompt": "string",
            "timeHorizon": "string",
            "constraints": "string?",
            "adoptedArcId": "string?",
        },
    },
    steps=[
        WorkflowStep(
            id="context_collect",
            type=StepType.COLLECT_FIELDS,
            label="Collect free-text Arc desire",
            fields_collected=["prompt"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "Invite the user to describe, in their own words, one thing they "
                "would like to make progress on or change in their life right now."
            ),
            validation_hint=(
                "Ensure there is at least a short free-text description of what "
                "they want to move forward."
            ),
            next_step_id="agent_generate_arc",
        ),
        WorkflowStep(
            id="agent_generate_arc",
            type=StepType.AGENT_GENERATE,
            label="Generate Arc suggestions",
            prompt_template=(
                "Given the user's context and any existing workspace snapshot, "
                "propose 1-3 Arc identity directions that feel distinctive and grounded."
            ),
            validation_hint=(
                "Arcs should read like long-horizon identity directions, not single projects."
            ),
            agent_behavior=AgentBehavior(
                loading_message=(
                    "Got it. I'm shaping a first-pass Arc that fits this dream and "
                    "stays broad enough to hold many future projects."
                ),
                loading_message_id="assistant-arc-status",
            ),
            next_step_id="confirm_arc",
        ),
        WorkflowStep(
            id="confirm_arc",
            type=StepType.CONFIRM,
            label="Confirm or edit Arc",
            fields_collected=["adoptedArcId"],
            prompt_template=(
                "Help the user decide whether to adopt one Arc, edit it, or try a "
                "different direction."
            ),
            validation_hint=(
                "Capture which Arc (if any) the user adopted, or leave null if they "
                "chose not to adopt yet."
            ),
            next_step_on_edit_id="agent_generate_arc",
        ),
    ],
)
