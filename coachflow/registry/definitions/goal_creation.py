from __future__ import annotations

from ...contracts import AgentBehavior, StepType, WorkflowDefinition, WorkflowStep
from .prompts import GOAL_CREATION_SYSTEM_PROMPT

GOAL_CREATION_WORKFLOW = WorkflowDefinition(
    id="goalCreation",
    label="Goal Coach",
    version=2,
    chat_mode="goalCreation",
    system_prompt=GOAL_CREATION_SYSTEM_PROMPT,
    renderable_components=["InstructionCard"],
    outcome_schema={
        "kind": "goal_creation_outcome",
        "fields": {
            "arcId": "string?",
            "prompt": "string",
            "constraints": "string?",
            "title": "string",
            "description": "string?",
            "status": "string",
            "forceIntent": "Record<string, 0 | 1 | 2 | 3>",
        },
    },
    steps=[
        WorkflowStep(
            id="arc_select",
            type=StepType.COLLECT_FIELDS,
            label="Pick an Arc (optional)",
            fields_collected=["arcId"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "Ask which Arc the user wants this goal to live in. They can skip "
                "and choose later."
            ),
            validation_hint="If an Arc is selected capture its id, otherwise leave it empty.",
            next_step_id="context_collect",
        ),
        WorkflowStep(
            id="context_collect",
            type=StepType.COLLECT_FIELDS,
            label="Collect prompt",
            fields_collected=["prompt", "constraints"],
            prompt_template=(
                "Ask the user in one short question what they want to make progress "
                "on over the next 30-90 days. Ask at most one follow-up about constraints."
            ),
            validation_hint=(
                "Ensure there is at least a short free-text prompt. Constraints are optional."
            ),
            next_step_id="agent_generate_goals",
        ),
        WorkflowStep(
            id="agent_generate_goals",
            type=StepType.AGENT_GENERATE,
            label="Generate goal options",
            prompt_template=(
                "Given the user's Arc choice, the focused Arc and the workspace "
                "snapshot, propose exactly ONE candidate goal with a title and short "
                "description."
            ),
            validation_hint=(
                "Produce exactly one concrete, realistic 30-90 day goal that does not "
                "duplicate existing goals verbatim."
            ),
            agent_behavior=AgentBehavior(
                loading_message=(
                    "Got it. I'm shaping one concrete 30-90 day goal that fits this "
                    "season and the Arc you're working from."
                ),
                loading_message_id="assistant-goal-status",
            ),
            next_step_id="confirm_goal",
        ),
        WorkflowStep(
            id="confirm_goal",
            type=StepType.CONFIRM,
            label="Confirm or refine goal",
            fields_collected=["title", "description", "status", "forceIntent"],
            prompt_template=(
                "Help the user pick or refine one goal that feels like the right next "
                "30-90 day focus."
            ),
            validation_hint=(
                "Capture exactly one goal draft the user feels good about adopting now."
            ),
            next_step_on_edit_id="context_collect",
        ),
    ],
)
