"""First-time onboarding workflow (identity Arc / aspiration).

A tap-first discovery flow that synthesizes an initial identity Arc from
structured answers. The identity-aspiration presenter owns this workflow's
lifecycle, so terminal steps never auto-complete the instance.
"""

from __future__ import annotations

from ...contracts import StepType, WorkflowDefinition, WorkflowStep
from .prompts import FIRST_TIME_ONBOARDING_PROMPT

FIRST_TIME_ONBOARDING_WORKFLOW_ID = "firstTimeOnboarding"

_SHORT_REPLY = "Keep your visible reply to a single short sentence."

FIRST_TIME_ONBOARDING_WORKFLOW = WorkflowDefinition(
    id=FIRST_TIME_ONBOARDING_WORKFLOW_ID,
    label="First-time onboarding (identity Arc / aspiration)",
    version=2,
    chat_mode="firstTimeOnboarding",
    system_prompt=FIRST_TIME_ONBOARDING_PROMPT,
    self_managed_lifecycle=True,
    renderable_components=[
        "FormField",
        "ActionButton",
        "InstructionCard",
        "ProgressIndicator",
    ],
    outcome_schema={
        "kind": "first_time_onboarding_v2_arc",
        "fields": {
            "domain": "string",
            "motivation": "string",
            "signatureTrait": "string",
            "growthEdge": "string",
            "proudMoment": "string",
            "nickname": "string?",
            "arcName": "string",
            "arcNarrative": "string",
            "nextSmallStep": "string",
            "confirmed": "boolean",
        },
    },
    steps=[
        WorkflowStep(
            id="soft_start",
            type=StepType.COLLECT_FIELDS,
            label="Soft start",
            render_mode="static",
            static_copy="Let's uncover the version of you that feels the most you.",
            hide_freeform_chat_input=True,
            prompt_template=(
                "Welcome the user with one gentle line about uncovering the version "
                "of them that feels most themselves. " + _SHORT_REPLY
            ),
            validation_hint="No fields collected; keep the message short and warm.",
            next_step_id="vibe_select",
        ),
        WorkflowStep(
            id="vibe_select",
            type=StepType.COLLECT_FIELDS,
            label="Domain of becoming",
            fields_collected=["domain"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "The host shows a tap-only card asking which life domain this "
                "identity Arc is about. " + _SHORT_REPLY
            ),
            validation_hint="domain should be one of the predefined options.",
            ui={
                "title": "Choose a direction",
                "description": (
                    "What area of life does your future self most want to grow into right now?"
                ),
            },
            next_step_id="social_mirror",
        ),
        WorkflowStep(
            id="social_mirror",
            type=StepType.COLLECT_FIELDS,
            label="Motivational style",
            fields_collected=["motivation"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "The host shows a tap-only card capturing the user's motivational "
                "posture. " + _SHORT_REPLY
            ),
            validation_hint="motivation is a short phrase capturing their motivational posture.",
            ui={"title": "How do you want it to feel?"},
            next_step_id="core_strength",
        ),
        WorkflowStep(
            id="core_strength",
            type=StepType.COLLECT_FIELDS,
            label="Signature trait",
            fields_collected=["signatureTrait"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "The host shows a tap-only card asking for the user's signature "
                "trait. " + _SHORT_REPLY
            ),
            validation_hint="signatureTrait is a short phrase describing a strength.",
            ui={"title": "What strength do you grow into?"},
            next_step_id="growth_edge",
        ),
        WorkflowStep(
            id="growth_edge",
            type=StepType.COLLECT_FIELDS,
            label="Growth edge",
            fields_collected=["growthEdge"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "The host shows a tap-only card asking for the user's growth edge. "
                + _SHORT_REPLY
            ),
            validation_hint="growthEdge is a short phrase describing a growth edge.",
            ui={"title": "What do you outgrow?"},
            next_step_id="everyday_moment",
        ),
        WorkflowStep(
            id="everyday_moment",
            type=StepType.COLLECT_FIELDS,
            label="Everyday proud moment",
            fields_collected=["proudMoment"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "The host shows a tap-only card asking what the user does on a normal "
                "day that makes them feel proud."
            ),
            validation_hint="proudMoment describes identity in action on a normal day.",
            ui={
                "title": "On a normal day…",
                "description": (
                    "Picture future-you on a normal day. What are they doing that "
                    "makes them feel proud?"
                ),
            },
            next_step_id="nickname_optional",
        ),
        WorkflowStep(
            id="nickname_optional",
            type=StepType.COLLECT_FIELDS,
            label="One-word identity (optional)",
            fields_collected=["nickname"],
            hide_freeform_chat_input=True,
            prompt_template=(
                "The host invites the user to optionally type a one- or two-word "
                "nickname for their future self, or skip with a tap."
            ),
            validation_hint="nickname is optional and may be blank.",
            ui={
                "title": "If future-you had a nickname…",
                "fields": [
                    {
                        "id": "nickname",
                        "label": "Nickname (optional)",
                        "type": "text",
                        "placeholder": "e.g., The Builder, The Quiet Genius",
                    }
                ],
                "primaryActionLabel": "Continue",
            },
            next_step_id="aspiration_generate",
        ),
        WorkflowStep(
            id="aspiration_generate",
            type=StepType.AGENT_GENERATE,
            label="Synthesize identity aspiration",
            fields_collected=["arcName", "arcNarrative", "nextSmallStep"],
            prompt_template=(
                "Using the collected inputs, generate an identity Arc with exactly 3 "
                "sentences plus a single gentle next small step. Respond ONLY with a "
                'JSON object: {"arcName": string, "aspirationSentence": string, '
                '"nextSmallStep": string}.'
            ),
            validation_hint=(
                "arcName should be short and legible in a list. nextSmallStep must "
                'begin with "Your next small step: ".'
            ),
            next_step_id="aspiration_reveal",
        ),
        WorkflowStep(
            id="aspiration_reveal",
            type=StepType.COLLECT_FIELDS,
            label="Reveal identity aspiration",
            render_mode="static",
            static_copy=(
                "Here's a first snapshot of the identity you're growing into, plus "
                "one tiny next step to help you live it."
            ),
            hide_freeform_chat_input=True,
            prompt_template=(
                "Briefly introduce the reveal in 1-2 short sentences; the host shows "
                "the Arc card."
            ),
            next_step_id="aspiration_confirm",
        ),
        WorkflowStep(
            id="aspiration_confirm",
            type=StepType.CONFIRM,
            label="Confirmation",
            fields_collected=["confirmed"],
            prompt_template=(
                'The host asks: "Does this feel like the future you?" with two taps: '
                "Yes / Close but tweak it."
            ),
            validation_hint=(
                "confirmed reflects whether the user said the aspiration feels like "
                "their future self."
            ),
            next_step_on_confirm_id="closing_arc",
            next_step_on_edit_id="aspiration_generate",
        ),
        WorkflowStep(
            id="closing_arc",
            type=StepType.COLLECT_FIELDS,
            label="Closing - Arc adopted",
            render_mode="static",
            static_copy=(
                "Great, we've turned what you shared into a clear identity Arc to "
                "start from. It's a storyline you can grow into and refine as you go."
            ),
            prompt_template=(
                "In 2-3 short sentences, congratulate the user and remind them the "
                "Arc is a starting point, not a life sentence."
            ),
        ),
    ],
)
