"""Generic presenter for guided (non self-managed) workflows."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..contracts import StepType, WorkflowInstance, WorkflowStep
from ..runtime.orchestrator import AgentWorkspace

logger = logging.getLogger(__name__)

QUESTION_CARD = "QuestionCard"
CONFIRM_CARD = "ConfirmCard"


class GuidedStepPresenter:
    """Renders the active step of a workspace and routes user answers back.

    Cards are keyed by ``<instance id>:<step id>`` so presenting the same step
    twice never duplicates it in the timeline.
    """

    def __init__(self, workspace: AgentWorkspace) -> None:
        self.workspace = workspace

    def _card_id(self, step: WorkflowStep) -> str:
        return f"{self.workspace.instance.id}:{step.id}"

    def _append_card_once(
        self, component_id: str, step: WorkflowStep, props: Dict[str, Any]
    ) -> None:
        card_id = self._card_id(step)
        if self.workspace.timeline.find(card_id) is not None:
            return
        self.workspace.timeline.append_card(
            component_id, props=props, step_id=step.id, item_id=card_id
        )

    async def present(self) -> Optional[str]:
        """Surface the current step. Returns the agent reply for generate steps."""
        step = self.workspace.current_step()
        instance = self.workspace.instance
        if step is None or instance is None or not instance.is_active:
            return None

        if step.type == StepType.COLLECT_FIELDS:
            if step.render_mode == "static":
                if step.static_copy:
                    self.workspace.timeline.upsert_assistant_message(
                        self._card_id(step), step.static_copy
                    )
                return None
            self._append_card_once(
                QUESTION_CARD,
                step,
                {
                    "label": step.label,
                    "fields": list(step.fields_collected),
                    "ui": step.ui or {},
                },
            )
            return None
        elif step.type == StepType.AGENT_GENERATE:
            return await self.workspace.invoke_agent_step(step.id)
        elif step.type == StepType.CONFIRM:
            self._append_card_once(
                CONFIRM_CARD,
                step,
                {"label": step.label, "canEdit": step.next_step_on_edit_id is not None},
            )
            return None
        raise ValueError(f"Unsupported step type: {step.type}")

    def submit_fields(self, values: Optional[Dict[str, Any]] = None) -> Optional[WorkflowInstance]:
        step = self.workspace.current_step()
        if step is None:
            logger.warning("submit_fields ignored: no active step")
            return None
        if step.type != StepType.COLLECT_FIELDS:
            raise ValueError(f"Step {step.id} is {step.type.value}, not collect_fields")
        return self.workspace.complete_step(step.id, dict(values or {}))

    def resolve_confirm(
        self, confirmed: bool, collected: Optional[Dict[str, Any]] = None
    ) -> Optional[WorkflowInstance]:
        """Answer the active confirm step and follow the confirm or edit branch."""
        step = self.workspace.current_step()
        if step is None or step.type != StepType.CONFIRM:
            logger.warning("resolve_confirm ignored: active step is not a confirm step")
            return self.workspace.instance

        if confirmed:
            override = step.next_step_on_confirm_id
        else:
            override = step.next_step_on_edit_id
            if override is None:
                logger.info(f"Step {step.id} has no edit branch; staying put")
                return self.workspace.instance

        data = {"confirmed": confirmed, **(collected or {})}
        return self.workspace.complete_step(step.id, data, next_step_id_override=override)
