"""Structural checks applied to workflow definitions at load time."""

from __future__ import annotations

from ..contracts import WorkflowDefinition
from ..exceptions import WorkflowConfigError

_SUCCESSOR_FIELDS = ("next_step_id", "next_step_on_confirm_id", "next_step_on_edit_id")


def validate_workflow_definition(workflow: WorkflowDefinition) -> None:
    """Raise ``WorkflowConfigError`` unless ``workflow`` is well-formed.

    Every step id must be unique and every successor pointer must reference a
    step declared in the same definition.
    """
    if not workflow.id:
        raise WorkflowConfigError(f"Workflow missing id: {workflow.model_dump()}")
    if not workflow.chat_mode:
        raise WorkflowConfigError(f"Workflow {workflow.id} missing chat_mode")
    if not workflow.system_prompt:
        raise WorkflowConfigError(f"Workflow {workflow.id} missing system_prompt")
    if not workflow.steps:
        raise WorkflowConfigError(f"Workflow {workflow.id} must have at least one step")

    step_ids: set[str] = set()
    for step in workflow.steps:
        if step.id in step_ids:
            raise WorkflowConfigError(
                f"Workflow {workflow.id} declares duplicate step id: {step.id}"
            )
        step_ids.add(step.id)

    for step in workflow.steps:
        for field_name in _SUCCESSOR_FIELDS:
            ref = getattr(step, field_name)
            if ref and ref not in step_ids:
                raise WorkflowConfigError(
                    f"Workflow {workflow.id} step {step.id} references invalid "
                    f"{field_name}: {ref}"
                )
