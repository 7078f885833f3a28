"""Workflow instance state machine.

Transitions are pure functions from one ``WorkflowInstance`` value to the
next. ``WorkflowStateMachine`` owns the current value and applies each
transition as a single read-reduce-write with no suspension point, so calls
issued on one event loop are totally ordered.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..contracts import WorkflowDefinition, WorkflowInstance, WorkflowInstanceStatus
from ..exceptions import UnknownStepError, WorkflowConfigError

logger = logging.getLogger(__name__)

_TERMINAL_STATUSES = (WorkflowInstanceStatus.COMPLETED, WorkflowInstanceStatus.CANCELLED)


def create_initial_instance(
    definition: WorkflowDefinition, instance_id: Optional[str] = None
) -> WorkflowInstance:
    """Create an in-progress instance positioned on the definition's first step."""
    first_step = definition.first_step
    if first_step is None:
        raise WorkflowConfigError(f"Workflow {definition.id} has no steps")
    return WorkflowInstance(
        id=instance_id or f"{definition.id}:local",
        definition_id=definition.id,
        status=WorkflowInstanceStatus.IN_PROGRESS,
        current_step_id=first_step.id,
        collected_data={},
        outcome=None,
    )


def apply_complete_step(
    definition: WorkflowDefinition,
    instance: WorkflowInstance,
    step_id: str,
    collected: Optional[Dict[str, Any]] = None,
    next_step_id_override: Optional[str] = None,
) -> WorkflowInstance:
    """Return the instance that results from completing ``step_id``.

    ``collected`` is merged over the existing data (later writes win, nothing
    is removed). The successor is ``next_step_id_override`` when given, else the
    step's ``next_step_id``. A terminal resolution completes the instance unless
    the definition manages its own lifecycle.
    """
    if instance.definition_id != definition.id:
        raise WorkflowConfigError(
            f"Instance {instance.id} belongs to {instance.definition_id}, not {definition.id}"
        )
    if instance.status in _TERMINAL_STATUSES:
        logger.warning(
            f"Ignoring completion of step {step_id} on {instance.status.value} "
            f"instance {instance.id}"
        )
        return instance

    step = definition.get_step(step_id)
    if step is None:
        raise UnknownStepError(f"Workflow {definition.id} has no step {step_id}")
    if next_step_id_override is not None and not definition.has_step(next_step_id_override):
        raise UnknownStepError(
            f"Workflow {definition.id} has no step {next_step_id_override} "
            f"(override for {step_id})"
        )

    collected_data = {**instance.collected_data, **(collected or {})}
    next_step_id = next_step_id_override or step.next_step_id

    if next_step_id is None:
        if definition.self_managed_lifecycle:
            return instance.model_copy(update={"collected_data": collected_data})
        logger.info(f"Workflow {definition.id} instance {instance.id} completed at {step_id}")
        return instance.model_copy(
            update={
                "collected_data": collected_data,
                "status": WorkflowInstanceStatus.COMPLETED,
                "outcome": dict(collected_data),
            }
        )

    return instance.model_copy(
        update={"collected_data": collected_data, "current_step_id": next_step_id}
    )


def apply_finish(
    instance: WorkflowInstance, outcome: Optional[Dict[str, Any]] = None
) -> WorkflowInstance:
    """Explicitly complete an instance; used by self-managed presenters."""
    if instance.status in _TERMINAL_STATUSES:
        return instance
    final = dict(outcome) if outcome is not None else dict(instance.collected_data)
    return instance.model_copy(
        update={"status": WorkflowInstanceStatus.COMPLETED, "outcome": final}
    )


def apply_cancel(instance: WorkflowInstance) -> WorkflowInstance:
    if instance.status in _TERMINAL_STATUSES:
        return instance
    return instance.model_copy(update={"status": WorkflowInstanceStatus.CANCELLED})


class WorkflowStateMachine:
    """Single owner of one workflow instance value."""

    def __init__(
        self, definition: WorkflowDefinition, instance: Optional[WorkflowInstance] = None
    ) -> None:
        self.definition = definition
        self._instance = instance or create_initial_instance(definition)

    @property
    def instance(self) -> WorkflowInstance:
        return self._instance

    def complete_step(
        self,
        step_id: str,
        collected: Optional[Dict[str, Any]] = None,
        next_step_id_override: Optional[str] = None,
    ) -> tuple[WorkflowInstance, WorkflowInstance]:
        """Apply a step completion and return ``(previous, current)``."""
        previous = self._instance
        self._instance = apply_complete_step(
            self.definition, previous, step_id, collected, next_step_id_override
        )
        return previous, self._instance

    def finish(
        self, outcome: Optional[Dict[str, Any]] = None
    ) -> tuple[WorkflowInstance, WorkflowInstance]:
        previous = self._instance
        self._instance = apply_finish(previous, outcome)
        return previous, self._instance

    def cancel(self) -> tuple[WorkflowInstance, WorkflowInstance]:
        previous = self._instance
        self._instance = apply_cancel(previous)
        return previous, self._instance
