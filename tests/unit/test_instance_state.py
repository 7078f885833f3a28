"""Tests for the workflow instance state machine."""

import pytest

from coachflow.contracts import StepType, WorkflowDefinition, WorkflowInstanceStatus, WorkflowStep
from coachflow.exceptions import UnknownStepError, WorkflowConfigError
from coachflow.registry.definitions import ARC_CREATION_WORKFLOW, FIRST_TIME_ONBOARDING_WORKFLOW
from coachflow.runtime import (
    WorkflowStateMachine,
    apply_cancel,
    apply_complete_step,
    apply_finish,
    create_initial_instance,
)


def _linear() -> WorkflowDefinition:
    return WorkflowDefinition(
        id="linear",
        chat_mode="linear",
        system_prompt="p",
        steps=[
            WorkflowStep(id="a", type=StepType.COLLECT_FIELDS, next_step_id="b"),
            WorkflowStep(id="b", type=StepType.COLLECT_FIELDS),
        ],
    )


def test_initial_instance_starts_on_first_step():
    instance = create_initial_instance(ARC_CREATION_WORKFLOW)
    assert instance.id == "arcCreation:local"
    assert instance.status == WorkflowInstanceStatus.IN_PROGRESS
    assert instance.current_step_id == ARC_CREATION_WORKFLOW.steps[0].id
    assert instance.collected_data == {}


def test_collected_data_merges_later_writes_win():
    definition = _linear()
    instance = create_initial_instance(definition)
    after_a = apply_complete_step(definition, instance, "a", {"x": 1, "y": 2})
    assert after_a.current_step_id == "b"
    assert instance.collected_data == {}

    machine = WorkflowStateMachine(
        definition, after_a.model_copy(update={"current_step_id": "a"})
    )
    _, current = machine.complete_step("a", {"y": 3, "z": 4})
    assert current.collected_data == {"x": 1, "y": 3, "z": 4}


def test_terminal_step_completes_with_outcome_snapshot():
    definition = _linear()
    machine = WorkflowStateMachine(definition)
    machine.complete_step("a", {"x": 1})
    previous, current = machine.complete_step("b", {"y": 2})
    assert previous.status == WorkflowInstanceStatus.IN_PROGRESS
    assert current.status == WorkflowInstanceStatus.COMPLETED
    assert current.outcome == {"x": 1, "y": 2}
    assert current.current_step_id == "b"


def test_override_takes_precedence_over_default_successor():
    definition = ARC_CREATION_WORKFLOW
    confirm = next(s for s in definition.steps if s.type == StepType.CONFIRM)
    instance = create_initial_instance(definition).model_copy(
        update={"current_step_id": confirm.id}
    )
    edited = apply_complete_step(
        definition, instance, confirm.id, {"confirmed": False}, confirm.next_step_on_edit_id
    )
    assert edited.current_step_id == confirm.next_step_on_edit_id
    assert edited.status == WorkflowInstanceStatus.IN_PROGRESS


def test_self_managed_terminal_step_does_not_complete():
    definition = FIRST_TIME_ONBOARDING_WORKFLOW
    instance = create_initial_instance(definition).model_copy(
        update={"current_step_id": "closing_arc"}
    )
    after = apply_complete_step(definition, instance, "closing_arc", {"confirmed": True})
    assert after.status == WorkflowInstanceStatus.IN_PROGRESS
    assert after.current_step_id == "closing_arc"
    assert after.outcome is None
    assert after.collected_data["confirmed"] is True

    finished = apply_finish(after, {"arcName": "The Builder"})
    assert finished.status == WorkflowInstanceStatus.COMPLETED
    assert finished.outcome == {"arcName": "The Builder"}


def test_unknown_step_and_override_raise():
    definition = _linear()
    instance = create_initial_instance(definition)
    with pytest.raises(UnknownStepError):
        apply_complete_step(definition, instance, "missing")
    with pytest.raises(UnknownStepError):
        apply_complete_step(definition, instance, "a", next_step_id_override="missing")


def test_mismatched_definition_raises():
    instance = create_initial_instance(ARC_CREATION_WORKFLOW)
    with pytest.raises(WorkflowConfigError):
        apply_complete_step(_linear(), instance, "a")


def test_completed_instance_ignores_further_completions():
    definition = _linear()
    machine = WorkflowStateMachine(definition)
    machine.complete_step("a")
    _, completed = machine.complete_step("b")
    previous, current = machine.complete_step("a", {"late": True})
    assert current is previous is completed
    assert "late" not in current.collected_data


def test_cancel_is_terminal_and_idempotent():
    instance = create_initial_instance(_linear())
    cancelled = apply_cancel(instance)
    assert cancelled.status == WorkflowInstanceStatus.CANCELLED
    assert apply_cancel(cancelled) is cancelled
    assert apply_finish(cancelled) is cancelled
