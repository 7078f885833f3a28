"""Tests for workflow definition validation and lookup."""

import pytest

from coachflow.contracts import StepType, WorkflowDefinition, WorkflowStep
from coachflow.exceptions import WorkflowConfigError, WorkflowNotFoundError
from coachflow.registry import WorkflowRegistry, default_registry
from coachflow.registry.definitions import FIRST_TIME_ONBOARDING_WORKFLOW_ID


def _definition(**overrides) -> WorkflowDefinition:
    data = dict(
        id="demo",
        label="Demo",
        chat_mode="demo",
        system_prompt="Be helpful.",
        steps=[
            WorkflowStep(id="ask", type=StepType.COLLECT_FIELDS, next_step_id="done"),
            WorkflowStep(id="done", type=StepType.CONFIRM),
        ],
    )
    data.update(overrides)
    return WorkflowDefinition(**data)


def test_default_registry_loads_builtin_workflows():
    registry = default_registry()
    assert set(registry.ids()) == {
        "goalCreation",
        "arcCreation",
        "activityCreation",
        "activityGuidance",
        FIRST_TIME_ONBOARDING_WORKFLOW_ID,
    }
    onboarding = registry.get(FIRST_TIME_ONBOARDING_WORKFLOW_ID)
    assert onboarding.self_managed_lifecycle is True
    assert registry.get("arcCreation").self_managed_lifecycle is False


def test_builtin_successors_resolve_within_each_definition():
    for definition in default_registry():
        ids = {step.id for step in definition.steps}
        for step in definition.steps:
            assert set(step.successor_ids()) <= ids, f"{definition.id}:{step.id}"


def test_dangling_next_step_is_rejected():
    bad = _definition(
        steps=[WorkflowStep(id="ask", type=StepType.COLLECT_FIELDS, next_step_id="nowhere")]
    )
    with pytest.raises(WorkflowConfigError, match="nowhere"):
        WorkflowRegistry([bad])


def test_dangling_edit_branch_is_rejected():
    bad = _definition(
        steps=[WorkflowStep(id="confirm", type=StepType.CONFIRM, next_step_on_edit_id="gone")]
    )
    with pytest.raises(WorkflowConfigError, match="next_step_on_edit_id"):
        WorkflowRegistry([bad])


def test_duplicate_step_ids_are_rejected():
    bad = _definition(
        steps=[
            WorkflowStep(id="ask", type=StepType.COLLECT_FIELDS),
            WorkflowStep(id="ask", type=StepType.CONFIRM),
        ]
    )
    with pytest.raises(WorkflowConfigError, match="duplicate"):
        WorkflowRegistry([bad])


def test_definition_without_steps_or_prompt_is_rejected():
    with pytest.raises(WorkflowConfigError):
        WorkflowRegistry([_definition(steps=[])])
    with pytest.raises(WorkflowConfigError):
        WorkflowRegistry([_definition(system_prompt=None)])


def test_duplicate_definition_ids_are_rejected():
    with pytest.raises(WorkflowConfigError):
        WorkflowRegistry([_definition(), _definition()])


def test_lookup_and_get_unknown_definition():
    registry = WorkflowRegistry([_definition()])
    assert registry.lookup("missing") is None
    assert registry.lookup(None) is None
    with pytest.raises(WorkflowNotFoundError):
        registry.get("missing")
    assert "demo" in registry
    assert len(registry) == 1


def test_launch_config_pairs_mode_with_definition():
    registry = WorkflowRegistry([_definition(id="demoFlow", chat_mode="demoMode")])
    assert registry.launch_config("demoMode") == ("demoMode", "demoFlow")
    with pytest.raises(WorkflowNotFoundError):
        registry.launch_config("otherMode")
