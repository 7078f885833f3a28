"""Integration tests for the generic guided step presenter."""

import pytest
from fixtures.clients import launch

from coachflow.config import CoachflowConfig
from coachflow.contracts import WorkflowInstanceStatus
from coachflow.llm import ScriptedModelClient
from coachflow.presenters import GuidedStepPresenter
from coachflow.registry import default_registry
from coachflow.registry.definitions import FIRST_TIME_ONBOARDING_WORKFLOW_ID
from coachflow.runtime import AgentWorkspace, CardItem


def _presenter(definition_id: str, client=None) -> GuidedStepPresenter:
    workspace = AgentWorkspace(
        default_registry(),
        client or ScriptedModelClient(default_reply="Here are some goals."),
        launch(source="goalsList"),
        workflow_definition_id=definition_id,
        config=CoachflowConfig(),
    )
    return GuidedStepPresenter(workspace)


def _cards(presenter: GuidedStepPresenter):
    return [i for i in presenter.workspace.timeline.items if isinstance(i, CardItem)]


@pytest.mark.asyncio
async def test_goal_creation_walkthrough_with_edit_branch():
    presenter = _presenter("goalCreation")

    await presenter.present()
    await presenter.present()
    cards = _cards(presenter)
    assert len(cards) == 1
    assert cards[0].component_id == "QuestionCard"
    assert cards[0].id == "goalCreation:local:arc_select"

    presenter.submit_fields({"arcId": "arc-1"})
    presenter.submit_fields({"prompt": "Run a 10k"})
    reply = await presenter.present()
    assert reply == "Here are some goals."
    status = [
        i for i in presenter.workspace.timeline.items if i.id.startswith("assistant-goal-status")
    ]
    assert [i.content for i in status] == [reply]

    presenter.workspace.complete_step("agent_generate_goals")
    await presenter.present()
    assert _cards(presenter)[-1].component_id == "ConfirmCard"

    edited = presenter.resolve_confirm(False)
    assert edited.current_step_id == "context_collect"
    assert edited.collected_data["confirmed"] is False

    presenter.submit_fields({"prompt": "Run a half marathon"})
    presenter.workspace.complete_step("agent_generate_goals")
    done = presenter.resolve_confirm(True, {"adoptedGoalId": "goal-9"})

    assert done.status == WorkflowInstanceStatus.COMPLETED
    assert done.outcome["prompt"] == "Run a half marathon"
    assert done.outcome["adoptedGoalId"] == "goal-9"
    assert done.outcome["confirmed"] is True


def test_arc_edit_branch_returns_to_generation():
    presenter = _presenter("arcCreation")
    workspace = presenter.workspace
    workspace.complete_step("context_collect", {"prompt": "x"})
    workspace.complete_step("agent_generate_arc")

    instance = presenter.resolve_confirm(False)

    assert instance.current_step_id == "agent_generate_arc"
    assert instance.status == WorkflowInstanceStatus.IN_PROGRESS


def test_resolve_confirm_outside_confirm_step_is_ignored():
    presenter = _presenter("arcCreation")
    before = presenter.workspace.instance

    assert presenter.resolve_confirm(True) is before


def test_submit_fields_rejects_agent_step():
    presenter = _presenter("activityGuidance")
    with pytest.raises(ValueError):
        presenter.submit_fields({"anything": 1})


@pytest.mark.asyncio
async def test_static_step_renders_copy_once():
    presenter = _presenter(FIRST_TIME_ONBOARDING_WORKFLOW_ID)

    await presenter.present()
    await presenter.present()

    items = presenter.workspace.timeline.items
    assert len(items) == 1
    assert items[0].kind == "assistantMessage"
    assert items[0].content.startswith("Let's uncover")
