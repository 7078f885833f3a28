"""First-time onboarding example using coachflow.

Runs the tap-first identity aspiration flow end to end. Set
``COACHFLOW_MODEL_BACKEND=scripted`` to run without model credentials; the
scripted client answers with an unparseable reply, so the local synthesis is
shown.
"""

import asyncio

from coachflow import AgentWorkspace, LaunchContext, default_registry, get_model_client, load_config
from coachflow.presenters import IdentityAspirationPresenter
from coachflow.registry.definitions import FIRST_TIME_ONBOARDING_WORKFLOW_ID
from coachflow.runtime import LoggingAnalytics


async def main():
    print("Running first-time onboarding with coachflow...")
    config = load_config()
    workspace = AgentWorkspace(
        default_registry(),
        get_model_client(config=config),
        LaunchContext(source="firstRun", intent="onboarding"),
        workflow_definition_id=FIRST_TIME_ONBOARDING_WORKFLOW_ID,
        analytics=LoggingAnalytics(),
        config=config,
    )
    presenter = IdentityAspirationPresenter(
        workspace, on_complete=lambda arc: print(f"Adopted Arc: {arc.name}")
    )

    workspace.on_start()
    presenter.start()
    presenter.select_domain(["making_building"])
    presenter.select_motivation(["make_new_things", "solve_hard_problems"])
    presenter.select_signature_trait(["curiosity"])
    presenter.select_growth_edge(["finishing_things"])
    presenter.select_proud_moment(["improving_a_skill"])
    presenter.skip_nickname()

    aspiration = await presenter.generate()
    print(f"{aspiration.arc_name} ({presenter.last_outcome.value})")
    print(aspiration.aspiration_sentence)
    print(aspiration.next_small_step)

    presenter.confirm()
    workspace.on_teardown()
    print(f"Workflow status: {workspace.instance.status.value}")


if __name__ == "__main__":
    asyncio.run(main())
