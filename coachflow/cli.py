"""Command line interface for inspecting and running coach workflows."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from coachflow.config import configure_logging, load_config
from coachflow.context import clamp_workspace_snapshot
from coachflow.contracts import LaunchContext, WorkflowDefinition
from coachflow.exceptions import WorkflowConfigError, WorkflowNotFoundError
from coachflow.llm import get_model_client
from coachflow.registry import WorkflowRegistry, default_registry
from coachflow.runtime import AgentWorkspace

app = typer.Typer(help="CLI for coachflow workflows")

# Command groups
workflow_app = typer.Typer(help="Commands for inspecting workflow definitions")
context_app = typer.Typer(help="Commands for building model context")

app.add_typer(workflow_app, name="workflow")
app.add_typer(context_app, name="context")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Override the configured log level"),
) -> None:
    """coachflow CLI entry point."""
    configure_logging(log_level or load_config().log_level)


@workflow_app.command("list")
def workflow_list() -> None:
    """
    List the built-in workflow definitions.

    Example:
        coachflow workflow list
        # Output: arcCreation    arcCreation    Arc creation    4 steps
    """
    registry = default_registry()
    for definition in registry:
        typer.echo(
            f"{definition.id}\t{definition.chat_mode}\t{definition.label}\t"
            f"{len(definition.steps)} steps"
        )


@workflow_app.command("show")
def workflow_show(definition_id: str) -> None:
    """
    Show the steps of a workflow definition.

    Args:
        definition_id: Workflow id as printed by 'workflow list'
    """
    try:
        definition = default_registry().get(definition_id)
    except WorkflowNotFoundError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"Workflow {definition.id} (v{definition.version}): {definition.label}")
    typer.echo(f"Chat mode: {definition.chat_mode}")
    if definition.self_managed_lifecycle:
        typer.echo("Lifecycle: managed by presenter")
    for step in definition.steps:
        successors = ", ".join(step.successor_ids()) or "(terminal)"
        typer.echo(f"- {step.id} [{step.type.value}] {step.label or ''} -> {successors}")


@workflow_app.command("validate")
def workflow_validate(path: Optional[Path] = None) -> None:
    """
    Validate workflow definitions.

    Without a path the built-in definitions are checked. A path may point to a
    YAML or JSON file holding a list of definitions (or a mapping with a
    ``workflows`` list).

    Example:
        coachflow workflow validate
        coachflow workflow validate ./my_workflows.yaml
    """
    if path is None:
        registry = default_registry()
        typer.echo(f"{len(registry)} built-in workflows are valid")
        return

    if not path.exists():
        typer.secho("Specified path does not exist", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    with open(path) as f:
        data = yaml.safe_load(f) or []
    if isinstance(data, dict):
        data = data.get("workflows", [])

    try:
        registry = WorkflowRegistry(WorkflowDefinition(**item) for item in data)
    except (WorkflowConfigError, ValidationError, TypeError) as exc:
        typer.secho(f"Invalid workflow definitions: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(f"{len(registry)} workflows are valid")


@context_app.command("snapshot")
def context_snapshot(
    path: Path,
    max_chars: Optional[int] = typer.Option(None, help="Character budget"),
) -> None:
    """
    Clamp a workspace snapshot file to the context budget and print it.

    Example:
        coachflow context snapshot ./workspace.txt --max-chars 2000
    """
    if not path.exists():
        typer.secho("Specified path does not exist", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    budget = max_chars if max_chars is not None else load_config().context.snapshot_max_chars
    clamped = clamp_workspace_snapshot(path.read_text(), budget)
    if clamped is None:
        typer.echo("Snapshot is empty")
        return
    typer.echo(clamped)


async def _chat_loop(workspace: AgentWorkspace) -> None:
    workspace.on_start()
    try:
        opening = await workspace.bootstrap()
        if opening:
            typer.echo(f"coach: {opening}")
        while True:
            try:
                line = typer.prompt("you", default="", show_default=False)
            except typer.Abort:
                break
            if line.strip().lower() in ("", "exit", "quit"):
                break
            reply = await workspace.send_user_message(line)
            if reply is None:
                typer.secho("(no reply)", fg=typer.colors.YELLOW)
            else:
                typer.echo(f"coach: {reply}")
    finally:
        workspace.on_teardown()


@app.command("chat")
def chat(
    mode: str,
    source: str = typer.Option("cli", help="Launch source recorded in the context"),
    intent: Optional[str] = typer.Option(None, help="Launch intent"),
    offline: bool = typer.Option(False, help="Use the scripted offline model client"),
) -> None:
    """
    Chat with the coach in the given mode.

    Example:
        coachflow chat arcCreation --offline
    """
    config = load_config()
    registry = default_registry()
    try:
        definition = registry.for_chat_mode(mode)
    except WorkflowNotFoundError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1)

    client = get_model_client("scripted" if offline else None, config)
    workspace = AgentWorkspace(
        registry,
        client,
        LaunchContext(source=source, intent=intent),
        workflow_definition_id=definition.id,
        mode=mode,
        config=config,
    )
    asyncio.run(_chat_loop(workspace))
    instance = workspace.instance
    if instance is not None:
        typer.echo(
            json.dumps(
                {"instance": instance.id, "status": instance.status.value,
                 "step": instance.current_step_id}
            )
        )


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
