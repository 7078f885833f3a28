"""Tests for the coachflow CLI."""

from typer.testing import CliRunner

from coachflow.cli import app

runner = CliRunner()


def test_workflow_list_shows_builtin_workflows():
    result = runner.invoke(app, ["workflow", "list"])
    assert result.exit_code == 0, result.output
    assert "arcCreation" in result.output
    assert "firstTimeOnboarding" in result.output


def test_workflow_show_and_missing():
    result = runner.invoke(app, ["workflow", "show", "goalCreation"])
    assert result.exit_code == 0, result.output
    assert "confirm_goal [confirm]" in result.output

    missing = runner.invoke(app, ["workflow", "show", "missing-id"])
    assert missing.exit_code == 1
    assert "Unknown workflow definition: missing-id" in missing.output


def test_workflow_validate_builtin_and_file(tmp_path):
    result = runner.invoke(app, ["workflow", "validate"])
    assert result.exit_code == 0, result.output
    assert "5 built-in workflows are valid" in result.output

    good = tmp_path / "good.yaml"
    good.write_text(
        """
workflows:
  - id: demo
    chat_mode: demo
    system_prompt: Be kind.
    steps:
      - id: ask
        type: collect_fields
"""
    )
    result = runner.invoke(app, ["workflow", "validate", str(good)])
    assert result.exit_code == 0, result.output
    assert "1 workflows are valid" in result.output

    bad = tmp_path / "bad.yaml"
    bad.write_text(
        """
- id: demo
  chat_mode: demo
  system_prompt: Be kind.
  steps:
    - id: ask
      type: collect_fields
      next_step_id: nowhere
"""
    )
    result = runner.invoke(app, ["workflow", "validate", str(bad)])
    assert result.exit_code == 1
    assert "nowhere" in result.output


def test_context_snapshot_clamps_file(tmp_path):
    snapshot = tmp_path / "snapshot.txt"
    snapshot.write_text("w" * 5000)
    result = runner.invoke(app, ["context", "snapshot", str(snapshot), "--max-chars", "500"])
    assert result.exit_code == 0, result.output
    assert "Workspace snapshot truncated" in result.output

    empty = tmp_path / "empty.txt"
    empty.write_text("   ")
    result = runner.invoke(app, ["context", "snapshot", str(empty)])
    assert "Snapshot is empty" in result.output


def test_offline_chat_replies_and_reports_instance(tmp_path, monkeypatch):
    monkeypatch.setenv("COACHFLOW_CONFIG", str(tmp_path / "missing.yaml"))
    result = runner.invoke(app, ["chat", "arcCreation", "--offline"], input="hello\nexit\n")
    assert result.exit_code == 0, result.output
    assert "coach: (offline) Noted." in result.output
    assert '"instance": "arcCreation:local"' in result.output


def test_chat_unknown_mode_fails():
    result = runner.invoke(app, ["chat", "noSuchMode", "--offline"])
    assert result.exit_code == 1
    assert "No workflow registered for chat mode: noSuchMode" in result.output
