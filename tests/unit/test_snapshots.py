"""Tests for workspace snapshot digests and clamping."""

from coachflow.constants import SNAPSHOT_TRUNCATION_NOTICE
from coachflow.context import (
    build_activity_coach_launch_context,
    build_arc_coach_launch_context,
    clamp_workspace_snapshot,
    combine_snapshots,
    compose_launch_context_text,
    serialize_launch_context,
)
from coachflow.contracts import Activity, Arc, EntityRef, Goal, LaunchContext


def test_clamp_returns_none_for_blank_input():
    assert clamp_workspace_snapshot(None) is None
    assert clamp_workspace_snapshot("   \n ") is None


def test_clamp_keeps_short_text_unchanged():
    assert clamp_workspace_snapshot("short snapshot") == "short snapshot"


def test_clamp_truncates_to_budget_with_notice():
    text = "x" * 20000
    clamped = clamp_workspace_snapshot(text, max_chars=8000)
    assert len(clamped) <= 8000
    assert clamped.endswith(SNAPSHOT_TRUNCATION_NOTICE)
    assert clamped.startswith("x" * 100)


def test_clamp_is_idempotent():
    text = "abc " * 5000
    once = clamp_workspace_snapshot(text, max_chars=1000)
    assert clamp_workspace_snapshot(once, max_chars=1000) == once


def test_clamp_tiny_budget_still_respects_limit():
    clamped = clamp_workspace_snapshot("y" * 100, max_chars=10)
    assert len(clamped) <= 10
    assert clamped.endswith("…")


def test_clamp_zero_budget_returns_empty_text():
    assert clamp_workspace_snapshot("abc", max_chars=0) == ""


def test_arc_digest_lists_goals_under_their_arc():
    arcs = [Arc(id="a1", name="The Builder", narrative="Makes things.")]
    goals = [
        Goal(id="g1", title="Ship a side project", arc_id="a1", description="d" * 300),
        Goal(id="g2", title="Orphan goal"),
    ]
    digest = build_arc_coach_launch_context(arcs, goals)
    assert "Total arcs: 1. Total goals: 2." in digest
    assert "Arc: The Builder (status: active)." in digest
    assert "- Ship a side project (status: planned)" in digest
    assert "d" * 300 not in digest
    assert "Orphan goal" not in digest


def test_arc_digest_is_none_without_records():
    assert build_arc_coach_launch_context([], []) is None
    assert build_activity_coach_launch_context([], []) is None


def test_activity_digest_includes_unassigned_activities():
    goals = [Goal(id="g1", title="Run a 10k")]
    activities = [
        Activity(id="x1", title="Morning jog", goal_id="g1", notes="easy pace"),
        Activity(id="x2", title="Stretch"),
    ]
    digest = build_activity_coach_launch_context(goals, activities)
    assert "- Morning jog (status: planned) – easy pace" in digest
    assert "Unassigned activities" in digest
    assert "- Stretch (status: planned)" in digest


def test_combine_snapshots_skips_empty_parts():
    combined = combine_snapshots(["first", None, "  ", "second"])
    assert combined == "first\n\nsecond"


def test_serialize_launch_context_includes_focus_and_field():
    context = LaunchContext(
        source="goalDetail",
        intent="edit",
        entity_ref=EntityRef(type="goal", id="g1"),
        field_id="description",
        field_label="Description",
        current_text="Run more.",
    )
    text = serialize_launch_context(context)
    assert text.startswith("Launch source: goalDetail. Intent: edit.")
    assert "Focused entity: goal#g1." in text
    assert "Field: description (Description)." in text
    assert text.endswith("Run more.")


def test_compose_launch_context_text_appends_clamped_snapshot():
    context = LaunchContext(source="arcsList")
    text = compose_launch_context_text(context, "z" * 500, snapshot_max_chars=200)
    base, snapshot = text.split("\n\n", 1)
    assert base == "Launch source: arcsList."
    assert len(snapshot) <= 200
    assert compose_launch_context_text(context, None) == "Launch source: arcsList."
