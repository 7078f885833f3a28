"""Core data contracts for coachflow workflows."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class StepType(str, Enum):
    """Closed set of step kinds a workflow can declare."""

    COLLECT_FIELDS = "collect_fields"
    AGENT_GENERATE = "agent_generate"
    CONFIRM = "confirm"


class WorkflowInstanceStatus(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AgentBehavior(BaseModel):
    """Hints for agent-driven steps."""

    model_config = ConfigDict(frozen=True)

    loading_message: Optional[str] = None
    loading_message_id: Optional[str] = None


class WorkflowStep(BaseModel):
    """One node in a workflow step graph."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: StepType
    label: Optional[str] = None
    fields_collected: List[str] = Field(default_factory=list)
    prompt_template: Optional[str] = None
    validation_hint: Optional[str] = None
    next_step_id: Optional[str] = None
    next_step_on_confirm_id: Optional[str] = None
    next_step_on_edit_id: Optional[str] = None
    agent_behavior: Optional[AgentBehavior] = None
    hide_freeform_chat_input: bool = False
    render_mode: Literal["chat", "static"] = "chat"
    static_copy: Optional[str] = None
    ui: Optional[Dict[str, Any]] = None

    @property
    def is_terminal(self) -> bool:
        """``True`` when the step declares no default successor."""
        return self.next_step_id is None

    def successor_ids(self) -> List[str]:
        """All step ids this step may transition to."""
        return [
            ref
            for ref in (
                self.next_step_id,
                self.next_step_on_confirm_id,
                self.next_step_on_edit_id,
            )
            if ref
        ]


class WorkflowDefinition(BaseModel):
    """Immutable description of a workflow's step graph."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    version: int = 1
    chat_mode: Optional[str] = None
    system_prompt: Optional[str] = None
    outcome_schema: Dict[str, Any] = Field(default_factory=dict)
    auto_bootstrap_first_message: bool = False
    renderable_components: List[str] = Field(default_factory=list)
    # A dedicated presenter drives completion; terminal steps never auto-complete.
    self_managed_lifecycle: bool = False
    steps: List[WorkflowStep] = Field(default_factory=list)

    @property
    def first_step(self) -> Optional[WorkflowStep]:
        return self.steps[0] if self.steps else None

    def get_step(self, step_id: Optional[str]) -> Optional[WorkflowStep]:
        """Return the step with ``step_id`` or ``None``."""
        if step_id is None:
            return None
        return next((s for s in self.steps if s.id == step_id), None)

    def has_step(self, step_id: str) -> bool:
        return self.get_step(step_id) is not None

    def step_position(self, step_id: Optional[str]) -> Optional[int]:
        """Zero-based index of ``step_id`` within the definition."""
        for index, step in enumerate(self.steps):
            if step.id == step_id:
                return index
        return None


class WorkflowInstance(BaseModel):
    """Runtime state of one conversation driven by a workflow definition.

    Instances are treated as values: transitions produce a new instance rather
    than mutating the existing one.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    definition_id: str
    status: WorkflowInstanceStatus = WorkflowInstanceStatus.IN_PROGRESS
    current_step_id: Optional[str] = None
    collected_data: Dict[str, Any] = Field(default_factory=dict)
    outcome: Optional[Dict[str, Any]] = None

    @property
    def is_active(self) -> bool:
        return self.status == WorkflowInstanceStatus.IN_PROGRESS


class ChatTurn(BaseModel):
    """Single role/content turn exchanged with the model."""

    model_config = ConfigDict(frozen=True)

    role: Literal["assistant", "user", "system"]
    content: str


class EntityRef(BaseModel):
    """Reference to the domain record a workspace is anchored to."""

    model_config = ConfigDict(frozen=True)

    type: Literal["arc", "goal", "activity"]
    id: str


class LaunchContext(BaseModel):
    """Where and why a workflow was started."""

    model_config = ConfigDict(frozen=True)

    source: str
    intent: Optional[str] = None
    entity_ref: Optional[EntityRef] = None
    object_type: Optional[str] = None
    object_id: Optional[str] = None
    field_id: Optional[str] = None
    field_label: Optional[str] = None
    current_text: Optional[str] = None


class Arc(BaseModel):
    """Long-horizon identity direction."""

    id: str
    name: str
    status: str = "active"
    narrative: Optional[str] = None


class Goal(BaseModel):
    id: str
    title: str
    status: str = "planned"
    arc_id: Optional[str] = None
    description: Optional[str] = None


class Activity(BaseModel):
    id: str
    title: str
    status: str = "planned"
    goal_id: Optional[str] = None
    notes: Optional[str] = None
