"""Agent workspace orchestration.

``AgentWorkspace`` is the single host for one coach conversation. It owns the
workflow instance, the shared message + card timeline, and the launch context
that every model request is grounded on. Step presenters talk to it through
``complete_step`` and ``invoke_agent_step``.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..config import CoachflowConfig, load_config
from ..context import build_chat_context, compose_launch_context_text
from ..contracts import (
    LaunchContext,
    WorkflowDefinition,
    WorkflowInstance,
    WorkflowInstanceStatus,
    WorkflowStep,
)
from ..llm.base import ChatOptions, ModelClient
from ..registry import WorkflowRegistry
from .analytics import (
    WORKFLOW_ABANDONED,
    WORKFLOW_COMPLETED,
    WORKFLOW_STARTED,
    WORKFLOW_STEP_COMPLETED,
    WORKFLOW_STEP_VIEWED,
    AnalyticsSink,
    NullAnalytics,
    safe_capture,
)
from .instance import WorkflowStateMachine, create_initial_instance
from .store import InMemoryInstanceStore
from .timeline import TimelineController

logger = logging.getLogger(__name__)

_generations = itertools.count(1)


@dataclass(frozen=True)
class SessionRef:
    """Identifies the instance an asynchronous call was issued against."""

    definition_id: str
    instance_id: str
    generation: int


@dataclass(frozen=True)
class StepCompletedEvent:
    definition: WorkflowDefinition
    previous_instance: WorkflowInstance
    next_instance: WorkflowInstance
    step_id: str
    collected: Optional[Dict[str, Any]]
    next_step_id: Optional[str]


def build_step_guidance(step: WorkflowStep) -> Optional[str]:
    """Render a step's prompt template and validation hint as a system turn."""
    if not step.prompt_template and not step.validation_hint:
        return None
    lines = [f"Workflow step guidance ({step.id}): {step.prompt_template or ''}".rstrip()]
    if step.validation_hint:
        lines.append(f"Validation hint: {step.validation_hint}")
    return "\n".join(lines)


class AgentWorkspace:
    """Host and orchestrator for one workflow-driven coach conversation.

    The host calls ``on_start`` once the workspace is shown and
    ``on_teardown`` when it goes away. Instance mutations are synchronous, so
    on a single event loop they are totally ordered and never interleave.
    """

    def __init__(
        self,
        registry: WorkflowRegistry,
        model_client: ModelClient,
        launch_context: LaunchContext,
        *,
        workflow_definition_id: Optional[str] = None,
        workflow_instance_id: Optional[str] = None,
        workspace_snapshot: Optional[str] = None,
        mode: Optional[str] = None,
        analytics: Optional[AnalyticsSink] = None,
        timeline: Optional[TimelineController] = None,
        store: Optional[InMemoryInstanceStore] = None,
        config: Optional[CoachflowConfig] = None,
        on_step_complete: Optional[Callable[[StepCompletedEvent], None]] = None,
        on_status_change: Optional[Callable[[WorkflowInstance], None]] = None,
        on_complete: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> None:
        self.registry = registry
        self.model_client = model_client
        self.launch_context = launch_context
        self.config = config or load_config()
        self.analytics: AnalyticsSink = analytics or NullAnalytics()
        self.timeline = timeline or TimelineController()
        self.store = store or InMemoryInstanceStore()
        self.on_step_complete = on_step_complete
        self.on_status_change = on_status_change
        self.on_complete = on_complete
        self._mode = mode
        self.conversation_summary: Optional[str] = None

        # Computed once per mount and passed verbatim into every request.
        self.launch_context_text = compose_launch_context_text(
            launch_context,
            workspace_snapshot,
            snapshot_max_chars=self.config.context.snapshot_max_chars,
        )

        self._has_logged_start = False
        self._torn_down = False
        self._seen_step_ids: set[str] = set()
        self._pending_placeholders: set[str] = set()
        self._machine: Optional[WorkflowStateMachine] = None
        self._session: Optional[SessionRef] = None
        self._install(workflow_definition_id, workflow_instance_id)

    # ------------------------------------------------------------------
    @property
    def definition(self) -> Optional[WorkflowDefinition]:
        return self._machine.definition if self._machine else None

    @property
    def instance(self) -> Optional[WorkflowInstance]:
        return self._machine.instance if self._machine else None

    @property
    def mode(self) -> Optional[str]:
        if self._mode:
            return self._mode
        definition = self.definition
        return definition.chat_mode if definition else None

    @property
    def session(self) -> Optional[SessionRef]:
        return self._session

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def is_current(self, session: Optional[SessionRef]) -> bool:
        """``True`` while ``session`` still identifies the live instance."""
        return (
            session is not None
            and not self._torn_down
            and self._session is not None
            and session == self._session
        )

    def current_step(self) -> Optional[WorkflowStep]:
        definition, instance = self.definition, self.instance
        if definition is None or instance is None:
            return None
        return definition.get_step(instance.current_step_id)

    # ------------------------------------------------------------------
    def _install(self, definition_id: Optional[str], instance_id: Optional[str]) -> None:
        if definition_id is None:
            self._machine = None
            self._session = None
            return
        definition = self.registry.get(definition_id)
        instance = create_initial_instance(definition, instance_id)
        self.store.claim(instance, self)
        self._machine = WorkflowStateMachine(definition, instance)
        self._session = SessionRef(definition.id, instance.id, next(_generations))
        self._seen_step_ids = set()
        logger.debug(f"Workspace bound to workflow {definition.id} instance {instance.id}")

    def set_definition(
        self, definition_id: Optional[str], instance_id: Optional[str] = None
    ) -> None:
        """Switch workflows mid-session, discarding the previous instance.

        Keeps the existing instance when ``definition_id`` is unchanged.
        """
        current = self.instance
        if current is not None and current.definition_id == definition_id:
            return
        if current is not None:
            self.store.release(current.id, self)
        for placeholder_id in list(self._pending_placeholders):
            self.timeline.remove(placeholder_id)
        self._pending_placeholders.clear()
        self._install(definition_id, instance_id)
        if self._has_logged_start:
            self._note_step_viewed()

    # ------------------------------------------------------------------
    def _workflow_props(self) -> Dict[str, Any]:
        definition, instance = self.definition, self.instance
        props: Dict[str, Any] = {
            "launch_source": self.launch_context.source,
            "launch_intent": self.launch_context.intent,
        }
        if definition is not None:
            props.update(
                workflow_id=definition.id,
                workflow_label=definition.label,
                workflow_version=definition.version,
                chat_mode=definition.chat_mode,
            )
        if instance is not None:
            props["instance_id"] = instance.id
        return props

    def _step_props(self, step_id: Optional[str]) -> Dict[str, Any]:
        definition = self.definition
        step = definition.get_step(step_id) if definition else None
        position = definition.step_position(step_id) if definition else None
        return {
            "step_id": step_id,
            "step_label": step.label if step else None,
            "step_position": position + 1 if position is not None else None,
            "step_count": len(definition.steps) if definition else None,
        }

    def on_start(self) -> None:
        """Record the workflow start once per mount."""
        instance, definition = self.instance, self.definition
        if instance is None or definition is None or self._has_logged_start:
            return
        if instance.status != WorkflowInstanceStatus.IN_PROGRESS:
            return
        from_bits = [bit for bit in (self.launch_context.source, self.launch_context.intent) if bit]
        from_clause = f" from {' / '.join(from_bits)}" if from_bits else ""
        logger.info(f"[workflow] User started {definition.label or definition.id}{from_clause}")
        safe_capture(self.analytics, WORKFLOW_STARTED, self._workflow_props())
        self._has_logged_start = True
        self._note_step_viewed()

    def _note_step_viewed(self) -> None:
        instance = self.instance
        if instance is None or instance.current_step_id is None:
            return
        if instance.current_step_id in self._seen_step_ids:
            return
        self._seen_step_ids.add(instance.current_step_id)
        safe_capture(
            self.analytics,
            WORKFLOW_STEP_VIEWED,
            {**self._workflow_props(), **self._step_props(instance.current_step_id)},
        )

    def on_teardown(self) -> None:
        """Release the instance and report abandonment if it never completed."""
        if self._torn_down:
            return
        # Read the live instance now, not a value captured at start.
        instance = self.instance
        if instance is not None and instance.status != WorkflowInstanceStatus.COMPLETED:
            safe_capture(
                self.analytics,
                WORKFLOW_ABANDONED,
                {
                    **self._workflow_props(),
                    **self._step_props(instance.current_step_id),
                    "status": instance.status.value,
                },
            )
            logger.info(
                f"[workflow] Abandoned {instance.definition_id} at step {instance.current_step_id}"
            )
        self._torn_down = True
        if instance is not None:
            self.store.release(instance.id, self)

    # ------------------------------------------------------------------
    def _apply(self, previous: WorkflowInstance, current: WorkflowInstance) -> None:
        self.store.save(current, self)
        if previous.status != current.status:
            if self.on_status_change is not None:
                self.on_status_change(current)
            self.timeline.append_system_event(
                "workflowTransition",
                message=f"Workflow {current.status.value}",
                data={"instance_id": current.id, "status": current.status.value},
            )
            if current.status == WorkflowInstanceStatus.COMPLETED:
                safe_capture(self.analytics, WORKFLOW_COMPLETED, self._workflow_props())
                if self.on_complete is not None:
                    self.on_complete(current.outcome or dict(current.collected_data))
        self._note_step_viewed()

    def complete_step(
        self,
        step_id: str,
        collected: Optional[Dict[str, Any]] = None,
        next_step_id_override: Optional[str] = None,
    ) -> Optional[WorkflowInstance]:
        """Mark ``step_id`` complete, merge ``collected`` and advance the instance.

        Returns the updated instance, or ``None`` when there is nothing to
        update (no workflow bound, or the workspace was torn down).
        """
        if self._torn_down or self._machine is None:
            logger.warning(f"complete_step({step_id}) ignored: no live workflow instance")
            return None

        previous, current = self._machine.complete_step(
            step_id, collected, next_step_id_override
        )
        if current is previous:
            return current

        definition = self._machine.definition
        next_step_id = (
            current.current_step_id
            if current.current_step_id != previous.current_step_id
            else None
        )
        # Step metadata is read after the transition has been applied.
        safe_capture(
            self.analytics,
            WORKFLOW_STEP_COMPLETED,
            {
                **self._workflow_props(),
                **self._step_props(step_id),
                "next_step_id": next_step_id,
                "status": current.status.value,
            },
        )
        self._apply(previous, current)
        if self.on_step_complete is not None:
            self.on_step_complete(
                StepCompletedEvent(
                    definition=definition,
                    previous_instance=previous,
                    next_instance=current,
                    step_id=step_id,
                    collected=collected,
                    next_step_id=next_step_id,
                )
            )
        return current

    def finish_workflow(
        self, outcome: Optional[Dict[str, Any]] = None
    ) -> Optional[WorkflowInstance]:
        """Complete a self-managed workflow with ``outcome``."""
        if self._torn_down or self._machine is None:
            return None
        previous, current = self._machine.finish(outcome)
        if current is not previous:
            self._apply(previous, current)
        return current

    def cancel(self) -> Optional[WorkflowInstance]:
        if self._torn_down or self._machine is None:
            return None
        previous, current = self._machine.cancel()
        if current is not previous:
            self._apply(previous, current)
        return current

    # ------------------------------------------------------------------
    def _build_messages(self, guidance: Optional[str]):
        return build_chat_context(
            self.timeline.history(),
            launch_context_summary=self.launch_context_text,
            conversation_summary=self.conversation_summary,
            workflow_step_instruction=guidance,
            recent_turns_max=self.config.context.recent_turns_max,
        )

    def _chat_options(self, step_id: Optional[str]) -> ChatOptions:
        definition, instance = self.definition, self.instance
        return ChatOptions(
            mode=self.mode,
            workflow_definition_id=definition.id if definition else None,
            workflow_instance_id=instance.id if instance else None,
            workflow_step_id=step_id,
            system_prompt=definition.system_prompt if definition else None,
        )

    async def invoke_agent_step(self, step_id: str) -> Optional[str]:
        """Ask the model to perform ``step_id`` and add the reply to the timeline.

        Failures are logged and leave the timeline as it was; nothing is
        retried. Returns the reply text, or ``None`` when no reply was written.
        """
        definition, instance = self.definition, self.instance
        if self._torn_down or definition is None or instance is None:
            logger.warning(f"invoke_agent_step({step_id}) ignored: no live workflow")
            return None
        if not instance.is_active:
            logger.warning(
                f"invoke_agent_step({step_id}) ignored: instance {instance.id} is "
                f"{instance.status.value}"
            )
            return None
        step = definition.get_step(step_id)
        if step is None:
            logger.error(f"invoke_agent_step: workflow {definition.id} has no step {step_id}")
            return None

        session = self._session
        messages = self._build_messages(build_step_guidance(step))

        placeholder_id: Optional[str] = None
        behavior = step.agent_behavior
        if behavior is not None and behavior.loading_message:
            # One placeholder per invocation; earlier replies keep their ids.
            base_id = behavior.loading_message_id or f"loading-{step.id}"
            placeholder_id = f"{base_id}:{uuid.uuid4().hex}"
            self.timeline.upsert_assistant_message(placeholder_id, behavior.loading_message)
            self._pending_placeholders.add(placeholder_id)

        try:
            reply = await self.model_client.send_chat(messages, self._chat_options(step.id))
        except Exception as exc:
            logger.error(f"Agent step {step.id} failed for workflow {definition.id}: {exc}")
            if placeholder_id is not None and self.is_current(session):
                self.timeline.remove(placeholder_id)
                self._pending_placeholders.discard(placeholder_id)
            return None

        if not self.is_current(session):
            logger.info(f"Discarding stale reply for step {step.id} of {session.instance_id}")
            return None

        if placeholder_id is not None:
            self._pending_placeholders.discard(placeholder_id)
            self.timeline.upsert_assistant_message(placeholder_id, reply)
        else:
            self.timeline.append_assistant_message(reply)
        return reply

    async def send_user_message(self, content: str) -> Optional[str]:
        """Append a free-form user turn and add the coach's reply."""
        if self._torn_down:
            return None
        if not content or not content.strip():
            return None
        self.timeline.append_user_message(content.strip())

        session = self._session
        step = self.current_step()
        guidance = build_step_guidance(step) if step is not None else None
        messages = self._build_messages(guidance)
        try:
            reply = await self.model_client.send_chat(
                messages, self._chat_options(step.id if step else None)
            )
        except Exception as exc:
            logger.error(f"Coach chat failed in mode {self.mode}: {exc}")
            return None

        if session is not None and not self.is_current(session):
            logger.info("Discarding stale coach reply")
            return None
        if self._torn_down:
            return None
        self.timeline.append_assistant_message(reply)
        return reply

    async def bootstrap(self) -> Optional[str]:
        """Send the opening agent turn for workflows that auto-bootstrap."""
        definition, step = self.definition, self.current_step()
        if definition is None or step is None or not definition.auto_bootstrap_first_message:
            return None
        if any(item.kind == "assistantMessage" for item in self.timeline.items):
            return None
        return await self.invoke_agent_step(step.id)
