"""Workflow definition registry."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from ..contracts import WorkflowDefinition
from ..exceptions import WorkflowConfigError, WorkflowNotFoundError
from .validation import validate_workflow_definition

logger = logging.getLogger(__name__)


class WorkflowRegistry:
    """Immutable catalog of workflow definitions keyed by id.

    Definitions are validated when the registry is built so a dangling step
    reference fails at startup rather than mid-conversation.
    """

    def __init__(self, definitions: Iterable[WorkflowDefinition]) -> None:
        by_id: dict[str, WorkflowDefinition] = {}
        by_mode: dict[str, WorkflowDefinition] = {}
        for definition in definitions:
            validate_workflow_definition(definition)
            if definition.id in by_id:
                raise WorkflowConfigError(
                    f"Duplicate workflow definition id: {definition.id}"
                )
            by_id[definition.id] = definition
            # First definition registered for a mode wins the mode lookup.
            by_mode.setdefault(definition.chat_mode, definition)
        self._by_id = MappingProxyType(by_id)
        self._by_mode = MappingProxyType(by_mode)
        logger.debug(f"Workflow registry loaded: {list(by_id)}")

    def lookup(self, definition_id: Optional[str]) -> Optional[WorkflowDefinition]:
        """Return the definition registered under ``definition_id`` or ``None``."""
        if definition_id is None:
            return None
        return self._by_id.get(definition_id)

    def get(self, definition_id: str) -> WorkflowDefinition:
        """Return the definition for ``definition_id`` or raise."""
        definition = self.lookup(definition_id)
        if definition is None:
            raise WorkflowNotFoundError(f"Unknown workflow definition: {definition_id}")
        return definition

    def for_chat_mode(self, mode: str) -> WorkflowDefinition:
        definition = self._by_mode.get(mode)
        if definition is None:
            raise WorkflowNotFoundError(f"No workflow registered for chat mode: {mode}")
        return definition

    def launch_config(self, mode: str) -> tuple[str, str]:
        """Return ``(mode, workflow_definition_id)`` kept in sync for hosts."""
        return mode, self.for_chat_mode(mode).id

    def ids(self) -> list[str]:
        return list(self._by_id)

    def chat_modes(self) -> list[str]:
        return list(self._by_mode)

    def __iter__(self) -> Iterator[WorkflowDefinition]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, definition_id: object) -> bool:
        return definition_id in self._by_id


def default_registry() -> WorkflowRegistry:
    """Build a registry holding the built-in coach workflows."""
    from .definitions import BUILTIN_WORKFLOWS

    return WorkflowRegistry(BUILTIN_WORKFLOWS)


__all__ = [
    "WorkflowRegistry",
    "default_registry",
    "validate_workflow_definition",
]
