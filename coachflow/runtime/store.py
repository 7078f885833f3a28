"""In-memory ownership of workflow instances."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ..contracts import WorkflowInstance
from ..exceptions import InstanceOwnershipError

logger = logging.getLogger(__name__)


class InMemoryInstanceStore:
    """Track which workspace owns each live instance id.

    Instances live only for one screen visit; nothing here survives a process
    restart. An instance id may be claimed by at most one owner at a time.
    """

    def __init__(self) -> None:
        self._owners: Dict[str, object] = {}
        self._instances: Dict[str, WorkflowInstance] = {}

    def claim(self, instance: WorkflowInstance, owner: object) -> None:
        current = self._owners.get(instance.id)
        if current is not None and current is not owner:
            raise InstanceOwnershipError(
                f"Workflow instance {instance.id} is already owned by another workspace"
            )
        self._owners[instance.id] = owner
        self._instances[instance.id] = instance

    def save(self, instance: WorkflowInstance, owner: object) -> None:
        if self._owners.get(instance.id) is not owner:
            raise InstanceOwnershipError(
                f"Workflow instance {instance.id} is not owned by this workspace"
            )
        self._instances[instance.id] = instance

    def release(self, instance_id: str, owner: object) -> None:
        if self._owners.get(instance_id) is owner:
            del self._owners[instance_id]
            self._instances.pop(instance_id, None)
            logger.debug(f"Released workflow instance {instance_id}")

    def get(self, instance_id: str) -> Optional[WorkflowInstance]:
        return self._instances.get(instance_id)

    def is_claimed(self, instance_id: str) -> bool:
        return instance_id in self._owners

    def list_instances(self) -> list[WorkflowInstance]:
        return list(self._instances.values())
