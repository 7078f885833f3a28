"""Exception hierarchy for coachflow."""

from __future__ import annotations


class CoachflowError(Exception):
    """Base class for all coachflow errors."""


class WorkflowConfigError(CoachflowError, ValueError):
    """A workflow definition is malformed (dangling step reference, missing id, ...)."""


class WorkflowNotFoundError(WorkflowConfigError, KeyError):
    """No workflow definition is registered under the requested id or chat mode."""

    def __str__(self) -> str:  # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else ""


class UnknownStepError(CoachflowError, ValueError):
    """A step id does not exist in the definition an instance belongs to."""


class InstanceOwnershipError(CoachflowError, RuntimeError):
    """A workflow instance id is already owned by another workspace."""
