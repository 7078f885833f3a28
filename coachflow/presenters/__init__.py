"""Step presenters layered on top of ``AgentWorkspace``."""

from .guided import GuidedStepPresenter
from .identity_aspiration import (
    AspirationPayload,
    AspirationPhase,
    GenerationOutcome,
    IdentityAnswers,
    IdentityAspirationPresenter,
    build_local_aspiration_fallback,
    build_next_small_step,
    parse_aspiration_reply,
    parse_quality_score,
)
from .options import ChoiceOption, format_selection_labels

__all__ = [
    "AspirationPayload",
    "AspirationPhase",
    "ChoiceOption",
    "GenerationOutcome",
    "GuidedStepPresenter",
    "IdentityAnswers",
    "IdentityAspirationPresenter",
    "build_local_aspiration_fallback",
    "build_next_small_step",
    "format_selection_labels",
    "parse_aspiration_reply",
    "parse_quality_score",
]
