"""Tap-choice catalogs for the identity aspiration flow."""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field


class ChoiceOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    tags: List[str] = Field(default_factory=list)
    emoji: Optional[str] = None


# Domain of becoming (the arena)
DOMAIN_OPTIONS = (
    ChoiceOption(id="creativity_expression", label="Creativity & expression", emoji="🎨",
                 tags=["creative", "expression", "mastery"]),
    ChoiceOption(id="leadership_influence", label="Leadership & influence", emoji="🌟",
                 tags=["leadership", "relationships"]),
    ChoiceOption(id="relationships_connection", label="Relationships & connection", emoji="🤝",
                 tags=["relationships", "helping"]),
    ChoiceOption(id="discipline_consistency", label="Discipline & consistency", emoji="📅",
                 tags=["discipline", "consistency"]),
    ChoiceOption(id="courage_confidence", label="Courage & confidence", emoji="💪",
                 tags=["courage", "self_belief"]),
    ChoiceOption(id="skill_mastery", label="Skill & mastery", emoji="🏅",
                 tags=["mastery", "strength"]),
    ChoiceOption(id="purpose_meaning", label="Purpose & meaning", emoji="🌱",
                 tags=["meaning", "values"]),
    ChoiceOption(id="adventure_exploration", label="Adventure & exploration", emoji="🧭",
                 tags=["exploration", "courage"]),
    ChoiceOption(id="making_building", label="Making & building", emoji="🛠️",
                 tags=["making", "creative", "strength"]),
)

# Motivational style (their drive)
MOTIVATION_OPTIONS = (
    ChoiceOption(id="make_new_things", label="Making things that didn't exist before",
                 tags=["creative", "making", "mastery"]),
    ChoiceOption(id="reliable_for_others", label="Being someone others can rely on",
                 tags=["reliability", "relationships", "helping"]),
    ChoiceOption(id="excellence_through_effort", label="Achieving excellence through effort",
                 tags=["excellence", "discipline", "mastery"]),
    ChoiceOption(id="solve_hard_problems", label="Figuring out problems others can't",
                 tags=["problem_solving", "mastery"]),
    ChoiceOption(id="help_people_feel_valued", label="Helping people feel valued",
                 tags=["helping", "relationships", "values"]),
    ChoiceOption(id="express_ideas_new_way", label="Expressing ideas in a new way",
                 tags=["expression", "creative", "new_thinking"]),
    ChoiceOption(id="become_stronger", label="Becoming stronger, mentally or physically",
                 tags=["strength", "mastery", "courage"]),
    ChoiceOption(id="stand_up_for_what_matters", label="Standing up for what matters",
                 tags=["values", "courage"]),
)

# Signature trait (their flavor)
SIGNATURE_TRAIT_OPTIONS = (
    ChoiceOption(id="curiosity", label="Curiosity", tags=["curiosity", "exploration"]),
    ChoiceOption(id="imagination", label="Imagination", tags=["imagination", "creative"]),
    ChoiceOption(id="loyalty", label="Loyalty", tags=["loyalty", "relationships"]),
    ChoiceOption(id="competitiveness", label="Competitiveness",
                 tags=["competitiveness", "excellence"]),
    ChoiceOption(id="humor", label="Sense of humor", tags=["humor", "relationships"]),
    ChoiceOption(id="calm", label="Calm", tags=["calm"]),
    ChoiceOption(id="intensity", label="Intensity", tags=["intensity"]),
    ChoiceOption(id="empathy", label="Empathy", tags=["empathy", "helping"]),
)

# Growth edge (their tension)
GROWTH_EDGE_OPTIONS = (
    ChoiceOption(id="staying_consistent", label="Staying consistent",
                 tags=["consistency", "discipline"]),
    ChoiceOption(id="believing_in_yourself", label="Believing in yourself", tags=["self_belief"]),
    ChoiceOption(id="getting_started", label="Getting started", tags=["starting"]),
    ChoiceOption(id="speaking_up", label="Speaking up", tags=["speaking_up", "courage"]),
    ChoiceOption(id="finishing_things", label="Finishing things", tags=["finishing", "discipline"]),
    ChoiceOption(id="managing_emotions", label="Managing emotions", tags=["emotion_regulation"]),
    ChoiceOption(id="being_patient", label="Being patient", tags=["patience"]),
    ChoiceOption(id="staying_focused", label="Staying focused", tags=["focus", "discipline"]),
)

# Everyday proud moment (embodiment)
PROUD_MOMENT_OPTIONS = (
    ChoiceOption(id="showing_up_when_hard", label="Showing up even when it's hard",
                 tags=["showing_up", "consistency", "courage"]),
    ChoiceOption(id="making_something_meaningful", label="Making something meaningful",
                 tags=["making_meaningful", "creative", "making"]),
    ChoiceOption(id="helping_someone", label="Helping someone", tags=["helping", "relationships"]),
    ChoiceOption(id="pushing_yourself", label="Pushing yourself", tags=["courage", "strength"]),
    ChoiceOption(id="thinking_in_new_way", label="Thinking in a new way",
                 tags=["new_thinking", "exploration"]),
    ChoiceOption(id="being_honest_or_brave", label="Being honest or brave",
                 tags=["honesty_bravery", "values", "courage"]),
    ChoiceOption(id="improving_a_skill", label="Improving a skill",
                 tags=["skill_improvement", "mastery"]),
    ChoiceOption(id="supporting_a_friend", label="Supporting a friend",
                 tags=["friend_support", "relationships", "helping"]),
)

TWEAK_OPTIONS = (
    ChoiceOption(id="more_calm", label="More calm / steady"),
    ChoiceOption(id="more_energy", label="More energy / boldness"),
    ChoiceOption(id="more_relationships", label="More about relationships"),
    ChoiceOption(id="more_mastery", label="More about skill & mastery"),
    ChoiceOption(id="simpler_language", label="Simpler language"),
)


def find_option(options: Sequence[ChoiceOption], option_id: str) -> Optional[ChoiceOption]:
    return next((o for o in options if o.id == option_id), None)


def require_options(options: Sequence[ChoiceOption], option_ids: Sequence[str]) -> List[str]:
    """Return ``option_ids`` deduplicated, raising ``ValueError`` on unknown ids."""
    if not option_ids:
        raise ValueError("At least one option must be selected")
    seen: List[str] = []
    for option_id in option_ids:
        if find_option(options, option_id) is None:
            raise ValueError(f"Unknown option id: {option_id}")
        if option_id not in seen:
            seen.append(option_id)
    return seen


def format_selection_labels(option_ids: Sequence[str], options: Sequence[ChoiceOption]) -> str:
    """Join the labels of ``option_ids`` as natural language ("a, b and c")."""
    labels = []
    for option_id in option_ids:
        option = find_option(options, option_id)
        labels.append(option.label if option else option_id)
    labels = [label for label in labels if label]

    if not labels:
        return ""
    if len(labels) == 1:
        return labels[0]
    return f"{', '.join(labels[:-1])} and {labels[-1]}"


def option_card_props(options: Sequence[ChoiceOption]) -> List[dict]:
    return [option.model_dump(exclude_none=True) for option in options]
