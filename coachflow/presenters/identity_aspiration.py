"""Tap-first identity aspiration presenter for first-time onboarding.

The presenter walks the user through five tap-only questions and an optional
nickname, then synthesizes an identity Arc:

1. ask the model for a JSON candidate,
2. parse it,
3. ask the model again to judge the candidate on a 0-2 rubric,
4. keep the candidate unless the judged total is below the quality threshold,
5. otherwise (or on any transport or parse failure) use a deterministic local
   synthesis built from the answers.

The onboarding workflow manages its own lifecycle, so this presenter finishes
the instance explicitly once the user adopts the Arc.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..constants import QUALITY_RUBRIC_DIMENSIONS
from ..contracts import Arc, ChatTurn
from ..llm.base import ChatOptions
from ..runtime.orchestrator import AgentWorkspace
from ..utils import extract_json_object
from .options import (
    DOMAIN_OPTIONS,
    GROWTH_EDGE_OPTIONS,
    MOTIVATION_OPTIONS,
    PROUD_MOMENT_OPTIONS,
    SIGNATURE_TRAIT_OPTIONS,
    TWEAK_OPTIONS,
    find_option,
    format_selection_labels,
    option_card_props,
    require_options,
)

logger = logging.getLogger(__name__)

GENERATE_STEP_ID = "aspiration_generate"
NEXT_SMALL_STEP_PREFIX = "Your next small step: "


class AspirationPhase(str, Enum):
    DOMAIN = "domain"
    MOTIVATION = "motivation"
    TRAIT = "trait"
    GROWTH = "growth"
    PROUD_MOMENT = "proud_moment"
    NICKNAME = "nickname"
    GENERATING = "generating"
    REVEAL = "reveal"
    TWEAK = "tweak"
    DONE = "done"


class GenerationOutcome(str, Enum):
    """How the last generated aspiration was arrived at."""

    ACCEPTED = "accepted"
    ACCEPTED_UNSCORED = "accepted_unscored"
    REJECTED_LOW_SCORE = "rejected_low_score"
    FALLBACK_PARSE_FAILURE = "fallback_parse_failure"
    FALLBACK_TRANSPORT_FAILURE = "fallback_transport_failure"


class AspirationPayload(BaseModel):
    arc_name: str
    aspiration_sentence: str
    next_small_step: str

    def as_collected(self) -> Dict[str, str]:
        return {
            "arcName": self.arc_name,
            "arcNarrative": self.aspiration_sentence,
            "nextSmallStep": self.next_small_step,
        }


class IdentityAnswers(BaseModel):
    domain_ids: List[str] = Field(default_factory=list)
    motivation_ids: List[str] = Field(default_factory=list)
    signature_trait_ids: List[str] = Field(default_factory=list)
    growth_edge_ids: List[str] = Field(default_factory=list)
    proud_moment_ids: List[str] = Field(default_factory=list)
    nickname: Optional[str] = None

    @property
    def domain(self) -> str:
        return format_selection_labels(self.domain_ids, DOMAIN_OPTIONS)

    @property
    def motivation(self) -> str:
        return format_selection_labels(self.motivation_ids, MOTIVATION_OPTIONS)

    @property
    def signature_trait(self) -> str:
        return format_selection_labels(self.signature_trait_ids, SIGNATURE_TRAIT_OPTIONS)

    @property
    def growth_edge(self) -> str:
        return format_selection_labels(self.growth_edge_ids, GROWTH_EDGE_OPTIONS)

    @property
    def proud_moment(self) -> str:
        return format_selection_labels(self.proud_moment_ids, PROUD_MOMENT_OPTIONS)

    @property
    def is_complete(self) -> bool:
        return all(
            (self.domain, self.motivation, self.signature_trait, self.growth_edge, self.proud_moment)
        )


def build_next_small_step(proud_moment_ids: Sequence[str]) -> str:
    """Pick a gentle next step that echoes the user's proud moment."""
    ids = set(proud_moment_ids)
    if "improving_a_skill" in ids:
        return (
            NEXT_SMALL_STEP_PREFIX
            + "Set a 10-minute timer and practice one small part of a skill you care about."
        )
    if ids & {"helping_someone", "supporting_a_friend"}:
        return (
            NEXT_SMALL_STEP_PREFIX
            + "Reach out to one person with a small act of help or encouragement."
        )
    if "making_something_meaningful" in ids:
        return NEXT_SMALL_STEP_PREFIX + "Make a tiny version of something that matters to you."
    if "showing_up_when_hard" in ids:
        return NEXT_SMALL_STEP_PREFIX + "Pick one small way to show up today, even if it's hard."
    return NEXT_SMALL_STEP_PREFIX + "Practice what matters for just 5 minutes."


def parse_aspiration_reply(
    reply: str, proud_moment_ids: Sequence[str] = ()
) -> Optional[AspirationPayload]:
    """Parse a generation reply; ``None`` when it lacks a name or narrative."""
    data = extract_json_object(reply)
    if data is None:
        return None

    arc_name = data.get("arcName")
    sentence = data.get("aspirationSentence")
    if not isinstance(arc_name, str) or not arc_name.strip():
        return None
    if not isinstance(sentence, str) or not sentence.strip():
        return None

    next_step = data.get("nextSmallStep")
    if not isinstance(next_step, str) or not next_step.strip():
        next_step = build_next_small_step(proud_moment_ids)
    return AspirationPayload(
        arc_name=arc_name.strip(),
        aspiration_sentence=sentence.strip(),
        next_small_step=next_step.strip(),
    )


def build_local_aspiration_fallback(answers: IdentityAnswers) -> Optional[AspirationPayload]:
    """Deterministic synthesis from the tapped answers alone."""
    if not answers.is_complete:
        return None

    nickname = (answers.nickname or "").strip()
    if nickname:
        arc_name = nickname
    else:
        first_domain_word = answers.domain.split(" ")[0]
        trait = answers.signature_trait
        if trait.startswith("Your "):
            trait = trait[len("Your "):]
        name_parts = [part for part in (first_domain_word, trait) if part]
        arc_name = " ".join(name_parts) if name_parts else "Growing into your next version"

    sentence = (
        f"You're the kind of person who is growing in **{answers.domain.lower()}**, "
        f"powered by {answers.motivation.lower()}. Your {answers.signature_trait.lower()} "
        "is already a real strength, and this next chapter keeps building on it while "
        f"you face {answers.growth_edge.lower()} with honesty. On normal days, that often "
        f"looks like {answers.proud_moment.lower()}."
    )
    return AspirationPayload(
        arc_name=arc_name,
        aspiration_sentence=sentence,
        next_small_step=build_next_small_step(answers.proud_moment_ids),
    )


def build_generation_prompt(answers: IdentityAnswers, tweak_hint: Optional[str] = None) -> str:
    inputs = [
        f"domain of becoming: {answers.domain}",
        f"motivational style: {answers.motivation}",
        f"signature trait: {answers.signature_trait}",
        f"growth edge: {answers.growth_edge}",
        f"everyday proud moment: {answers.proud_moment}",
    ]
    if answers.nickname:
        inputs.append(f"nickname: {answers.nickname}")
    if tweak_hint:
        inputs.append(f"user tweak preference: {tweak_hint}")

    return "\n".join(
        [
            "You are generating a deep Identity Arc for a user based on their answers "
            "to a short tap-only onboarding quiz.",
            "",
            "An Identity Arc is a vivid description of the user's future self, grounded "
            "in identity and values, written in 3-5 sentences.",
            "",
            "Hard rules:",
            "- Do NOT use first person.",
            "- Do NOT give steps, advice, or growth edges in the description.",
            "- Do NOT mention questions, options, or how the Arc was constructed.",
            "- Do NOT use therapy language or corporate tone.",
            "",
            'Arc name: "The {Identity Noun}". If a nickname is provided, treat it as a '
            "high-priority inspiration for the name.",
            "",
            "Additionally, generate a single tiny next step that helps them live this Arc.",
            "",
            "Output format (JSON only, no backticks, no extra commentary):",
            "{",
            '  "arcName": string,',
            '  "aspirationSentence": string,',
            f'  "nextSmallStep": string starting with "{NEXT_SMALL_STEP_PREFIX}"',
            "}",
            "",
            "Inputs:",
            *[f"- {line}" for line in inputs],
        ]
    )


def build_judge_prompt(answers: IdentityAnswers, candidate: AspirationPayload) -> str:
    score_lines = [f'    "{dimension}": 0,' for dimension in QUALITY_RUBRIC_DIMENSIONS]
    score_lines[-1] = score_lines[-1].rstrip(",")
    return "\n".join(
        [
            "You are evaluating the quality of an Identity Arc generated for a user.",
            "",
            "Rate it on a 0-2 scale for each dimension:",
            "1) specificity: how clearly it reflects this particular user rather than anyone.",
            "2) coherence: how well the sentences hang together around one identity thread.",
            "3) depth: whether it includes values, meaning, or worldview (not just traits).",
            "4) voice: whether the tone fits a thoughtful, identity-focused app.",
            "5) constraint_adherence: whether it follows the requested structure and "
            'avoids advice or "you should" language.',
            "",
            "Return JSON only in this shape (no extra commentary, no markdown):",
            "{",
            '  "scores": {',
            *score_lines,
            "  },",
            '  "total_score": 0,',
            '  "notes": "one or two short sentences of feedback"',
            "}",
            "",
            "User identity signals (high-level):",
            f"- domain of becoming: {answers.domain or 'unknown'}",
            f"- motivational style: {answers.motivation or 'unknown'}",
            f"- signature trait: {answers.signature_trait or 'unknown'}",
            f"- growth edge: {answers.growth_edge or 'unknown'}",
            f"- everyday proud moment: {answers.proud_moment or 'unknown'}",
            "",
            f"Candidate Arc name: {candidate.arc_name}",
            f"Candidate Arc narrative: {candidate.aspiration_sentence}",
        ]
    )


def parse_quality_score(reply: str) -> Optional[float]:
    """Read ``total_score`` (or ``totalScore``) from a judge reply."""
    data = extract_json_object(reply)
    if data is None:
        return None
    for key in ("total_score", "totalScore"):
        value = data.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    return None


class IdentityAspirationPresenter:
    """Drives the ``firstTimeOnboarding`` workflow end to end."""

    def __init__(
        self,
        workspace: AgentWorkspace,
        *,
        threshold: Optional[float] = None,
        on_complete: Optional[Callable[[Arc], None]] = None,
    ) -> None:
        self.workspace = workspace
        self.threshold = (
            threshold if threshold is not None else workspace.config.quality.threshold
        )
        self.on_complete = on_complete
        self.answers = IdentityAnswers()
        self.phase = AspirationPhase.DOMAIN
        self.aspiration: Optional[AspirationPayload] = None
        self.last_outcome: Optional[GenerationOutcome] = None
        self.last_score: Optional[float] = None
        self.adopted_arc: Optional[Arc] = None
        self._generating = False

    # ------------------------------------------------------------------
    def _require_phase(self, *phases: AspirationPhase) -> None:
        if self.phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise ValueError(f"Expected phase {allowed}, presenter is in {self.phase.value}")

    def _show_static_copy(self, step_id: str) -> None:
        definition = self.workspace.definition
        step = definition.get_step(step_id) if definition else None
        if step is not None and step.static_copy:
            self.workspace.timeline.upsert_assistant_message(
                f"{self.workspace.instance.id}:{step_id}", step.static_copy
            )

    def _show_question(self, step_id: str, options) -> None:
        self.workspace.timeline.append_card(
            "ChoiceCard", props={"options": option_card_props(options)}, step_id=step_id
        )

    def _options(self, step_id: Optional[str]) -> ChatOptions:
        definition, instance = self.workspace.definition, self.workspace.instance
        return ChatOptions(
            mode=self.workspace.mode,
            workflow_definition_id=definition.id if definition else None,
            workflow_instance_id=instance.id if instance else None,
            workflow_step_id=step_id,
        )

    # ------------------------------------------------------------------
    def start(self) -> None:
        """Post the soft-start copy and open the first question."""
        step = self.workspace.current_step()
        if step is None or step.id != "soft_start":
            return
        self._show_static_copy("soft_start")
        self.workspace.complete_step("soft_start")
        self._show_question("vibe_select", DOMAIN_OPTIONS)

    def select_domain(self, option_ids: Sequence[str]) -> None:
        self._require_phase(AspirationPhase.DOMAIN)
        self.answers.domain_ids = require_options(DOMAIN_OPTIONS, option_ids)
        self.workspace.complete_step("vibe_select", {"domain": self.answers.domain})
        self.phase = AspirationPhase.MOTIVATION
        self._show_question("social_mirror", MOTIVATION_OPTIONS)

    def select_motivation(self, option_ids: Sequence[str]) -> None:
        self._require_phase(AspirationPhase.MOTIVATION)
        self.answers.motivation_ids = require_options(MOTIVATION_OPTIONS, option_ids)
        self.workspace.complete_step("social_mirror", {"motivation": self.answers.motivation})
        self.phase = AspirationPhase.TRAIT
        self._show_question("core_strength", SIGNATURE_TRAIT_OPTIONS)

    def select_signature_trait(self, option_ids: Sequence[str]) -> None:
        self._require_phase(AspirationPhase.TRAIT)
        self.answers.signature_trait_ids = require_options(SIGNATURE_TRAIT_OPTIONS, option_ids)
        self.workspace.complete_step(
            "core_strength", {"signatureTrait": self.answers.signature_trait}
        )
        self.phase = AspirationPhase.GROWTH
        self._show_question("growth_edge", GROWTH_EDGE_OPTIONS)

    def select_growth_edge(self, option_ids: Sequence[str]) -> None:
        self._require_phase(AspirationPhase.GROWTH)
        self.answers.growth_edge_ids = require_options(GROWTH_EDGE_OPTIONS, option_ids)
        self.workspace.complete_step("growth_edge", {"growthEdge": self.answers.growth_edge})
        self.phase = AspirationPhase.PROUD_MOMENT
        self._show_question("everyday_moment", PROUD_MOMENT_OPTIONS)

    def select_proud_moment(self, option_ids: Sequence[str]) -> None:
        self._require_phase(AspirationPhase.PROUD_MOMENT)
        self.answers.proud_moment_ids = require_options(PROUD_MOMENT_OPTIONS, option_ids)
        self.workspace.complete_step(
            "everyday_moment", {"proudMoment": self.answers.proud_moment}
        )
        self.phase = AspirationPhase.NICKNAME

    def submit_nickname(self, nickname: Optional[str]) -> None:
        self._require_phase(AspirationPhase.NICKNAME)
        cleaned = (nickname or "").strip() or None
        self.answers.nickname = cleaned
        self.workspace.complete_step("nickname_optional", {"nickname": cleaned})
        self.phase = AspirationPhase.GENERATING

    def skip_nickname(self) -> None:
        self.submit_nickname(None)

    # ------------------------------------------------------------------
    async def score_aspiration(self, candidate: AspirationPayload) -> Optional[float]:
        """Judge ``candidate``; ``None`` means no score was available."""
        messages = [ChatTurn(role="user", content=build_judge_prompt(self.answers, candidate))]
        try:
            reply = await self.workspace.model_client.send_chat(
                messages, self._options(GENERATE_STEP_ID)
            )
        except Exception as exc:
            logger.warning(f"Failed to score identity Arc quality: {exc}")
            return None
        score = parse_quality_score(reply)
        if score is None:
            logger.warning("Identity Arc quality reply had no usable total_score")
        return score

    async def generate(self, tweak_hint: Optional[str] = None) -> Optional[AspirationPayload]:
        """Synthesize the aspiration and move to the reveal phase.

        Returns ``None`` when the answers are incomplete, when a generation is
        already in flight, or when the workspace moved on to another instance
        while the model calls were in flight.
        """
        if not self.answers.is_complete:
            logger.warning("Cannot generate an identity Arc before all answers are in")
            return None
        self._require_phase(AspirationPhase.GENERATING, AspirationPhase.TWEAK)
        if self._generating:
            logger.info("Identity Arc generation already in flight; ignoring duplicate request")
            return None

        self._generating = True
        try:
            return await self._generate(tweak_hint)
        finally:
            self._generating = False

    async def _generate(self, tweak_hint: Optional[str]) -> Optional[AspirationPayload]:
        session = self.workspace.session
        self.phase = AspirationPhase.GENERATING
        self.last_score = None

        prompt = build_generation_prompt(self.answers, tweak_hint)
        candidate: Optional[AspirationPayload] = None
        try:
            reply = await self.workspace.model_client.send_chat(
                [ChatTurn(role="user", content=prompt)], self._options(GENERATE_STEP_ID)
            )
        except Exception as exc:
            logger.warning(f"Identity Arc generation failed, using local fallback: {exc}")
            self.last_outcome = GenerationOutcome.FALLBACK_TRANSPORT_FAILURE
        else:
            candidate = parse_aspiration_reply(reply, self.answers.proud_moment_ids)
            if candidate is None:
                logger.warning("Aspiration JSON parse failed, falling back to local synthesis")
                self.last_outcome = GenerationOutcome.FALLBACK_PARSE_FAILURE

        if candidate is not None and self.workspace.is_current(session):
            score = await self.score_aspiration(candidate)
            self.last_score = score
            if score is not None and score < self.threshold:
                logger.warning(
                    f"Identity Arc quality below threshold ({score} < {self.threshold}), "
                    "using local fallback instead"
                )
                self.last_outcome = GenerationOutcome.REJECTED_LOW_SCORE
                candidate = None
            elif score is None:
                self.last_outcome = GenerationOutcome.ACCEPTED_UNSCORED
            else:
                self.last_outcome = GenerationOutcome.ACCEPTED

        if not self.workspace.is_current(session):
            logger.info("Discarding identity Arc generated for a previous workflow instance")
            return None

        if candidate is None:
            candidate = build_local_aspiration_fallback(self.answers)

        self.aspiration = candidate
        self.workspace.complete_step(GENERATE_STEP_ID, candidate.as_collected())
        self._show_static_copy("aspiration_reveal")
        self.workspace.complete_step("aspiration_reveal")
        self.workspace.timeline.append_card(
            "AspirationRevealCard",
            props={
                "arcName": candidate.arc_name,
                "aspirationSentence": candidate.aspiration_sentence,
                "nextSmallStep": candidate.next_small_step,
            },
            step_id="aspiration_reveal",
        )
        self.phase = AspirationPhase.REVEAL
        return candidate

    async def request_tweak(self, option_id: str) -> Optional[AspirationPayload]:
        """Send the user back through generation with a tweak preference."""
        self._require_phase(AspirationPhase.REVEAL)
        option = find_option(TWEAK_OPTIONS, option_id)
        if option is None:
            raise ValueError(f"Unknown tweak option: {option_id}")

        step = self.workspace.current_step()
        self.workspace.complete_step(
            "aspiration_confirm",
            {"confirmed": False},
            next_step_id_override=step.next_step_on_edit_id if step else None,
        )
        self.phase = AspirationPhase.TWEAK
        return await self.generate(tweak_hint=option.label)

    def confirm(self) -> Optional[Arc]:
        """Adopt the revealed Arc and finish the onboarding workflow.

        Confirming again once the Arc is adopted returns the same Arc and does
        not call ``on_complete`` a second time.
        """
        if self.phase == AspirationPhase.DONE:
            return self.adopted_arc
        self._require_phase(AspirationPhase.REVEAL)
        current = self.workspace.instance
        if current is None or not current.is_active:
            logger.warning("confirm ignored: onboarding instance is no longer active")
            return None
        step = self.workspace.current_step()
        self.workspace.complete_step(
            "aspiration_confirm",
            {"confirmed": True},
            next_step_id_override=step.next_step_on_confirm_id if step else None,
        )
        self._show_static_copy("closing_arc")
        self.workspace.complete_step("closing_arc")

        instance = self.workspace.instance
        outcome: Dict[str, Any] = dict(instance.collected_data) if instance else {}
        self.workspace.finish_workflow(outcome)

        self.adopted_arc = Arc(
            id=f"arc-{instance.id}" if instance else "arc-onboarding",
            name=self.aspiration.arc_name,
            status="active",
            narrative=self.aspiration.aspiration_sentence,
        )
        self.phase = AspirationPhase.DONE
        if self.on_complete is not None:
            self.on_complete(self.adopted_arc)
        return self.adopted_arc
