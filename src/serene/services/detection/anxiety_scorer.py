"""
Anxiety Scorer

Estimates a 0-10 anxiety level for a single user message from
layered weighted pattern matching and recent conversation context.

Order of operations (kept stable; breakpoints are tuned against it):
1. Emergency phrases short-circuit with their fixed weight
2. Sum of matched distress and dimension weights
3. Context bonuses from recent user messages
4. Duration, intensity and escalation multipliers
5. Additive life-stressor bonus
6. Pattern-count boost, then breakpoint mapping

CLINICAL_REVIEW_REQUIRED: Weights and breakpoints are heuristics.
SAFETY_CRITICAL: Emergency matches must always surface as 8-10.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from serene.config.logging_config import get_logger
from serene.domain.models.conversation import ConversationMessage, user_messages
from serene.services.detection import pattern_library as lib
from serene.services.detection.weighted_patterns import (
    first_match,
    max_multiplier,
    normalize_text,
    sum_matched_weights,
)

logger = get_logger(__name__)


@dataclass
class ScoreBreakdown:
    """
    Intermediate values of one scoring pass.

    Attributes:
        base_score: Summed pattern weight incl. context bonuses
        matched_labels: Labels of everything that contributed, in order
        duration_multiplier: Max matching duration modifier
        intensity_multiplier: Max matching intensity modifier
        escalation_factor: 1.3 when intensity markers rose sharply
        stressors: Matched life-stressor labels
        stressor_bonus: Additive stressor bonus after co-occurrence scaling
        pattern_boost: Distinct-label boost
        final_score: Continuous score before breakpoint mapping
        level: Mapped 0-10 level, None when no signal
        emergency: Label of the emergency pattern that fired, if any
    """

    base_score: float = 0.0
    matched_labels: list[str] = field(default_factory=list)
    duration_multiplier: float = 1.0
    intensity_multiplier: float = 1.0
    escalation_factor: float = 1.0
    stressors: list[str] = field(default_factory=list)
    stressor_bonus: float = 0.0
    pattern_boost: float = 1.0
    final_score: float = 0.0
    level: Optional[int] = None
    emergency: Optional[str] = None

    @property
    def distinct_labels(self) -> int:
        return len(set(self.matched_labels))

    def to_dict(self) -> dict:
        """Serialize for diagnostics (labels only, never text)."""
        return {
            "base_score": round(self.base_score, 3),
            "matched_labels": list(self.matched_labels),
            "duration_multiplier": self.duration_multiplier,
            "intensity_multiplier": self.intensity_multiplier,
            "escalation_factor": self.escalation_factor,
            "stressors": list(self.stressors),
            "stressor_bonus": round(self.stressor_bonus, 3),
            "pattern_boost": self.pattern_boost,
            "final_score": round(self.final_score, 3),
            "level": self.level,
            "emergency": self.emergency,
        }


class AnxietyScorer:
    """
    Pattern-based anxiety level estimator.

    Pure and deterministic: the same message and history always
    produce the same level. Absence of signal is None, not an error.
    """

    # Upper bound (inclusive) -> level; anything above the last bound is 10
    BREAKPOINTS: tuple[tuple[float, int], ...] = (
        (0.5, 1),
        (1.0, 2),
        (1.8, 3),
        (2.5, 4),
        (3.5, 5),
        (5.0, 6),
        (8.0, 7),
        (12.0, 8),
        (18.0, 9),
    )

    LENGTH_ESCALATION_RATIO = 1.5
    LENGTH_ESCALATION_BONUS = 0.8
    TOPIC_PERSISTENCE_BONUS = 0.5
    INTENSITY_ESCALATION_RATIO = 1.5
    ESCALATION_FACTOR = 1.3
    EMOTIONAL_FLOOR = 1.5
    GENERAL_DISTRESS_LEVEL = 2
    RECENT_WINDOW = 3

    def score(
        self,
        message: str,
        history: Sequence[ConversationMessage],
    ) -> Optional[int]:
        """
        Score one user message.

        Args:
            message: Current user message
            history: Prior messages of the session, oldest first

        Returns:
            Anxiety level 0-10, or None when no signal was found

        Raises:
            ValueError: If message or history is None
        """
        return self.analyze(message, history).level

    def analyze(
        self,
        message: str,
        history: Sequence[ConversationMessage],
    ) -> ScoreBreakdown:
        """
        Score one user message and keep every intermediate value.

        Args:
            message: Current user message
            history: Prior messages of the session, oldest first

        Returns:
            ScoreBreakdown with the mapped level
        """
        if message is None:
            raise ValueError("message must not be None")
        if history is None:
            raise ValueError("history must not be None")

        text = normalize_text(message)
        result = ScoreBreakdown()

        # SAFETY_CRITICAL: emergency phrases bypass all weighting
        emergency = first_match(text, lib.EMERGENCY_PATTERNS)
        if emergency is not None:
            logger.warning(
                "Emergency pattern matched",
                pattern=emergency.label,
                level=int(emergency.weight),
            )
            result.emergency = emergency.label
            result.final_score = emergency.weight
            result.level = int(emergency.weight)
            return result

        for table in (
            lib.MODERATE_DISTRESS_PATTERNS,
            lib.BEHAVIORAL_DISTRESS_PATTERNS,
            lib.COMMUNICATION_DISTRESS_PATTERNS,
            lib.DIMENSION_PATTERNS,
        ):
            weight, labels = sum_matched_weights(text, table)
            result.base_score += weight
            result.matched_labels.extend(labels)

        self._apply_context_bonuses(text, history, result)

        result.escalation_factor = self._escalation_factor(text, history)
        result.duration_multiplier = max_multiplier(text, lib.DURATION_MODIFIERS)
        result.intensity_multiplier = max_multiplier(text, lib.INTENSITY_MODIFIERS)

        self._apply_stressors(text, result)

        if (
            result.matched_labels
            and lib.FEELING_VERB.search(text)
            and lib.NEGATIVE_FEELING.search(text)
            and result.base_score < self.EMOTIONAL_FLOOR
        ):
            result.base_score = self.EMOTIONAL_FLOOR
            result.matched_labels.append("General emotional distress baseline")

        if not result.matched_labels and not result.stressors:
            if lib.GENERAL_DISTRESS.search(text):
                result.level = self.GENERAL_DISTRESS_LEVEL
            logger.debug("No weighted pattern matched", level=result.level)
            return result

        final = (
            result.base_score
            * result.duration_multiplier
            * result.intensity_multiplier
            * result.escalation_factor
        )
        final += result.stressor_bonus

        if result.distinct_labels >= 5:
            result.pattern_boost = 1.5
        elif result.distinct_labels >= 3:
            result.pattern_boost = 1.3
        final *= result.pattern_boost

        result.final_score = final
        result.level = self.to_level(final)

        logger.debug(
            "Anxiety scored",
            final_score=round(final, 2),
            level=result.level,
            labels=result.distinct_labels,
            stressors=len(result.stressors),
        )
        return result

    def to_level(self, final_score: float) -> Optional[int]:
        """
        Map a continuous score to a 0-10 level.

        Args:
            final_score: Continuous score

        Returns:
            Level, or None for a score of exactly 0
        """
        if final_score == 0:
            return None
        for upper, level in self.BREAKPOINTS:
            if final_score <= upper:
                return level
        return 10

    def _apply_context_bonuses(
        self,
        text: str,
        history: Sequence[ConversationMessage],
        result: ScoreBreakdown,
    ) -> None:
        """Length escalation and topic persistence against recent user messages."""
        recent = user_messages(history)[-self.RECENT_WINDOW:]
        if not recent:
            return

        previous = [normalize_text(msg.text) for msg in recent]
        average_length = sum(len(p) for p in previous) / len(previous)
        if len(text) > average_length * self.LENGTH_ESCALATION_RATIO:
            result.base_score += self.LENGTH_ESCALATION_BONUS
            result.matched_labels.append("Escalating message length")

        combined = " ".join(previous)
        for topic in lib.PERSISTENT_TOPICS:
            token = re.compile(rf"\b{topic}\b")
            if token.search(text) and token.search(combined):
                result.base_score += self.TOPIC_PERSISTENCE_BONUS
                result.matched_labels.append(f"Persistent {topic}-related concern")
                break

    def _escalation_factor(
        self,
        text: str,
        history: Sequence[ConversationMessage],
    ) -> float:
        """1.3 when intensity markers rose sharply since the last user message."""
        if len(history) <= 2:
            return 1.0

        recent_user = user_messages(history[-self.RECENT_WINDOW:])
        if not recent_user:
            return 1.0

        current = len(lib.INTENSITY_MARKER.findall(text))
        previous = len(lib.INTENSITY_MARKER.findall(normalize_text(recent_user[-1].text)))
        if current > previous * self.INTENSITY_ESCALATION_RATIO:
            logger.debug("Escalating intensity detected", current=current, previous=previous)
            return self.ESCALATION_FACTOR
        return 1.0

    def _apply_stressors(self, text: str, result: ScoreBreakdown) -> None:
        """Additive life-stressor bonus, amplified on co-occurrence."""
        bonus, labels = sum_matched_weights(text, lib.LIFE_STRESSOR_PATTERNS)
        if len(labels) >= 3:
            bonus *= 1.4
        elif len(labels) == 2:
            bonus *= 1.2
        result.stressors = labels
        result.stressor_bonus = bonus


# Global scorer instance
anxiety_scorer = AnxietyScorer()
