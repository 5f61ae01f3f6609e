"""
Multi-Trigger Detector

Identifies every real-life concern ("trigger") evidenced by a user
message, not just the strongest one, and recognizes named compound
patterns across co-occurring triggers.

Scoring per trigger definition:
- Patterns matching the current message contribute full weight
- Patterns matching the concatenated history contribute 0.3x
- A trigger qualifies at a total of 0.5 or more

CLINICAL_REVIEW_REQUIRED: Trigger definitions, weights and compound
rules must be reviewed by mental health professionals.
"""

from typing import Optional, Sequence

from serene.config.logging_config import get_logger
from serene.domain.enums.intervention_type import TriggerConfidence
from serene.domain.models.conversation import ConversationMessage
from serene.domain.models.trigger_analysis import (
    CompoundPattern,
    TriggerDetectionResult,
    TriggerMatch,
    TriggerSummary,
)
from serene.services.detection import pattern_library as lib
from serene.services.detection.weighted_patterns import (
    CompoundRule,
    TriggerDefinition,
    normalize_text,
)

logger = get_logger(__name__)


class TriggerDetector:
    """
    Detects all qualifying triggers for a message.

    Deterministic: identical message and history always yield an
    identical result, including tie order (definition order).
    """

    HISTORY_DECAY = 0.3
    QUALIFYING_SCORE = 0.5
    MIN_TRIGGERS_FOR_COMPOUND = 2

    def __init__(
        self,
        definitions: Sequence[TriggerDefinition] = lib.TRIGGER_DEFINITIONS,
        compound_rules: Sequence[CompoundRule] = lib.COMPOUND_RULES,
    ) -> None:
        """
        Initialize detector.

        Args:
            definitions: Trigger definitions in tie-break order
            compound_rules: Compound rules in evaluation order
        """
        self._definitions = tuple(definitions)
        self._compound_rules = tuple(compound_rules)

    def detect(
        self,
        message: str,
        history: Sequence[ConversationMessage],
    ) -> TriggerDetectionResult:
        """
        Detect all triggers in a message.

        Args:
            message: Current user message
            history: Prior messages of the session, oldest first

        Returns:
            TriggerDetectionResult (empty when nothing qualified)

        Raises:
            ValueError: If message or history is None
        """
        if message is None:
            raise ValueError("message must not be None")
        if history is None:
            raise ValueError("history must not be None")

        text = normalize_text(message)
        full_conversation = normalize_text(" ".join(msg.text for msg in history))

        qualifying: list[TriggerMatch] = []
        for definition in self._definitions:
            match = self._score_definition(definition, text, full_conversation)
            if match is not None:
                qualifying.append(match)

        # sorted() is stable: ties keep definition order
        ranked = tuple(sorted(qualifying, key=lambda m: m.score, reverse=True))

        by_category: dict[str, list[TriggerMatch]] = {}
        for match in qualifying:
            by_category.setdefault(match.category, []).append(match)

        compounds = self._find_compounds([m.trigger for m in ranked])

        summary = TriggerSummary(
            total_triggers=len(ranked),
            categories=tuple(by_category),
            high_confidence_triggers=sum(
                1 for m in ranked if m.confidence == TriggerConfidence.HIGH
            ),
            has_compound_pattern=bool(compounds),
        )

        if ranked:
            logger.debug(
                "Triggers detected",
                triggers=[m.trigger for m in ranked],
                categories=list(summary.categories),
                compound_patterns=[c.name for c in compounds],
            )

        return TriggerDetectionResult(
            all_triggers=ranked,
            triggers_by_category={k: tuple(v) for k, v in by_category.items()},
            compound_patterns=compounds,
            summary=summary,
        )

    def _score_definition(
        self,
        definition: TriggerDefinition,
        text: str,
        full_conversation: str,
    ) -> Optional[TriggerMatch]:
        """Score one definition against message and history."""
        score = 0.0
        labels: list[str] = []

        for weighted in definition.patterns:
            if weighted.matches(text):
                score += weighted.weight
                labels.append(f"current:{weighted.label}")
            if full_conversation and weighted.matches(full_conversation):
                score += weighted.weight * self.HISTORY_DECAY
                labels.append(f"history:{weighted.label}")

        if score < self.QUALIFYING_SCORE:
            return None

        return TriggerMatch(
            trigger=definition.key,
            score=score,
            category=definition.category,
            description=definition.description,
            confidence=TriggerConfidence.from_score(score),
            matched_labels=tuple(labels),
        )

    def _find_compounds(self, ranked_keys: list[str]) -> tuple[CompoundPattern, ...]:
        """Evaluate compound rules; only meaningful with 2+ triggers."""
        if len(ranked_keys) < self.MIN_TRIGGERS_FOR_COMPOUND:
            return ()

        found = []
        for rule in self._compound_rules:
            compound = rule.evaluate(ranked_keys)
            if compound is not None:
                found.append(compound)
        return tuple(found)


# Global detector instance
trigger_detector = TriggerDetector()
