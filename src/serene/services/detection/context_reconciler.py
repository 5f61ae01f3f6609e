"""
Context-Aware Reconciler

Merges the scorer's raw level with the trigger detection result:
several triggers, high-anxiety triggers and compound patterns each
raise the final level, since a message carrying them reflects a more
complex situation than its wording alone shows.
"""

import math
from typing import Optional

from serene.config.logging_config import get_logger
from serene.domain.models.session import MAX_ANXIETY_LEVEL, MIN_ANXIETY_LEVEL
from serene.domain.models.trigger_analysis import TriggerDetectionResult
from serene.services.detection.pattern_library import HIGH_ANXIETY_TRIGGERS

logger = get_logger(__name__)


class ContextAwareReconciler:
    """
    Adjusts a raw anxiety level by trigger complexity.

    Multipliers stack multiplicatively:
    - 1.5 for 4+ triggers, else 1.3 for 2+
    - 1.2 when any trigger is in the high-anxiety subset
    - 1.4 when any compound pattern fired
    """

    TRIGGER_BASELINE = 1
    MANY_TRIGGERS = 4
    SEVERAL_TRIGGERS = 2
    MANY_TRIGGERS_MULTIPLIER = 1.5
    SEVERAL_TRIGGERS_MULTIPLIER = 1.3
    HIGH_ANXIETY_MULTIPLIER = 1.2
    COMPOUND_MULTIPLIER = 1.4

    def __init__(self, high_anxiety_triggers: frozenset[str] = HIGH_ANXIETY_TRIGGERS) -> None:
        self._high_anxiety = high_anxiety_triggers

    def reconcile(
        self,
        raw_score: Optional[int],
        triggers: TriggerDetectionResult,
    ) -> Optional[int]:
        """
        Reconcile a raw level with detected triggers.

        Args:
            raw_score: Level from the anxiety scorer (None = no signal)
            triggers: Trigger detection result for the same message

        Returns:
            Adjusted level in [0, 10], or None when neither a level
            nor a trigger was found
        """
        if raw_score is None:
            if not triggers.all_triggers:
                return None
            raw_score = self.TRIGGER_BASELINE

        multiplier = self.multiplier(triggers)
        # Round half up; Python's round() is banker's rounding
        adjusted = math.floor(raw_score * multiplier + 0.5)
        final = max(MIN_ANXIETY_LEVEL, min(MAX_ANXIETY_LEVEL, adjusted))

        if final != raw_score:
            logger.debug(
                "Anxiety level adjusted by trigger context",
                raw_score=raw_score,
                multiplier=round(multiplier, 3),
                final=final,
            )
        return final

    def multiplier(self, triggers: TriggerDetectionResult) -> float:
        """Combined complexity multiplier for a detection result."""
        total = triggers.summary.total_triggers
        multiplier = 1.0

        if total >= self.MANY_TRIGGERS:
            multiplier *= self.MANY_TRIGGERS_MULTIPLIER
        elif total >= self.SEVERAL_TRIGGERS:
            multiplier *= self.SEVERAL_TRIGGERS_MULTIPLIER

        if any(key in self._high_anxiety for key in triggers.trigger_keys):
            multiplier *= self.HIGH_ANXIETY_MULTIPLIER

        if triggers.compound_patterns:
            multiplier *= self.COMPOUND_MULTIPLIER

        return multiplier


# Global reconciler instance
context_reconciler = ContextAwareReconciler()
