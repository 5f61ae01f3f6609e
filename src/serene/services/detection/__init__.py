"""Detection services package."""

from serene.services.detection.anxiety_scorer import AnxietyScorer, ScoreBreakdown
from serene.services.detection.context_reconciler import ContextAwareReconciler
from serene.services.detection.trigger_detector import TriggerDetector

__all__ = [
    "AnxietyScorer",
    "ScoreBreakdown",
    "ContextAwareReconciler",
    "TriggerDetector",
]
