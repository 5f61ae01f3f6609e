"""
Intervention and Confidence Enumerations

CLINICAL_REVIEW_REQUIRED: Intervention groupings and confidence
thresholds should be validated by mental health professionals.
"""

from enum import StrEnum


class InterventionType(StrEnum):
    """Therapeutic technique families offered during a session."""

    GROUNDING = "grounding"
    BREATHING = "breathing"
    COGNITIVE = "cognitive"
    MINDFULNESS = "mindfulness"
    PHYSICAL = "physical"


class TriggerConfidence(StrEnum):
    """
    Confidence that a detected trigger is really driving the anxiety.

    Derived from the trigger's cumulative pattern score.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_score(cls, score: float) -> "TriggerConfidence":
        """
        Map a cumulative trigger score to a confidence band.

        Args:
            score: Summed pattern weight for the trigger

        Returns:
            HIGH for >= 2.0, MEDIUM for >= 1.0, LOW otherwise
        """
        if score >= 2.0:
            return cls.HIGH
        if score >= 1.0:
            return cls.MEDIUM
        return cls.LOW
