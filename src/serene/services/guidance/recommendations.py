"""
Therapeutic Recommendations

Short clinician-facing notes derived from trigger complexity,
compound patterns and the assessed anxiety level. Attached to the
outbound signal as recommended therapeutic notes.

CLINICAL_REVIEW_REQUIRED: Recommendation wording and thresholds.
"""

from typing import Optional

from serene.domain.models.trigger_analysis import TriggerDetectionResult


HIGH_ANXIETY_LEVEL = 7

COMPLEX_TRIGGER_NOTES: tuple[str, ...] = (
    "Multi-modal crisis intervention required for complex trigger situation",
    "Address interconnected stressors systematically",
)
MULTIPLE_TRIGGER_NOTES: tuple[str, ...] = (
    "Integrated therapeutic approach for multiple triggers",
)

# Compound pattern name -> notes, in output order
COMPOUND_NOTES: dict[str, tuple[str, ...]] = {
    "accident_financial_job_crisis": (
        "Emergency practical support needed for cascading crisis",
        "Address immediate safety and stability concerns",
    ),
    "isolated_multi_stressor": (
        "Social support network building critical for coping",
        "Address isolation as both trigger and barrier to healing",
    ),
}

HIGH_ANXIETY_NOTES: tuple[str, ...] = (
    "High anxiety level requires immediate intervention",
    "Consider crisis stabilization techniques",
)


def therapeutic_recommendations(
    triggers: TriggerDetectionResult,
    anxiety_level: Optional[int],
) -> list[str]:
    """
    Build recommended therapeutic notes.

    Args:
        triggers: Trigger detection result
        anxiety_level: Reconciled anxiety level (None = not assessed)

    Returns:
        Notes in a stable order: complexity, compound, severity
    """
    notes: list[str] = []

    total = triggers.summary.total_triggers
    if total >= 4:
        notes.extend(COMPLEX_TRIGGER_NOTES)
    elif total >= 2:
        notes.extend(MULTIPLE_TRIGGER_NOTES)

    for name, compound_notes in COMPOUND_NOTES.items():
        if triggers.has_compound(name):
            notes.extend(compound_notes)

    if anxiety_level is not None and anxiety_level >= HIGH_ANXIETY_LEVEL:
        notes.extend(HIGH_ANXIETY_NOTES)

    return notes
