"""Domain enums package."""

from serene.domain.enums.session_stage import AnxietyStage, SupportedLanguage
from serene.domain.enums.intervention_type import InterventionType, TriggerConfidence

__all__ = [
    "AnxietyStage",
    "SupportedLanguage",
    "InterventionType",
    "TriggerConfidence",
]
