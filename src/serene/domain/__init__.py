"""
SERENE Domain Layer

Core entities, value objects and static catalogs.
These models are independent of any storage or transport.
"""

from serene.domain.models.conversation import ConversationMessage
from serene.domain.models.session import AnxietySession, SessionUpdate
from serene.domain.models.trigger_analysis import (
    TriggerMatch,
    CompoundPattern,
    TriggerSummary,
    TriggerDetectionResult,
)
from serene.domain.enums.session_stage import AnxietyStage, SupportedLanguage
from serene.domain.enums.intervention_type import InterventionType, TriggerConfidence

__all__ = [
    "ConversationMessage",
    "AnxietySession",
    "SessionUpdate",
    "TriggerMatch",
    "CompoundPattern",
    "TriggerSummary",
    "TriggerDetectionResult",
    "AnxietyStage",
    "SupportedLanguage",
    "InterventionType",
    "TriggerConfidence",
]
