"""Domain models package."""

from serene.domain.models.conversation import ConversationMessage, user_messages
from serene.domain.models.session import (
    AnxietySession,
    SessionUpdate,
    is_valid_anxiety_level,
)
from serene.domain.models.trigger_analysis import (
    TriggerMatch,
    CompoundPattern,
    TriggerSummary,
    TriggerDetectionResult,
)
from serene.domain.models.intervention import Intervention, TriggerCategory

__all__ = [
    # Conversation
    "ConversationMessage",
    "user_messages",
    # Session
    "AnxietySession",
    "SessionUpdate",
    "is_valid_anxiety_level",
    # Trigger analysis
    "TriggerMatch",
    "CompoundPattern",
    "TriggerSummary",
    "TriggerDetectionResult",
    # Catalog entries
    "Intervention",
    "TriggerCategory",
]
