"""Orchestration services package."""

from serene.services.orchestration.conversation_engine import (
    ConversationEngine,
    MessageAnalysis,
    TurnResult,
)

__all__ = [
    "ConversationEngine",
    "MessageAnalysis",
    "TurnResult",
]
