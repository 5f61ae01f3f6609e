"""Session flow services package."""

from serene.services.session.intervention_selector import InterventionSelector
from serene.services.session.reply_intents import (
    ReplyIntent,
    ReplyIntentClassifier,
    TurnSignal,
)
from serene.services.session.stage_machine import StageMachine

__all__ = [
    "InterventionSelector",
    "ReplyIntent",
    "ReplyIntentClassifier",
    "TurnSignal",
    "StageMachine",
]
