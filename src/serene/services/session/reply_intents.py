"""
Reply Intent Classifier

Adapter between free text and the stage machine. Converts the
assistant reply into a set of intents (e.g. "asked for a 0-10
rating") and the user message into extracted values (first integer,
named trigger category), so the stage machine itself never looks
at text.

Cue phrases cover every supported language regardless of the
session language; reply wording is produced by an external
generator and may drift.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from serene.domain.catalog.trigger_categories import TRIGGER_CATEGORIES
from serene.domain.enums.session_stage import SupportedLanguage
from serene.domain.models.intervention import TriggerCategory
from serene.services.detection.weighted_patterns import normalize_text


class ReplyIntent(StrEnum):
    """What the assistant reply is doing, as far as stage flow cares."""

    ASKED_FOR_TRIGGER = "asked_for_trigger"
    ASKED_FOR_SCALE = "asked_for_scale"
    GUIDING_EXERCISE = "guiding_exercise"
    ASKED_FOR_CURRENT_RATING = "asked_for_current_rating"
    ASKED_WHAT_HELPED = "asked_what_helped"
    CLOSING = "closing"


@dataclass(frozen=True)
class TurnSignal:
    """
    Structured input to the stage machine for one conversation turn.

    Attributes:
        intents: Intents recognized in the assistant reply
        user_message: Raw user message (recorded verbatim, never inspected)
        rating: First signed integer in the user message, unvalidated
        trigger_category: Trigger category id named by the user message
    """

    intents: frozenset[ReplyIntent] = field(default_factory=frozenset)
    user_message: str = ""
    rating: Optional[int] = None
    trigger_category: Optional[str] = None

    def has(self, intent: ReplyIntent) -> bool:
        return intent in self.intents


class ReplyIntentClassifier:
    """
    Phrase-based classifier for assistant replies and user answers.

    Matching is case-insensitive and apostrophe-normalized.
    """

    CUES: dict[ReplyIntent, tuple[str, ...]] = {
        ReplyIntent.ASKED_FOR_TRIGGER: (
            "what's triggering your anxiety",
            "what is triggering your anxiety",
            "qué está provocando tu ansiedad",
            "qué desencadena tu ansiedad",
            "o que está provocando sua ansiedade",
            "o que está desencadeando sua ansiedade",
        ),
        ReplyIntent.ASKED_FOR_SCALE: (
            "scale of 0-10",
            "scale of 0 to 10",
            "scale from 0 to 10",
            "escala del 0 al 10",
            "escala de 0 a 10",
            "escala de 0-10",
        ),
        ReplyIntent.GUIDING_EXERCISE: (
            "guide you through",
            "let's try",
            "te guiaré",
            "intentemos",
            "vou guiá-lo",
            "vamos tentar",
        ),
        ReplyIntent.ASKED_FOR_CURRENT_RATING: (
            "how would you rate your anxiety now",
            "how do you feel now",
            "rate your anxiety now",
            "how would you rate",
            "cómo te sientes ahora",
            "cómo calificarías",
            "como você se sente agora",
            "como você avaliaria",
        ),
        ReplyIntent.ASKED_WHAT_HELPED: (
            "what did you find helpful",
            "how was this exercise",
            "qué te resultó útil",
            "qué te pareció este ejercicio",
            "o que você achou útil",
            "como foi este exercício",
        ),
        ReplyIntent.CLOSING: (
            "thank you for sharing",
            "saved this information",
            "gracias por compartir",
            "guardado esta información",
            "obrigado por compartilhar",
            "obrigada por compartilhar",
            "salvei essas informações",
        ),
    }

    _FIRST_INTEGER = re.compile(r"-?\d+")

    def __init__(self, categories: tuple[TriggerCategory, ...] = TRIGGER_CATEGORIES) -> None:
        self._categories = categories

    def classify(
        self,
        user_message: str,
        assistant_reply: str,
        language: str = SupportedLanguage.EN,
    ) -> TurnSignal:
        """
        Build the turn signal for one exchange.

        Args:
            user_message: Last user message
            assistant_reply: Assistant reply to that message
            language: Session language (selects category labels)

        Returns:
            TurnSignal for the stage machine

        Raises:
            ValueError: If either text is None
        """
        if user_message is None or assistant_reply is None:
            raise ValueError("user_message and assistant_reply must not be None")

        return TurnSignal(
            intents=self.reply_intents(assistant_reply),
            user_message=user_message,
            rating=self.extract_rating(user_message),
            trigger_category=self.match_trigger_category(user_message, language),
        )

    def reply_intents(self, assistant_reply: str) -> frozenset[ReplyIntent]:
        """Intents whose cue phrases occur in the reply."""
        text = normalize_text(assistant_reply)
        return frozenset(
            intent
            for intent, cues in self.CUES.items()
            if any(cue in text for cue in cues)
        )

    def extract_rating(self, user_message: str) -> Optional[int]:
        """
        First signed integer in the message.

        The sign is kept so that "-1" is seen as out of range
        rather than read as 1.
        """
        match = self._FIRST_INTEGER.search(user_message)
        return int(match.group()) if match else None

    def match_trigger_category(self, user_message: str, language: str) -> Optional[str]:
        """
        First category (catalog order) named by the user message.

        A category matches on its id or its session-language label,
        either whole or any "/"-separated part, on word boundaries.
        """
        text = normalize_text(user_message)
        for category in self._categories:
            for term in self._terms(category, language):
                if re.search(rf"\b{re.escape(term)}\b", text):
                    return category.id
        return None

    @staticmethod
    def _terms(category: TriggerCategory, language: str) -> list[str]:
        label = category.label(language).lower()
        terms = [category.id, label]
        if "/" in label:
            terms.extend(part.strip() for part in label.split("/") if part.strip())
        return terms


# Global classifier instance
reply_intent_classifier = ReplyIntentClassifier()
