"""
Session Stage and Language Enumerations

Defines the stages of the guided anxiety-management conversation
and the languages a session can run in.
"""

from enum import StrEnum
from typing import Optional


class AnxietyStage(StrEnum):
    """
    Stages of a guided anxiety-management session.

    Nominal order:
        idle -> assessing -> selecting-trigger -> trigger-description
        -> anxiety-rating -> delivering-intervention -> post-rating
        -> feedback -> completed

    IDLE and COMPLETED are both valid starting points for a new
    assessment cycle.
    """

    IDLE = "idle"
    """Session created, no user message handled yet."""

    ASSESSING = "assessing"
    """Initial open-ended assessment of how the user feels."""

    SELECTING_TRIGGER = "selecting-trigger"
    """User is asked which area of life is triggering the anxiety."""

    TRIGGER_DESCRIPTION = "trigger-description"
    """User describes the trigger in their own words."""

    ANXIETY_RATING = "anxiety-rating"
    """User rates their anxiety on a 0-10 scale."""

    DELIVERING_INTERVENTION = "delivering-intervention"
    """A therapeutic technique is being guided."""

    POST_RATING = "post-rating"
    """User re-rates their anxiety after the intervention."""

    FEEDBACK = "feedback"
    """User shares what was helpful."""

    COMPLETED = "completed"
    """Session closed; end time recorded."""

    @classmethod
    def _missing_(cls, value: object) -> Optional["AnxietyStage"]:
        # Older sessions were stored with "post-assessment"
        if isinstance(value, str) and value.lower() == "post-assessment":
            return cls.POST_RATING
        return None

    @property
    def is_restartable(self) -> bool:
        """Whether a new user message restarts assessment from this stage."""
        return self in (AnxietyStage.IDLE, AnxietyStage.COMPLETED)

    @classmethod
    def ordered(cls) -> list["AnxietyStage"]:
        """Stages in nominal flow order."""
        return list(cls)


class SupportedLanguage(StrEnum):
    """Languages supported by pattern tables and catalogs."""

    EN = "en"
    ES = "es"
    PT = "pt"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "SupportedLanguage":
        """
        Parse a language code, falling back to English.

        Args:
            value: Language code such as "en" or "pt-BR"

        Returns:
            Matching SupportedLanguage (EN when unknown)
        """
        if not value:
            return cls.EN
        code = value.lower().split("-")[0]
        try:
            return cls(code)
        except ValueError:
            return cls.EN
