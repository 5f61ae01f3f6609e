"""
Catalog Entry Models

Static, read-only entries for the session trigger categories and
the therapist-approved intervention catalog. Text fields are keyed
by language code (en/es/pt).
"""

from dataclasses import dataclass

from serene.domain.enums.intervention_type import InterventionType
from serene.domain.enums.session_stage import SupportedLanguage


def _localized(texts: dict[str, str], language: str) -> str:
    lang = SupportedLanguage.coerce(language).value
    return texts.get(lang) or texts.get(SupportedLanguage.EN.value, "")


@dataclass(frozen=True)
class TriggerCategory:
    """
    A session-level trigger category the user can pick.

    Attributes:
        id: Stable category id stored on the session (e.g. "work")
        labels: Display label per language
    """

    id: str
    labels: dict[str, str]

    def label(self, language: str = "en") -> str:
        """Label in the requested language (English fallback)."""
        return _localized(self.labels, language)

    def to_dict(self, language: str = "en") -> dict:
        return {"id": self.id, "label": self.label(language)}


@dataclass(frozen=True)
class Intervention:
    """
    A therapeutic technique.

    Attributes:
        id: Stable technique id (e.g. "box_breathing")
        type: Technique family
        name: Display name per language
        description: Instructions per language
        for_triggers: Trigger category ids this applies to ("general" = any)
        voice_prompt: Opening line per language for guided delivery
    """

    id: str
    type: InterventionType
    name: dict[str, str]
    description: dict[str, str]
    for_triggers: tuple[str, ...]
    voice_prompt: dict[str, str]

    def applies_to(self, trigger_category: str) -> bool:
        """Whether the technique is tagged for the category or general use."""
        return trigger_category in self.for_triggers or "general" in self.for_triggers

    def localized_name(self, language: str = "en") -> str:
        return _localized(self.name, language)

    def localized_description(self, language: str = "en") -> str:
        return _localized(self.description, language)

    def localized_voice_prompt(self, language: str = "en") -> str:
        return _localized(self.voice_prompt, language)

    def to_dict(self, language: str = "en") -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.localized_name(language),
            "description": self.localized_description(language),
            "voice_prompt": self.localized_voice_prompt(language),
            "for_triggers": list(self.for_triggers),
        }
