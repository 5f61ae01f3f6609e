"""
Session Trigger Categories

The categories a user can choose during the selecting-trigger stage.
A session's trigger_category is always one of these ids.
"""

from typing import Optional

from serene.domain.models.intervention import TriggerCategory


TRIGGER_CATEGORIES: tuple[TriggerCategory, ...] = (
    TriggerCategory("work", {
        "en": "Work/Performance",
        "es": "Trabajo/Rendimiento",
        "pt": "Trabalho/Desempenho",
    }),
    TriggerCategory("social", {
        "en": "Social Situations",
        "es": "Situaciones Sociales",
        "pt": "Situações Sociais",
    }),
    TriggerCategory("health", {
        "en": "Health Concerns",
        "es": "Problemas de Salud",
        "pt": "Problemas de Saúde",
    }),
    TriggerCategory("financial", {
        "en": "Financial Stress",
        "es": "Estrés Financiero",
        "pt": "Estresse Financeiro",
    }),
    TriggerCategory("relationship", {
        "en": "Relationship Issues",
        "es": "Problemas de Relación",
        "pt": "Problemas de Relacionamento",
    }),
    TriggerCategory("family", {
        "en": "Family Conflicts",
        "es": "Conflictos Familiares",
        "pt": "Conflitos Familiares",
    }),
    TriggerCategory("academic", {
        "en": "Academic Pressure",
        "es": "Presión Académica",
        "pt": "Pressão Acadêmica",
    }),
    TriggerCategory("uncertainty", {
        "en": "Uncertainty/Future",
        "es": "Incertidumbre/Futuro",
        "pt": "Incerteza/Futuro",
    }),
    TriggerCategory("trauma", {
        "en": "Past Trauma",
        "es": "Trauma Pasado",
        "pt": "Trauma Passado",
    }),
    TriggerCategory("environmental", {
        "en": "Environmental Stressors",
        "es": "Estresores Ambientales",
        "pt": "Estressores Ambientais",
    }),
    TriggerCategory("other", {
        "en": "Other",
        "es": "Otro",
        "pt": "Outro",
    }),
)

TRIGGER_CATEGORY_IDS: frozenset[str] = frozenset(c.id for c in TRIGGER_CATEGORIES)


def get_trigger_category(category_id: Optional[str]) -> Optional[TriggerCategory]:
    """Look up a category by id."""
    for category in TRIGGER_CATEGORIES:
        if category.id == category_id:
            return category
    return None
