"""
Unit Tests for Static Catalogs
"""

import pytest

from serene.domain.catalog import (
    DEFAULT_INTERVENTION_ID,
    INTERVENTIONS,
    TRIGGER_CATEGORIES,
    TRIGGER_CATEGORY_IDS,
    get_intervention,
    get_trigger_category,
    interventions_by_type,
)
from serene.domain.enums.intervention_type import InterventionType


class TestTriggerCategories:
    """Trigger category catalog."""

    def test_ids_unique(self) -> None:
        """Test category ids do not repeat."""
        assert len(TRIGGER_CATEGORY_IDS) == len(TRIGGER_CATEGORIES)

    @pytest.mark.parametrize("language", ["en", "es", "pt"])
    def test_every_category_labelled(self, language: str) -> None:
        """Test every category has a label per language."""
        for category in TRIGGER_CATEGORIES:
            assert category.labels[language]

    def test_lookup_and_fallback_label(self) -> None:
        """Test lookup and English fallback for unknown languages."""
        work = get_trigger_category("work")

        assert work.label("es") == "Trabajo/Rendimiento"
        assert work.label("fr") == "Work/Performance"
        assert work.to_dict("pt") == {"id": "work", "label": "Trabalho/Desempenho"}

    def test_unknown_category(self) -> None:
        """Test unknown ids return None."""
        assert get_trigger_category("weather") is None


class TestInterventions:
    """Intervention catalog."""

    def test_default_exists(self) -> None:
        """Test the default technique is a breathing exercise."""
        assert get_intervention(DEFAULT_INTERVENTION_ID).type is InterventionType.BREATHING

    def test_unknown_intervention(self) -> None:
        """Test unknown ids return None."""
        assert get_intervention("juggling") is None

    def test_grouped_by_type(self) -> None:
        """Test grouping covers every type and every technique."""
        grouped = interventions_by_type()

        assert set(grouped) == set(InterventionType)
        assert sum(len(items) for items in grouped.values()) == len(INTERVENTIONS)
        assert all(i.type is kind for kind, items in grouped.items() for i in items)

    @pytest.mark.parametrize("language", ["en", "es", "pt"])
    def test_localized_text(self, language: str) -> None:
        """Test every technique has localized text."""
        for intervention in INTERVENTIONS:
            data = intervention.to_dict(language)
            assert data["name"]
            assert data["description"]
            assert data["voice_prompt"]
