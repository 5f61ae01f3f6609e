"""
Unit Tests for Intervention Selector

Tests category candidates, severity preferences and fallbacks.
"""

import random

import pytest

from serene.domain.enums.intervention_type import InterventionType
from serene.domain.models.intervention import Intervention
from serene.services.session.intervention_selector import InterventionSelector


def _technique(technique_id: str, kind: InterventionType, *tags: str) -> Intervention:
    text = {"en": technique_id}
    return Intervention(
        id=technique_id,
        type=kind,
        name=text,
        description=text,
        for_triggers=tags,
        voice_prompt=text,
    )


class TestSeverityPreference:
    """Severity narrows the category candidates."""

    def test_high_severity_prefers_grounding_and_breathing(
        self, selector: InterventionSelector
    ) -> None:
        """Test level 7 keeps grounding and breathing only."""
        candidates = selector.candidates("work", 7)

        assert candidates
        assert {c.type for c in candidates} <= {
            InterventionType.GROUNDING,
            InterventionType.BREATHING,
        }

    def test_high_severity_never_cognitive(self) -> None:
        """Repeated selections at level 7 stay out of cognitive."""
        selector = InterventionSelector(rng=random.Random(0))

        types = {selector.select("work", 7).type for _ in range(50)}

        assert InterventionType.COGNITIVE not in types

    def test_moderate_severity_prefers_mindfulness(self, selector: InterventionSelector) -> None:
        """Test level 5 narrows work to mindfulness."""
        candidates = selector.candidates("work", 5)

        assert [c.id for c in candidates] == ["present_moment"]

    def test_low_severity_prefers_cognitive_and_physical(
        self, selector: InterventionSelector
    ) -> None:
        """Test low levels keep cognitive and physical techniques."""
        candidates = selector.candidates("health", 2)

        assert {c.type for c in candidates} == {
            InterventionType.COGNITIVE,
            InterventionType.PHYSICAL,
        }

    @pytest.mark.parametrize("level", [0, 3, 4, 6, 7, 10])
    def test_selection_comes_from_candidates(
        self, selector: InterventionSelector, level: int
    ) -> None:
        """Test the selection is always a candidate."""
        candidates = selector.candidates("social", level)

        assert selector.select("social", level) in candidates


class TestFallbacks:
    """Behavior when the category has no tagged techniques."""

    def test_no_category_candidates_uses_severity_over_catalog(self) -> None:
        """Test severity preference applies to the whole catalog."""
        catalog = (
            _technique("calm_breath", InterventionType.BREATHING, "health"),
            _technique("reframe", InterventionType.COGNITIVE, "social"),
        )
        selector = InterventionSelector(catalog=catalog, rng=random.Random(1))

        assert [c.id for c in selector.candidates("work", 8)] == ["calm_breath"]

    def test_falls_back_to_full_catalog(self) -> None:
        """Test an unmatched preference falls back to every technique."""
        catalog = (_technique("reframe", InterventionType.COGNITIVE, "social"),)
        selector = InterventionSelector(catalog=catalog, rng=random.Random(1))

        assert selector.select("work", 8).id == "reframe"

    def test_missing_category(self, selector: InterventionSelector) -> None:
        """Test a session without a category still gets candidates."""
        assert selector.candidates(None, 8)

    def test_empty_catalog_returns_default(self) -> None:
        """Test an empty catalog yields the default technique."""
        selector = InterventionSelector(catalog=(), rng=random.Random(1))

        assert selector.select("work", 5).id == "box_breathing"


class TestRandomness:
    """Selection goes through the injected random source."""

    def test_same_seed_same_choice(self) -> None:
        """Test equal seeds give equal sequences."""
        first = InterventionSelector(rng=random.Random(42))
        second = InterventionSelector(rng=random.Random(42))

        picks_a = [first.select("work", 8).id for _ in range(10)]
        picks_b = [second.select("work", 8).id for _ in range(10)]

        assert picks_a == picks_b

    def test_choices_vary_across_calls(self) -> None:
        """Test selection is not constant."""
        selector = InterventionSelector(rng=random.Random(7))

        picks = {selector.select("work", 8).id for _ in range(100)}

        assert len(picks) > 1
