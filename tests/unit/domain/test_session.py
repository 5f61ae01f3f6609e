"""
Unit Tests for Session Domain Model
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import uuid4

import pytest

from serene.domain.enums.session_stage import AnxietyStage, SupportedLanguage
from serene.domain.models.session import CYCLE_FIELDS, AnxietySession, SessionUpdate


class TestLevelValidation:
    """Anxiety levels must be integers in [0, 10]."""

    @pytest.mark.parametrize("level", [-1, 11, 5.5, True])
    def test_invalid_levels_rejected(self, level: Any) -> None:
        """Test out-of-range and non-integer levels raise."""
        with pytest.raises(ValueError):
            AnxietySession(pre_anxiety_level=level)

    def test_update_validates_too(self) -> None:
        """Test deltas validate their levels."""
        with pytest.raises(ValueError):
            SessionUpdate(post_anxiety_level=12)

    @pytest.mark.parametrize("level", [0, 10])
    def test_bounds_accepted(self, level: int) -> None:
        """Test both ends of the scale are valid."""
        session = AnxietySession(pre_anxiety_level=level, post_anxiety_level=level)

        assert session.anxiety_change == 0


class TestApply:
    """Applying deltas."""

    def test_apply_returns_new_session(self) -> None:
        """Test apply copies instead of mutating."""
        session = AnxietySession.start(uuid4())

        updated = session.apply(SessionUpdate(stage=AnxietyStage.ASSESSING))

        assert updated is not session
        assert updated.stage == AnxietyStage.ASSESSING
        assert session.stage == AnxietyStage.IDLE
        assert updated.id == session.id

    def test_empty_update_returns_same(self) -> None:
        """Test an empty delta is a no-op."""
        session = AnxietySession.start(uuid4())

        assert session.apply(SessionUpdate()) is session

    def test_update_to_dict_only_changes(self) -> None:
        """Test serialization omits unchanged fields."""
        when = datetime(2024, 5, 1, 12, 0, 0)
        update = SessionUpdate(stage=AnxietyStage.COMPLETED, notes="breathing", end_time=when)

        assert update.to_dict() == {
            "stage": "completed",
            "notes": "breathing",
            "end_time": "2024-05-01T12:00:00",
        }


class TestNewCycle:
    """Clearing the previous cycle on restart."""

    def test_new_cycle_is_not_empty(self) -> None:
        """Test a clearing delta counts as a change on its own."""
        assert not SessionUpdate(new_cycle=True).is_empty

    def test_apply_clears_cycle_fields(self) -> None:
        """Test ratings, intervention and notes are dropped before the changes apply."""
        start = datetime(2024, 5, 1, 12, 0, 0)
        restart = start + timedelta(hours=1)
        session = AnxietySession(
            stage=AnxietyStage.COMPLETED,
            start_time=start,
            end_time=start + timedelta(minutes=10),
            trigger_category="work",
            trigger_description="My boss",
            pre_anxiety_level=8,
            intervention="box_breathing",
            intervention_type="breathing",
            post_anxiety_level=3,
            notes="The breathing",
            ai_detected_insights={"peak": 8},
        )

        updated = session.apply(
            SessionUpdate(stage=AnxietyStage.ASSESSING, start_time=restart, new_cycle=True)
        )

        assert all(getattr(updated, name) is None for name in CYCLE_FIELDS)
        assert updated.stage == AnxietyStage.ASSESSING
        assert updated.start_time == restart
        assert updated.id == session.id
        assert updated.user_id == session.user_id
        assert updated.ai_detected_insights == {"peak": 8}

    def test_to_dict_lists_cleared_fields(self) -> None:
        """Test storage is told which fields to clear."""
        restart = datetime(2024, 5, 1, 13, 0, 0)
        update = SessionUpdate(stage=AnxietyStage.ASSESSING, start_time=restart, new_cycle=True)

        data = update.to_dict()

        assert data["cleared"] == list(CYCLE_FIELDS)
        assert data["stage"] == "assessing"
        assert data["start_time"] == "2024-05-01T13:00:00"
        assert "new_cycle" not in data

    def test_plain_update_has_no_cleared_key(self) -> None:
        """Test ordinary deltas never clear fields."""
        assert "cleared" not in SessionUpdate(stage=AnxietyStage.ASSESSING).to_dict()


class TestSessionProperties:
    """Derived values and serialization."""

    def test_anxiety_change(self) -> None:
        """Test change is pre minus post."""
        session = AnxietySession(pre_anxiety_level=8, post_anxiety_level=3)

        assert session.anxiety_change == 5

    def test_anxiety_change_needs_both(self) -> None:
        """Test change needs both ratings."""
        assert AnxietySession(pre_anxiety_level=8).anxiety_change is None

    def test_duration(self) -> None:
        """Test duration of a closed session."""
        start = datetime(2024, 5, 1, 12, 0, 0)
        session = AnxietySession(start_time=start, end_time=start + timedelta(minutes=3))

        assert session.duration_seconds == 180

    def test_is_active(self) -> None:
        """Test idle is inactive and mid-flow stages are active."""
        assert not AnxietySession(stage=AnxietyStage.IDLE).is_active
        assert AnxietySession(stage=AnxietyStage.FEEDBACK).is_active

    def test_to_dict(self) -> None:
        """Test serialized session layout."""
        session = AnxietySession.start(uuid4(), language="es")

        data = session.to_dict()

        assert data["stage"] == "idle"
        assert data["language"] == "es"
        assert data["end_time"] is None
        assert data["pre_anxiety_level"] is None


class TestEnums:
    """Stage and language parsing."""

    def test_legacy_post_assessment(self) -> None:
        """Test the legacy stage name is accepted."""
        assert AnxietyStage("post-assessment") is AnxietyStage.POST_RATING

    def test_unknown_stage_rejected(self) -> None:
        """Test unknown stage names raise."""
        with pytest.raises(ValueError):
            AnxietyStage("wandering")

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("pt-BR", SupportedLanguage.PT),
            ("ES", SupportedLanguage.ES),
            ("fr", SupportedLanguage.EN),
            (None, SupportedLanguage.EN),
        ],
    )
    def test_language_coerce(self, code: Optional[str], expected: SupportedLanguage) -> None:
        """Test region tags, case and fallback."""
        assert SupportedLanguage.coerce(code) is expected

    def test_stage_order(self) -> None:
        """Test the flow starts idle and ends completed."""
        stages = AnxietyStage.ordered()

        assert stages[0] is AnxietyStage.IDLE
        assert stages[-1] is AnxietyStage.COMPLETED
