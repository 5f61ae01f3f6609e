"""
Unit Tests for Session Analytics
"""

from datetime import datetime, timedelta

import pytest

from serene.domain.enums.session_stage import AnxietyStage
from serene.domain.models.conversation import ConversationMessage
from serene.domain.models.session import AnxietySession
from serene.services.analytics.session_analytics import SessionAnalyticsService


START = datetime(2024, 5, 1, 12, 0, 0)


def _at(minutes: int) -> datetime:
    return START + timedelta(minutes=minutes)


@pytest.fixture
def service() -> SessionAnalyticsService:
    """Create analytics service instance."""
    return SessionAnalyticsService()


@pytest.fixture
def history() -> list[ConversationMessage]:
    """Five timestamped messages, two of them with a signal."""
    return [
        ConversationMessage(text="hello", is_user=True, timestamp=_at(0)),
        ConversationMessage(text="Hi, how are you feeling?", is_user=False, timestamp=_at(1)),
        ConversationMessage(text="I hate my job", is_user=True, timestamp=_at(2)),
        ConversationMessage(text="That sounds hard.", is_user=False, timestamp=_at(3)),
        ConversationMessage(text="I'm nervous and restless", is_user=True, timestamp=_at(4)),
    ]


@pytest.fixture
def finished_session() -> AnxietySession:
    """Completed ten-minute session rated 7 then 2."""
    return AnxietySession(
        stage=AnxietyStage.COMPLETED,
        start_time=START,
        end_time=_at(10),
        pre_anxiety_level=7,
        post_anxiety_level=2,
    )


class TestCounts:
    """Message counts and basic fields."""

    def test_counts(
        self,
        service: SessionAnalyticsService,
        finished_session: AnxietySession,
        history: list[ConversationMessage],
    ) -> None:
        """Test message counts, stage and duration."""
        report = service.analyze(finished_session, history)

        assert report.total_messages == 5
        assert report.user_messages == 3
        assert report.ai_messages == 2
        assert report.stage == "completed"
        assert report.duration_seconds == 600

    def test_improvement(
        self,
        service: SessionAnalyticsService,
        finished_session: AnxietySession,
        history: list[ConversationMessage],
    ) -> None:
        """Test improvement is pre minus post."""
        report = service.analyze(finished_session, history)

        assert report.initial_level == 7
        assert report.current_level == 2
        assert report.improvement == 5

    def test_none_history_raises(
        self, service: SessionAnalyticsService, finished_session: AnxietySession
    ) -> None:
        """Missing history is a caller error."""
        with pytest.raises(ValueError):
            service.analyze(finished_session, None)

    def test_empty_history(
        self, service: SessionAnalyticsService, finished_session: AnxietySession
    ) -> None:
        """Test an empty history gives an empty progression."""
        report = service.analyze(finished_session, [])

        assert report.total_messages == 0
        assert report.progression == []
        assert report.peak_level is None


class TestProgression:
    """Per-message levels."""

    def test_messages_without_signal_are_skipped(
        self,
        service: SessionAnalyticsService,
        finished_session: AnxietySession,
        history: list[ConversationMessage],
    ) -> None:
        """Test only messages with a level appear in the progression."""
        report = service.analyze(finished_session, history)

        assert [p.timestamp for p in report.progression] == [_at(2), _at(4)]
        assert all(0 <= p.level <= 10 for p in report.progression)

    def test_overall_triggers(
        self,
        service: SessionAnalyticsService,
        finished_session: AnxietySession,
        history: list[ConversationMessage],
    ) -> None:
        """Test triggers are detected over the whole conversation."""
        report = service.analyze(finished_session, history)

        assert "work_dissatisfaction" in report.trigger_analysis.trigger_keys


class TestRecommendations:
    """Notes use the latest self-rating."""

    def test_low_post_rating_no_severity_notes(
        self,
        service: SessionAnalyticsService,
        finished_session: AnxietySession,
        history: list[ConversationMessage],
    ) -> None:
        """Test a low post rating suppresses severity notes."""
        report = service.analyze(finished_session, history)

        assert "High anxiety level requires immediate intervention" not in report.recommendations

    def test_falls_back_to_pre_rating(
        self, service: SessionAnalyticsService, history: list[ConversationMessage]
    ) -> None:
        """Test the pre rating is used before a post rating exists."""
        session = AnxietySession(stage=AnxietyStage.DELIVERING_INTERVENTION, pre_anxiety_level=8)

        report = service.analyze(session, history)

        assert "High anxiety level requires immediate intervention" in report.recommendations
        assert report.improvement is None


class TestSerialization:
    """Report shape."""

    def test_to_dict(
        self,
        service: SessionAnalyticsService,
        finished_session: AnxietySession,
        history: list[ConversationMessage],
    ) -> None:
        """Test serialized report layout."""
        data = service.analyze(finished_session, history).to_dict()

        assert data["session_stage"] == "completed"
        assert data["anxiety_progression"]["detections"] == 2
        assert data["anxiety_progression"]["improvement"] == 5
        assert data["trigger_analysis"]["trigger_complexity"] >= 1
        assert isinstance(data["therapeutic_recommendations"], list)
