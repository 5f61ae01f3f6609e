"""
Unit Tests for Session Stage Machine

Tests every stage transition, rating boundaries, the secondary
intervention path, closure, restart and no-op behavior.
"""

from datetime import datetime
from typing import Callable, Optional

import pytest

from serene.domain.enums.intervention_type import InterventionType
from serene.domain.enums.session_stage import AnxietyStage
from serene.domain.models.session import AnxietySession
from serene.services.session.reply_intents import ReplyIntent, TurnSignal
from serene.services.session.stage_machine import StageMachine

SessionFactory = Callable[..., AnxietySession]


def _signal(
    *intents: ReplyIntent,
    user_message: str = "",
    rating: Optional[int] = None,
    category: Optional[str] = None,
) -> TurnSignal:
    return TurnSignal(
        intents=frozenset(intents),
        user_message=user_message,
        rating=rating,
        trigger_category=category,
    )


class TestRestart:
    """Idle and completed both start a new assessment."""

    @pytest.mark.parametrize("stage", [AnxietyStage.IDLE, AnxietyStage.COMPLETED])
    def test_any_message_starts_assessing(
        self, stage_machine: StageMachine, session_factory: SessionFactory, stage: AnxietyStage
    ) -> None:
        """Test any turn restarts the flow."""
        update = stage_machine.advance(session_factory(stage), _signal(user_message="hi"))

        assert update.stage == AnxietyStage.ASSESSING

    def test_restart_from_completed_clears_cycle(
        self,
        stage_machine: StageMachine,
        session_factory: SessionFactory,
        fixed_now: datetime,
    ) -> None:
        """Test a new cycle drops the previous ratings and intervention."""
        session = session_factory(
            AnxietyStage.COMPLETED,
            trigger_category="work",
            trigger_description="My boss",
            pre_anxiety_level=8,
            intervention="box_breathing",
            intervention_type="breathing",
            post_anxiety_level=3,
            notes="The breathing",
            end_time=datetime(2024, 5, 1, 12, 0, 0),
        )

        update = stage_machine.advance(session, _signal(user_message="hi again"))
        restarted = session.apply(update)

        assert update.new_cycle is True
        assert update.start_time == fixed_now
        assert restarted.stage == AnxietyStage.ASSESSING
        assert restarted.start_time == fixed_now
        assert restarted.pre_anxiety_level is None
        assert restarted.post_anxiety_level is None
        assert restarted.intervention is None
        assert restarted.trigger_category is None
        assert restarted.notes is None
        assert restarted.end_time is None
        assert restarted.anxiety_change is None
        assert restarted.id == session.id

    def test_restart_from_idle_keeps_fields(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the first start of a session is a plain stage change."""
        update = stage_machine.advance(session_factory(AnxietyStage.IDLE), _signal(user_message="hi"))

        assert update.new_cycle is False
        assert update.changes() == {"stage": AnxietyStage.ASSESSING}


class TestAssessing:
    """Assessing waits for the trigger question."""

    def test_trigger_question_moves_on(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the trigger question advances to selection."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.ASSESSING),
            _signal(ReplyIntent.ASKED_FOR_TRIGGER),
        )

        assert update.stage == AnxietyStage.SELECTING_TRIGGER

    def test_other_reply_is_no_op(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test an out-of-order intent does not advance."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.ASSESSING),
            _signal(ReplyIntent.ASKED_FOR_SCALE),
        )

        assert update.is_empty


class TestSelectingTrigger:
    """Category capture."""

    def test_category_recorded(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test a recognized category is recorded."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.SELECTING_TRIGGER),
            _signal(category="work"),
        )

        assert update.stage == AnxietyStage.TRIGGER_DESCRIPTION
        assert update.trigger_category == "work"

    def test_no_category_is_no_op(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the stage holds until a category is named."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.SELECTING_TRIGGER),
            _signal(user_message="not sure"),
        )

        assert update.is_empty


class TestTriggerDescription:
    """Description capture on the scale question."""

    def test_description_recorded(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the user message is kept as the description."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.TRIGGER_DESCRIPTION, trigger_category="work"),
            _signal(ReplyIntent.ASKED_FOR_SCALE, user_message="My boss keeps yelling"),
        )

        assert update.stage == AnxietyStage.ANXIETY_RATING
        assert update.trigger_description == "My boss keeps yelling"


class TestAnxietyRating:
    """Pre-rating and intervention selection."""

    def test_rating_selects_intervention(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Level 7 with work draws from grounding/breathing."""
        session = session_factory(AnxietyStage.ANXIETY_RATING, trigger_category="work")

        update = stage_machine.advance(session, _signal(user_message="7", rating=7))

        assert update.stage == AnxietyStage.DELIVERING_INTERVENTION
        assert update.pre_anxiety_level == 7
        assert update.intervention is not None
        assert update.intervention_type in (
            InterventionType.GROUNDING.value,
            InterventionType.BREATHING.value,
        )

    @pytest.mark.parametrize("rating", [0, 10])
    def test_inclusive_bounds_accepted(
        self, stage_machine: StageMachine, session_factory: SessionFactory, rating: int
    ) -> None:
        """Test both ends of the scale are valid ratings."""
        session = session_factory(AnxietyStage.ANXIETY_RATING, trigger_category="work")

        update = stage_machine.advance(session, _signal(rating=rating))

        assert update.pre_anxiety_level == rating
        assert update.stage == AnxietyStage.DELIVERING_INTERVENTION

    @pytest.mark.parametrize("rating", [11, -1, None])
    def test_out_of_range_rejected(
        self, stage_machine: StageMachine, session_factory: SessionFactory, rating: Optional[int]
    ) -> None:
        """Test ratings outside 0-10 do not advance."""
        session = session_factory(AnxietyStage.ANXIETY_RATING, trigger_category="work")

        update = stage_machine.advance(session, _signal(rating=rating))

        assert update.is_empty

    def test_secondary_path_with_existing_rating(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Moving to the exercise without a new number keeps the old rating."""
        session = session_factory(
            AnxietyStage.ANXIETY_RATING,
            trigger_category="work",
            pre_anxiety_level=6,
        )

        update = stage_machine.advance(session, _signal(ReplyIntent.GUIDING_EXERCISE))

        assert update.changes() == {"stage": AnxietyStage.DELIVERING_INTERVENTION}

    def test_secondary_path_needs_rating(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the exercise path requires an earlier rating."""
        session = session_factory(AnxietyStage.ANXIETY_RATING, trigger_category="work")

        update = stage_machine.advance(session, _signal(ReplyIntent.GUIDING_EXERCISE))

        assert update.is_empty


class TestPostIntervention:
    """Post-rating and feedback."""

    def test_current_rating_question(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the current-rating question moves to post-rating."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.DELIVERING_INTERVENTION),
            _signal(ReplyIntent.ASKED_FOR_CURRENT_RATING),
        )

        assert update.stage == AnxietyStage.POST_RATING

    def test_post_rating_recorded(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test a valid post rating moves to feedback."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.POST_RATING, pre_anxiety_level=7),
            _signal(user_message="3", rating=3),
        )

        assert update.stage == AnxietyStage.FEEDBACK
        assert update.post_anxiety_level == 3

    def test_post_rating_out_of_range(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test an invalid post rating does not advance."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.POST_RATING),
            _signal(rating=11),
        )

        assert update.is_empty


class TestFeedback:
    """Notes capture and closure."""

    def test_notes_without_closure(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the what-helped question records notes only."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.FEEDBACK),
            _signal(ReplyIntent.ASKED_WHAT_HELPED, user_message="The breathing"),
        )

        assert update.changes() == {"notes": "The breathing"}

    def test_closure_completes(
        self,
        stage_machine: StageMachine,
        session_factory: SessionFactory,
        fixed_now: datetime,
    ) -> None:
        """Test what-helped plus closing completes the session."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.FEEDBACK),
            _signal(
                ReplyIntent.ASKED_WHAT_HELPED,
                ReplyIntent.CLOSING,
                user_message="The breathing",
            ),
        )

        assert update.stage == AnxietyStage.COMPLETED
        assert update.notes == "The breathing"
        assert update.end_time == fixed_now

    def test_closing_alone_is_no_op(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test closing language without the what-helped question does nothing."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.FEEDBACK),
            _signal(ReplyIntent.CLOSING, user_message="ok"),
        )

        assert update.is_empty

    def test_closing_reply_text_alone_is_no_op(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test a farewell reply that never asks what helped keeps the stage."""
        session = session_factory(AnxietyStage.FEEDBACK, pre_anxiety_level=7, post_anxiety_level=3)

        update = stage_machine.advance_from_text(session, "ok", "Thank you for sharing, take care.")

        assert update.is_empty
        assert session.apply(update).stage == AnxietyStage.FEEDBACK

    def test_unrelated_reply(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test other intents leave feedback untouched."""
        update = stage_machine.advance(
            session_factory(AnxietyStage.FEEDBACK),
            _signal(ReplyIntent.GUIDING_EXERCISE, user_message="ok"),
        )

        assert update.is_empty


class TestFromText:
    """Text adapter wiring."""

    def test_advance_from_text(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the rating is parsed from the user message."""
        session = session_factory(AnxietyStage.ANXIETY_RATING, trigger_category="work")

        update = stage_machine.advance_from_text(
            session,
            "I'd say 10",
            "Thank you. Let's try something together.",
        )

        assert update.pre_anxiety_level == 10

    def test_legacy_stage_name(
        self, stage_machine: StageMachine, session_factory: SessionFactory
    ) -> None:
        """Test the legacy post-assessment name maps to post-rating."""
        session = session_factory(AnxietyStage("post-assessment"))

        update = stage_machine.advance_from_text(session, "4", "Thanks.")

        assert update.stage == AnxietyStage.FEEDBACK
        assert update.post_anxiety_level == 4
