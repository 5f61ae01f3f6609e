"""
Session Stage Machine

Drives an anxiety session through the guided flow:

    idle -> assessing -> selecting-trigger -> trigger-description
    -> anxiety-rating -> delivering-intervention -> post-rating
    -> feedback -> completed

The machine is text-agnostic: each stage has one transition function
over (session, TurnSignal). Text is turned into a TurnSignal by the
ReplyIntentClassifier beforehand. Every call returns a SessionUpdate
delta; an empty delta means the turn did not advance the flow, which
is expected (the caller re-prompts) and never an error.

ARCHITECTURE: The machine never persists anything. Callers must
serialize advances per session id so the stage used as the
transition base is never stale.
"""

from datetime import datetime
from typing import Callable, Optional

from serene.config.logging_config import get_logger
from serene.domain.enums.session_stage import AnxietyStage
from serene.domain.models.session import (
    AnxietySession,
    SessionUpdate,
    is_valid_anxiety_level,
)
from serene.services.session.intervention_selector import InterventionSelector
from serene.services.session.reply_intents import (
    ReplyIntent,
    ReplyIntentClassifier,
    TurnSignal,
)

logger = get_logger(__name__)

NO_CHANGE = SessionUpdate()

Transition = Callable[[AnxietySession, TurnSignal], SessionUpdate]


class StageMachine:
    """
    Deterministic stage transition function.

    At most one rule fires per call. Randomness enters only through
    the injected intervention selector, time only through the clock.
    """

    def __init__(
        self,
        selector: Optional[InterventionSelector] = None,
        classifier: Optional[ReplyIntentClassifier] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        """
        Initialize stage machine.

        Args:
            selector: Intervention selector used at the rating stage
            classifier: Text adapter for advance_from_text
            clock: Source of the completion timestamp
        """
        self._selector = selector or InterventionSelector()
        self._classifier = classifier or ReplyIntentClassifier()
        self._clock = clock
        self._transitions: dict[AnxietyStage, Transition] = {
            AnxietyStage.IDLE: self._restart,
            AnxietyStage.COMPLETED: self._restart,
            AnxietyStage.ASSESSING: self._from_assessing,
            AnxietyStage.SELECTING_TRIGGER: self._from_selecting_trigger,
            AnxietyStage.TRIGGER_DESCRIPTION: self._from_trigger_description,
            AnxietyStage.ANXIETY_RATING: self._from_anxiety_rating,
            AnxietyStage.DELIVERING_INTERVENTION: self._from_delivering_intervention,
            AnxietyStage.POST_RATING: self._from_post_rating,
            AnxietyStage.FEEDBACK: self._from_feedback,
        }

    def advance(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        """
        Compute the session delta for one turn.

        Args:
            session: Current session (its stage is the transition base)
            signal: Classified turn

        Returns:
            SessionUpdate (empty when nothing changes)
        """
        update = self._transitions[session.stage](session, signal)

        if update.is_empty:
            logger.debug(
                "Stage unchanged",
                session_id=str(session.id),
                stage=session.stage.value,
                intents=sorted(i.value for i in signal.intents),
            )
        elif update.stage is not None:
            logger.info(
                "Stage transition",
                session_id=str(session.id),
                from_stage=session.stage.value,
                to_stage=update.stage.value,
            )
        return update

    def advance_from_text(
        self,
        session: AnxietySession,
        user_message: str,
        assistant_reply: str,
    ) -> SessionUpdate:
        """
        Classify a raw exchange and advance.

        Args:
            session: Current session
            user_message: Last user message
            assistant_reply: Assistant reply to that message

        Returns:
            SessionUpdate (empty when nothing changes)
        """
        signal = self._classifier.classify(
            user_message,
            assistant_reply,
            language=session.language,
        )
        return self.advance(session, signal)

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def _restart(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        if session.stage is AnxietyStage.COMPLETED:
            # Ratings and intervention of the finished cycle must not carry over
            return SessionUpdate(
                stage=AnxietyStage.ASSESSING,
                start_time=self._clock(),
                new_cycle=True,
            )
        return SessionUpdate(stage=AnxietyStage.ASSESSING)

    def _from_assessing(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        if signal.has(ReplyIntent.ASKED_FOR_TRIGGER):
            return SessionUpdate(stage=AnxietyStage.SELECTING_TRIGGER)
        return NO_CHANGE

    def _from_selecting_trigger(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        if signal.trigger_category is not None:
            return SessionUpdate(
                stage=AnxietyStage.TRIGGER_DESCRIPTION,
                trigger_category=signal.trigger_category,
            )
        return NO_CHANGE

    def _from_trigger_description(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        if signal.has(ReplyIntent.ASKED_FOR_SCALE):
            return SessionUpdate(
                stage=AnxietyStage.ANXIETY_RATING,
                trigger_description=signal.user_message,
            )
        return NO_CHANGE

    def _from_anxiety_rating(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        if is_valid_anxiety_level(signal.rating):
            intervention = self._selector.select(session.trigger_category, signal.rating)
            return SessionUpdate(
                stage=AnxietyStage.DELIVERING_INTERVENTION,
                pre_anxiety_level=signal.rating,
                intervention=intervention.id,
                intervention_type=intervention.type.value,
            )

        # Reply moved on to the exercise without a new number
        if signal.has(ReplyIntent.GUIDING_EXERCISE) and session.pre_anxiety_level is not None:
            return SessionUpdate(stage=AnxietyStage.DELIVERING_INTERVENTION)

        return NO_CHANGE

    def _from_delivering_intervention(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        if signal.has(ReplyIntent.ASKED_FOR_CURRENT_RATING):
            return SessionUpdate(stage=AnxietyStage.POST_RATING)
        return NO_CHANGE

    def _from_post_rating(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        if is_valid_anxiety_level(signal.rating):
            return SessionUpdate(
                stage=AnxietyStage.FEEDBACK,
                post_anxiety_level=signal.rating,
            )
        return NO_CHANGE

    def _from_feedback(self, session: AnxietySession, signal: TurnSignal) -> SessionUpdate:
        # Closure only counts alongside the what-helped question
        if not signal.has(ReplyIntent.ASKED_WHAT_HELPED):
            return NO_CHANGE
        if signal.has(ReplyIntent.CLOSING):
            return SessionUpdate(
                stage=AnxietyStage.COMPLETED,
                notes=signal.user_message,
                end_time=self._clock(),
            )
        return SessionUpdate(notes=signal.user_message)
