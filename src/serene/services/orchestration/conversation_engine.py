"""
Conversation Engine

Coordinates the per-message analysis pipeline and the post-reply
stage advance.

ARCHITECTURE: One inbound user message flows through
    Trigger Detector -> Anxiety Scorer -> Reconciler -> Reply Guidance
and, once the external generator has replied,
    Reply Intent Classifier -> Stage Machine -> SessionUpdate delta

The engine holds no session state and performs no I/O. The host
persists the returned deltas and serializes turns per session.
"""

import random
from dataclasses import dataclass
from typing import Optional, Sequence
from uuid import UUID

from serene.config import Settings, get_settings
from serene.config.logging_config import get_logger, session_context
from serene.domain.catalog.interventions import get_intervention
from serene.domain.enums.session_stage import AnxietyStage
from serene.domain.models.conversation import ConversationMessage
from serene.domain.models.intervention import Intervention
from serene.domain.models.session import AnxietySession, SessionUpdate
from serene.domain.models.trigger_analysis import TriggerDetectionResult
from serene.infrastructure.metrics import MetricsRecorder, update_system_info
from serene.services.detection.anxiety_scorer import AnxietyScorer, ScoreBreakdown
from serene.services.detection.context_reconciler import ContextAwareReconciler
from serene.services.detection.trigger_detector import TriggerDetector
from serene.services.guidance.reply_guidance import ReplyGuidance, ReplyGuidanceBuilder
from serene.services.session.intervention_selector import InterventionSelector
from serene.services.session.stage_machine import StageMachine

logger = get_logger(__name__)


@dataclass
class MessageAnalysis:
    """
    Analysis of one inbound user message.

    Attributes:
        raw_score: Scorer level before trigger reconciliation
        anxiety_level: Reconciled level (None = no signal)
        triggers: Trigger detection result
        guidance: Outbound signal for the reply generator
        breakdown: Scorer intermediate values
    """

    raw_score: Optional[int]
    anxiety_level: Optional[int]
    triggers: TriggerDetectionResult
    guidance: ReplyGuidance
    breakdown: ScoreBreakdown

    @property
    def is_emergency(self) -> bool:
        """Whether an emergency phrase fired."""
        return self.breakdown.emergency is not None

    def to_dict(self) -> dict:
        """Serialize for the reply generator and host logging."""
        return {
            "raw_score": self.raw_score,
            "anxiety_level": self.anxiety_level,
            "is_emergency": self.is_emergency,
            "guidance": self.guidance.to_dict(),
        }


@dataclass
class TurnResult:
    """
    Outcome of advancing a session after a reply.

    Attributes:
        update: Delta for the storage collaborator
        session: Session with the delta applied
        intervention: Catalog entry when one was selected this turn
    """

    update: SessionUpdate
    session: AnxietySession
    intervention: Optional[Intervention] = None

    @property
    def advanced(self) -> bool:
        return not self.update.is_empty

    def to_dict(self) -> dict:
        return {
            "update": self.update.to_dict(),
            "stage": self.session.stage.value,
            "intervention": (
                self.intervention.to_dict(self.session.language)
                if self.intervention
                else None
            ),
        }


class ConversationEngine:
    """
    Entry point for hosts embedding the engine.

    Services are injectable for testing; from_settings() wires the
    defaults from configuration.
    """

    def __init__(
        self,
        detector: Optional[TriggerDetector] = None,
        scorer: Optional[AnxietyScorer] = None,
        reconciler: Optional[ContextAwareReconciler] = None,
        guidance_builder: Optional[ReplyGuidanceBuilder] = None,
        stage_machine: Optional[StageMachine] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Initialize engine with services.

        Args:
            detector: Trigger detector
            scorer: Anxiety scorer
            reconciler: Context-aware reconciler
            guidance_builder: Reply guidance builder
            stage_machine: Session stage machine
            settings: Application settings
        """
        self._settings = settings or get_settings()
        self._detector = detector or TriggerDetector()
        self._scorer = scorer or AnxietyScorer()
        self._reconciler = reconciler or ContextAwareReconciler()
        self._guidance = guidance_builder or ReplyGuidanceBuilder()
        self._stage_machine = stage_machine or StageMachine()
        self._metrics = MetricsRecorder.from_settings(self._settings)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ConversationEngine":
        """
        Build an engine wired from configuration.

        A configured intervention seed makes selection reproducible.

        Args:
            settings: Settings (cached settings when omitted)

        Returns:
            ConversationEngine
        """
        settings = settings or get_settings()
        update_system_info(settings.env)
        rng = random.Random(settings.analysis.intervention_seed)
        machine = StageMachine(selector=InterventionSelector(rng=rng))
        return cls(stage_machine=machine, settings=settings)

    def start_session(self, user_id: UUID, language: Optional[str] = None) -> AnxietySession:
        """
        Create a new idle session.

        Args:
            user_id: Owning user
            language: Session language (configured default when omitted)

        Returns:
            New AnxietySession
        """
        session = AnxietySession.start(
            user_id=user_id,
            language=language or self._settings.analysis.default_language,
        )
        logger.info(
            "Session started",
            session_id=str(session.id),
            language=session.language.value,
        )
        return session

    def analyze_message(
        self,
        session: AnxietySession,
        message: str,
        history: Sequence[ConversationMessage],
    ) -> MessageAnalysis:
        """
        Analyze one inbound user message.

        Args:
            session: Current session
            message: User message
            history: Prior messages of the session, oldest first

        Returns:
            MessageAnalysis with level, triggers and reply guidance

        Raises:
            ValueError: If message or history is None
        """
        with session_context(str(session.id)):
            with self._metrics.track_analysis_latency():
                triggers = self._detector.detect(message, history)
                breakdown = self._scorer.analyze(message, history)
                level = self._reconciler.reconcile(breakdown.level, triggers)
                guidance = self._guidance.build(
                    triggers,
                    level,
                    language=session.language,
                    stage=session.stage,
                )

            if breakdown.emergency is not None:
                self._metrics.track_emergency_signal(breakdown.emergency)
            self._metrics.track_assessment(level)
            self._metrics.track_triggers(
                list(triggers.summary.categories),
                triggers.compound_pattern_names,
            )

            logger.info(
                "Message analyzed",
                stage=session.stage.value,
                raw_score=breakdown.level,
                anxiety_level=level,
                triggers=triggers.summary.total_triggers,
                compound=triggers.summary.has_compound_pattern,
            )

        return MessageAnalysis(
            raw_score=breakdown.level,
            anxiety_level=level,
            triggers=triggers,
            guidance=guidance,
            breakdown=breakdown,
        )

    def complete_turn(
        self,
        session: AnxietySession,
        user_message: str,
        assistant_reply: str,
    ) -> TurnResult:
        """
        Advance the session once the assistant has replied.

        Args:
            session: Session as stored before this turn
            user_message: User message of the turn
            assistant_reply: Generated reply of the turn

        Returns:
            TurnResult with the delta and the updated session
        """
        with session_context(str(session.id)):
            update = self._stage_machine.advance_from_text(session, user_message, assistant_reply)
        updated = session.apply(update)

        intervention = None
        if update.intervention is not None:
            intervention = get_intervention(update.intervention)
            self._metrics.track_intervention(update.intervention_type)

        if update.stage is not None:
            self._metrics.track_stage_transition(session.stage.value, update.stage.value)
            if update.stage is AnxietyStage.COMPLETED:
                self._metrics.track_session_completed(updated.anxiety_change)

        return TurnResult(update=update, session=updated, intervention=intervention)
