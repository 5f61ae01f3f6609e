"""
Session Analytics

Per-session report over a session and its message history:
message counts, whole-session trigger analysis, per-message anxiety
progression, stage, duration, self-rated improvement and
recommendations.

ARCHITECTURE: Read-only. Loading the session and its history is the
storage collaborator's job; this module only computes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from serene.config.logging_config import get_logger
from serene.domain.models.conversation import ConversationMessage, user_messages
from serene.domain.models.session import AnxietySession
from serene.domain.models.trigger_analysis import TriggerDetectionResult
from serene.services.detection.anxiety_scorer import AnxietyScorer
from serene.services.detection.context_reconciler import ContextAwareReconciler
from serene.services.detection.trigger_detector import TriggerDetector
from serene.services.guidance.recommendations import therapeutic_recommendations

logger = get_logger(__name__)


@dataclass
class AnxietyDataPoint:
    """Reconciled level for one user message."""

    level: int
    timestamp: datetime

    def to_dict(self) -> dict:
        return {"level": self.level, "timestamp": self.timestamp.isoformat()}


@dataclass
class SessionAnalytics:
    """
    Analytics report for one session.

    Attributes:
        session_id: Session identifier
        total_messages: All messages in history
        user_messages: User-authored messages
        ai_messages: Assistant messages
        trigger_analysis: Detection over the joined user text
        progression: Reconciled levels for user messages that had a signal
        initial_level: Self-rated level before the intervention
        current_level: Self-rated level after the intervention
        stage: Current session stage
        duration_seconds: Session duration (to now while open)
        recommendations: Recommended therapeutic notes
    """

    session_id: str
    total_messages: int
    user_messages: int
    ai_messages: int
    trigger_analysis: TriggerDetectionResult
    progression: list[AnxietyDataPoint] = field(default_factory=list)
    initial_level: Optional[int] = None
    current_level: Optional[int] = None
    stage: str = ""
    duration_seconds: int = 0
    recommendations: list[str] = field(default_factory=list)

    @property
    def improvement(self) -> Optional[int]:
        """Pre minus post rating (positive = improvement)."""
        if self.initial_level is None or self.current_level is None:
            return None
        return self.initial_level - self.current_level

    @property
    def peak_level(self) -> Optional[int]:
        return max((p.level for p in self.progression), default=None)

    def to_dict(self) -> dict:
        """Serialize report."""
        summary = self.trigger_analysis.summary
        return {
            "session_id": self.session_id,
            "total_messages": self.total_messages,
            "user_messages": self.user_messages,
            "ai_messages": self.ai_messages,
            "trigger_analysis": {
                **self.trigger_analysis.to_dict(),
                "trigger_complexity": summary.total_triggers,
            },
            "anxiety_progression": {
                "detections": len(self.progression),
                "initial_level": self.initial_level,
                "current_level": self.current_level,
                "improvement": self.improvement,
                "peak_level": self.peak_level,
                "progression": [p.to_dict() for p in self.progression],
            },
            "session_stage": self.stage,
            "session_duration_seconds": self.duration_seconds,
            "therapeutic_recommendations": list(self.recommendations),
        }


class SessionAnalyticsService:
    """
    Computes session analytics.

    Each user message is scored against the history that preceded it
    and reconciled with its own trigger analysis.
    """

    def __init__(
        self,
        scorer: Optional[AnxietyScorer] = None,
        detector: Optional[TriggerDetector] = None,
        reconciler: Optional[ContextAwareReconciler] = None,
    ) -> None:
        self._scorer = scorer or AnxietyScorer()
        self._detector = detector or TriggerDetector()
        self._reconciler = reconciler or ContextAwareReconciler()

    def analyze(
        self,
        session: AnxietySession,
        history: Sequence[ConversationMessage],
    ) -> SessionAnalytics:
        """
        Build the analytics report.

        Args:
            session: Session being reported on
            history: All messages of the session, oldest first

        Returns:
            SessionAnalytics
        """
        if history is None:
            raise ValueError("history must not be None")

        from_user = user_messages(history)
        joined_user_text = " ".join(msg.text for msg in from_user)
        overall = self._detector.detect(joined_user_text, history)

        progression: list[AnxietyDataPoint] = []
        for index, message in enumerate(history):
            if not message.is_user:
                continue
            prior = history[:index]
            triggers = self._detector.detect(message.text, prior)
            raw = self._scorer.score(message.text, prior)
            level = self._reconciler.reconcile(raw, triggers)
            if level is not None:
                progression.append(AnxietyDataPoint(level=level, timestamp=message.timestamp))

        rated = (
            session.post_anxiety_level
            if session.post_anxiety_level is not None
            else session.pre_anxiety_level
        )

        report = SessionAnalytics(
            session_id=str(session.id),
            total_messages=len(history),
            user_messages=len(from_user),
            ai_messages=len(history) - len(from_user),
            trigger_analysis=overall,
            progression=progression,
            initial_level=session.pre_anxiety_level,
            current_level=session.post_anxiety_level,
            stage=session.stage.value,
            duration_seconds=session.duration_seconds,
            recommendations=therapeutic_recommendations(overall, rated),
        )

        logger.info(
            "Session analytics computed",
            session_id=report.session_id,
            total_messages=report.total_messages,
            triggers=overall.summary.total_triggers,
            detections=len(progression),
        )
        return report


# Global analytics service instance
session_analytics_service = SessionAnalyticsService()
