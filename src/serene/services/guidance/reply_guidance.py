"""
Reply Guidance

Structured outbound signal for the external reply generator. The
engine never builds or sends a prompt; it hands over what it knows
(level, triggers, stage, notes) plus guidance derived from trigger
complexity, and the generator turns that into wording.

CLINICAL_REVIEW_REQUIRED: Understanding/priority texts and key
insights must be reviewed by the clinical team.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from serene.config.logging_config import get_logger
from serene.domain.enums.session_stage import AnxietyStage, SupportedLanguage
from serene.domain.models.trigger_analysis import TriggerDetectionResult
from serene.services.guidance.recommendations import therapeutic_recommendations

logger = get_logger(__name__)


class ComplexityTier(StrEnum):
    """How many concerns the reply has to address at once."""

    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"
    COMPLEX = "complex"

    @classmethod
    def from_trigger_count(cls, total: int) -> "ComplexityTier":
        if total >= 4:
            return cls.COMPLEX
        if total >= 2:
            return cls.MULTIPLE
        if total == 1:
            return cls.SINGLE
        return cls.NONE


@dataclass
class ReplyGuidance:
    """
    Guidance handed to the reply generator for one message.

    Attributes:
        anxiety_level: Reconciled anxiety level (None = not assessed)
        trigger_analysis: Full trigger detection result
        recommended_therapeutic_notes: Clinician-facing notes
        complexity: Complexity tier from trigger count
        psychological_understanding: Summary of the situation
        therapeutic_priorities: What the reply should prioritize
        key_insights: Compound-pattern specific insights
        max_response_tokens: Suggested reply length budget
        language: Session language
        stage: Session stage when the message arrived
    """

    anxiety_level: Optional[int]
    trigger_analysis: TriggerDetectionResult
    recommended_therapeutic_notes: list[str] = field(default_factory=list)
    complexity: ComplexityTier = ComplexityTier.NONE
    psychological_understanding: str = ""
    therapeutic_priorities: str = ""
    key_insights: list[str] = field(default_factory=list)
    max_response_tokens: int = 300
    language: SupportedLanguage = SupportedLanguage.EN
    stage: Optional[AnxietyStage] = None

    @property
    def is_high_anxiety(self) -> bool:
        return self.anxiety_level is not None and self.anxiety_level >= 7

    def to_dict(self) -> dict:
        """Serialize for the reply generator."""
        return {
            "anxiety_level": self.anxiety_level,
            "trigger_analysis": self.trigger_analysis.to_dict(),
            "recommended_therapeutic_notes": list(self.recommended_therapeutic_notes),
            "complexity": self.complexity.value,
            "psychological_understanding": self.psychological_understanding,
            "therapeutic_priorities": self.therapeutic_priorities,
            "key_insights": list(self.key_insights),
            "max_response_tokens": self.max_response_tokens,
            "language": self.language.value,
            "stage": self.stage.value if self.stage else None,
        }


class ReplyGuidanceBuilder:
    """
    Builds ReplyGuidance from analysis results.

    Deterministic: same inputs, same guidance.
    """

    TOKEN_BUDGETS: dict[ComplexityTier, int] = {
        ComplexityTier.COMPLEX: 500,
        ComplexityTier.MULTIPLE: 400,
        ComplexityTier.SINGLE: 300,
        ComplexityTier.NONE: 300,
    }

    PRIORITIES: dict[ComplexityTier, str] = {
        ComplexityTier.COMPLEX: (
            "Do not oversimplify this situation. Address the interconnected nature "
            "of the triggers and how the concerns amplify each other."
        ),
        ComplexityTier.MULTIPLE: (
            "Address the triggers together rather than focusing on one. "
            "Show how the concerns connect to each other."
        ),
        ComplexityTier.SINGLE: (
            "Provide targeted support for the primary concern while building rapport."
        ),
        ComplexityTier.NONE: (
            "Explore underlying concerns through supportive questioning and validation."
        ),
    }

    # CLINICAL_REVIEW_REQUIRED
    COMPOUND_INSIGHTS: dict[str, str] = {
        "distress_validation_seeking": (
            "Emotional distress with an urgent need for validation. The person feels "
            "unheard; validate first while addressing the underlying distress."
        ),
        "accident_financial_job_crisis": (
            "Cascading crisis: a car accident creating financial strain and job "
            "security concerns. A genuine multi-domain emergency needing broad support."
        ),
        "isolated_multi_stressor": (
            "Multiple major stressors combined with social isolation. The lack of "
            "support makes every other problem more severe; address both."
        ),
    }

    MULTIPLE_PRACTICAL_INSIGHT = (
        "Several concrete practical problems. Offer practical guidance alongside "
        "emotional support."
    )

    def build(
        self,
        triggers: TriggerDetectionResult,
        anxiety_level: Optional[int],
        language: str = SupportedLanguage.EN,
        stage: Optional[AnxietyStage] = None,
    ) -> ReplyGuidance:
        """
        Build guidance for one analyzed message.

        Args:
            triggers: Trigger detection result
            anxiety_level: Reconciled anxiety level
            language: Session language
            stage: Current session stage

        Returns:
            ReplyGuidance
        """
        tier = ComplexityTier.from_trigger_count(triggers.summary.total_triggers)

        guidance = ReplyGuidance(
            anxiety_level=anxiety_level,
            trigger_analysis=triggers,
            recommended_therapeutic_notes=therapeutic_recommendations(triggers, anxiety_level),
            complexity=tier,
            psychological_understanding=self._understanding(tier, triggers),
            therapeutic_priorities=self.PRIORITIES[tier],
            key_insights=self._key_insights(triggers),
            max_response_tokens=self.TOKEN_BUDGETS[tier],
            language=SupportedLanguage.coerce(language),
            stage=stage,
        )

        logger.debug(
            "Reply guidance built",
            complexity=tier.value,
            anxiety_level=anxiety_level,
            insights=len(guidance.key_insights),
        )
        return guidance

    def _understanding(self, tier: ComplexityTier, triggers: TriggerDetectionResult) -> str:
        total = triggers.summary.total_triggers
        if tier is ComplexityTier.COMPLEX:
            categories = ", ".join(triggers.summary.categories)
            return (
                f"A complex situation with {total} interconnected triggers "
                f"across several life domains ({categories})."
            )
        if tier is ComplexityTier.MULTIPLE:
            keys = ", ".join(triggers.trigger_keys)
            return f"Multiple interconnected concerns ({keys}) affecting the person at once."
        if tier is ComplexityTier.SINGLE:
            return (
                f"Primary concern: {triggers.primary_trigger.description}. "
                "Stay alert for related issues."
            )
        return "General emotional distress without a clear trigger pattern."

    def _key_insights(self, triggers: TriggerDetectionResult) -> list[str]:
        insights = [
            text
            for name, text in self.COMPOUND_INSIGHTS.items()
            if triggers.has_compound(name)
        ]
        if len(triggers.triggers_by_category.get("practical", ())) >= 2:
            insights.append(self.MULTIPLE_PRACTICAL_INSIGHT)
        return insights


# Global builder instance
reply_guidance_builder = ReplyGuidanceBuilder()
