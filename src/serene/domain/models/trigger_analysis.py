"""
Trigger Analysis Models

Output contract of the trigger detector. Derived per message and
never persisted as its own entity; only the session trigger category
is stored on the session.
"""

from dataclasses import dataclass, field
from typing import Optional

from serene.domain.enums.intervention_type import TriggerConfidence


@dataclass(frozen=True)
class TriggerMatch:
    """
    A qualifying trigger for one message.

    Attributes:
        trigger: Trigger definition key (e.g. "work_dissatisfaction")
        score: Cumulative pattern weight (message + decayed history)
        category: Static category of the trigger definition
        description: Human-readable description
        confidence: Confidence band derived from score
        matched_labels: Which patterns fired, prefixed "current:" or "history:"
    """

    trigger: str
    score: float
    category: str
    description: str
    confidence: TriggerConfidence
    matched_labels: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "trigger": self.trigger,
            "score": round(self.score, 2),
            "category": self.category,
            "description": self.description,
            "confidence": self.confidence.value,
        }


@dataclass(frozen=True)
class CompoundPattern:
    """
    A named co-occurrence of triggers treated as a more severe situation.

    Attributes:
        name: Pattern name (e.g. "accident_financial_job_crisis")
        description: Human-readable description
        triggers: Trigger keys that formed the pattern
    """

    name: str
    description: str
    triggers: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "triggers": list(self.triggers),
        }


@dataclass(frozen=True)
class TriggerSummary:
    """Aggregate statistics for one detection result."""

    total_triggers: int = 0
    categories: tuple[str, ...] = ()
    high_confidence_triggers: int = 0
    has_compound_pattern: bool = False

    def to_dict(self) -> dict:
        return {
            "total_triggers": self.total_triggers,
            "categories": list(self.categories),
            "high_confidence_triggers": self.high_confidence_triggers,
            "has_compound_pattern": self.has_compound_pattern,
        }


@dataclass(frozen=True)
class TriggerDetectionResult:
    """
    Result of multi-trigger detection.

    An empty result (no qualifying triggers) is valid: it means
    generic distress with no specific trigger identified.

    Attributes:
        all_triggers: Every qualifying trigger, ranked by score descending
        triggers_by_category: Qualifying triggers grouped by category
        compound_patterns: Detected co-occurrence patterns
        summary: Aggregate statistics
    """

    all_triggers: tuple[TriggerMatch, ...] = ()
    triggers_by_category: dict[str, tuple[TriggerMatch, ...]] = field(default_factory=dict)
    compound_patterns: tuple[CompoundPattern, ...] = ()
    summary: TriggerSummary = field(default_factory=TriggerSummary)

    @property
    def primary_trigger(self) -> Optional[TriggerMatch]:
        """Highest-scoring trigger, or None when nothing qualified."""
        return self.all_triggers[0] if self.all_triggers else None

    @property
    def secondary_triggers(self) -> tuple[TriggerMatch, ...]:
        """All qualifying triggers except the primary one."""
        return self.all_triggers[1:]

    @property
    def trigger_keys(self) -> list[str]:
        """Ranked trigger keys."""
        return [t.trigger for t in self.all_triggers]

    @property
    def compound_pattern_names(self) -> list[str]:
        return [p.name for p in self.compound_patterns]

    def has_compound(self, name: str) -> bool:
        """Whether the named compound pattern fired."""
        return any(p.name == name for p in self.compound_patterns)

    def to_dict(self) -> dict:
        """Serialize for the reply generator and analytics."""
        primary = self.primary_trigger
        return {
            "all_triggers": [t.to_dict() for t in self.all_triggers],
            "primary_trigger": primary.to_dict() if primary else None,
            "secondary_triggers": [t.to_dict() for t in self.secondary_triggers],
            "triggers_by_category": {
                category: [
                    {
                        "trigger": t.trigger,
                        "score": round(t.score, 2),
                        "description": t.description,
                    }
                    for t in matches
                ]
                for category, matches in self.triggers_by_category.items()
            },
            "compound_patterns": [p.to_dict() for p in self.compound_patterns],
            "summary": self.summary.to_dict(),
        }
