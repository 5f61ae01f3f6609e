"""
Anxiety Session Domain Model

Represents one guided anxiety-management session. The session's
stage field drives conversation progression; the stage machine is the
only component that produces changes to it, as SessionUpdate deltas.

PRIVACY: trigger_description and notes hold user-authored text
and should be encrypted at rest by the storage layer.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from serene.domain.enums.session_stage import AnxietyStage, SupportedLanguage


MIN_ANXIETY_LEVEL = 0
MAX_ANXIETY_LEVEL = 10

# Fields that belong to one assessment cycle and reset on restart
CYCLE_FIELDS: tuple[str, ...] = (
    "end_time",
    "trigger_category",
    "trigger_description",
    "pre_anxiety_level",
    "intervention",
    "intervention_type",
    "post_anxiety_level",
    "notes",
)


def is_valid_anxiety_level(value: Any) -> bool:
    """Check that a value is an integer anxiety level in [0, 10]."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_ANXIETY_LEVEL <= value <= MAX_ANXIETY_LEVEL
    )


def _validate_level(name: str, value: Optional[int]) -> None:
    if value is not None and not is_valid_anxiety_level(value):
        raise ValueError(f"{name} must be an integer in [0, 10], got {value!r}")


@dataclass(frozen=True)
class SessionUpdate:
    """
    Partial session change produced by the stage machine.

    Only non-None fields are changes. The storage collaborator
    commits the delta; the engine never writes storage itself.
    """

    stage: Optional[AnxietyStage] = None
    trigger_category: Optional[str] = None
    trigger_description: Optional[str] = None
    pre_anxiety_level: Optional[int] = None
    intervention: Optional[str] = None
    intervention_type: Optional[str] = None
    post_anxiety_level: Optional[int] = None
    notes: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    new_cycle: bool = False
    """Clear the per-cycle fields before applying the other changes."""

    def __post_init__(self) -> None:
        _validate_level("pre_anxiety_level", self.pre_anxiety_level)
        _validate_level("post_anxiety_level", self.post_anxiety_level)

    @property
    def is_empty(self) -> bool:
        """True when the update changes nothing."""
        return not self.new_cycle and not self.changes()

    def changes(self) -> dict[str, Any]:
        """Changed fields as a name -> value mapping."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "new_cycle" and getattr(self, f.name) is not None
        }

    def to_dict(self) -> dict:
        """Serialize the changed fields for the storage collaborator."""
        data: dict[str, Any] = {}
        if self.new_cycle:
            # Storage clears these before writing the changes below
            data["cleared"] = list(CYCLE_FIELDS)
        for name, value in self.changes().items():
            if isinstance(value, datetime):
                data[name] = value.isoformat()
            elif isinstance(value, AnxietyStage):
                data[name] = value.value
            else:
                data[name] = value
        return data


@dataclass(frozen=True)
class AnxietySession:
    """
    Anxiety session entity.

    Attributes:
        id: Session identifier
        user_id: Owning user identifier
        language: Session language (en/es/pt)
        start_time: When the session was created
        end_time: When the session completed
        stage: Current conversation stage
        trigger_category: Selected trigger category id
        trigger_description: User's description of the trigger
        pre_anxiety_level: Self-rated anxiety before intervention
        intervention: Selected intervention id
        intervention_type: Selected intervention type
        post_anxiety_level: Self-rated anxiety after intervention
        notes: User feedback on what helped
        ai_detected_insights: Analysis signals recorded by the host
    """

    id: UUID = field(default_factory=uuid4)
    user_id: UUID = field(default_factory=uuid4)
    language: SupportedLanguage = SupportedLanguage.EN
    start_time: datetime = field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None
    stage: AnxietyStage = AnxietyStage.IDLE
    trigger_category: Optional[str] = None
    trigger_description: Optional[str] = None
    pre_anxiety_level: Optional[int] = None
    intervention: Optional[str] = None
    intervention_type: Optional[str] = None
    post_anxiety_level: Optional[int] = None
    notes: Optional[str] = None
    ai_detected_insights: Optional[dict] = None

    def __post_init__(self) -> None:
        _validate_level("pre_anxiety_level", self.pre_anxiety_level)
        _validate_level("post_anxiety_level", self.post_anxiety_level)

    @classmethod
    def start(
        cls,
        user_id: UUID,
        language: str = SupportedLanguage.EN,
    ) -> "AnxietySession":
        """
        Create a new session in the idle stage.

        Args:
            user_id: Owning user
            language: Session language code

        Returns:
            New idle session
        """
        return cls(user_id=user_id, language=SupportedLanguage.coerce(language))

    def apply(self, update: SessionUpdate) -> "AnxietySession":
        """
        Return a copy of this session with the update applied.

        Args:
            update: Delta from the stage machine

        Returns:
            Updated session (self when the update is empty)
        """
        if update.is_empty:
            return self
        base = replace(self, **dict.fromkeys(CYCLE_FIELDS)) if update.new_cycle else self
        return replace(base, **update.changes())

    @property
    def is_active(self) -> bool:
        """Whether the session is mid-flow."""
        return not self.stage.is_restartable

    @property
    def anxiety_change(self) -> Optional[int]:
        """Pre minus post rating (positive = improvement)."""
        if self.pre_anxiety_level is None or self.post_anxiety_level is None:
            return None
        return self.pre_anxiety_level - self.post_anxiety_level

    @property
    def duration_seconds(self) -> int:
        """Session duration in seconds (to now while still open)."""
        end = self.end_time or datetime.utcnow()
        return int((end - self.start_time).total_seconds())

    def to_dict(self) -> dict:
        """Serialize session to dictionary."""
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "language": self.language.value,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "stage": self.stage.value,
            "trigger_category": self.trigger_category,
            "trigger_description": self.trigger_description,
            "pre_anxiety_level": self.pre_anxiety_level,
            "intervention": self.intervention,
            "intervention_type": self.intervention_type,
            "post_anxiety_level": self.post_anxiety_level,
            "notes": self.notes,
            "ai_detected_insights": self.ai_detected_insights,
        }
