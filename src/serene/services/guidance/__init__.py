"""Reply guidance services package."""

from serene.services.guidance.recommendations import therapeutic_recommendations
from serene.services.guidance.reply_guidance import (
    ComplexityTier,
    ReplyGuidance,
    ReplyGuidanceBuilder,
)

__all__ = [
    "therapeutic_recommendations",
    "ComplexityTier",
    "ReplyGuidance",
    "ReplyGuidanceBuilder",
]
