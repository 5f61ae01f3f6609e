"""Session analytics services package."""

from serene.services.analytics.session_analytics import (
    AnxietyDataPoint,
    SessionAnalytics,
    SessionAnalyticsService,
)

__all__ = [
    "AnxietyDataPoint",
    "SessionAnalytics",
    "SessionAnalyticsService",
]
