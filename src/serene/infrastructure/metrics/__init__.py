"""Metrics infrastructure package."""

from serene.infrastructure.metrics.prometheus_metrics import (
    # Analysis metrics
    ANXIETY_ASSESSMENTS_TOTAL,
    EMERGENCY_SIGNALS_TOTAL,
    TRIGGERS_DETECTED_TOTAL,
    COMPOUND_PATTERNS_TOTAL,
    ANALYSIS_LATENCY,
    # Session flow metrics
    STAGE_TRANSITIONS_TOTAL,
    INTERVENTIONS_SELECTED_TOTAL,
    SESSIONS_COMPLETED_TOTAL,
    # Recording
    MetricsRecorder,
    update_system_info,
)

__all__ = [
    "ANXIETY_ASSESSMENTS_TOTAL",
    "EMERGENCY_SIGNALS_TOTAL",
    "TRIGGERS_DETECTED_TOTAL",
    "COMPOUND_PATTERNS_TOTAL",
    "ANALYSIS_LATENCY",
    "STAGE_TRANSITIONS_TOTAL",
    "INTERVENTIONS_SELECTED_TOTAL",
    "SESSIONS_COMPLETED_TOTAL",
    "MetricsRecorder",
    "update_system_info",
]
