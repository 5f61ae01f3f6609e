"""
Prometheus Metrics

Metrics for SERENE analysis and session-flow observability.
Collected into the default prometheus_client registry; exposition
is left to the host process.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
A MetricsRecorder built from Settings is a no-op when metrics are disabled.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from prometheus_client import Counter, Histogram, Info

from serene.config.settings import Settings

# =============================================================================
# ANALYSIS METRICS
# =============================================================================

ANXIETY_ASSESSMENTS_TOTAL = Counter(
    "serene_anxiety_assessments_total",
    "Reconciled anxiety assessments by level",
    ["level"],  # 0-10, none
)

EMERGENCY_SIGNALS_TOTAL = Counter(
    "serene_emergency_signals_total",
    "Emergency pattern matches by pattern label",
    ["pattern"],
)

TRIGGERS_DETECTED_TOTAL = Counter(
    "serene_triggers_detected_total",
    "Qualifying triggers by category",
    ["category"],
)

COMPOUND_PATTERNS_TOTAL = Counter(
    "serene_compound_patterns_total",
    "Compound trigger patterns by name",
    ["pattern"],
)

ANALYSIS_LATENCY = Histogram(
    "serene_analysis_latency_seconds",
    "Per-message analysis latency",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

# =============================================================================
# SESSION FLOW METRICS
# =============================================================================

STAGE_TRANSITIONS_TOTAL = Counter(
    "serene_stage_transitions_total",
    "Session stage transitions",
    ["from_stage", "to_stage"],
)

INTERVENTIONS_SELECTED_TOTAL = Counter(
    "serene_interventions_selected_total",
    "Interventions selected by type",
    ["intervention_type"],
)

SESSIONS_COMPLETED_TOTAL = Counter(
    "serene_sessions_completed_total",
    "Sessions that reached the completed stage",
    ["outcome"],  # improved, unchanged, worsened, unknown
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "serene_engine",
    "SERENE engine information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",  # Updated at runtime
})

# =============================================================================
# RECORDER
# =============================================================================

class MetricsRecorder:
    """
    Records engine metrics when enabled.

    One recorder per engine, built from the engine's own settings,
    so an engine configured with metrics off never touches the
    shared registry.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    @classmethod
    def from_settings(cls, settings: Settings) -> "MetricsRecorder":
        return cls(enabled=settings.metrics_enabled)

    def track_assessment(self, level: Optional[int]) -> None:
        """Record a reconciled anxiety level."""
        if not self.enabled:
            return
        ANXIETY_ASSESSMENTS_TOTAL.labels(level="none" if level is None else str(level)).inc()

    def track_emergency_signal(self, pattern: str) -> None:
        """Record an emergency pattern match."""
        if not self.enabled:
            return
        EMERGENCY_SIGNALS_TOTAL.labels(pattern=pattern).inc()

    def track_triggers(self, categories: list[str], compound_patterns: list[str]) -> None:
        """Record detected trigger categories and compound patterns."""
        if not self.enabled:
            return
        for category in categories:
            TRIGGERS_DETECTED_TOTAL.labels(category=category).inc()
        for name in compound_patterns:
            COMPOUND_PATTERNS_TOTAL.labels(pattern=name).inc()

    def track_stage_transition(self, from_stage: str, to_stage: str) -> None:
        if not self.enabled:
            return
        STAGE_TRANSITIONS_TOTAL.labels(from_stage=from_stage, to_stage=to_stage).inc()

    def track_intervention(self, intervention_type: str) -> None:
        if not self.enabled:
            return
        INTERVENTIONS_SELECTED_TOTAL.labels(intervention_type=intervention_type).inc()

    def track_session_completed(self, anxiety_change: Optional[int]) -> None:
        """Record session completion by pre/post outcome."""
        if not self.enabled:
            return
        if anxiety_change is None:
            outcome = "unknown"
        elif anxiety_change > 0:
            outcome = "improved"
        elif anxiety_change < 0:
            outcome = "worsened"
        else:
            outcome = "unchanged"
        SESSIONS_COMPLETED_TOTAL.labels(outcome=outcome).inc()

    @contextmanager
    def track_analysis_latency(self) -> Iterator[None]:
        """Observe the duration of the wrapped analysis block."""
        start_time = time.perf_counter()
        try:
            yield
        finally:
            if self.enabled:
                ANALYSIS_LATENCY.observe(time.perf_counter() - start_time)


def update_system_info(environment: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
