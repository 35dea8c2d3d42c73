"""Metrics infrastructure package."""

from haven.infrastructure.metrics.prometheus_metrics import (
    # Breathing metrics
    BREATHING_SESSIONS_STARTED,
    BREATHING_SESSIONS_ENDED,
    BREATHING_SESSION_DURATION,
    ACTIVE_BREATHING_SESSIONS,
    PHASE_TRANSITIONS_TOTAL,
    BREATHING_CYCLES_TOTAL,
    COMMANDS_REJECTED_TOTAL,
    # Helpers
    SessionMetricsRecorder,
    track_command_rejected,
    track_session_ended,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "BREATHING_SESSIONS_STARTED",
    "BREATHING_SESSIONS_ENDED",
    "BREATHING_SESSION_DURATION",
    "ACTIVE_BREATHING_SESSIONS",
    "PHASE_TRANSITIONS_TOTAL",
    "BREATHING_CYCLES_TOTAL",
    "COMMANDS_REJECTED_TOTAL",
    "SessionMetricsRecorder",
    "track_command_rejected",
    "track_session_ended",
    "update_system_info",
    "metrics_router",
]
