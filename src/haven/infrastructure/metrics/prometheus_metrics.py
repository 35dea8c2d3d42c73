"""
Prometheus Metrics

Breathing engine observability.
Exposes metrics at /metrics endpoint for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)
from fastapi import APIRouter, Response

from haven.config.logging_config import get_logger
from haven.domain.enums.breath_phase import BreathPhase
from haven.domain.models.events import (
    PhaseEntered,
    SessionCompleted,
    SessionEvent,
    SessionStopped,
)

logger = get_logger(__name__)

# =============================================================================
# BREATHING SESSION METRICS
# =============================================================================

BREATHING_SESSIONS_STARTED = Counter(
    "haven_breathing_sessions_started_total",
    "Total number of breathing sessions started",
)

BREATHING_SESSIONS_ENDED = Counter(
    "haven_breathing_sessions_ended_total",
    "Total number of breathing sessions ended",
    ["outcome"],  # completed, stopped
)

BREATHING_SESSION_DURATION = Histogram(
    "haven_breathing_session_duration_seconds",
    "Elapsed seconds of ended breathing sessions",
    ["outcome"],
    buckets=[15, 30, 60, 120, 180, 300, 600, 1200],
)

ACTIVE_BREATHING_SESSIONS = Gauge(
    "haven_active_breathing_sessions",
    "Number of currently active breathing sessions",
)

PHASE_TRANSITIONS_TOTAL = Counter(
    "haven_phase_transitions_total",
    "Breath phases entered",
    ["phase"],  # inhale, hold, exhale
)

BREATHING_CYCLES_TOTAL = Counter(
    "haven_breathing_cycles_total",
    "Full inhale/hold/exhale cycles completed",
)

COMMANDS_REJECTED_TOTAL = Counter(
    "haven_commands_rejected_total",
    "Engine commands rejected as illegal transitions",
    ["command"],
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "haven_system",
    "Sensory Haven system information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_command_rejected(command: str) -> None:
    """Record a rejected engine command."""
    COMMANDS_REJECTED_TOTAL.labels(command=command).inc()


def track_session_ended(outcome: str, elapsed_seconds: float) -> None:
    """Record a breathing session ending."""
    BREATHING_SESSIONS_ENDED.labels(outcome=outcome).inc()
    BREATHING_SESSION_DURATION.labels(outcome=outcome).observe(elapsed_seconds)
    ACTIVE_BREATHING_SESSIONS.dec()


class SessionMetricsRecorder:
    """
    Engine subscriber feeding the breathing metrics.

    A session start is recognised as a PhaseEntered at zero elapsed
    seconds; every start is matched by exactly one SessionStopped.
    """

    def __call__(self, event: SessionEvent) -> None:
        if isinstance(event, PhaseEntered):
            PHASE_TRANSITIONS_TOTAL.labels(phase=event.phase.value).inc()
            if event.elapsed_seconds == 0:
                BREATHING_SESSIONS_STARTED.inc()
                ACTIVE_BREATHING_SESSIONS.inc()
            elif event.phase is BreathPhase.INHALE:
                BREATHING_CYCLES_TOTAL.inc()
        elif isinstance(event, SessionStopped):
            outcome = "completed" if event.completed else "stopped"
            track_session_ended(outcome, event.elapsed_seconds)
        elif isinstance(event, SessionCompleted):
            logger.debug(
                "Session completion recorded",
                elapsed_seconds=event.elapsed_seconds,
                cycles_completed=event.cycles_completed,
            )


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(environment: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
