"""Domain models package."""

from haven.domain.models.pattern import BreathingPattern
from haven.domain.models.session import (
    EngineState,
    SessionConfig,
    SessionState,
    minutes_to_seconds,
    validate_session_length,
)
from haven.domain.models.events import (
    PhaseEntered,
    SessionCompleted,
    SessionEvent,
    SessionReset,
    SessionStopped,
)

__all__ = [
    # Pattern
    "BreathingPattern",
    # Session
    "EngineState",
    "SessionConfig",
    "SessionState",
    "minutes_to_seconds",
    "validate_session_length",
    # Events
    "PhaseEntered",
    "SessionCompleted",
    "SessionEvent",
    "SessionReset",
    "SessionStopped",
]
