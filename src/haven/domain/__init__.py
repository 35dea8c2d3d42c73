"""
Sensory Haven Domain Layer

Core breathing entities, value objects, events and errors.
These models are independent of the clock, voice and HTTP layers.
"""

from haven.domain.enums.breath_phase import BreathPhase, VoiceCue
from haven.domain.errors import (
    BreathingError,
    ClockUnavailable,
    IllegalTransition,
    InvalidConfiguration,
)
from haven.domain.models.pattern import BreathingPattern
from haven.domain.models.session import EngineState, SessionConfig, SessionState
from haven.domain.models.events import (
    PhaseEntered,
    SessionCompleted,
    SessionEvent,
    SessionReset,
    SessionStopped,
)

__all__ = [
    # Enums
    "BreathPhase",
    "VoiceCue",
    # Errors
    "BreathingError",
    "ClockUnavailable",
    "IllegalTransition",
    "InvalidConfiguration",
    # Models
    "BreathingPattern",
    "EngineState",
    "SessionConfig",
    "SessionState",
    # Events
    "PhaseEntered",
    "SessionCompleted",
    "SessionEvent",
    "SessionReset",
    "SessionStopped",
]
