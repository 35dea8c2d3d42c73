"""
Breathing Session Events

Discrete moments published by the engine. Subscribers (voice
feedback, metrics) react to these instead of being called from the
tick handler directly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from haven.domain.enums.breath_phase import BreathPhase


def _utcnow() -> datetime:
    return datetime.utcnow()


@dataclass(frozen=True)
class PhaseEntered:
    """A new phase began; the only trigger for phase voice cues."""

    phase: BreathPhase
    cycles_completed: int
    elapsed_seconds: int
    timestamp: datetime = field(default_factory=_utcnow, compare=False)


@dataclass(frozen=True)
class SessionCompleted:
    """The session budget ran out and the engine stopped itself."""

    elapsed_seconds: int
    cycles_completed: int
    timestamp: datetime = field(default_factory=_utcnow, compare=False)


@dataclass(frozen=True)
class SessionStopped:
    """The session was deactivated (by the user or by completion)."""

    elapsed_seconds: int
    cycles_completed: int
    completed: bool = False
    timestamp: datetime = field(default_factory=_utcnow, compare=False)


@dataclass(frozen=True)
class SessionReset:
    """The engine returned to its ready state."""

    timestamp: datetime = field(default_factory=_utcnow, compare=False)


SessionEvent = Union[PhaseEntered, SessionCompleted, SessionStopped, SessionReset]
