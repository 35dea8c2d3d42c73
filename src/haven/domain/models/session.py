"""
Breathing Session Domain Model

Configuration and live state of a guided breathing session.

Both values are immutable: every tick or command produces a new
instance, so readers never observe a half-applied update.
"""

from dataclasses import dataclass, replace

from haven.domain.enums.breath_phase import BreathPhase
from haven.domain.errors import InvalidConfiguration
from haven.domain.models.pattern import BreathingPattern


def minutes_to_seconds(minutes: int) -> int:
    """
    Convert the minute selector value into a session budget.

    Args:
        minutes: Positive whole number of minutes

    Returns:
        Session length in seconds

    Raises:
        InvalidConfiguration: If minutes is not a positive integer
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 1:
        raise InvalidConfiguration(
            f"Session length must be a positive number of minutes, got {minutes!r}",
            command="set_session_length",
        )
    return minutes * 60


def validate_session_length(seconds: int) -> int:
    """Return seconds unchanged if it is a positive integer."""
    if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 1:
        raise InvalidConfiguration(
            f"Session length must be a positive number of seconds, got {seconds!r}",
            command="set_session_length",
        )
    return seconds


@dataclass(frozen=True)
class SessionConfig:
    """
    User-selected session settings.

    Attributes:
        pattern: Selected breathing pattern
        session_length_seconds: Time budget for one session
        voice_enabled: Whether phase cues are spoken
    """

    pattern: BreathingPattern
    session_length_seconds: int
    voice_enabled: bool = True

    def __post_init__(self) -> None:
        validate_session_length(self.session_length_seconds)

    def to_dict(self) -> dict:
        """Serialize config to dictionary."""
        return {
            "pattern": self.pattern.to_dict(),
            "session_length_seconds": self.session_length_seconds,
            "voice_enabled": self.voice_enabled,
        }


@dataclass(frozen=True)
class SessionState:
    """
    Live state of the breathing engine.

    Attributes:
        phase: Current breath phase
        time_left_in_phase: Whole seconds left in the current phase
        elapsed_seconds: Ticks delivered since the last start or reset
        cycles_completed: Full inhale/hold/exhale traversals
        is_active: Whether the clock is ticking
        is_completed: Whether the last session ran out its budget
    """

    phase: BreathPhase
    time_left_in_phase: int
    elapsed_seconds: int = 0
    cycles_completed: int = 0
    is_active: bool = False
    is_completed: bool = False

    @classmethod
    def ready(cls, pattern: BreathingPattern) -> "SessionState":
        """Ready (not yet started) state for a pattern."""
        return cls(phase=BreathPhase.INHALE, time_left_in_phase=pattern.inhale)

    @classmethod
    def started(cls, pattern: BreathingPattern) -> "SessionState":
        """State right after start()."""
        return replace(cls.ready(pattern), is_active=True)

    @property
    def is_ready(self) -> bool:
        """Inactive and not yet advanced since the last start or reset."""
        return (
            not self.is_active
            and self.elapsed_seconds == 0
            and self.cycles_completed == 0
            and self.phase is BreathPhase.INHALE
        )

    def to_dict(self) -> dict:
        """Serialize state to dictionary."""
        return {
            "phase": self.phase.value,
            "time_left_in_phase": self.time_left_in_phase,
            "elapsed_seconds": self.elapsed_seconds,
            "cycles_completed": self.cycles_completed,
            "is_active": self.is_active,
            "is_completed": self.is_completed,
        }


@dataclass(frozen=True)
class EngineState:
    """Config and session state applied together by the reducer."""

    config: SessionConfig
    session: SessionState

    @classmethod
    def initial(cls, config: SessionConfig) -> "EngineState":
        """Ready engine state for a config."""
        return cls(config=config, session=SessionState.ready(config.pattern))

    @property
    def phase_duration(self) -> int:
        """Configured duration of the current phase."""
        return self.config.pattern.duration_of(self.session.phase)

    @property
    def remaining_seconds(self) -> int:
        """Seconds left in the session budget."""
        return max(0, self.config.session_length_seconds - self.session.elapsed_seconds)
