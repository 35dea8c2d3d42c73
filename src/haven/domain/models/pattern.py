"""
Breathing Pattern Domain Model

A named set of phase durations, e.g. the classic 4-7-8 pattern.
Patterns are catalog entries and never change once built.
"""

from dataclasses import dataclass

from haven.domain.enums.breath_phase import BreathPhase
from haven.domain.errors import InvalidConfiguration


@dataclass(frozen=True)
class BreathingPattern:
    """
    Immutable breathing pattern.

    Attributes:
        id: Stable catalog identifier
        name: Display name
        description: Short explanation shown to the user
        inhale: Inhale duration in seconds
        hold: Hold duration in seconds
        exhale: Exhale duration in seconds
    """

    id: str
    name: str
    description: str
    inhale: int
    hold: int
    exhale: int

    def __post_init__(self) -> None:
        for phase in BreathPhase:
            seconds = getattr(self, phase.value)
            # bool is an int subclass; reject it explicitly
            if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 1:
                raise InvalidConfiguration(
                    f"Pattern '{self.id}' has invalid {phase.value} duration: {seconds!r}",
                    command="select_pattern",
                )

    def duration_of(self, phase: BreathPhase) -> int:
        """Seconds configured for a phase."""
        return getattr(self, phase.value)

    @property
    def cycle_seconds(self) -> int:
        """Length of one full inhale/hold/exhale cycle."""
        return self.inhale + self.hold + self.exhale

    @property
    def label(self) -> str:
        """Compact label such as '4-7-8'."""
        return f"{self.inhale}-{self.hold}-{self.exhale}"

    def to_dict(self) -> dict:
        """Serialize pattern to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "inhale": self.inhale,
            "hold": self.hold,
            "exhale": self.exhale,
            "label": self.label,
            "cycle_seconds": self.cycle_seconds,
        }
