"""
Breath Phase and Voice Cue Enumerations

Defines the three segments of a breathing cycle and the spoken
cues the voice channel understands.
"""

from enum import StrEnum


class BreathPhase(StrEnum):
    """
    Segment of the breathing cycle.

    Phases always run in the order INHALE -> HOLD -> EXHALE and
    then wrap back to INHALE.
    """

    INHALE = "inhale"
    """Breathe in; the animation grows."""

    HOLD = "hold"
    """Hold the breath; the animation stays full."""

    EXHALE = "exhale"
    """Breathe out; the animation shrinks."""

    def following(self) -> "BreathPhase":
        """Return the phase entered when this one runs out."""
        order = _PHASE_ORDER
        return order[(order.index(self) + 1) % len(order)]

    @property
    def wraps_cycle(self) -> bool:
        """Whether leaving this phase completes a full cycle."""
        return self is BreathPhase.EXHALE


_PHASE_ORDER: tuple[BreathPhase, ...] = (
    BreathPhase.INHALE,
    BreathPhase.HOLD,
    BreathPhase.EXHALE,
)


class VoiceCue(StrEnum):
    """Labels accepted by the voice channel."""

    INHALE = "inhale"
    HOLD = "hold"
    EXHALE = "exhale"
    COMPLETE = "complete"

    @classmethod
    def from_phase(cls, phase: BreathPhase) -> "VoiceCue":
        """
        Map a breath phase to its spoken cue.

        Args:
            phase: Phase that was just entered

        Returns:
            Cue with the same label
        """
        return cls(phase.value)
