"""
Animation Projector

Maps the engine's current phase and countdown to a single scale
value in [0, 1] the UI uses to size the breathing circle.

Stateless: the value can be recomputed at any instant from the
current snapshot without replaying history.
"""

from haven.domain.enums.breath_phase import BreathPhase
from haven.domain.errors import InvalidConfiguration
from haven.domain.models.session import EngineState


PROGRESS_FLOOR = 0.5


def progress(
    phase: BreathPhase,
    time_left_in_phase: int,
    phase_duration: int,
    floor: float = PROGRESS_FLOOR,
) -> float:
    """
    Compute the animation scale for a point in a phase.

    Inhale rises linearly from ``floor`` to 1.0 as the countdown runs
    from ``phase_duration`` to 0, hold stays at 1.0, and exhale falls
    back from 1.0 to ``floor``.

    Args:
        phase: Current breath phase
        time_left_in_phase: Seconds left in the phase
        phase_duration: Configured phase length in seconds
        floor: Scale at the start of inhale and end of exhale

    Returns:
        Scale in [floor, 1.0]

    Raises:
        InvalidConfiguration: If any input is out of range
    """
    if phase_duration < 1:
        raise InvalidConfiguration(f"Phase duration must be positive, got {phase_duration}")
    if not 0 <= time_left_in_phase <= phase_duration:
        raise InvalidConfiguration(
            f"time_left_in_phase {time_left_in_phase} outside [0, {phase_duration}]"
        )
    if not 0.0 <= floor <= 1.0:
        raise InvalidConfiguration(f"Progress floor must be within [0, 1], got {floor}")

    if phase is BreathPhase.HOLD:
        return 1.0

    span = 1.0 - floor
    done = (phase_duration - time_left_in_phase) / phase_duration

    if phase is BreathPhase.INHALE:
        return floor + span * done
    return 1.0 - span * done


def project(state: EngineState, floor: float = PROGRESS_FLOOR) -> float:
    """Animation scale for an engine state."""
    return progress(
        state.session.phase,
        state.session.time_left_in_phase,
        state.phase_duration,
        floor=floor,
    )
