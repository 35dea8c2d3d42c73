"""
Breathing Session Reducer

Pure state machine for the guided breathing engine:

    reduce(EngineState, Action) -> Transition(EngineState, events)

No clock, no voice, no logging. The engine applies the returned
transition atomically and publishes its events, so a command and a
tick can never produce a torn update.

Tick ordering is fixed:
1. Decrement the phase countdown
2. On reaching zero, advance the phase (counting a cycle on the
   exhale -> inhale wrap) and emit PhaseEntered
3. Increment elapsed time
4. On exhausting the session budget, stop and emit SessionCompleted
   after any PhaseEntered from the same tick
"""

from dataclasses import dataclass, field, replace
from typing import Union

from haven.domain.errors import IllegalTransition
from haven.domain.models.events import (
    PhaseEntered,
    SessionCompleted,
    SessionEvent,
    SessionReset,
    SessionStopped,
)
from haven.domain.models.pattern import BreathingPattern
from haven.domain.models.session import (
    EngineState,
    SessionState,
    validate_session_length,
)


# =============================================================================
# ACTIONS
# =============================================================================

@dataclass(frozen=True)
class Start:
    name: str = field(default="start", init=False)


@dataclass(frozen=True)
class Stop:
    name: str = field(default="stop", init=False)


@dataclass(frozen=True)
class Reset:
    name: str = field(default="reset", init=False)


@dataclass(frozen=True)
class Tick:
    name: str = field(default="tick", init=False)


@dataclass(frozen=True)
class SelectPattern:
    pattern: BreathingPattern
    name: str = field(default="select_pattern", init=False)


@dataclass(frozen=True)
class SetSessionLength:
    seconds: int
    name: str = field(default="set_session_length", init=False)


@dataclass(frozen=True)
class SetVoiceEnabled:
    enabled: bool
    name: str = field(default="set_voice_enabled", init=False)


Action = Union[Start, Stop, Reset, Tick, SelectPattern, SetSessionLength, SetVoiceEnabled]


@dataclass(frozen=True)
class Transition:
    """Result of applying one action."""

    state: EngineState
    events: tuple[SessionEvent, ...] = ()


# =============================================================================
# REDUCER
# =============================================================================

def reduce(state: EngineState, action: Action) -> Transition:
    """
    Apply an action to an engine state.

    Args:
        state: Current engine state
        action: Command or tick to apply

    Returns:
        New state plus the events it produced, in order

    Raises:
        IllegalTransition: If the action is not valid in this state
        InvalidConfiguration: If a configuration value is out of range
    """
    if isinstance(action, Tick):
        return _tick(state)
    if isinstance(action, Start):
        return _start(state)
    if isinstance(action, Stop):
        return _stop(state)
    if isinstance(action, Reset):
        return _reset(state)
    if isinstance(action, SelectPattern):
        return _select_pattern(state, action.pattern)
    if isinstance(action, SetSessionLength):
        return _set_session_length(state, action.seconds)
    if isinstance(action, SetVoiceEnabled):
        config = replace(state.config, voice_enabled=bool(action.enabled))
        return Transition(state=replace(state, config=config))
    raise TypeError(f"Unsupported action: {action!r}")


def _require_inactive(state: EngineState, command: str) -> None:
    if state.session.is_active:
        raise IllegalTransition(
            f"{command} is not allowed while a session is active",
            command=command,
        )


def _start(state: EngineState) -> Transition:
    _require_inactive(state, "start")
    session = SessionState.started(state.config.pattern)
    return Transition(
        state=replace(state, session=session),
        events=(
            PhaseEntered(
                phase=session.phase,
                cycles_completed=0,
                elapsed_seconds=0,
            ),
        ),
    )


def _stop(state: EngineState) -> Transition:
    session = state.session
    if not session.is_active:
        raise IllegalTransition("stop is only allowed while a session is active", command="stop")

    return Transition(
        state=replace(state, session=replace(session, is_active=False)),
        events=(
            SessionStopped(
                elapsed_seconds=session.elapsed_seconds,
                cycles_completed=session.cycles_completed,
            ),
        ),
    )


def _reset(state: EngineState) -> Transition:
    events: list[SessionEvent] = []
    if state.session.is_active:
        events.extend(_stop(state).events)
    events.append(SessionReset())

    return Transition(
        state=replace(state, session=SessionState.ready(state.config.pattern)),
        events=tuple(events),
    )


def _select_pattern(state: EngineState, pattern: BreathingPattern) -> Transition:
    _require_inactive(state, "select_pattern")
    config = replace(state.config, pattern=pattern)
    # Counters from a finished session are kept for display; only the
    # ready countdown follows the new pattern.
    session = replace(
        state.session,
        phase=SessionState.ready(pattern).phase,
        time_left_in_phase=pattern.inhale,
    )
    return Transition(state=EngineState(config=config, session=session))


def _set_session_length(state: EngineState, seconds: int) -> Transition:
    _require_inactive(state, "set_session_length")
    config = replace(state.config, session_length_seconds=validate_session_length(seconds))
    return Transition(state=replace(state, config=config))


def _tick(state: EngineState) -> Transition:
    session = state.session
    if not session.is_active:
        raise IllegalTransition("tick delivered while inactive", command="tick")

    pattern = state.config.pattern
    phase = session.phase
    time_left = session.time_left_in_phase - 1
    cycles = session.cycles_completed
    elapsed = session.elapsed_seconds + 1
    events: list[SessionEvent] = []

    if time_left <= 0:
        if phase.wraps_cycle:
            cycles += 1
        phase = phase.following()
        time_left = pattern.duration_of(phase)
        events.append(
            PhaseEntered(phase=phase, cycles_completed=cycles, elapsed_seconds=elapsed)
        )

    is_active = True
    is_completed = False
    if elapsed >= state.config.session_length_seconds:
        is_active = False
        is_completed = True
        events.append(
            SessionStopped(elapsed_seconds=elapsed, cycles_completed=cycles, completed=True)
        )
        events.append(SessionCompleted(elapsed_seconds=elapsed, cycles_completed=cycles))

    new_session = SessionState(
        phase=phase,
        time_left_in_phase=time_left,
        elapsed_seconds=elapsed,
        cycles_completed=cycles,
        is_active=is_active,
        is_completed=is_completed,
    )
    return Transition(state=replace(state, session=new_session), events=tuple(events))
