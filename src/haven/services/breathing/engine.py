"""
Breathing Session Engine

Thin shell around the pure reducer. The engine:
- holds the current EngineState and swaps it atomically
- owns exactly one session clock while a session is active
- publishes session events to subscribers (voice, metrics)
- turns illegal commands into no-op rejections

ARCHITECTURE: Every public operation is synchronous and completes
within the event loop turn it is called in, so commands and ticks
are strictly serialized. Call it from the loop that runs the clock.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from haven.config.logging_config import (
    bind_session_context,
    get_logger,
    unbind_session_context,
)
from haven.domain.errors import ClockUnavailable, IllegalTransition, InvalidConfiguration
from haven.domain.models.events import PhaseEntered, SessionEvent
from haven.domain.models.pattern import BreathingPattern
from haven.domain.models.session import (
    EngineState,
    SessionConfig,
    SessionState,
    minutes_to_seconds,
)
from haven.infrastructure.metrics import track_command_rejected
from haven.services.breathing.catalog import PatternCatalog
from haven.services.breathing.clock import AsyncioSessionClock, SessionClock, TickCallback
from haven.services.breathing.projector import PROGRESS_FLOOR, project
from haven.services.breathing.reducer import (
    Action,
    Reset,
    SelectPattern,
    SetSessionLength,
    SetVoiceEnabled,
    Start,
    Stop,
    Tick,
    Transition,
    reduce,
)

logger = get_logger(__name__)

ClockFactory = Callable[[TickCallback], SessionClock]
Subscriber = Callable[[SessionEvent], None]

DEFAULT_SESSION_LENGTH_SECONDS = 120


@dataclass(frozen=True)
class EngineSnapshot:
    """
    Read-only view of the engine for the UI layer.

    Attributes:
        config: Current session configuration
        state: Current session state
        phase_duration: Configured length of the current phase
        remaining_seconds: Seconds left in the session budget
        progress: Animation scale for the current instant
    """

    config: SessionConfig
    state: SessionState
    phase_duration: int
    remaining_seconds: int
    progress: float

    def to_dict(self) -> dict:
        """Serialize snapshot to dictionary."""
        return {
            "config": self.config.to_dict(),
            "state": self.state.to_dict(),
            "phase_duration": self.phase_duration,
            "remaining_seconds": self.remaining_seconds,
            "progress": round(self.progress, 4),
        }


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an engine command."""

    accepted: bool
    command: str
    snapshot: EngineSnapshot
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "command": self.command,
            "reason": self.reason,
            "snapshot": self.snapshot.to_dict(),
        }


def asyncio_clock_factory(interval_seconds: float = 1.0) -> ClockFactory:
    """Build a factory producing asyncio clocks with the given interval."""
    def factory(on_tick: TickCallback) -> SessionClock:
        return AsyncioSessionClock(on_tick=on_tick, interval_seconds=interval_seconds)
    return factory


class BreathingSessionEngine:
    """
    Guided breathing session engine.

    Usage:
        engine = BreathingSessionEngine(catalog=PatternCatalog())
        engine.subscribe(VoiceFeedback(channel, lambda: engine.config.voice_enabled))
        engine.start()
    """

    def __init__(
        self,
        catalog: PatternCatalog,
        clock_factory: Optional[ClockFactory] = None,
        config: Optional[SessionConfig] = None,
        progress_floor: float = PROGRESS_FLOOR,
    ) -> None:
        self._catalog = catalog
        self._clock_factory = clock_factory or asyncio_clock_factory()
        self._clock: Optional[SessionClock] = None
        self._subscribers: list[Subscriber] = []
        if not 0.0 <= progress_floor <= 1.0:
            raise InvalidConfiguration(f"Progress floor must be within [0, 1], got {progress_floor}")
        self._progress_floor = progress_floor

        # Events awaiting delivery, tagged with the session epoch they belong to.
        self._outbox: deque[tuple[int, SessionEvent]] = deque()
        self._publishing = False
        self._epoch = 0
        self._sessions_started = 0

        if config is None:
            config = SessionConfig(
                pattern=catalog.default(),
                session_length_seconds=DEFAULT_SESSION_LENGTH_SECONDS,
            )
        self._state = EngineState.initial(config)

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def catalog(self) -> PatternCatalog:
        return self._catalog

    @property
    def config(self) -> SessionConfig:
        return self._state.config

    @property
    def state(self) -> SessionState:
        return self._state.session

    @property
    def is_active(self) -> bool:
        return self._state.session.is_active

    @property
    def has_clock(self) -> bool:
        """Whether a clock handle is currently owned."""
        return self._clock is not None

    def snapshot(self) -> EngineSnapshot:
        """Current config, state and derived display values."""
        state = self._state
        return EngineSnapshot(
            config=state.config,
            state=state.session,
            phase_duration=state.phase_duration,
            remaining_seconds=state.remaining_seconds,
            progress=project(state, floor=self._progress_floor),
        )

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Register an event listener.

        Listeners run synchronously, in registration order, after the
        state change that produced the event has been committed.

        Returns:
            Callable that removes the listener
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def select_pattern(self, pattern: BreathingPattern) -> CommandResult:
        """Choose a pattern; rejected while a session is active."""
        return self._dispatch(SelectPattern(pattern=pattern))

    def select_pattern_by_id(self, pattern_id: str) -> CommandResult:
        """Choose a catalog pattern by id; unknown ids raise InvalidConfiguration."""
        return self.select_pattern(self._catalog.get(pattern_id))

    def set_session_length(self, seconds: int) -> CommandResult:
        """Set the session budget in seconds; rejected while active."""
        return self._dispatch(SetSessionLength(seconds=seconds))

    def set_session_minutes(self, minutes: int) -> CommandResult:
        """Set the session budget from the minute selector."""
        return self.set_session_length(minutes_to_seconds(minutes))

    def set_voice_enabled(self, enabled: bool) -> CommandResult:
        """Toggle voice cues; takes effect from the next phase change."""
        return self._dispatch(SetVoiceEnabled(enabled=enabled))

    def start(self) -> CommandResult:
        """
        Start a session from the inactive state.

        Raises:
            ClockUnavailable: If no tick source can be scheduled; the
                engine stays in its current inactive state
        """
        action = Start()
        try:
            transition = reduce(self._state, action)
        except IllegalTransition as e:
            return self._reject(action, e)

        bind_session_context(
            session_number=self._sessions_started + 1,
            pattern_id=self.config.pattern.id,
            session_length_seconds=self.config.session_length_seconds,
        )
        clock_ref = _ClockRef()
        clock = self._clock_factory(self._tick_callback_for(clock_ref))
        try:
            clock.start()
        except ClockUnavailable:
            logger.error("Session clock unavailable, session not started")
            unbind_session_context()
            raise
        self._sessions_started += 1
        clock_ref.clock = clock
        self._clock = clock

        self._commit(transition)
        logger.info("Breathing session started", voice_enabled=self.config.voice_enabled)
        return self._accepted(action)

    def stop(self) -> CommandResult:
        """Stop the active session; counters are kept for display."""
        result = self._dispatch(Stop())
        if result.accepted:
            logger.info(
                "Breathing session stopped",
                elapsed_seconds=self.state.elapsed_seconds,
                cycles_completed=self.state.cycles_completed,
            )
        return result

    def reset(self) -> CommandResult:
        """Stop if needed and return to the ready state."""
        return self._dispatch(Reset())

    def quick_calm(self) -> CommandResult:
        """Reset, select the calm pattern and start straight away."""
        self.reset()
        self.select_pattern(self._catalog.calm())
        return self.start()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _tick_callback_for(self, ref: "_ClockRef") -> TickCallback:
        def on_tick() -> None:
            # Ticks from a clock we no longer own are stale.
            if ref.clock is None or ref.clock is not self._clock:
                return
            self._on_tick()
        return on_tick

    def _on_tick(self) -> None:
        try:
            transition = reduce(self._state, Tick())
        except IllegalTransition:
            logger.debug("Ignoring tick while inactive")
            self._release_clock()
            return
        self._commit(transition)

        if self.state.is_completed:
            logger.info(
                "Breathing session completed",
                elapsed_seconds=self.state.elapsed_seconds,
                cycles_completed=self.state.cycles_completed,
            )

    def _dispatch(self, action: Action) -> CommandResult:
        try:
            transition = reduce(self._state, action)
        except IllegalTransition as e:
            return self._reject(action, e)
        self._commit(transition)
        return self._accepted(action)

    def _commit(self, transition: Transition) -> None:
        was_active = self._state.session.is_active
        self._state = transition.state
        if not self._state.session.is_active:
            self._release_clock()
            if was_active:
                self._epoch += 1
        self._publish(transition.events)

    def _publish(self, events: tuple[SessionEvent, ...]) -> None:
        """
        Queue events and deliver them in commit order.

        A subscriber may issue a command while handling an event. The
        nested commit only queues its events; the outermost call drains
        the queue, so every subscriber sees events in commit order. A
        phase cue queued before a nested stop or reset belongs to a
        session that has already ended and is dropped.
        """
        self._outbox.extend((self._epoch, event) for event in events)
        if self._publishing:
            return

        self._publishing = True
        try:
            while self._outbox:
                epoch, event = self._outbox.popleft()
                self._deliver(epoch, event)
        finally:
            self._publishing = False

    def _deliver(self, epoch: int, event: SessionEvent) -> None:
        for subscriber in list(self._subscribers):
            if isinstance(event, PhaseEntered) and epoch != self._epoch:
                logger.debug("Dropping phase event from ended session", phase=event.phase.value)
                return
            try:
                subscriber(event)
            except Exception as e:
                logger.error(
                    "Session event subscriber failed",
                    event_type=type(event).__name__,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

    def _release_clock(self) -> None:
        clock, self._clock = self._clock, None
        if clock is not None:
            clock.stop()
            unbind_session_context()

    def _reject(self, action: Action, error: IllegalTransition) -> CommandResult:
        logger.warning(
            "Command rejected",
            command=action.name,
            reason=error.message,
            is_active=self.is_active,
        )
        track_command_rejected(action.name)
        return CommandResult(
            accepted=False,
            command=action.name,
            snapshot=self.snapshot(),
            reason=error.message,
        )

    def _accepted(self, action: Action) -> CommandResult:
        return CommandResult(accepted=True, command=action.name, snapshot=self.snapshot())


class _ClockRef:
    """Late-bound reference from a tick callback to its own clock."""

    __slots__ = ("clock",)

    def __init__(self) -> None:
        self.clock: Optional[SessionClock] = None
