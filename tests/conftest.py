"""Tests configuration and fixtures."""

from typing import Callable, Optional

import pytest

from haven.config import Settings
from haven.domain.enums.breath_phase import VoiceCue
from haven.domain.errors import ClockUnavailable
from haven.domain.models.events import SessionEvent
from haven.domain.models.pattern import BreathingPattern
from haven.domain.models.session import SessionConfig
from haven.infrastructure.voice.channel import VoiceChannel
from haven.services.breathing.catalog import PatternCatalog
from haven.services.breathing.engine import BreathingSessionEngine
from haven.services.breathing.voice_feedback import VoiceFeedback


class RecordingVoiceChannel(VoiceChannel):
    """Voice channel stub that records every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    @property
    def channel_name(self) -> str:
        return "recording"

    def speak(self, cue: VoiceCue) -> None:
        self.calls.append(("speak", cue))

    def cancel_pending(self) -> None:
        self.calls.append(("cancel",))

    @property
    def spoken(self) -> list[VoiceCue]:
        return [call[1] for call in self.calls if call[0] == "speak"]

    @property
    def cancel_count(self) -> int:
        return sum(1 for call in self.calls if call[0] == "cancel")

    def clear(self) -> None:
        self.calls.clear()


class ManualClock:
    """Deterministic clock: ticks only when the test fires them."""

    def __init__(self, on_tick: Callable[[], None]) -> None:
        self.on_tick = on_tick
        self.running = False
        self.start_calls = 0
        self.stop_calls = 0

    @property
    def is_running(self) -> bool:
        return self.running

    def start(self) -> None:
        self.start_calls += 1
        self.running = True

    def stop(self) -> None:
        self.stop_calls += 1
        self.running = False

    def fire(self) -> None:
        if self.running:
            self.on_tick()


class ManualClockFactory:
    """Clock factory handing out ManualClocks and remembering them."""

    def __init__(self) -> None:
        self.clocks: list[ManualClock] = []

    def __call__(self, on_tick: Callable[[], None]) -> ManualClock:
        clock = ManualClock(on_tick)
        self.clocks.append(clock)
        return clock

    @property
    def current(self) -> Optional[ManualClock]:
        return self.clocks[-1] if self.clocks else None

    def advance(self, ticks: int) -> None:
        for _ in range(ticks):
            if self.current is not None:
                self.current.fire()


class UnavailableClock:
    """Clock whose host cannot schedule timers."""

    def __init__(self, on_tick: Callable[[], None]) -> None:
        self.on_tick = on_tick

    @property
    def is_running(self) -> bool:
        return False

    def start(self) -> None:
        raise ClockUnavailable()

    def stop(self) -> None:
        pass


class EventRecorder:
    """Engine subscriber collecting published events."""

    def __init__(self) -> None:
        self.events: list[SessionEvent] = []

    def __call__(self, event: SessionEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list:
        return [event for event in self.events if isinstance(event, event_type)]


def _build_pattern(inhale: int = 4, hold: int = 4, exhale: int = 4, pattern_id: str = "test") -> BreathingPattern:
    return BreathingPattern(
        id=pattern_id,
        name=f"Test {inhale}-{hold}-{exhale}",
        description="Pattern used in tests",
        inhale=inhale,
        hold=hold,
        exhale=exhale,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with fast, quiet defaults."""
    return Settings(
        env="development",
        debug=True,
        log_level="DEBUG",
    )


@pytest.fixture
def voice() -> RecordingVoiceChannel:
    return RecordingVoiceChannel()


@pytest.fixture
def clocks() -> ManualClockFactory:
    return ManualClockFactory()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def make_engine(voice, clocks, recorder):
    """
    Build an engine on manual clocks with a recording voice stub.

    Usage:
        engine = make_engine(make_pattern(4, 7, 8), session_length_seconds=60)
    """
    def factory(
        pattern: Optional[BreathingPattern] = None,
        session_length_seconds: int = 120,
        voice_enabled: bool = True,
        catalog: Optional[PatternCatalog] = None,
        clock_factory=None,
    ) -> BreathingSessionEngine:
        pattern = pattern or _build_pattern()
        catalog = catalog or PatternCatalog()
        engine = BreathingSessionEngine(
            catalog=catalog,
            clock_factory=clock_factory or clocks,
            config=SessionConfig(
                pattern=pattern,
                session_length_seconds=session_length_seconds,
                voice_enabled=voice_enabled,
            ),
        )
        engine.subscribe(recorder)
        engine.subscribe(VoiceFeedback(voice, lambda: engine.config.voice_enabled))
        return engine

    return factory


@pytest.fixture
def make_pattern():
    """Factory for ad-hoc patterns: make_pattern(4, 7, 8)."""
    return _build_pattern


@pytest.fixture
def unavailable_clocks():
    """Clock factory whose clocks can never be scheduled."""
    return UnavailableClock
