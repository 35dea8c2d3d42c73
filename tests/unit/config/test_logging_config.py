"""
Unit Tests for Logging Configuration
"""

import pytest

from haven.config.logging_config import (
    SERVICE_NAME,
    bind_session_context,
    clear_context,
    get_processors,
    get_session_context,
    unbind_session_context,
    _redact_secrets,
    _stamp_service,
)
from haven.domain.errors import ClockUnavailable


@pytest.fixture(autouse=True)
def clean_context():
    clear_context()
    yield
    clear_context()


class TestProcessors:
    """Tests for the custom structlog processors."""

    def test_secrets_redacted_at_any_depth(self):
        event = _redact_secrets(None, "info", {
            "event": "Sentry configured",
            "sentry_dsn": "https://key@example.invalid/1",
            "monitoring": {"dsn": "https://key@example.invalid/1", "sample_rate": 1.0},
            "pattern_id": "calm",
        })

        assert event["sentry_dsn"] == "[REDACTED]"
        assert event["monitoring"]["dsn"] == "[REDACTED]"
        assert event["monitoring"]["sample_rate"] == 1.0
        assert event["pattern_id"] == "calm"

    def test_service_stamped(self):
        event = _stamp_service(None, "info", {"event": "tick"})

        assert event["service"] == SERVICE_NAME
        assert event["version"] == "0.1.0"

    def test_development_renders_to_console(self):
        processors = get_processors(is_development=True)

        assert type(processors[-1]).__name__ == "ConsoleRenderer"

    def test_other_environments_render_json(self):
        processors = get_processors(is_development=False)

        assert type(processors[-1]).__name__ == "JSONRenderer"


class TestSessionContext:
    """Tests for breathing session log context."""

    def test_bind_and_unbind(self):
        bind_session_context(session_number=3, pattern_id="calm", session_length_seconds=120)

        assert get_session_context() == {
            "breathing_session": 3,
            "pattern_id": "calm",
            "session_length_seconds": 120,
        }

        unbind_session_context()

        assert get_session_context() == {
            "breathing_session": None,
            "pattern_id": None,
            "session_length_seconds": None,
        }

    def test_engine_binds_session_while_active(self, make_engine, make_pattern, clocks):
        engine = make_engine(make_pattern(4, 7, 8, pattern_id="relax-478"), session_length_seconds=60)

        engine.start()
        bound = get_session_context()
        engine.stop()

        assert bound == {
            "breathing_session": 1,
            "pattern_id": "relax-478",
            "session_length_seconds": 60,
        }
        assert get_session_context()["pattern_id"] is None

    def test_session_number_counts_started_sessions(self, make_engine, clocks):
        engine = make_engine(session_length_seconds=2)

        engine.start()
        clocks.advance(2)
        engine.start()

        assert get_session_context()["breathing_session"] == 2

    def test_context_cleared_when_clock_unavailable(self, make_engine, unavailable_clocks):
        engine = make_engine(clock_factory=unavailable_clocks)

        with pytest.raises(ClockUnavailable):
            engine.start()

        assert get_session_context()["pattern_id"] is None
