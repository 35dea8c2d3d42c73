"""
Unit Tests for Breathing Domain Models

Tests pattern validation, session config and phase ordering.
"""

from dataclasses import FrozenInstanceError

import pytest

from haven.domain.enums.breath_phase import BreathPhase, VoiceCue
from haven.domain.errors import InvalidConfiguration
from haven.domain.models.pattern import BreathingPattern
from haven.domain.models.session import (
    EngineState,
    SessionConfig,
    SessionState,
    minutes_to_seconds,
)


class TestBreathPhase:
    """Tests for phase ordering."""

    def test_phase_cycle_order(self):
        """Phases run inhale -> hold -> exhale -> inhale."""
        assert BreathPhase.INHALE.following() is BreathPhase.HOLD
        assert BreathPhase.HOLD.following() is BreathPhase.EXHALE
        assert BreathPhase.EXHALE.following() is BreathPhase.INHALE

    def test_only_exhale_wraps_cycle(self):
        assert BreathPhase.EXHALE.wraps_cycle is True
        assert BreathPhase.INHALE.wraps_cycle is False
        assert BreathPhase.HOLD.wraps_cycle is False

    def test_voice_cue_from_phase(self):
        assert VoiceCue.from_phase(BreathPhase.HOLD) is VoiceCue.HOLD
        assert VoiceCue.COMPLETE.value == "complete"


class TestBreathingPattern:
    """Tests for BreathingPattern validation."""

    def test_valid_pattern(self, make_pattern):
        pattern = make_pattern(4, 7, 8)

        assert pattern.duration_of(BreathPhase.HOLD) == 7
        assert pattern.cycle_seconds == 19
        assert pattern.label == "4-7-8"

    @pytest.mark.parametrize("inhale,hold,exhale", [(0, 4, 4), (4, -1, 4), (4, 4, 0)])
    def test_non_positive_duration_rejected(self, inhale, hold, exhale):
        with pytest.raises(InvalidConfiguration):
            BreathingPattern(
                id="bad", name="Bad", description="", inhale=inhale, hold=hold, exhale=exhale,
            )

    def test_non_integer_duration_rejected(self):
        with pytest.raises(InvalidConfiguration):
            BreathingPattern(id="bad", name="Bad", description="", inhale=4.5, hold=4, exhale=4)

    def test_pattern_is_immutable(self, make_pattern):
        pattern = make_pattern()
        with pytest.raises(FrozenInstanceError):
            pattern.inhale = 10

    def test_to_dict(self, make_pattern):
        data = make_pattern(4, 4, 6, pattern_id="calm").to_dict()

        assert data["id"] == "calm"
        assert data["label"] == "4-4-6"
        assert data["cycle_seconds"] == 14


class TestSessionConfig:
    """Tests for session length handling."""

    def test_minutes_to_seconds(self):
        assert minutes_to_seconds(1) == 60
        assert minutes_to_seconds(5) == 300

    @pytest.mark.parametrize("minutes", [0, -1, True, 1.5])
    def test_invalid_minutes_rejected(self, minutes):
        with pytest.raises(InvalidConfiguration):
            minutes_to_seconds(minutes)

    def test_non_positive_length_rejected(self, make_pattern):
        with pytest.raises(InvalidConfiguration):
            SessionConfig(pattern=make_pattern(), session_length_seconds=0)


class TestSessionState:
    """Tests for ready state construction."""

    def test_ready_state_uses_inhale_duration(self, make_pattern):
        state = SessionState.ready(make_pattern(5, 2, 7))

        assert state.phase is BreathPhase.INHALE
        assert state.time_left_in_phase == 5
        assert state.elapsed_seconds == 0
        assert state.cycles_completed == 0
        assert state.is_active is False
        assert state.is_ready is True

    def test_engine_state_derived_values(self, make_pattern):
        config = SessionConfig(pattern=make_pattern(4, 7, 8), session_length_seconds=30)
        state = EngineState.initial(config)

        assert state.phase_duration == 4
        assert state.remaining_seconds == 30
