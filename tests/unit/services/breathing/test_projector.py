"""
Unit Tests for the Animation Projector
"""

import pytest

from haven.domain.enums.breath_phase import BreathPhase
from haven.domain.errors import InvalidConfiguration
from haven.domain.models.session import EngineState, SessionConfig
from haven.services.breathing.projector import PROGRESS_FLOOR, progress, project


class TestProgress:
    """Tests for the phase-to-scale mapping."""

    def test_inhale_rises_from_floor_to_full(self):
        assert progress(BreathPhase.INHALE, 4, 4) == pytest.approx(PROGRESS_FLOOR)
        assert progress(BreathPhase.INHALE, 2, 4) == pytest.approx(0.75)
        assert progress(BreathPhase.INHALE, 0, 4) == pytest.approx(1.0)

    def test_hold_is_full(self):
        for time_left in range(1, 8):
            assert progress(BreathPhase.HOLD, time_left, 7) == 1.0

    def test_exhale_falls_from_full_to_floor(self):
        assert progress(BreathPhase.EXHALE, 8, 8) == pytest.approx(1.0)
        assert progress(BreathPhase.EXHALE, 4, 8) == pytest.approx(0.75)
        assert progress(BreathPhase.EXHALE, 0, 8) == pytest.approx(PROGRESS_FLOOR)

    def test_custom_floor(self):
        assert progress(BreathPhase.INHALE, 5, 5, floor=0.2) == pytest.approx(0.2)
        assert progress(BreathPhase.EXHALE, 0, 5, floor=0.0) == pytest.approx(0.0)

    def test_monotonic_during_inhale(self):
        values = [progress(BreathPhase.INHALE, left, 6) for left in range(6, -1, -1)]

        assert values == sorted(values)

    @pytest.mark.parametrize(
        "time_left,duration,floor",
        [(5, 4, 0.5), (-1, 4, 0.5), (1, 0, 0.5), (1, 4, 1.5)],
    )
    def test_invalid_inputs_rejected(self, time_left, duration, floor):
        with pytest.raises(InvalidConfiguration):
            progress(BreathPhase.INHALE, time_left, duration, floor=floor)


class TestProject:
    """Tests for projecting an engine state."""

    def test_ready_state_is_at_floor(self, make_pattern):
        state = EngineState.initial(
            SessionConfig(pattern=make_pattern(4, 7, 8), session_length_seconds=60)
        )

        assert project(state) == pytest.approx(PROGRESS_FLOOR)
