"""Domain enums package."""

from haven.domain.enums.breath_phase import BreathPhase, VoiceCue

__all__ = ["BreathPhase", "VoiceCue"]
