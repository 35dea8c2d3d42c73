"""
Unit Tests for Voice Channels
"""

import asyncio

import pytest

from haven.domain.enums.breath_phase import VoiceCue
from haven.infrastructure.voice.channel import LoggingVoiceChannel, NullVoiceChannel


class TestLoggingVoiceChannel:
    """Tests for the simulated speech backend."""

    @pytest.mark.asyncio
    async def test_speak_holds_single_pending_utterance(self):
        channel = LoggingVoiceChannel(utterance_seconds=1.0)

        channel.speak(VoiceCue.INHALE)

        assert channel.pending_cue is VoiceCue.INHALE
        channel.cancel_pending()

    @pytest.mark.asyncio
    async def test_cancel_pending_silences_utterance(self):
        channel = LoggingVoiceChannel(utterance_seconds=1.0)
        channel.speak(VoiceCue.HOLD)

        channel.cancel_pending()
        await asyncio.sleep(0)

        assert channel.pending_cue is None

    @pytest.mark.asyncio
    async def test_utterance_finishes_on_its_own(self):
        channel = LoggingVoiceChannel(utterance_seconds=0.01)
        channel.speak(VoiceCue.EXHALE)

        await asyncio.sleep(0.05)

        assert channel.pending_cue is None

    def test_speak_without_event_loop_does_not_raise(self):
        channel = LoggingVoiceChannel()

        channel.speak(VoiceCue.COMPLETE)
        channel.cancel_pending()

        assert channel.pending_cue is None


class TestNullVoiceChannel:
    def test_null_channel_is_silent(self):
        channel = NullVoiceChannel()

        channel.speak(VoiceCue.INHALE)
        channel.cancel_pending()

        assert channel.channel_name == "null"
