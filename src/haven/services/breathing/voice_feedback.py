"""
Voice Feedback Subscriber

Turns engine events into spoken cues. Last cue wins: every new
utterance cancels the previous one first, and nothing is queued.
"""

from typing import Callable

from haven.config.logging_config import get_logger
from haven.domain.enums.breath_phase import VoiceCue
from haven.domain.models.events import (
    PhaseEntered,
    SessionCompleted,
    SessionEvent,
    SessionReset,
    SessionStopped,
)
from haven.infrastructure.voice.channel import VoiceChannel

logger = get_logger(__name__)


class VoiceFeedback:
    """
    Engine subscriber driving a VoiceChannel.

    Args:
        channel: Voice output
        is_enabled: Reads the current voice toggle at emission time,
            so toggling only affects future cues
    """

    def __init__(self, channel: VoiceChannel, is_enabled: Callable[[], bool]) -> None:
        self._channel = channel
        self._is_enabled = is_enabled

    @property
    def channel(self) -> VoiceChannel:
        return self._channel

    def __call__(self, event: SessionEvent) -> None:
        if isinstance(event, PhaseEntered):
            self._say(VoiceCue.from_phase(event.phase))
        elif isinstance(event, SessionCompleted):
            self._say(VoiceCue.COMPLETE)
        elif isinstance(event, (SessionStopped, SessionReset)):
            self._channel.cancel_pending()

    def _say(self, cue: VoiceCue) -> None:
        if not self._is_enabled():
            return
        self._channel.cancel_pending()
        self._channel.speak(cue)
        logger.debug("Voice cue issued", cue=cue.value, channel=self._channel.channel_name)
