"""
Voice Channel Interface

Defines the contract for spoken breathing cues. The engine treats
speech as fire-and-forget: it never waits for an utterance to end.

ARCHITECTURE: All speech goes through this interface so the engine
can be tested with a recording stub instead of a real speech backend.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from haven.config.logging_config import get_logger
from haven.domain.enums.breath_phase import VoiceCue

logger = get_logger(__name__)


class VoiceChannel(ABC):
    """
    Abstract voice output.

    Implementations own a single utterance slot:
    - speak() starts an utterance and returns immediately
    - cancel_pending() silences whatever is still playing
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Get channel name for logging."""
        pass

    @abstractmethod
    def speak(self, cue: VoiceCue) -> None:
        """
        Start speaking a cue.

        Args:
            cue: Label to speak
        """
        pass

    @abstractmethod
    def cancel_pending(self) -> None:
        """Cancel any in-flight utterance; no-op when silent."""
        pass


class NullVoiceChannel(VoiceChannel):
    """Voice channel that never makes a sound."""

    @property
    def channel_name(self) -> str:
        return "null"

    def speak(self, cue: VoiceCue) -> None:
        pass

    def cancel_pending(self) -> None:
        pass


class LoggingVoiceChannel(VoiceChannel):
    """
    Simulated speech backend.

    Each utterance is an asyncio task that lasts ``utterance_seconds``
    and logs when it starts, finishes or is cut off. Used in
    development and wherever no real text-to-speech device exists.
    """

    def __init__(self, utterance_seconds: float = 1.2) -> None:
        self._utterance_seconds = utterance_seconds
        self._pending: Optional[asyncio.Task] = None
        self._pending_cue: Optional[VoiceCue] = None

    @property
    def channel_name(self) -> str:
        return "logging"

    @property
    def pending_cue(self) -> Optional[VoiceCue]:
        """Cue currently being spoken, if any."""
        if self._pending is not None and not self._pending.done():
            return self._pending_cue
        return None

    def speak(self, cue: VoiceCue) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.info("Voice cue", cue=cue.value, channel=self.channel_name)
            return

        self._pending_cue = cue
        self._pending = loop.create_task(self._utter(cue), name=f"voice-{cue.value}")

    def cancel_pending(self) -> None:
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Voice cue cancelled", cue=self._pending_cue.value if self._pending_cue else None)
        self._pending_cue = None

    async def _utter(self, cue: VoiceCue) -> None:
        logger.info("Voice cue started", cue=cue.value, channel=self.channel_name)
        await asyncio.sleep(self._utterance_seconds)
        logger.debug("Voice cue finished", cue=cue.value)
