"""Voice output abstraction package."""

from haven.infrastructure.voice.channel import (
    LoggingVoiceChannel,
    NullVoiceChannel,
    VoiceChannel,
)

__all__ = [
    "LoggingVoiceChannel",
    "NullVoiceChannel",
    "VoiceChannel",
]
