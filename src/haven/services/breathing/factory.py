"""
Breathing Engine Factory

Wires a BreathingSessionEngine from settings: catalog, asyncio clock,
voice feedback and metrics subscribers.
"""

from typing import Optional

from haven.config.logging_config import get_logger
from haven.config.settings import Settings
from haven.domain.models.session import SessionConfig, minutes_to_seconds
from haven.infrastructure.metrics import SessionMetricsRecorder
from haven.infrastructure.voice.channel import LoggingVoiceChannel, VoiceChannel
from haven.services.breathing.catalog import PatternCatalog
from haven.services.breathing.engine import (
    BreathingSessionEngine,
    ClockFactory,
    asyncio_clock_factory,
)
from haven.services.breathing.voice_feedback import VoiceFeedback

logger = get_logger(__name__)


def build_engine(
    settings: Settings,
    voice_channel: Optional[VoiceChannel] = None,
    clock_factory: Optional[ClockFactory] = None,
    catalog: Optional[PatternCatalog] = None,
) -> BreathingSessionEngine:
    """
    Create a fully wired breathing engine.

    Args:
        settings: Application settings
        voice_channel: Voice output override (defaults to LoggingVoiceChannel)
        clock_factory: Clock override (defaults to asyncio clocks)
        catalog: Pattern catalog override

    Returns:
        Engine in the ready state with voice and metrics subscribed
    """
    breathing = settings.breathing
    catalog = catalog or PatternCatalog(default_pattern_id=breathing.default_pattern_id)
    voice_channel = voice_channel or LoggingVoiceChannel(
        utterance_seconds=breathing.utterance_seconds,
    )

    engine = BreathingSessionEngine(
        catalog=catalog,
        clock_factory=clock_factory or asyncio_clock_factory(breathing.tick_interval_seconds),
        config=SessionConfig(
            pattern=catalog.default(),
            session_length_seconds=minutes_to_seconds(breathing.default_session_minutes),
            voice_enabled=breathing.voice_enabled,
        ),
        progress_floor=breathing.progress_floor,
    )
    engine.subscribe(VoiceFeedback(voice_channel, lambda: engine.config.voice_enabled))
    engine.subscribe(SessionMetricsRecorder())

    logger.info(
        "Breathing engine created",
        default_pattern=catalog.default().id,
        patterns=len(catalog),
        voice_channel=voice_channel.channel_name,
    )
    return engine
