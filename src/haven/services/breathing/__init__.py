"""Guided breathing services package."""

from haven.services.breathing.catalog import DEFAULT_PATTERNS, PatternCatalog
from haven.services.breathing.clock import AsyncioSessionClock, SessionClock
from haven.services.breathing.engine import (
    BreathingSessionEngine,
    CommandResult,
    EngineSnapshot,
    asyncio_clock_factory,
)
from haven.services.breathing.projector import PROGRESS_FLOOR, progress, project
from haven.services.breathing.reducer import Transition, reduce
from haven.services.breathing.voice_feedback import VoiceFeedback

__all__ = [
    # Catalog
    "DEFAULT_PATTERNS",
    "PatternCatalog",
    # Clock
    "AsyncioSessionClock",
    "SessionClock",
    # Engine
    "BreathingSessionEngine",
    "CommandResult",
    "EngineSnapshot",
    "asyncio_clock_factory",
    # Projector
    "PROGRESS_FLOOR",
    "progress",
    "project",
    # Reducer
    "Transition",
    "reduce",
    # Voice
    "VoiceFeedback",
]
