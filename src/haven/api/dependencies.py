"""
API Dependencies

Holds the process-wide breathing engine created during startup and
exposes the settings the application was created with.
"""

from typing import Optional

from fastapi import Request

from haven.config.settings import Settings
from haven.services.breathing.engine import BreathingSessionEngine

# Global engine instance (initialized during startup)
_engine: Optional[BreathingSessionEngine] = None


def set_engine(engine: Optional[BreathingSessionEngine]) -> None:
    """Install (or clear) the global engine."""
    global _engine
    _engine = engine


def get_engine() -> BreathingSessionEngine:
    """Get the global engine instance."""
    if _engine is None:
        raise RuntimeError("Breathing engine not initialized")
    return _engine


def engine_ready() -> bool:
    """Whether the engine has been created."""
    return _engine is not None


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings
