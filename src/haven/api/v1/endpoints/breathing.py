"""
Breathing Session Endpoints

Command and snapshot surface for the guided breathing UI.

Illegal commands (e.g. selecting a pattern mid-session) are
answered with 409 and the unchanged snapshot; they never fail
the request with a server error.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, model_validator

from haven.api.dependencies import get_app_settings, get_engine
from haven.config import Settings
from haven.config.logging_config import get_logger
from haven.infrastructure.monitoring import set_breathing_context
from haven.services.breathing.engine import BreathingSessionEngine, CommandResult

logger = get_logger(__name__)
router = APIRouter()


# Request/Response Models

class SelectPatternRequest(BaseModel):
    """Request to choose a breathing pattern."""

    pattern_id: str = Field(..., min_length=1, max_length=64, description="Catalog pattern id")


class SessionLengthRequest(BaseModel):
    """Request to set the session budget; give minutes or seconds."""

    minutes: Optional[int] = Field(default=None, description="Minute selector value")
    seconds: Optional[int] = Field(default=None, description="Exact budget in seconds")

    @model_validator(mode="after")
    def exactly_one_unit(self) -> "SessionLengthRequest":
        if (self.minutes is None) == (self.seconds is None):
            raise ValueError("Provide exactly one of 'minutes' or 'seconds'")
        return self


class VoiceRequest(BaseModel):
    """Request to toggle voice cues."""

    enabled: bool


class CommandResponse(BaseModel):
    """Outcome of an engine command."""

    accepted: bool
    command: str
    reason: Optional[str] = None
    snapshot: dict

    class Config:
        json_schema_extra = {
            "example": {
                "accepted": False,
                "command": "select_pattern",
                "reason": "select_pattern is not allowed while a session is active",
                "snapshot": {"state": {"phase": "hold", "is_active": True}},
            }
        }


class PatternCatalogResponse(BaseModel):
    """Available patterns and length choices."""

    patterns: list[dict]
    default_pattern_id: str
    session_minute_options: list[int]


def _respond(result: CommandResult) -> JSONResponse:
    """Serialize a command result, using 409 for rejections."""
    snapshot = result.snapshot
    set_breathing_context(
        pattern_id=snapshot.config.pattern.id,
        phase=snapshot.state.phase.value,
        is_active=snapshot.state.is_active,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if result.accepted else status.HTTP_409_CONFLICT,
        content=CommandResponse(**result.to_dict()).model_dump(),
    )


@router.get(
    "/patterns",
    response_model=PatternCatalogResponse,
    summary="List breathing patterns",
)
async def list_patterns(
    engine: BreathingSessionEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
) -> PatternCatalogResponse:
    """Return the static pattern catalog and minute options."""
    return PatternCatalogResponse(
        patterns=[pattern.to_dict() for pattern in engine.catalog],
        default_pattern_id=engine.catalog.default().id,
        session_minute_options=settings.breathing.session_minute_options,
    )


@router.get(
    "/session",
    summary="Current session snapshot",
)
async def get_session(
    engine: BreathingSessionEngine = Depends(get_engine),
) -> dict:
    """Read-only snapshot of config, state and animation progress."""
    return engine.snapshot().to_dict()


@router.post("/session/pattern", response_model=CommandResponse, summary="Select pattern")
async def select_pattern(
    request: SelectPatternRequest,
    engine: BreathingSessionEngine = Depends(get_engine),
) -> JSONResponse:
    return _respond(engine.select_pattern_by_id(request.pattern_id))


@router.post("/session/length", response_model=CommandResponse, summary="Set session length")
async def set_session_length(
    request: SessionLengthRequest,
    engine: BreathingSessionEngine = Depends(get_engine),
) -> JSONResponse:
    if request.minutes is not None:
        return _respond(engine.set_session_minutes(request.minutes))
    return _respond(engine.set_session_length(request.seconds))


@router.post("/session/voice", response_model=CommandResponse, summary="Toggle voice cues")
async def set_voice(
    request: VoiceRequest,
    engine: BreathingSessionEngine = Depends(get_engine),
) -> JSONResponse:
    return _respond(engine.set_voice_enabled(request.enabled))


@router.post("/session/start", response_model=CommandResponse, summary="Start session")
async def start_session(
    engine: BreathingSessionEngine = Depends(get_engine),
) -> JSONResponse:
    return _respond(engine.start())


@router.post("/session/stop", response_model=CommandResponse, summary="Stop session")
async def stop_session(
    engine: BreathingSessionEngine = Depends(get_engine),
) -> JSONResponse:
    return _respond(engine.stop())


@router.post("/session/reset", response_model=CommandResponse, summary="Reset session")
async def reset_session(
    engine: BreathingSessionEngine = Depends(get_engine),
) -> JSONResponse:
    return _respond(engine.reset())


@router.post("/session/calm", response_model=CommandResponse, summary="Calm now")
async def quick_calm(
    engine: BreathingSessionEngine = Depends(get_engine),
) -> JSONResponse:
    """
    Emergency calm shortcut.

    Abandons any running session, selects the calm 4-4-6 pattern
    and starts immediately.
    """
    logger.info("Quick calm requested", was_active=engine.is_active)
    return _respond(engine.quick_calm())
