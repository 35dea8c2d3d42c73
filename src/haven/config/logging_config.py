"""
Sensory Haven Logging Configuration

structlog on top of the stdlib logging module. Every entry carries
the service name and version; request handlers add a correlation id
and a running breathing session adds its pattern and budget, so tick
logs emitted from the clock task can be tied back to the session
that scheduled them.

Development renders to the console, every other environment to JSON.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from haven import __version__
from haven.config.settings import Settings

SERVICE_NAME = "haven-breathing"

# Keys whose values never reach a log sink
REDACTED_KEYS: tuple[str, ...] = ("dsn", "secret", "token", "password", "authorization")

# Session fields bound while a breathing session runs
SESSION_CONTEXT_KEYS: tuple[str, ...] = (
    "breathing_session",
    "pattern_id",
    "session_length_seconds",
)

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "asyncio": logging.WARNING,
    "sentry_sdk.errors": logging.WARNING,
}


def _is_redacted(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in REDACTED_KEYS)


def _scrub(key: str, value: Any) -> Any:
    if _is_redacted(key):
        return "[REDACTED]"
    if isinstance(value, dict):
        return {k: _scrub(k, v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(key, item) for item in value]
    return value


def _redact_secrets(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Replace values of secret-looking keys, including nested ones."""
    return {key: _scrub(key, value) for key, value in event_dict.items()}


def _stamp_service(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Build the structlog processor chain.

    Context variables are merged first so session and request fields
    go through redaction like any other key.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_secrets,
        _stamp_service,
    ]

    if is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return processors


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the root logger once at startup."""
    structlog.configure(
        processors=get_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )
    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Tag every entry of the current request with its correlation id."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def bind_session_context(
    session_number: int,
    pattern_id: str,
    session_length_seconds: int,
) -> None:
    """
    Tag log entries with the breathing session about to start.

    Bind before the session clock task is created: asyncio copies the
    current context into new tasks, so tick logs inherit these fields.
    """
    structlog.contextvars.bind_contextvars(
        breathing_session=session_number,
        pattern_id=pattern_id,
        session_length_seconds=session_length_seconds,
    )


def unbind_session_context() -> None:
    structlog.contextvars.unbind_contextvars(*SESSION_CONTEXT_KEYS)


def get_session_context() -> dict[str, Optional[Any]]:
    """Session fields bound in the current context, for diagnostics."""
    bound = structlog.contextvars.get_contextvars()
    return {key: bound.get(key) for key in SESSION_CONTEXT_KEYS}


def clear_context() -> None:
    """Drop all bound context (end of request)."""
    structlog.contextvars.clear_contextvars()
