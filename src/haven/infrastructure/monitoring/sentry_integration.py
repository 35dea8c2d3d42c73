"""
Sentry Error Tracking Integration

Error tracking for the breathing backend with sensitive data scrubbing.
Tags errors with the current breathing session context.
"""

import re
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from haven.config.logging_config import get_logger

logger = get_logger(__name__)

# Patterns for sensitive data scrubbing
SENSITIVE_PATTERNS = [
    r"password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"authorization[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
]

SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "authorization",
    "cookie",
})


def _scrub_string(value: str) -> str:
    """Scrub sensitive patterns from string."""
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)
    return result


def _scrub_dict(data: dict) -> dict:
    """Recursively scrub sensitive data from dictionary."""
    result = {}
    for key, value in data.items():
        key_lower = str(key).lower().replace("-", "_")

        if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = _scrub_dict(value)
        elif isinstance(value, str):
            result[key] = _scrub_string(value)
        else:
            result[key] = value

    return result


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """Scrub request data and extras before sending to Sentry."""
    if "request" in event:
        if isinstance(event["request"].get("headers"), dict):
            event["request"]["headers"] = _scrub_dict(event["request"]["headers"])
        if isinstance(event["request"].get("data"), dict):
            event["request"]["data"] = _scrub_dict(event["request"]["data"])

    if "extra" in event:
        event["extra"] = _scrub_dict(event["extra"])

    return event


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = "haven@0.1.0",
    sample_rate: float = 1.0,
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN; empty disables tracking
        environment: Environment name
        release: Release version
        sample_rate: Error sample rate (1.0 = all errors)
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.warning("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        sample_rate=sample_rate,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            AsyncioIntegration(),
            LoggingIntegration(
                level=None,  # Don't capture logs as breadcrumbs
                event_level=None,  # Don't capture logs as events
            ),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    logger.info(
        "Sentry initialized",
        environment=environment,
        release=release,
    )
    return True


def set_breathing_context(
    pattern_id: str,
    phase: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> None:
    """Attach breathing session context to subsequent events."""
    sentry_sdk.set_context("breathing_session", {
        "pattern_id": pattern_id,
        "phase": phase,
        "is_active": is_active,
    })


def capture_exception_with_context(
    exception: Exception,
    command: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with additional context.

    Returns: Sentry event ID
    """
    with sentry_sdk.new_scope() as scope:
        if command:
            scope.set_tag("command", command)
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
