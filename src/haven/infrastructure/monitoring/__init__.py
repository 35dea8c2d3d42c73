"""Monitoring infrastructure package."""

from haven.infrastructure.monitoring.sentry_integration import (
    init_sentry,
    set_breathing_context,
    capture_exception_with_context,
)

__all__ = [
    "init_sentry",
    "set_breathing_context",
    "capture_exception_with_context",
]
