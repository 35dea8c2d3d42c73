"""
Breathing Engine Errors

Small, local error taxonomy. None of these are fatal: the engine
rejects the offending command and leaves its state untouched.
"""

from typing import Optional


class BreathingError(Exception):
    """Base exception for breathing engine errors."""

    def __init__(self, message: str, command: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.command = command


class InvalidConfiguration(BreathingError, ValueError):
    """
    A pattern, session length or projector input is out of range.

    Rejected at configuration time; state is unchanged.
    """


class IllegalTransition(BreathingError):
    """
    A command is not valid in the current state.

    For example start() while already active, or select_pattern()
    while a session runs. Reported to callers as a no-op rejection.
    """


class ClockUnavailable(BreathingError):
    """The tick source could not be scheduled; the engine stays ready."""

    def __init__(self, message: str = "Session clock cannot be scheduled") -> None:
        super().__init__(message, command="start")
