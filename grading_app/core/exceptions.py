# /grading_app/core/exceptions.py

"""
Domain errors raised by the grading service layer.

Routers translate these into HTTP status codes. `NotFoundError` and
`InvalidStateError` subclass `ValueError`, so callers that only care about
"bad input" can keep catching `ValueError`.
"""


class GradingError(Exception):
    """Base class for every error raised by the grading workflow."""


class NotFoundError(GradingError, ValueError):
    """A referenced Result, OpenAnswer, Simulation, Question or User does not exist
    (or is outside the caller's grading scope)."""


class InvalidStateError(GradingError, ValueError):
    """The requested transition is not allowed from the entity's current state."""


class PermissionDeniedError(GradingError):
    """The principal is authenticated but may not perform the operation."""
