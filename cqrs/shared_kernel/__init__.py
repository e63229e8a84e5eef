"""Shared kernel primitives (events, errors, naming)."""

from .events import Event, Invalidated
from .exceptions import (
    CQRSException,
    MissingArgument,
    ValidationFailed,
    InvalidArgument,
    RuleValidationFailed,
    UnsupportedValidator,
    NotRunnable,
    NotACommand,
    NotAQuery,
    NotSupported,
    MissingTags,
)

__all__ = [
    "Event",
    "Invalidated",
    "CQRSException",
    "MissingArgument",
    "ValidationFailed",
    "InvalidArgument",
    "RuleValidationFailed",
    "UnsupportedValidator",
    "NotRunnable",
    "NotACommand",
    "NotAQuery",
    "NotSupported",
    "MissingTags",
]
