"""Error reporting with typo suggestions and recovery hints."""

from cmdhints.errors.handler import (
    DISPLAY_ORIGINAL,
    ErrorHandler,
    ErrorReport,
    closest_matches,
)

__all__ = [
    "DISPLAY_ORIGINAL",
    "ErrorHandler",
    "ErrorReport",
    "closest_matches",
]
