"""Structured error records.

Errors never cross a component boundary as exceptions; they travel inside
:class:`~cmdhints.domain.result.Err` as one of the frozen records below. Each
record carries an :class:`ErrorCode` in ``type`` plus the context fields that
code needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "FieldError",
    "LoadError",
    "ValidationFailure",
    "I18nError",
    "TranslationNotFound",
    "CompletionError",
    "HistoryError",
    "HintError",
    "ParseError",
    "UserError",
    "SystemFailure",
    "BusinessLogicError",
]


class ErrorCategory(Enum):
    """Three-tier error taxonomy."""

    USER = "USER_ERROR"
    SYSTEM = "SYSTEM_ERROR"
    BUSINESS_LOGIC = "BUSINESS_LOGIC_ERROR"


class ErrorCode(str, Enum):
    # user errors
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"
    FLAG_NOT_FOUND = "FLAG_NOT_FOUND"
    ARGUMENT_NOT_FOUND = "ARGUMENT_NOT_FOUND"
    # system errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"
    INIT_FAILED = "INIT_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"
    YAML_PARSE_ERROR = "YAML_PARSE_ERROR"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    SAVE_FAILED = "SAVE_FAILED"
    LOAD_FAILED = "LOAD_FAILED"
    # business logic errors
    TRANSLATION_NOT_FOUND = "TRANSLATION_NOT_FOUND"
    TRANSLATION_UNAVAILABLE = "TRANSLATION_UNAVAILABLE"
    INVALID_COMMAND = "INVALID_COMMAND"
    NO_CANDIDATES_FOUND = "NO_CANDIDATES_FOUND"

    @property
    def category(self) -> ErrorCategory:
        if self in _USER_CODES:
            return ErrorCategory.USER
        if self in _BUSINESS_CODES:
            return ErrorCategory.BUSINESS_LOGIC
        return ErrorCategory.SYSTEM


_USER_CODES = frozenset(
    {ErrorCode.COMMAND_NOT_FOUND, ErrorCode.FLAG_NOT_FOUND, ErrorCode.ARGUMENT_NOT_FOUND}
)
_BUSINESS_CODES = frozenset(
    {
        ErrorCode.TRANSLATION_NOT_FOUND,
        ErrorCode.TRANSLATION_UNAVAILABLE,
        ErrorCode.INVALID_COMMAND,
        ErrorCode.NO_CANDIDATES_FOUND,
    }
)


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single violated field reported by schema validation."""

    field: str
    message: str


@dataclass(frozen=True, slots=True)
class LoadError:
    """Failure while reading a translation bundle from disk."""

    type: ErrorCode
    path: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """Schema validation failure enumerating every violated field."""

    errors: tuple[FieldError, ...] = ()
    type: ErrorCode = ErrorCode.SCHEMA_VALIDATION_FAILED

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]


@dataclass(frozen=True, slots=True)
class I18nError:
    """Failure initializing the resolver or switching locale."""

    type: ErrorCode
    locale: Optional[str] = None
    message: Optional[str] = None
    errors: tuple[FieldError, ...] = ()


@dataclass(frozen=True, slots=True)
class TranslationNotFound:
    key: str
    locale: str
    type: ErrorCode = ErrorCode.TRANSLATION_NOT_FOUND


@dataclass(frozen=True, slots=True)
class CompletionError:
    type: ErrorCode
    command: Optional[str] = None


@dataclass(frozen=True, slots=True)
class HistoryError:
    type: ErrorCode
    message: str = ""


@dataclass(frozen=True, slots=True)
class HintError:
    type: ErrorCode
    command: Optional[str] = None
    flag: Optional[str] = None
    argument: Optional[str] = None
    key: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ParseError:
    """Failure turning a command definition file into metadata."""

    type: ErrorCode
    message: Optional[str] = None
    path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UserError:
    """Unknown command, flag or argument typed by the user."""

    type: ErrorCode
    command: Optional[str] = None
    flag: Optional[str] = None
    argument: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SystemFailure:
    """File, parse, init or locale-resource failure."""

    type: ErrorCode
    path: Optional[str] = None
    message: Optional[str] = None
    locale: Optional[str] = None


@dataclass(frozen=True, slots=True)
class BusinessLogicError:
    """Missing translation, invalid command reference or empty result."""

    type: ErrorCode
    key: Optional[str] = None
    locale: Optional[str] = None
    command: Optional[str] = None
