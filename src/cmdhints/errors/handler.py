"""Three-tier error handling.

User errors (unknown command, flag or argument) get typo suggestions drawn
from the metadata store. System errors name a fallback locale or a recovery
action. Business logic errors may carry a default value to display instead.
Every report is logged at its own level.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union

from rapidfuzz.distance import Levenshtein
from rich.text import Text

from cmdhints.domain.errors import (
    BusinessLogicError,
    ErrorCategory,
    ErrorCode,
    HintError,
    SystemFailure,
    UserError,
)
from cmdhints.domain.models import union_flags
from cmdhints.domain.protocols.metadata import MetadataStore
from cmdhints.i18n.resolver import TranslationResolver, interpolate
from cmdhints.logger import get_logger
from cmdhints.rendering import render

logger = get_logger("errors")

MAX_SUGGESTIONS = 3
MAX_DISTANCE = 3

DISPLAY_ORIGINAL = "display_original"

AnyError = Union[UserError, HintError, SystemFailure, BusinessLogicError]

_DEFAULT_MESSAGES = {
    ErrorCode.COMMAND_NOT_FOUND: 'Command "{{command}}" not found',
    ErrorCode.FLAG_NOT_FOUND: 'Flag "{{flag}}" is not available',
    ErrorCode.ARGUMENT_NOT_FOUND: 'Argument "{{argument}}" not found for command "{{command}}"',
    ErrorCode.FILE_NOT_FOUND: "File not found: {{path}}",
    ErrorCode.PARSE_ERROR: "Parse error: {{message}}",
    ErrorCode.INIT_FAILED: "Initialization failed: {{message}}",
    ErrorCode.RESOURCE_NOT_FOUND: "Resource not found for locale: {{locale}}",
    ErrorCode.SCHEMA_VALIDATION_FAILED: "Invalid translation resource for locale: {{locale}}",
    ErrorCode.YAML_PARSE_ERROR: "Invalid front matter: {{message}}",
    ErrorCode.FILE_READ_ERROR: "Cannot read file: {{path}}",
    ErrorCode.SAVE_FAILED: "Cannot save history: {{message}}",
    ErrorCode.LOAD_FAILED: "Cannot load history: {{message}}",
    ErrorCode.TRANSLATION_NOT_FOUND: "Translation not found for key: {{key}} (locale: {{locale}})",
    ErrorCode.TRANSLATION_UNAVAILABLE: "Translation unavailable for key: {{key}}",
    ErrorCode.INVALID_COMMAND: "Invalid command: {{command}}",
    ErrorCode.NO_CANDIDATES_FOUND: "No candidates found",
}

_BUSINESS_LEVELS = {
    ErrorCode.TRANSLATION_NOT_FOUND: "WARNING",
    ErrorCode.TRANSLATION_UNAVAILABLE: "WARNING",
    ErrorCode.INVALID_COMMAND: "WARNING",
    ErrorCode.NO_CANDIDATES_FOUND: "INFO",
}


@dataclass(frozen=True, slots=True)
class ErrorReport:
    """What to show the user for one error, and how to recover."""

    message: str
    category: ErrorCategory
    level: str
    suggestions: tuple[str, ...] = ()
    fallback_locale: Optional[str] = None
    recovery: Optional[str] = None
    default_value: Optional[str] = None


def closest_matches(
    text: str,
    choices: Iterable[str],
    max_distance: int = MAX_DISTANCE,
    limit: int = MAX_SUGGESTIONS,
) -> list[str]:
    """Choices within ``max_distance`` edits of ``text``, nearest first."""
    scored = []
    for choice in choices:
        distance = Levenshtein.distance(text, choice, score_cutoff=max_distance)
        if distance <= max_distance:
            scored.append((distance, choice))
    scored.sort(key=lambda item: item[0])
    return [choice for _distance, choice in scored[:limit]]


class ErrorHandler:
    """Turns error records into localized, logged :class:`ErrorReport` objects."""

    def __init__(
        self,
        resolver: TranslationResolver,
        store: Optional[MetadataStore] = None,
    ) -> None:
        self._resolver = resolver
        self._store = store

    def handle(self, error: AnyError) -> ErrorReport:
        """Dispatch on the error code's category."""
        category = error.type.category
        if category is ErrorCategory.USER:
            return self.handle_user_error(error)
        if category is ErrorCategory.SYSTEM:
            return self.handle_system_error(error)
        return self.handle_business_logic_error(error)

    def handle_user_error(self, error: UserError) -> ErrorReport:
        suggestions: list[str] = []
        if error.type is ErrorCode.COMMAND_NOT_FOUND and error.command:
            suggestions = self.find_command_suggestions(error.command)
        elif error.type is ErrorCode.FLAG_NOT_FOUND and error.flag:
            suggestions = self.find_flag_suggestions(error.flag)

        report = ErrorReport(
            message=self._message(
                error.type, command=error.command, flag=error.flag, argument=error.argument
            ),
            category=ErrorCategory.USER,
            level="WARNING",
            suggestions=tuple(suggestions),
        )
        return self._logged(report)

    def handle_system_error(self, error: SystemFailure) -> ErrorReport:
        message = self._message(
            error.type, path=error.path, message=error.message, locale=error.locale
        )
        if error.type is ErrorCode.PARSE_ERROR:
            report = ErrorReport(
                message=message,
                category=ErrorCategory.SYSTEM,
                level="ERROR",
                recovery=DISPLAY_ORIGINAL,
            )
        else:
            current = error.locale or self._resolver.current_locale
            report = ErrorReport(
                message=message,
                category=ErrorCategory.SYSTEM,
                level="ERROR",
                fallback_locale="en" if current == "ja" else "ja",
            )
        return self._logged(report)

    def handle_business_logic_error(self, error: BusinessLogicError) -> ErrorReport:
        report = ErrorReport(
            message=self._message(
                error.type, key=error.key, locale=error.locale, command=error.command
            ),
            category=ErrorCategory.BUSINESS_LOGIC,
            level=_BUSINESS_LEVELS.get(error.type, "WARNING"),
            default_value=error.key if error.type is ErrorCode.TRANSLATION_NOT_FOUND else None,
        )
        return self._logged(report)

    def find_command_suggestions(self, text: str) -> list[str]:
        if self._store is None:
            return []
        return closest_matches(text, self._store.get_all_commands())

    def find_flag_suggestions(self, text: str) -> list[str]:
        if self._store is None:
            return []
        options = []
        for flag in union_flags(self._store.get_all_commands().values()):
            options.append(flag.option)
            if flag.alias:
                options.append(f"--{flag.alias}")
        return closest_matches(text, options)

    def format_error_message(self, report: ErrorReport) -> str:
        """Colored rendering: red message, yellow heading, green suggestions."""
        text = Text()
        text.append(f"{self._label('error', 'Error')}: ", style="bold red")
        text.append(report.message, style="red")
        if report.suggestions:
            text.append(f"\n\n{self._label('suggestions', 'Suggestions')}:", style="yellow")
            for suggestion in report.suggestions:
                text.append("\n  ")
                text.append(suggestion, style="green")
        return render(text)

    def format_error_message_plain(self, report: ErrorReport) -> str:
        lines = [f"{self._label('error', 'Error')}: {report.message}"]
        if report.suggestions:
            lines.append("")
            lines.append(f"{self._label('suggestions', 'Suggestions')}:")
            lines.extend(f"  {suggestion}" for suggestion in report.suggestions)
        return "\n".join(lines)

    def _message(self, code: ErrorCode, **context: Optional[str]) -> str:
        values = {name: value for name, value in context.items() if value is not None}
        default = _DEFAULT_MESSAGES.get(code, code.value)
        translated = self._resolver.translate(
            f"errors.{code.value}", default_value=interpolate(default, values), interpolation=values
        )
        return translated.value if translated.ok else default

    def _label(self, name: str, default: str) -> str:
        return self._resolver.text(f"labels.{name}", default=default)

    @staticmethod
    def _logged(report: ErrorReport) -> ErrorReport:
        logger.log(report.level, f"[{report.category.value}] {report.message}")
        return report

