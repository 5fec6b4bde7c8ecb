"""Command, flag and argument hints.

Hints are built from the same fallback chain the completion engine uses and
come in two renderings: ANSI-colored for the terminal and plain text. The
colored command hint is memoized per command and locale.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Optional

from rich.text import Text

from cmdhints.core.cache import ResultCache
from cmdhints.domain.errors import ErrorCode, HintError
from cmdhints.domain.models import FlagMetadata
from cmdhints.domain.protocols.cache import Cache
from cmdhints.domain.protocols.metadata import MetadataStore
from cmdhints.domain.result import Err, Ok, Result
from cmdhints.errors.handler import AnyError, ErrorHandler
from cmdhints.hint.fallback import (
    command_argument_hint,
    command_category,
    command_description,
    flag_description,
    no_description,
)
from cmdhints.i18n.resolver import TranslationResolver
from cmdhints.logger import get_logger
from cmdhints.rendering import render

logger = get_logger("hint.provider")

DEFAULT_HINT_CACHE_SIZE = 200
DEFAULT_HINT_CACHE_TTL = 300_000

HintResult = Result[str, HintError]


class HintProvider:
    """Builds display hints for commands, flags and arguments.

    Example:
        >>> provider = HintProvider(resolver, store)
        >>> print(provider.generate_command_hint_plain("build").value)
        /build [target] [--flags]
          フレームワーク検出付きプロジェクトビルダー
          [開発]
    """

    def __init__(
        self,
        resolver: TranslationResolver,
        store: MetadataStore,
        cache: Optional[Cache[str]] = None,
    ) -> None:
        self._resolver = resolver
        self._store = store
        self._cache: Cache[str] = (
            cache
            if cache is not None
            else ResultCache(max_size=DEFAULT_HINT_CACHE_SIZE, ttl=DEFAULT_HINT_CACHE_TTL)
        )
        self._errors = ErrorHandler(resolver, store)

    def generate_command_hint(self, command_name: str) -> HintResult:
        cache_key = f"{command_name}:{self._resolver.current_locale}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return Ok(cached)

        metadata = self._store.get_command(command_name)
        if metadata is None:
            return self._command_not_found(command_name)

        argument_hint = command_argument_hint(self._resolver, metadata)
        category = command_category(self._resolver, metadata)

        text = Text()
        text.append(f"/{metadata.name}", style="bold blue")
        if argument_hint:
            text.append(" ")
            text.append(argument_hint, style="bright_black")
        text.append(f"\n  {command_description(self._resolver, metadata)}")
        if category:
            text.append("\n  ")
            text.append(f"[{category}]", style="yellow")

        hint = render(text)
        self._cache.set(cache_key, hint)
        return Ok(hint)

    def generate_command_hint_plain(self, command_name: str) -> HintResult:
        metadata = self._store.get_command(command_name)
        if metadata is None:
            return self._command_not_found(command_name)

        head = f"/{metadata.name}"
        argument_hint = command_argument_hint(self._resolver, metadata)
        if argument_hint:
            head += f" {argument_hint}"
        lines = [head, f"  {command_description(self._resolver, metadata)}"]
        category = command_category(self._resolver, metadata)
        if category:
            lines.append(f"  [{category}]")
        return Ok("\n".join(lines))

    def generate_flag_hint(self, command_name: str, flag: str) -> HintResult:
        found = self._find_flag(command_name, flag)
        if not found.ok:
            return found
        metadata = found.value

        text = Text()
        text.append(metadata.option, style="bold cyan")
        alias = self._alias_line(metadata)
        if alias:
            text.append(f" ({alias})", style="bright_black")
        text.append(f"\n  {self._flag_description(metadata)}")
        example = self._example_line(metadata)
        if example:
            text.append("\n  ")
            text.append(example, style="green")
        return Ok(render(text))

    def generate_flag_hint_plain(self, command_name: str, flag: str) -> HintResult:
        found = self._find_flag(command_name, flag)
        if not found.ok:
            return found
        metadata = found.value

        head = metadata.option
        alias = self._alias_line(metadata)
        if alias:
            head += f" ({alias})"
        lines = [head, f"  {self._flag_description(metadata)}"]
        example = self._example_line(metadata)
        if example:
            lines.append(f"  {example}")
        return Ok("\n".join(lines))

    def generate_argument_hint(self, command_name: str, argument: Optional[str] = None) -> HintResult:
        """Describe one argument value, or the command's argument synopsis when none is given."""
        metadata = self._store.get_command(command_name)
        if metadata is None:
            return self._command_not_found(command_name)

        if argument is None:
            synopsis = command_argument_hint(self._resolver, metadata)
            return Ok(synopsis or self._resolver.text("labels.enter_argument", default="Enter argument"))

        translated = self._resolver.translate(f"arguments.{argument}.description")
        if not translated.ok:
            return Err(
                HintError(type=ErrorCode.ARGUMENT_NOT_FOUND, command=command_name, argument=argument)
            )
        return Ok(f"{argument}: {translated.value}")

    def format_error(self, error: AnyError, suggestions: Sequence[str] = ()) -> str:
        """Plain error text; explicit ``suggestions`` replace the computed ones."""
        report = self._errors.handle(error)
        if suggestions:
            report = replace(report, suggestions=tuple(suggestions))
        return self._errors.format_error_message_plain(report)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _find_flag(self, command_name: str, flag: str) -> Result[FlagMetadata, HintError]:
        metadata = self._store.get_command(command_name)
        if metadata is None:
            return self._command_not_found(command_name)
        found = metadata.find_flag(flag)
        if found is None:
            logger.debug(f"Flag '{flag}' not defined for command '{command_name}'")
            return Err(HintError(type=ErrorCode.FLAG_NOT_FOUND, command=command_name, flag=flag))
        return Ok(found)

    def _flag_description(self, flag: FlagMetadata) -> str:
        return flag_description(
            self._resolver, flag, default=no_description(self._resolver.current_locale)
        )

    def _alias_line(self, flag: FlagMetadata) -> str:
        if not flag.alias:
            return ""
        label = self._resolver.text("labels.alias", default="alias")
        return f"{label}: --{flag.alias}"

    def _example_line(self, flag: FlagMetadata) -> str:
        example = self._resolver.translate(f"flags.{flag.name}.example")
        if not example.ok:
            return ""
        label = self._resolver.text("labels.example", default="Example")
        return f"{label}: {example.value}"

    @staticmethod
    def _command_not_found(command_name: str) -> Err[HintError]:
        logger.debug(f"No metadata for command '{command_name}'")
        return Err(HintError(type=ErrorCode.COMMAND_NOT_FOUND, command=command_name))
